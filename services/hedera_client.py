# services/hedera_client.py
"""
Hedera implementation of the ledger client, built on hiero-sdk-python.

Signing is explicit: transfers are frozen with the operator client and then
signed exactly once with the operator private key held by this object.
"""
import logging
from decimal import Decimal

from hiero_sdk_python import AccountId, Client, Network, PrivateKey, TransferTransaction
from hiero_sdk_python.response_code import ResponseCode

from errors import SettlementFailed
from services.ledger_client import LedgerClient, OperatorCredentials, TransferReceipt, to_tinybars

logger = logging.getLogger(__name__)

SUCCESS = "SUCCESS"


class HederaLedgerClient(LedgerClient):
     """Ledger client bound to one Hedera network and one operator account."""

     def __init__(self, credentials: OperatorCredentials, network: str = "testnet") -> None:
          self._operator_id = AccountId.from_string(credentials.account_id)
          self._operator_key = PrivateKey.from_string(credentials.private_key)
          self._client = Client(Network(network=network))
          self._client.set_operator(self._operator_id, self._operator_key)
          self._network = network

     def parse_account_id(self, account_id: str) -> str:
          try:
               parsed = AccountId.from_string(account_id)
          except (ValueError, TypeError) as exc:
               raise ValueError(f"Ledger rejected account id {account_id!r}") from exc
          return str(parsed)

     def _sign(self, transaction: TransferTransaction) -> None:
          """The single point where the operator key signs anything."""
          transaction.sign(self._operator_key)

     def transfer(self, recipient: str, amount: Decimal, memo: str) -> TransferReceipt:
          tinybars = to_tinybars(amount)
          try:
               transaction = (
                    TransferTransaction()
                    .add_hbar_transfer(self._operator_id, -tinybars)
                    .add_hbar_transfer(AccountId.from_string(recipient), tinybars)
               )
               transaction.set_transaction_memo(memo)
               transaction.freeze_with(self._client)
               self._sign(transaction)
               receipt = transaction.execute(self._client)
          except Exception as exc:
               logger.error("Hedera transfer to %s failed: %s", recipient, exc)
               raise SettlementFailed(f"ledger client error ({type(exc).__name__})") from exc

          status = ResponseCode(receipt.status).name
          transaction_id = str(transaction.transaction_id)
          if status != SUCCESS:
               logger.error("Hedera transfer %s finished with status %s", transaction_id, status)
               raise SettlementFailed(f"receipt status {status}")

          return TransferReceipt(transaction_id=transaction_id, status=status)
