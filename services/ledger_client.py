# services/ledger_client.py
"""
Ledger client port.

The settlement executor talks to the ledger only through LedgerClient.
Implementations own the operator credentials and are the only code that
signs: one explicit signature with the operator key per submitted transfer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal

HBAR_DECIMALS = 8
TINYBARS_PER_HBAR = 10 ** HBAR_DECIMALS


@dataclass(frozen=True)
class OperatorCredentials:
     """Operator account and private key. The key never appears in repr or logs."""
     account_id: str
     private_key: str = field(repr=False)


@dataclass(frozen=True)
class TransferReceipt:
     """Outcome of a confirmed transfer."""
     transaction_id: str
     status: str


def to_tinybars(amount: Decimal) -> int:
     """
     Convert an HBAR amount to tinybars.

     Raises:
          ValueError: amount has more than 8 decimal places.
     """
     scaled = amount * TINYBARS_PER_HBAR
     if scaled != scaled.to_integral_value():
          raise ValueError(f"{amount} HBAR is not a whole number of tinybars")
     return int(scaled)


class LedgerClient(ABC):
     """Abstract ledger client used for account parsing and transfers."""

     @abstractmethod
     def parse_account_id(self, account_id: str) -> str:
          """
          Parse account_id with the ledger's own account-id parser.

          Returns the canonical string form.

          Raises:
               ValueError: the ledger rejects the identifier.
          """

     @abstractmethod
     def transfer(self, recipient: str, amount: Decimal, memo: str) -> TransferReceipt:
          """
          Move amount HBAR from the operator account to recipient.

          Builds one atomic transfer carrying memo, signs it once with the
          operator key, submits it and blocks until the receipt arrives.
          Never retries.

          Raises:
               SettlementFailed: submission rejected, timed out, or the
                    receipt status is not SUCCESS.
          """
