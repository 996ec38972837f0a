# services/invoice_service.py
"""
Invoice Service - validation and creation of invoices.

Inputs are checked in order, and nothing is stored unless all checks pass:
1. amount is a positive number representable in tinybars
2. merchant id has the shard.realm.num shape
3. merchant id is accepted by the ledger client's parser
"""
import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any

from database import InvoiceStore
from errors import InvalidAccountFormat, InvalidAmount, MalformedAccount
from models import Invoice
from services.accounts import is_valid_account_format
from services.ledger_client import HBAR_DECIMALS, LedgerClient

logger = logging.getLogger(__name__)


def parse_amount(value: Any) -> Decimal:
     """
     Parse a client-supplied amount into a positive Decimal.

     Numbers and numeric strings are accepted. Floats go through str()
     so 12.5 becomes Decimal("12.5") rather than its binary expansion.

     Raises:
          InvalidAmount: missing, boolean, not numeric, not finite, <= 0,
               or more than 8 decimal places.
     """
     if value is None or isinstance(value, bool):
          raise InvalidAmount()
     if isinstance(value, str):
          value = value.strip()
          if not value:
               raise InvalidAmount()
     elif not isinstance(value, (int, float, Decimal)):
          raise InvalidAmount()

     try:
          amount = Decimal(str(value))
     except (InvalidOperation, ValueError):
          raise InvalidAmount()

     if not amount.is_finite() or amount <= 0:
          raise InvalidAmount()
     if amount.as_tuple().exponent < -HBAR_DECIMALS:
          raise InvalidAmount(f"Invalid amount: at most {HBAR_DECIMALS} decimal places")
     return amount


class InvoiceService:
     """Creates invoices and stores them."""

     def __init__(self, store: InvoiceStore, ledger: LedgerClient) -> None:
          self._store = store
          self._ledger = ledger

     def create_invoice(self, amount: Any, merchant_id: Any) -> Invoice:
          """
          Validate inputs and store a new unpaid invoice.

          Args:
               amount: HBAR amount as sent by the client
               merchant_id: merchant account id, e.g. "0.0.717"

          Returns:
               The stored Invoice, with a fresh random UUID as id

          Raises:
               InvalidAmount: amount rejected
               InvalidAccountFormat: merchant_id fails the shape check
               MalformedAccount: merchant_id rejected by the ledger parser
          """
          parsed_amount = parse_amount(amount)

          if not is_valid_account_format(merchant_id):
               raise InvalidAccountFormat()

          try:
               merchant = self._ledger.parse_account_id(merchant_id)
          except ValueError:
               raise MalformedAccount()

          invoice = Invoice(
               id=str(uuid.uuid4()),
               amount=parsed_amount,
               merchant=merchant,
          )
          self._store.put(invoice)

          logger.info("Created invoice %s for %s HBAR to %s", invoice.id, invoice.amount, invoice.merchant)
          return invoice
