# services/settlement_service.py
"""
Settlement Service - pays an invoice with a transfer from the operator account.

1. Under the invoice lock: reject unknown, paid, or in-flight invoices,
   then mark the invoice as settling
2. Outside the lock: submit one transfer with memo "InvoiceID:<id>" and
   wait for the receipt
3. Under the invoice lock: attach {id, status, link} and mark paid

There is no internal retry. A failed attempt leaves the invoice unpaid and
surfaces SettlementFailed; the mirror node check is the recovery path when
a transfer went through but its receipt did not come back.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict

from database import InvoiceStore
from errors import AlreadyPaid, NotFoundError, SettlementFailed, SettlementInProgress
from services.ledger_client import LedgerClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementResult:
     transaction_id: str
     status: str
     link: str

     def as_record(self) -> Dict[str, Any]:
          return {"id": self.transaction_id, "status": self.status, "link": self.link}


class SettlementService:
     """Settles invoices through the ledger client, at most once per invoice."""

     def __init__(self, store: InvoiceStore, ledger: LedgerClient, explorer_url: str) -> None:
          self._store = store
          self._ledger = ledger
          self._explorer_url = explorer_url.rstrip("/")

     def transaction_link(self, transaction_id: str) -> str:
          return f"{self._explorer_url}/{transaction_id}"

     def pay(self, invoice_id: str) -> SettlementResult:
          """
          Transfer the invoice amount to the merchant and mark the invoice paid.

          Raises:
               NotFoundError: no invoice with this id
               AlreadyPaid: the invoice already carries settlement evidence
               SettlementInProgress: another pay call for it is in flight
               SettlementFailed: the ledger rejected or did not confirm the
                    transfer; the invoice stays unpaid
          """
          invoice = self._store.get(invoice_id)
          if invoice is None:
               raise NotFoundError()

          with self._store.lock(invoice_id):
               if invoice.paid:
                    raise AlreadyPaid()
               if invoice.settling:
                    raise SettlementInProgress()
               invoice.settling = True

          try:
               logger.info("Submitting transfer of %s HBAR to %s for invoice %s", invoice.amount, invoice.merchant, invoice.id)
               receipt = self._ledger.transfer(invoice.merchant, invoice.amount, invoice.memo)
          except SettlementFailed:
               logger.exception("Settlement of invoice %s failed", invoice.id)
               with self._store.lock(invoice_id):
                    invoice.settling = False
               raise
          except Exception:
               with self._store.lock(invoice_id):
                    invoice.settling = False
               raise

          result = SettlementResult(
               transaction_id=receipt.transaction_id,
               status=receipt.status,
               link=self.transaction_link(receipt.transaction_id),
          )

          with self._store.lock(invoice_id):
               invoice.settling = False
               if invoice.paid:
                    # the mirror node check found this transfer first
                    logger.warning(
                         "Invoice %s was already marked paid while transfer %s was in flight",
                         invoice.id,
                         result.transaction_id,
                    )
               else:
                    invoice.mark_as_paid(result.as_record())

          logger.info("Invoice %s settled by %s (%s)", invoice.id, result.transaction_id, result.status)
          return result
