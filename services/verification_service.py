# services/verification_service.py
"""
Verification Service - discovers invoice settlement on the mirror node.

A paid invoice answers from its recorded evidence without any network
call. An unpaid one triggers a mirror node query for the merchant account
and a linear scan for the first record whose decoded memo contains the
invoice id.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from database import InvoiceStore
from errors import NotFoundError
from services.mirror_service import MirrorNodeClient, decode_memo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
     paid: bool
     tx: Optional[Dict[str, Any]] = None


def find_settlement(records: Iterable[Dict[str, Any]], invoice_id: str) -> Optional[Dict[str, Any]]:
     """Return the first record whose memo contains invoice_id, or None."""
     for record in records:
          if invoice_id in decode_memo(record):
               return record
     return None


class VerificationService:
     """Checks whether an invoice has been settled."""

     def __init__(self, store: InvoiceStore, mirror: MirrorNodeClient) -> None:
          self._store = store
          self._mirror = mirror

     def verify(self, invoice_id: str) -> VerificationResult:
          """
          Report whether the invoice is paid, searching the mirror node if needed.

          Safe to poll: a miss changes nothing, a hit marks the invoice paid
          once and later calls are served from the stored evidence.

          Raises:
               NotFoundError: no invoice with this id
               VerificationUnavailable: mirror node unreachable or malformed;
                    invoice state is untouched
          """
          invoice = self._store.get(invoice_id)
          if invoice is None:
               raise NotFoundError()

          if invoice.paid:
               return VerificationResult(paid=True, tx=invoice.tx)

          records = self._mirror.transactions_for_account(invoice.merchant)
          match = find_settlement(records, invoice.id)
          if match is None:
               logger.debug("No settlement found for invoice %s among %d records", invoice.id, len(records))
               return VerificationResult(paid=False)

          with self._store.lock(invoice_id):
               if not invoice.paid:
                    invoice.mark_as_paid(match)
                    logger.info(
                         "Invoice %s found settled by %s on the mirror node",
                         invoice.id,
                         match.get("transaction_id"),
                    )
               return VerificationResult(paid=True, tx=invoice.tx)
