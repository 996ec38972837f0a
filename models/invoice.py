# models/invoice.py
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

from errors import AlreadyPaid

CURRENCY = "HBAR"


@dataclass(eq=False)
class Invoice:
     """
     Invoice record - a request for payment of a fixed HBAR amount to a
     merchant account.

     id, amount, merchant, currency and created_at never change after
     creation. paid moves from False to True exactly once, together with
     tx; settling is set only while a transfer for this invoice is in
     flight. Mutations happen under the store's per-invoice lock.
     """
     id: str
     amount: Decimal
     merchant: str
     currency: str = CURRENCY
     paid: bool = False
     tx: Optional[Dict[str, Any]] = None
     settling: bool = False
     created_at: float = field(default_factory=time.time)

     def __repr__(self):
          return f"<Invoice(id={self.id}, amount={self.amount}, merchant='{self.merchant}', paid={self.paid})>"

     @property
     def memo(self) -> str:
          """Memo attached to the settlement transfer of this invoice."""
          return f"InvoiceID:{self.id}"

     def mark_as_paid(self, tx: Dict[str, Any]) -> None:
          """
          Attach settlement evidence and mark the invoice as paid.

          tx is written before paid so a reader that sees paid=True without
          holding the lock also sees the evidence.

          Raises:
               AlreadyPaid: evidence is already attached.
          """
          if self.paid:
               raise AlreadyPaid()
          self.tx = tx
          self.paid = True
