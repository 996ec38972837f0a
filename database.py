# database.py
"""
In-memory invoice store and its request dependency.

This module provides:
- InvoiceStore: the single source of truth for invoice state in one process
- Per-invoice locks for the paid transition
- get_store: FastAPI dependency returning the store built at startup

Usage:
     from database import get_store, InvoiceStore

     # In FastAPI routes:
     @router.get("/items/{item_id}")
     def get_item(item_id: str, store: InvoiceStore = Depends(get_store)):
          return store.get(item_id)

Invoices are never evicted or persisted; they live as long as the process.
"""
from contextlib import contextmanager
from threading import Lock
from typing import Dict, Iterator, Optional

from fastapi import Request

from models import Invoice


class InvoiceStore:
     """
     Mapping from invoice id to Invoice.

     Locking uses two levels:
     1. A global lock guards the invoice and lock dictionaries
     2. A per-invoice lock serializes state transitions of one invoice

     Callers hold the per-invoice lock only around check-then-set of the
     paid/settling flags, never across a network call.
     """

     def __init__(self) -> None:
          self._invoices: Dict[str, Invoice] = {}
          self._locks: Dict[str, Lock] = {}
          self._global_lock = Lock()

     def get(self, invoice_id: str) -> Optional[Invoice]:
          """Return the invoice handle for invoice_id, or None."""
          with self._global_lock:
               return self._invoices.get(invoice_id)

     def put(self, invoice: Invoice) -> None:
          """
          Insert a new invoice.

          Raises:
               ValueError: an invoice with the same id is already stored.
          """
          with self._global_lock:
               if invoice.id in self._invoices:
                    raise ValueError(f"Invoice {invoice.id} already exists")
               self._invoices[invoice.id] = invoice
               self._locks[invoice.id] = Lock()

     @contextmanager
     def lock(self, invoice_id: str) -> Iterator[None]:
          """Hold the state-transition lock of one invoice."""
          with self._global_lock:
               if invoice_id not in self._locks:
                    self._locks[invoice_id] = Lock()
               lock = self._locks[invoice_id]

          with lock:
               yield

     def __contains__(self, invoice_id: object) -> bool:
          with self._global_lock:
               return invoice_id in self._invoices

     def __len__(self) -> int:
          with self._global_lock:
               return len(self._invoices)


def get_store(request: Request) -> InvoiceStore:
     """
     FastAPI dependency that provides the process-wide invoice store.

     The store is created once by main.create_app and kept on app.state.
     """
     return request.app.state.store
