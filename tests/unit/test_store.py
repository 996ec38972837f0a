"""Tests for InvoiceStore and the Invoice record."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from decimal import Decimal

import pytest

from database import InvoiceStore
from errors import AlreadyPaid
from models import Invoice


def _invoice(invoice_id: str = "inv-1") -> Invoice:
    return Invoice(id=invoice_id, amount=Decimal("1.5"), merchant="0.0.717")


class TestInvoiceStore:
    def test_get_returns_stored_handle(self) -> None:
        store = InvoiceStore()
        invoice = _invoice()

        store.put(invoice)

        assert store.get("inv-1") is invoice
        assert "inv-1" in store
        assert len(store) == 1

    def test_get_unknown_returns_none(self) -> None:
        assert InvoiceStore().get("nope") is None

    def test_put_rejects_duplicate_id(self) -> None:
        store = InvoiceStore()
        store.put(_invoice())

        with pytest.raises(ValueError):
            store.put(_invoice())

    def test_mutation_through_handle_is_visible(self) -> None:
        store = InvoiceStore()
        store.put(_invoice())

        store.get("inv-1").mark_as_paid({"id": "tx"})

        assert store.get("inv-1").paid is True

    def test_lock_serializes_same_invoice(self) -> None:
        store = InvoiceStore()
        store.put(_invoice())
        inside = 0
        max_inside = 0
        counter_lock = threading.Lock()

        def critical_section() -> None:
            nonlocal inside, max_inside
            with store.lock("inv-1"):
                with counter_lock:
                    inside += 1
                    max_inside = max(max_inside, inside)
                time.sleep(0.01)
                with counter_lock:
                    inside -= 1

        with ThreadPoolExecutor(max_workers=5) as pool:
            wait([pool.submit(critical_section) for _ in range(10)])

        assert max_inside == 1

    def test_locks_of_different_invoices_are_independent(self) -> None:
        store = InvoiceStore()
        store.put(_invoice("a"))
        store.put(_invoice("b"))

        with store.lock("a"):
            acquired = threading.Event()

            def take_b() -> None:
                with store.lock("b"):
                    acquired.set()

            thread = threading.Thread(target=take_b)
            thread.start()
            assert acquired.wait(timeout=5)
            thread.join()


class TestInvoice:
    def test_new_invoice_is_unpaid(self) -> None:
        invoice = _invoice()

        assert invoice.paid is False
        assert invoice.tx is None
        assert invoice.settling is False
        assert invoice.currency == "HBAR"
        assert invoice.created_at > 0

    def test_memo_embeds_id_verbatim(self) -> None:
        assert _invoice("6f1c-x").memo == "InvoiceID:6f1c-x"

    def test_mark_as_paid_attaches_evidence_once(self) -> None:
        invoice = _invoice()
        invoice.mark_as_paid({"id": "first"})

        with pytest.raises(AlreadyPaid):
            invoice.mark_as_paid({"id": "second"})

        assert invoice.paid is True
        assert invoice.tx == {"id": "first"}
