"""Tests for invoice creation and input validation."""

from decimal import Decimal

import pytest

from database import InvoiceStore
from errors import InvalidAccountFormat, InvalidAmount, MalformedAccount
from services.accounts import is_valid_account_format
from services.invoice_service import InvoiceService, parse_amount


# =============================================================================
# Amount parsing
# =============================================================================


class TestParseAmount:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12.5, Decimal("12.5")),
            (1, Decimal("1")),
            ("3.25", Decimal("3.25")),
            (" 7 ", Decimal("7")),
            (Decimal("0.00000001"), Decimal("0.00000001")),
            (0.1, Decimal("0.1")),
        ],
    )
    def test_accepts_positive_numbers(self, value, expected) -> None:
        assert parse_amount(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "NaN", "Infinity", 0, -1, "-0.5", 0.0, True, False, [], {}],
    )
    def test_rejects_invalid_amounts(self, value) -> None:
        with pytest.raises(InvalidAmount):
            parse_amount(value)

    def test_rejects_amount_finer_than_a_tinybar(self) -> None:
        with pytest.raises(InvalidAmount, match="8 decimal places"):
            parse_amount("0.000000001")


# =============================================================================
# Account shape check
# =============================================================================


class TestAccountFormat:
    @pytest.mark.parametrize("account_id", ["0.0.717", "0.0.0", "1.2.3", "0.0.12345678"])
    def test_accepts_shard_realm_num(self, account_id: str) -> None:
        assert is_valid_account_format(account_id)

    @pytest.mark.parametrize(
        "account_id",
        [None, 717, "", "0.0", "0.0.717.1", "0.0.-1", "0.0.abc", " 0.0.717", "0.0.717\n", "0x0.0.1", "0..717", "٠.٠.٧١٧"],
    )
    def test_rejects_everything_else(self, account_id) -> None:
        assert not is_valid_account_format(account_id)


# =============================================================================
# Invoice creation
# =============================================================================


class TestCreateInvoice:
    def test_creates_unpaid_invoice_and_stores_it(
        self, invoice_service: InvoiceService, store: InvoiceStore
    ) -> None:
        invoice = invoice_service.create_invoice(12.5, "0.0.717")

        assert invoice.amount == Decimal("12.5")
        assert invoice.merchant == "0.0.717"
        assert invoice.currency == "HBAR"
        assert invoice.paid is False
        assert invoice.tx is None
        assert store.get(invoice.id) is invoice

    def test_ids_are_unique(self, invoice_service: InvoiceService, store: InvoiceStore) -> None:
        ids = {invoice_service.create_invoice(1, "0.0.717").id for _ in range(200)}

        assert len(ids) == 200
        assert len(store) == 200

    def test_id_is_a_uuid(self, invoice_service: InvoiceService) -> None:
        invoice = invoice_service.create_invoice(1, "0.0.717")

        parts = invoice.id.split("-")
        assert [len(part) for part in parts] == [8, 4, 4, 4, 12]

    def test_leading_zero_account_is_rejected_by_ledger_parser(
        self, invoice_service: InvoiceService, store: InvoiceStore
    ) -> None:
        with pytest.raises(MalformedAccount):
            invoice_service.create_invoice(1, "0.0.0717")

        assert len(store) == 0

    @pytest.mark.parametrize("amount", [None, "abc", 0, -5])
    def test_invalid_amount_stores_nothing(
        self, invoice_service: InvoiceService, store: InvoiceStore, amount
    ) -> None:
        with pytest.raises(InvalidAmount):
            invoice_service.create_invoice(amount, "0.0.717")

        assert len(store) == 0

    @pytest.mark.parametrize("merchant_id", [None, "", "0.0", "alice", "0.0.x", "٠.٠.٧١٧"])
    def test_wrong_account_shape_stores_nothing(
        self, invoice_service: InvoiceService, store: InvoiceStore, merchant_id
    ) -> None:
        with pytest.raises(InvalidAccountFormat):
            invoice_service.create_invoice(10, merchant_id)

        assert len(store) == 0

    def test_ledger_rejected_account_stores_nothing(
        self, invoice_service: InvoiceService, store: InvoiceStore
    ) -> None:
        with pytest.raises(MalformedAccount):
            invoice_service.create_invoice(10, "0.0.99999999999999999999")

        assert len(store) == 0

    def test_amount_is_checked_before_account(self, invoice_service: InvoiceService) -> None:
        with pytest.raises(InvalidAmount):
            invoice_service.create_invoice(0, "not-an-account")
