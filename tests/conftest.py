"""Shared pytest fixtures."""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import InvoiceStore
from main import create_app
from services.invoice_service import InvoiceService
from services.settlement_service import SettlementService
from services.verification_service import VerificationService
from tests.fakes import FakeLedgerClient, FakeMirrorClient


@pytest.fixture
def settings() -> Settings:
    return Settings(
        operator_id="0.0.2",
        operator_key="test-operator-key",
        mirror_node_url="https://mirror.test",
        explorer_url="https://hashscan.io/testnet/transaction",
        static_dir="does-not-exist",
    )


@pytest.fixture
def store() -> InvoiceStore:
    return InvoiceStore()


@pytest.fixture
def ledger() -> FakeLedgerClient:
    return FakeLedgerClient()


@pytest.fixture
def mirror() -> FakeMirrorClient:
    return FakeMirrorClient()


@pytest.fixture
def invoice_service(store: InvoiceStore, ledger: FakeLedgerClient) -> InvoiceService:
    return InvoiceService(store, ledger)


@pytest.fixture
def settlement_service(store: InvoiceStore, ledger: FakeLedgerClient, settings: Settings) -> SettlementService:
    return SettlementService(store, ledger, settings.explorer_url)


@pytest.fixture
def verification_service(store: InvoiceStore, mirror: FakeMirrorClient) -> VerificationService:
    return VerificationService(store, mirror)


@pytest.fixture
def client(settings: Settings, ledger: FakeLedgerClient, mirror: FakeMirrorClient, store: InvoiceStore) -> TestClient:
    app = create_app(settings, ledger=ledger, mirror=mirror, store=store)
    return TestClient(app)
