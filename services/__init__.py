# services/__init__.py
from .accounts import is_valid_account_format
from .invoice_service import InvoiceService, parse_amount
from .ledger_client import LedgerClient, OperatorCredentials, TransferReceipt, to_tinybars
from .mirror_service import MirrorNodeClient, decode_memo
from .settlement_service import SettlementService, SettlementResult
from .verification_service import VerificationService, VerificationResult, find_settlement

__all__ = [
     "is_valid_account_format",
     "InvoiceService",
     "parse_amount",
     "LedgerClient",
     "OperatorCredentials",
     "TransferReceipt",
     "to_tinybars",
     "MirrorNodeClient",
     "decode_memo",
     "SettlementService",
     "SettlementResult",
     "VerificationService",
     "VerificationResult",
     "find_settlement",
]
