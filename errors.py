# errors.py
"""
Error taxonomy for the invoicing service.

Exception hierarchy:
    InvoiceError (base)
    ├── ValidationError (400)
    │   ├── InvalidAmount
    │   ├── InvalidAccountFormat
    │   └── MalformedAccount
    ├── NotFoundError (404)
    ├── ConflictError (400)
    │   ├── AlreadyPaid
    │   └── SettlementInProgress
    ├── ExternalServiceError (500)
    │   ├── SettlementFailed
    │   └── VerificationUnavailable
    └── InternalError (500)

Every class carries the HTTP status it maps to and a short, client-safe
default message. The exception handlers in main.py render them as
{"error": message}.
"""
from typing import Optional


class InvoiceError(Exception):
     """Base exception for all invoicing errors."""

     status_code: int = 500
     default_message: str = "Internal server error"

     def __init__(self, message: Optional[str] = None) -> None:
          self.message = message or self.default_message
          super().__init__(self.message)


# ---------------------------------------------------------------------------
# Client errors
# ---------------------------------------------------------------------------

class ValidationError(InvoiceError):
     """Bad input. Raised before any external call or state mutation."""
     status_code = 400
     default_message = "Invalid request"


class InvalidAmount(ValidationError):
     """Amount is missing, not a number, not positive, or finer than a tinybar."""
     default_message = "Invalid amount"


class InvalidAccountFormat(ValidationError):
     """Merchant id does not have the shard.realm.num shape."""
     default_message = "Invalid merchant Hedera account ID"


class MalformedAccount(ValidationError):
     """Merchant id has the right shape but the ledger client rejects it."""
     default_message = "Malformed merchant account ID"


class NotFoundError(InvoiceError):
     status_code = 404
     default_message = "Invoice not found"


class ConflictError(InvoiceError):
     status_code = 400
     default_message = "Invoice state conflict"


class AlreadyPaid(ConflictError):
     """Settlement requested for an invoice that is already paid."""
     default_message = "Invoice already paid"


class SettlementInProgress(ConflictError):
     """Settlement requested while another settlement of the same invoice is in flight."""
     default_message = "Invoice payment already in progress"


# ---------------------------------------------------------------------------
# Server errors
# ---------------------------------------------------------------------------

class ExternalServiceError(InvoiceError):
     status_code = 500
     default_message = "External service error"


class SettlementFailed(ExternalServiceError):
     """
     The ledger rejected the transfer, timed out, or returned a non-success
     receipt. The invoice stays unpaid so the caller may retry explicitly.
     """
     default_message = "Payment failed"

     def __init__(self, reason: Optional[str] = None) -> None:
          self.reason = reason
          super().__init__(f"Payment failed: {reason}" if reason else None)


class VerificationUnavailable(ExternalServiceError):
     """The mirror node could not be reached or returned malformed data."""
     default_message = "Error checking transactions"


class InternalError(InvoiceError):
     status_code = 500
     default_message = "Internal server error"
