# schemas/__init__.py
from .invoice import (
     InvoiceCreate,
     InvoiceCreateResponse,
     InvoiceStatusResponse,
)
from .payment import PaymentResponse, ErrorResponse

__all__ = [
     "InvoiceCreate",
     "InvoiceCreateResponse",
     "InvoiceStatusResponse",
     "PaymentResponse",
     "ErrorResponse",
]
