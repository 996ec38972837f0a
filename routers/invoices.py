# routers/invoices.py
"""
Invoice API routes.

- POST /invoices                 create an invoice
- POST /invoices/{invoice_id}/pay settle it with an operator transfer
- GET  /invoices/{invoice_id}     verify settlement (safe to poll)

Errors are raised as errors.InvoiceError subclasses and rendered by the
exception handlers registered in main.py.
"""
from fastapi import APIRouter, Depends, Request, status

from schemas.invoice import InvoiceCreate, InvoiceCreateResponse, InvoiceStatusResponse
from schemas.payment import ErrorResponse, PaymentResponse
from services.invoice_service import InvoiceService
from services.settlement_service import SettlementService
from services.verification_service import VerificationService

router = APIRouter(prefix="/invoices", tags=["invoices"])


# ---------------------------------------------------------------------------
# Service dependencies (built once in main.create_app)
# ---------------------------------------------------------------------------

def get_invoice_service(request: Request) -> InvoiceService:
     return request.app.state.invoice_service


def get_settlement_service(request: Request) -> SettlementService:
     return request.app.state.settlement_service


def get_verification_service(request: Request) -> VerificationService:
     return request.app.state.verification_service


@router.post(
     "",
     response_model=InvoiceCreateResponse,
     status_code=status.HTTP_201_CREATED,
     responses={400: {"model": ErrorResponse}},
     summary="Create a new invoice"
)
def create_invoice(
     invoice_data: InvoiceCreate,
     invoices: InvoiceService = Depends(get_invoice_service),
):
     """
     Create an unpaid invoice.

     - **amount**: HBAR amount (must be positive)
     - **merchantId**: Hedera account that will receive the payment
     """
     invoice = invoices.create_invoice(invoice_data.amount, invoice_data.merchantId)
     return InvoiceCreateResponse(
          invoiceId=invoice.id,
          amount=float(invoice.amount),
          merchant=invoice.merchant,
          currency=invoice.currency,
     )


@router.post(
     "/{invoice_id}/pay",
     response_model=PaymentResponse,
     responses={
          400: {"model": ErrorResponse},
          404: {"model": ErrorResponse},
          500: {"model": ErrorResponse},
     },
     summary="Pay an invoice from the operator account"
)
def pay_invoice(
     invoice_id: str,
     settlement: SettlementService = Depends(get_settlement_service),
):
     """
     Transfer the invoice amount from the operator account to the merchant.

     Never retried server side. A 500 leaves the invoice unpaid; poll
     GET /invoices/{invoice_id} before paying again.
     """
     result = settlement.pay(invoice_id)
     return PaymentResponse(
          txId=result.transaction_id,
          link=result.link,
          status=result.status,
     )


@router.get(
     "/{invoice_id}",
     responses={
          200: {"model": InvoiceStatusResponse},
          404: {"model": ErrorResponse},
          500: {"model": ErrorResponse},
     },
     summary="Check whether an invoice is paid"
)
def verify_invoice(
     invoice_id: str,
     verification: VerificationService = Depends(get_verification_service),
):
     """
     Return the recorded settlement, or search the mirror node for a
     transfer whose memo contains the invoice ID.
     """
     result = verification.verify(invoice_id)
     if not result.paid:
          return {"paid": False}
     return {"paid": True, "tx": result.tx}
