# schemas/payment.py
"""
Pydantic schemas for the pay-invoice API.
"""
from pydantic import BaseModel, ConfigDict, Field


class PaymentResponse(BaseModel):
     """Response for POST /invoices/{invoice_id}/pay."""

     success: bool = True
     message: str = "Invoice paid successfully"
     txId: str = Field(..., description="Ledger transaction ID of the transfer")
     link: str = Field(..., description="Explorer URL for the transaction")
     status: str = Field(..., description="Receipt status reported by the ledger")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "success": True,
                    "message": "Invoice paid successfully",
                    "txId": "0.0.1001@1700000000.000000001",
                    "link": "https://hashscan.io/testnet/transaction/0.0.1001@1700000000.000000001",
                    "status": "SUCCESS",
               }
          }
     )


class ErrorResponse(BaseModel):
     """Body of every error response."""

     error: str
