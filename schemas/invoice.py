# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response bodies.

Request fields are deliberately loose: amount and merchantId are checked
by InvoiceService so each failure maps to its own error.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class InvoiceCreate(BaseModel):
     """Schema for creating a new invoice."""
     amount: Any = Field(None, description="Invoice amount in HBAR (must be positive)")
     merchantId: Any = Field(None, description="Merchant Hedera account ID, shard.realm.num")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "amount": 12.5,
                    "merchantId": "0.0.717"
               }
          }
     )


class InvoiceCreateResponse(BaseModel):
     """Schema for a created invoice."""
     invoiceId: str
     amount: float
     merchant: str
     currency: str = "HBAR"
     message: str = "Invoice created successfully"

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "invoiceId": "6f1c1c1e-8f5e-4c0e-9d57-2a8b6a4c2f10",
                    "amount": 12.5,
                    "merchant": "0.0.717",
                    "currency": "HBAR",
                    "message": "Invoice created successfully"
               }
          }
     )


class InvoiceStatusResponse(BaseModel):
     """Schema for invoice verification. tx is omitted while unpaid."""
     paid: bool
     tx: Optional[Dict[str, Any]] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "paid": True,
                    "tx": {
                         "id": "0.0.1001@1700000000.000000001",
                         "status": "SUCCESS",
                         "link": "https://hashscan.io/testnet/transaction/0.0.1001@1700000000.000000001"
                    }
               }
          }
     )
