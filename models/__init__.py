# models/__init__.py
from .invoice import Invoice, CURRENCY

__all__ = [
     "Invoice",
     "CURRENCY",
]
