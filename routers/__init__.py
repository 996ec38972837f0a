# routers/__init__.py
from .invoices import router as invoices_router

__all__ = [
     "invoices_router",
]
