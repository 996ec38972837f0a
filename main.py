import logging
import os
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config import ConfigurationError, Settings, configure_logging, load_settings
from database import InvoiceStore
from errors import InvoiceError
from routers import invoices_router
from services.invoice_service import InvoiceService
from services.ledger_client import LedgerClient, OperatorCredentials
from services.mirror_service import MirrorNodeClient
from services.settlement_service import SettlementService
from services.verification_service import VerificationService

logger = logging.getLogger("invoicing")


def build_ledger_client(settings: Settings) -> LedgerClient:
    # Imported here so the Hedera SDK loads only when a real client is built
    from services.hedera_client import HederaLedgerClient

    credentials = OperatorCredentials(account_id=settings.operator_id, private_key=settings.operator_key)
    return HederaLedgerClient(credentials, network=settings.hedera_network)


def build_mirror_client(settings: Settings) -> MirrorNodeClient:
    return MirrorNodeClient(
        settings.mirror_node_url,
        page_limit=settings.mirror_page_limit,
        max_pages=settings.mirror_max_pages,
        timeout=settings.mirror_timeout,
    )


def create_app(
    settings: Settings,
    ledger: Optional[LedgerClient] = None,
    mirror: Optional[MirrorNodeClient] = None,
    store: Optional[InvoiceStore] = None,
) -> FastAPI:
    """Wire the store, the external clients and the three invoice services into an app."""
    store = store if store is not None else InvoiceStore()
    ledger = ledger if ledger is not None else build_ledger_client(settings)
    mirror = mirror if mirror is not None else build_mirror_client(settings)

    # App instance
    app = FastAPI(title="HBAR Invoicing")
    app.state.settings = settings
    app.state.store = store
    app.state.invoice_service = InvoiceService(store, ledger)
    app.state.settlement_service = SettlementService(store, ledger, settings.explorer_url)
    app.state.verification_service = VerificationService(store, mirror)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvoiceError)
    async def invoice_error_handler(request: Request, exc: InvoiceError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    # 404 Fallback
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(invoices_router)

    # Front-end page, when shipped alongside the service
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def build_app() -> FastAPI:
    """Application factory for uvicorn. Exits the process when configuration is missing."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error("❌ %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    return create_app(settings)


if __name__ == "__main__":
    app = build_app()
    port = app.state.settings.port
    logger.info("✅ Server running on http://localhost:%s", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
