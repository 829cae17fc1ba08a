#!/usr/bin/env python3
"""
Product webhook receiver.
FastAPI app that validates HMAC signatures on catalog product events.
"""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from mangum import Mangum

from . import __version__
from .config import Settings, configure_logging, load_initial_secret
from .errors import AdminAuthError, WebhookRejected
from .routes import router
from .secret_store import SecretStore

logger = logging.getLogger(__name__)

REJECTION_REASON_HEADER = "X-Webhook-Rejection-Reason"


async def webhook_rejected_handler(request: Request, exc: WebhookRejected) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"error": "Invalid signature"},
        headers={REJECTION_REASON_HEADER: exc.reason.value},
    )


async def admin_auth_error_handler(request: Request, exc: AdminAuthError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Product Webhook Receiver",
        description="Receiver for catalog product webhooks with HMAC validation",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.secret_store = SecretStore(load_initial_secret(settings))

    app.include_router(router)
    app.add_exception_handler(WebhookRejected, webhook_rejected_handler)
    app.add_exception_handler(AdminAuthError, admin_auth_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    return app


def log_startup_banner(app: FastAPI) -> None:
    settings = app.state.settings
    configured = app.state.secret_store.configured

    logger.info("=" * 60)
    logger.info("Product Webhook Receiver started")
    logger.info("Listening on http://%s:%d", settings.host, settings.port)
    logger.info("Webhook endpoint: http://%s:%d/webhooks/products", settings.host, settings.port)
    if configured:
        logger.info("Secret configured: yes")
    else:
        logger.warning("Secret configured: no (verification disabled)")
        logger.warning("To enable signature verification:")
        logger.warning("  1. Set the WEBHOOK_SECRET environment variable, or")
        logger.warning('  2. POST to /set-secret with {"secret": "your-secret"}')
    if not settings.admin_token:
        logger.warning("WEBHOOK_ADMIN_TOKEN not set - /set-secret is unauthenticated")
    logger.info("=" * 60)


app = create_app()

# Lambda handler using Mangum adapter
handler = Mangum(app)


def main() -> None:
    settings = app.state.settings
    log_startup_banner(app)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
