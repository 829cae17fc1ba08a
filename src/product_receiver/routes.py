import logging
from fastapi import APIRouter, Depends, Header, Request
from typing import Optional

from .auth import verify_admin_token
from .capture import CapturedPayload, capture_payload
from .dispatch import acknowledge, log_headers, utc_now_iso
from .errors import WebhookRejected
from .models import (
    AckResponse,
    ErrorResponse,
    HealthResponse,
    SetSecretRequest,
    SetSecretResponse,
)
from .secret_store import SecretStore
from .signatures import SIGNATURE_HEADER, evaluate

logger = logging.getLogger(__name__)

router = APIRouter()


def get_secret_store(request: Request) -> SecretStore:
    return request.app.state.secret_store


@router.post(
    "/webhooks/products",
    response_model=AckResponse,
    responses={401: {"model": ErrorResponse}},
    tags=["Webhooks"],
)
async def receive_product_webhook(
    captured: CapturedPayload = Depends(capture_payload),
    store: SecretStore = Depends(get_secret_store),
    signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    event_type: Optional[str] = Header(None, alias="X-Event-Type"),
    event_id: Optional[str] = Header(None, alias="X-Event-Id"),
    content_type: Optional[str] = Header(None, alias="Content-Type"),
):
    """
    Receive a product event and verify its signature.

    The signature is checked against the raw body and the secret configured
    at the moment of the call.
    """
    log_headers(event_type, event_id, signature, content_type)

    outcome = evaluate(captured.raw, signature, store.get())
    if not outcome.accepted:
        logger.warning(
            "✗ Invalid signature - rejecting webhook %s (%s)",
            event_id,
            outcome.reason.value,
        )
        raise WebhookRejected(outcome.reason)

    return acknowledge(captured, outcome, event_id)


@router.get("/health", response_model=HealthResponse, tags=["Health Checks"])
async def health_check(store: SecretStore = Depends(get_secret_store)):
    """Health check endpoint for monitoring"""
    configured = store.configured
    if not configured:
        logger.warning("Health check: no webhook secret configured (verification disabled)")

    return HealthResponse(
        status="healthy",
        webhook_secret_configured=configured,
        timestamp=utc_now_iso(),
    )


@router.post(
    "/set-secret",
    response_model=SetSecretResponse,
    responses={401: {"model": ErrorResponse}},
    tags=["Receiver Management"],
    dependencies=[Depends(verify_admin_token)],
)
async def set_secret(
    body: SetSecretRequest, store: SecretStore = Depends(get_secret_store)
):
    """
    Replace the webhook secret.

    An empty secret disables signature verification.
    """
    store.set(body.secret)
    if store.configured:
        logger.info("✓ Webhook secret updated")
    else:
        logger.warning("Webhook secret cleared - signature verification disabled")

    return SetSecretResponse(
        message="Secret updated successfully",
        webhook_secret_configured=store.configured,
    )
