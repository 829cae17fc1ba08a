import logging
from datetime import datetime, timezone
from typing import List, Optional

from .capture import CapturedPayload
from .models import EVENT_TYPES, AckResponse, ProductEvent
from .signatures import VerificationOutcome

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2026-02-08T10:30:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_headers(
    event_type: Optional[str],
    event_id: Optional[str],
    signature: Optional[str],
    content_type: Optional[str],
) -> None:
    logger.info(
        "Webhook received: X-Event-Type=%s X-Event-Id=%s Content-Type=%s",
        event_type,
        event_id,
        content_type,
    )
    logger.debug("X-Webhook-Signature: %s", signature)


def describe_event(envelope: ProductEvent) -> List[str]:
    """
    Human-readable summary of an event envelope.

    Diagnostic only; nothing here affects the response.
    """
    lines = [
        f"Event Type: {envelope.event_type}",
        f"Event ID: {envelope.event_id}",
        f"Timestamp: {envelope.timestamp}",
    ]

    product = envelope.product
    if product is not None:
        lines.extend(
            [
                "Product:",
                f"  ID: {product.id}",
                f"  Name: {product.name}",
                f"  Price: ${product.price}",
                f"  SKU: {product.sku}",
                f"  Category: {product.category}",
                f"  Stock: {product.stock_quantity}",
            ]
        )

    return lines


def log_event(captured: CapturedPayload) -> None:
    if captured.envelope is None:
        # Accepted but only partially decoded
        logger.warning(
            "Webhook payload could not be decoded (%s), %d raw bytes",
            captured.decode_error,
            len(captured.raw),
        )
        return

    envelope = captured.envelope
    if envelope.event_type not in EVENT_TYPES:
        logger.warning("Unknown event type: %s", envelope.event_type)

    for line in describe_event(envelope):
        logger.info(line)


def acknowledge(
    captured: CapturedPayload,
    outcome: VerificationOutcome,
    event_id_header: Optional[str] = None,
) -> AckResponse:
    """
    Build the acknowledgment for an accepted webhook.

    The event id echoes the X-Event-Id header, falling back to the
    envelope. Every call is acknowledged independently, so a redelivered
    event id is simply accepted again.
    """
    if outcome.verification_disabled:
        logger.warning("⚠ No webhook secret configured - accepted without verification")
    else:
        logger.info("✓ Signature verified successfully")

    log_event(captured)

    event_id = event_id_header
    if not event_id and captured.envelope is not None:
        event_id = captured.envelope.event_id

    return AckResponse(received=True, event_id=event_id, processed_at=utc_now_iso())
