import json
import logging
import uuid
import requests
from typing import Any, Dict, Optional, Tuple

from .dispatch import utc_now_iso
from .models import ProductEvent
from .signatures import SIGNATURE_HEADER, sign_payload

logger = logging.getLogger(__name__)


def generate_event_id() -> str:
    return f"evt_{uuid.uuid4().hex[:16]}"


def build_event(event_type: str, product: Optional[Dict[str, Any]] = None) -> ProductEvent:
    """Create an event envelope the way the catalog service emits it"""
    return ProductEvent(
        event_id=generate_event_id(),
        event_type=event_type,
        timestamp=utc_now_iso(),
        product=product,
    )


def serialize_event(event: ProductEvent) -> bytes:
    return event.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def deliver_event(
    target_url: str, event: ProductEvent, webhook_secret: str, timeout: int = 30
) -> Tuple[bool, int, str]:
    """
    Deliver a product event with an HMAC signature.

    The signature covers exactly the bytes posted.

    Returns: (success: bool, status_code: int, error_message: str)
    """
    body = serialize_event(event)

    headers = {
        "Content-Type": "application/json",
        "X-Event-Type": event.event_type or "",
        "X-Event-Id": event.event_id or "",
    }
    if webhook_secret:
        headers[SIGNATURE_HEADER] = sign_payload(body, webhook_secret)

    try:
        response = requests.post(
            target_url,
            data=body,
            headers=headers,
            timeout=timeout,
        )

        success = 200 <= response.status_code < 300
        if success:
            logger.info("✓ Delivered %s to %s (status=%d)", event.event_id, target_url, response.status_code)
            return True, response.status_code, ""

        logger.warning("✗ Delivery of %s to %s failed (status=%d)", event.event_id, target_url, response.status_code)
        return False, response.status_code, _error_message(response)

    except requests.exceptions.Timeout:
        return False, 0, "Request timeout"
    except requests.exceptions.ConnectionError as e:
        return False, 0, f"Connection error: {str(e)}"
    except requests.exceptions.RequestException as e:
        return False, 0, f"Unexpected error: {str(e)}"


def _error_message(response: requests.Response) -> str:
    try:
        return json.loads(response.text).get("error", response.text)
    except (ValueError, AttributeError):
        return response.text
