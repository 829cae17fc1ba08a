"""
Raw body capture for signature verification.

Signatures are computed over the exact bytes the sender posted, so the body
is read once as bytes and only then decoded. A failed decode never loses
the raw bytes.
"""
import json
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Request
from pydantic import ValidationError

from .models import ProductEvent


@dataclass(frozen=True)
class CapturedPayload:
    raw: bytes
    document: Optional[Any] = None
    envelope: Optional[ProductEvent] = None
    decode_error: Optional[str] = None

    @property
    def decoded(self) -> bool:
        return self.envelope is not None


def decode_envelope(raw: bytes) -> CapturedPayload:
    """Best-effort JSON and envelope decode of a raw body"""
    try:
        document = json.loads(raw.decode("utf-8"))
    except (ValueError, RecursionError) as e:
        return CapturedPayload(raw=raw, decode_error=f"Invalid JSON body: {e}")

    if not isinstance(document, dict):
        return CapturedPayload(
            raw=raw,
            document=document,
            decode_error=f"Expected a JSON object, got {type(document).__name__}",
        )

    try:
        envelope = ProductEvent.model_validate(document)
    except ValidationError as e:
        return CapturedPayload(
            raw=raw,
            document=document,
            decode_error=f"Invalid event envelope: {e.error_count()} error(s)",
        )

    return CapturedPayload(raw=raw, document=document, envelope=envelope)


async def capture_payload(request: Request) -> CapturedPayload:
    """FastAPI dependency: read the raw body, then decode it"""
    body = await request.body()
    return decode_envelope(body)
