import base64
import hashlib
import hmac
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Webhook-Signature"


class Decision(str, Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class RejectionReason(str, Enum):
    MISSING_SIGNATURE = "missing_signature"
    SIGNATURE_MISMATCH = "signature_mismatch"
    VERIFICATION_ERROR = "verification_error"


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of verifying one request"""

    decision: Decision
    reason: Optional[RejectionReason] = None
    verification_disabled: bool = False

    @property
    def accepted(self) -> bool:
        return self.decision is Decision.ACCEPTED


def sign_payload(payload: bytes, secret: str) -> str:
    """
    Generate the webhook signature for a raw payload.

    Returns base64(HMAC-SHA256(secret, payload)), the value sent in the
    X-Webhook-Signature header.
    """
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """
    Compare two byte strings without revealing where they differ.

    Only a length mismatch returns early; equal-length inputs always walk
    every byte.
    """
    if len(a) != len(b):
        return False

    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0


def _compare(payload: bytes, provided_signature: str, secret: str) -> bool:
    expected = sign_payload(payload, secret).encode("ascii")
    provided = provided_signature.encode("utf-8", errors="replace")
    return constant_time_equals(expected, provided)


def evaluate(
    payload: bytes, provided_signature: Optional[str], secret: Optional[str]
) -> VerificationOutcome:
    """
    Decide whether a payload was signed by a holder of the shared secret.

    - No secret configured: accepted with verification disabled.
    - Secret configured but no signature: rejected (fail closed).
    - Otherwise: constant-time comparison against the expected signature.
      Errors while hashing are rejections, never exceptions.
    """
    if not secret:
        return VerificationOutcome(Decision.ACCEPTED, verification_disabled=True)

    if provided_signature is None:
        return VerificationOutcome(Decision.REJECTED, RejectionReason.MISSING_SIGNATURE)

    try:
        is_valid = _compare(payload, provided_signature, secret)
    except Exception as e:
        logger.error("Error verifying signature: %s", e)
        return VerificationOutcome(Decision.REJECTED, RejectionReason.VERIFICATION_ERROR)

    if not is_valid:
        return VerificationOutcome(Decision.REJECTED, RejectionReason.SIGNATURE_MISMATCH)

    return VerificationOutcome(Decision.ACCEPTED)


def verify(payload: bytes, provided_signature: Optional[str], secret: Optional[str]) -> bool:
    """Boolean form of evaluate()"""
    return evaluate(payload, provided_signature, secret).accepted
