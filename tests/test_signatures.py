import base64
import hashlib
import hmac
from unittest.mock import patch

import pytest

from product_receiver.signatures import (
    Decision,
    RejectionReason,
    constant_time_equals,
    evaluate,
    sign_payload,
    verify,
)

SECRET = "abc123"
PAYLOAD = b'{"eventType":"product.created","eventId":"e1"}'


def reference_signature(payload: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def test_sign_payload_matches_hmac_sha256_base64():
    """Signature is base64 of the raw HMAC-SHA256 digest"""
    assert sign_payload(PAYLOAD, SECRET) == reference_signature(PAYLOAD, SECRET)


@pytest.mark.parametrize(
    "payload,secret",
    [
        (PAYLOAD, SECRET),
        (b"", "s"),
        ("{\"name\": \"Café\"}".encode("utf-8"), "whsec_ü"),
        (bytes(range(256)), "binary-secret"),
    ],
)
def test_verify_accepts_valid_signature(payload, secret):
    """A correctly signed payload is accepted"""
    assert verify(payload, sign_payload(payload, secret), secret) is True


def test_verify_rejects_wrong_signature():
    """Any signature other than the expected one is rejected"""
    signature = sign_payload(PAYLOAD, SECRET)
    other = sign_payload(PAYLOAD, "different-secret")

    assert verify(PAYLOAD, other, SECRET) is False
    assert verify(PAYLOAD, signature[:-2], SECRET) is False
    assert verify(PAYLOAD, signature + "=", SECRET) is False
    assert verify(PAYLOAD, "", SECRET) is False


def test_verify_detects_single_byte_tampering():
    """Flipping any byte of the payload invalidates the signature"""
    signature = sign_payload(PAYLOAD, SECRET)

    for index in range(len(PAYLOAD)):
        tampered = bytearray(PAYLOAD)
        tampered[index] ^= 0x01
        assert verify(bytes(tampered), signature, SECRET) is False


@pytest.mark.parametrize("signature", [None, "", "garbage", sign_payload(PAYLOAD, "x")])
def test_verify_without_secret_is_disabled(signature):
    """No configured secret accepts anything (degraded mode)"""
    outcome = evaluate(PAYLOAD, signature, "")

    assert outcome.decision is Decision.ACCEPTED
    assert outcome.verification_disabled is True
    assert verify(PAYLOAD, signature, None) is True


@pytest.mark.parametrize("payload", [PAYLOAD, b"", b"not json"])
def test_missing_signature_with_secret_is_rejected(payload):
    """Omitting the signature fails closed when a secret is configured"""
    outcome = evaluate(payload, None, SECRET)

    assert outcome.decision is Decision.REJECTED
    assert outcome.reason is RejectionReason.MISSING_SIGNATURE


@pytest.mark.parametrize(
    "signature",
    ["!!!not-base64!!!", "ééé", "\ud800", "a" * 44, "=" * 1000],
)
def test_malformed_signature_is_mismatch(signature):
    """Malformed signatures are rejected, never raised"""
    outcome = evaluate(PAYLOAD, signature, SECRET)

    assert outcome.decision is Decision.REJECTED
    assert outcome.reason is RejectionReason.SIGNATURE_MISMATCH


def test_hashing_failure_is_rejection():
    """Unexpected errors while hashing resolve to a rejection"""
    with patch("product_receiver.signatures.hmac.new") as mock_new:
        mock_new.side_effect = RuntimeError("hash failure")
        outcome = evaluate(PAYLOAD, "sig", SECRET)

    assert outcome.decision is Decision.REJECTED
    assert outcome.reason is RejectionReason.VERIFICATION_ERROR


def test_valid_signature_is_not_marked_disabled():
    outcome = evaluate(PAYLOAD, sign_payload(PAYLOAD, SECRET), SECRET)

    assert outcome.accepted
    assert outcome.reason is None
    assert outcome.verification_disabled is False


def test_constant_time_equals():
    assert constant_time_equals(b"", b"") is True
    assert constant_time_equals(b"abc", b"abc") is True
    assert constant_time_equals(b"abc", b"abd") is False
    assert constant_time_equals(b"abc", b"xbc") is False
    assert constant_time_equals(b"abc", b"abcd") is False
