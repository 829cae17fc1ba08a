import logging
from fastapi import Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional

from .errors import AdminAuthError
from .signatures import constant_time_equals

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def is_valid_admin_token(provided: Optional[str], expected: str) -> bool:
    if not provided:
        return False
    return constant_time_equals(provided.encode("utf-8"), expected.encode("utf-8"))


async def verify_admin_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> None:
    """
    FastAPI dependency guarding administrative endpoints.

    When WEBHOOK_ADMIN_TOKEN is not configured the endpoint is left open,
    matching the reference receiver, and every call is logged.
    """
    expected = request.app.state.settings.admin_token
    if not expected:
        logger.warning("Administrative call to %s without admin token configured", request.url.path)
        return

    provided = credentials.credentials if credentials else None
    if not is_valid_admin_token(provided, expected):
        logger.warning("✗ Invalid admin token for %s", request.url.path)
        raise AdminAuthError()
