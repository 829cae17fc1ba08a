"""Receiver configuration from environment variables."""

import logging
import os
from typing import Optional

import boto3

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings:
    """Receiver settings, read from environment variables with defaults."""

    def __init__(
        self,
        webhook_secret: Optional[str] = None,
        secret_parameter: Optional[str] = None,
        admin_token: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.webhook_secret: str = (
            webhook_secret
            if webhook_secret is not None
            else os.getenv("WEBHOOK_SECRET", "")
        )
        self.secret_parameter: Optional[str] = (
            secret_parameter
            if secret_parameter is not None
            else os.getenv("WEBHOOK_SECRET_PARAMETER") or None
        )
        self.admin_token: Optional[str] = (
            admin_token
            if admin_token is not None
            else os.getenv("WEBHOOK_ADMIN_TOKEN") or None
        )
        self.host: str = host or os.getenv("HOST", "0.0.0.0")
        self.port: int = port or int(os.getenv("PORT", "3000"))
        self.log_level: str = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()


def fetch_secret_parameter(name: str) -> str:
    """
    Read the webhook secret from SSM Parameter Store.

    Returns an empty string when the parameter cannot be read, which leaves
    the receiver in degraded mode (reported by /health).
    """
    try:
        ssm = boto3.client("ssm")
        response = ssm.get_parameter(Name=name, WithDecryption=True)
        return response["Parameter"]["Value"]
    except Exception as e:
        logger.error("Error retrieving webhook secret parameter %s: %s", name, e)
        return ""


def load_initial_secret(settings: Settings) -> str:
    """Resolve the startup secret: environment first, then SSM."""
    if settings.webhook_secret:
        return settings.webhook_secret

    if settings.secret_parameter:
        secret = fetch_secret_parameter(settings.secret_parameter)
        if secret:
            logger.info(
                "✓ Webhook secret loaded from parameter %s", settings.secret_parameter
            )
        return secret

    return ""


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("product_receiver").setLevel(level)
