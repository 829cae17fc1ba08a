from .signatures import RejectionReason


class WebhookRejected(Exception):
    """Raised when an inbound webhook fails signature verification"""

    def __init__(self, reason: RejectionReason):
        super().__init__(f"Webhook rejected: {reason.value}")
        self.reason = reason


class AdminAuthError(Exception):
    """Raised when an administrative call lacks a valid admin token"""

    def __init__(self, message: str = "Invalid admin token"):
        super().__init__(message)
        self.message = message
