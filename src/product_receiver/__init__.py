"""Product webhook receiver with HMAC signature verification."""

__version__ = "1.0.0"
