"""Process-wide webhook secret with atomic replacement."""

import threading
from typing import Optional


class SecretStore:
    """
    Holds the single active webhook secret.

    Updates are last-write-wins. Readers always see a complete value,
    either the one before or the one after a concurrent update.
    An empty secret means verification is disabled.
    """

    def __init__(self, initial: Optional[str] = "") -> None:
        self._lock = threading.Lock()
        self._value = initial or ""

    def get(self) -> str:
        with self._lock:
            return self._value

    def set(self, value: Optional[str]) -> None:
        with self._lock:
            self._value = value or ""

    @property
    def configured(self) -> bool:
        return bool(self.get())
