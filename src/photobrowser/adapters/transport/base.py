from __future__ import annotations

from typing import Protocol


class TransportError(RuntimeError):
    """Raised when a remote payload cannot be fetched."""


class Transport(Protocol):
    def fetch(self, url: str) -> bytes | None:
        """Fetch the raw response body for ``url``; ``None`` when no payload was received."""
