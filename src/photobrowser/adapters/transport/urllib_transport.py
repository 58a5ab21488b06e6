from __future__ import annotations

import logging
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .base import TransportError

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15
DEFAULT_USER_AGENT = "photobrowser/0.1"


class UrllibTransport:
    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    def fetch(self, url: str) -> bytes | None:
        try:
            request = Request(url, headers={"User-Agent": self._user_agent})
            with urlopen(request, timeout=self._timeout_seconds) as response:
                payload = response.read()
        except HTTPError as exc:
            raise TransportError(f"GET {url} failed with HTTP {exc.code}") from exc
        except (URLError, TimeoutError, OSError, HTTPException, ValueError) as exc:
            raise TransportError(f"GET {url} failed") from exc

        LOGGER.debug("Fetched %d bytes from %s", len(payload), url)
        return payload
