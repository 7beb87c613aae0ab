"""HTTP transport used by every exchange client."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter

from tradex import logger


class HttpError(Exception):
    """A response with a status other than 200; the body is kept."""

    def __init__(self, status: str, body: bytes = b"") -> None:
        super().__init__(status)
        self.status = status
        self.body = body


class HttpClient(ABC):
    """What an exchange client needs from an HTTP transport."""

    @abstractmethod
    def set_timeout(self, sec: float) -> None:
        """Set the request timeout in seconds."""

    @abstractmethod
    def set_proxy(self, proxy: str) -> None:
        """Route requests through the proxy URL."""

    @abstractmethod
    def do_request(
        self, method: str, url: str, body: str, headers: Mapping[str, str] | None
    ) -> bytes:
        """Send a request and return the response body."""


class DefaultHttpClient(HttpClient):
    """HTTP client backed by a pooled requests session."""

    def __init__(self, timeout: float = 5.0) -> None:
        logger.info("[http utils] setup default http client")
        self.timeout = timeout
        self._session = requests.Session()
        adapter = HTTPAdapter(pool_connections=8, pool_maxsize=4)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def set_timeout(self, sec: float) -> None:
        self.timeout = sec
        logger.info("[DefaultHttpClient] http(s) timeout: %ss", sec)

    def set_proxy(self, proxy: str) -> None:
        try:
            parts = urlsplit(proxy)
            parts.port
        except ValueError as exc:
            logger.warn("[DefaultHttpClient] parse proxy url err: %s", exc)
            raise
        if not parts.scheme or not parts.hostname:
            logger.warn("[DefaultHttpClient] parse proxy url err: %s", proxy)
            raise ValueError(f"invalid proxy url: {proxy!r}")
        logger.info("[DefaultHttpClient] http(s) proxy url: %s", proxy)
        self._session.proxies = {"http": proxy, "https": proxy}

    def do_request(
        self, method: str, url: str, body: str = "", headers: Mapping[str, str] | None = None
    ) -> bytes:
        logger.debug("[DefaultHttpClient] [%s] request url: %s", method, url)
        response = self._session.request(
            method,
            url,
            data=body.encode() if body else None,
            headers=dict(headers) if headers else None,
            timeout=self.timeout,
        )
        with response:
            content = response.content
        if response.status_code != 200:
            raise HttpError(f"{response.status_code} {response.reason}", content)
        return content


_default_client: HttpClient = DefaultHttpClient()


def get_default_client() -> HttpClient:
    """Return the client that exchange APIs send requests through."""
    return _default_client


def set_default_client(client: HttpClient) -> None:
    """Replace the client that exchange APIs send requests through."""
    global _default_client
    logger.info("use new http client implement: %s", type(client).__name__)
    _default_client = client