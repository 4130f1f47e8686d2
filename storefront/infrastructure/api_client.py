"""
HTTP transport for the storefront client.

Wraps an ``httpx.AsyncClient`` bound to the backend base URL. Only read requests
are issued. Transient transport failures (connection refused, timeouts) are
retried with exponential backoff using tenacity; HTTP error statuses and
undecodable bodies are not retried.

Every failure surfaces as ``ApiRequestError`` so callers deal with a single
exception type regardless of what went wrong on the wire.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront.config import Settings, get_settings
from storefront.utils.logging import get_logger

log = get_logger(__name__)


class ApiRequestError(Exception):
    """A read request did not yield a usable JSON body."""

    def __init__(self, message: str, *, path: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code


class ApiClient:
    """
    Async JSON reader for the backend.

    Use as an async context manager, or call ``aclose()`` when done.

    Parameters
    ----------
    base_url : str
        Backend root; resource paths are resolved against it.
    token : str | None
        Bearer token sent with every request when set.
    timeout_seconds : float
        Per-request timeout.
    retry_attempts : int
        Total attempts for transport-level failures (1 disables retries).
    retry_wait_seconds : float
        Backoff multiplier between attempts.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (tests inject ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        retry_attempts: int = 3,
        retry_wait_seconds: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retry_attempts = max(1, retry_attempts)
        self.retry_wait_seconds = retry_wait_seconds
        self._headers: Dict[str, str] = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ApiClient":
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            token=settings.api_token,
            timeout_seconds=settings.request_timeout_seconds,
            retry_attempts=settings.request_retry_attempts,
            retry_wait_seconds=settings.request_retry_wait_seconds,
            transport=transport,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def _send(self, path: str) -> httpx.Response:
        client = self._get_client()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    log.debug(
                        "Retrying request",
                        extra={"path": path, "attempt": attempt.retry_state.attempt_number},
                    )
                return await client.get(path)
        raise AssertionError("unreachable")  # pragma: no cover

    async def get_json(self, path: str) -> Any:
        """
        GET ``path`` and return the decoded JSON body (``None`` for an empty body).

        Raises
        ------
        ApiRequestError
            On transport failure after retries, a non-2xx status, or invalid JSON.
        """
        try:
            response = await self._send(path)
        except httpx.TransportError as exc:
            raise ApiRequestError(f"GET {path} failed: {exc!r}", path=path) from exc

        if response.is_error:
            raise ApiRequestError(
                f"GET {path} returned HTTP {response.status_code}",
                path=path,
                status_code=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiRequestError(f"GET {path} returned invalid JSON", path=path) from exc

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["ApiClient", "ApiRequestError"]
