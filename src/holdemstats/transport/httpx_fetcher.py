# src/holdemstats/transport/httpx_fetcher.py

"""Fetcher implementation backed by httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from holdemstats.config import API_URL, HTTP_TIMEOUT
from holdemstats.exceptions import HttpStatusError, NotFoundError, TransportError

from .logging import RequestLoggingHooks

logger = logging.getLogger(__name__)


class HttpxFetcher:
    """GETs JSON documents from the game API with an httpx.AsyncClient.

    Args:
        base_url: API root every path is resolved against
        timeout: Seconds before a request is abandoned
        transport: Optional httpx transport (ASGITransport, MockTransport...)
        headers: Extra headers sent with every request (e.g. auth)
    """

    def __init__(
        self,
        base_url: str = API_URL,
        *,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._hooks = RequestLoggingHooks()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers=headers,
            event_hooks=self._hooks.event_hooks(),
        )

    async def fetch(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET `path` and return the decoded JSON body.

        Raises:
            TransportError: If no response was received.
            NotFoundError: If the server answered 404.
            HttpStatusError: For any other 4xx/5xx answer.
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            logger.error(
                "GET %s -> ERROR: %s",
                path,
                message,
                extra={"path": path, "error": message},
                exc_info=True,
            )
            raise TransportError(message, path=path) from e

        if response.is_error:
            raise _status_error(response, path)
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _server_message(response: httpx.Response) -> str | None:
    """Message the server put in an error body, if it sent one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("message", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _status_error(response: httpx.Response, path: str) -> HttpStatusError:
    message = _server_message(response)
    if response.status_code == 404:
        return NotFoundError(response.reason_phrase, message, path)
    return HttpStatusError(response.status_code, response.reason_phrase, message, path)
