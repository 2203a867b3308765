# src/holdemstats/transport/logging.py

"""Request/response logging hooks for the httpx client."""

import logging
import time
import uuid

import httpx

logger = logging.getLogger("holdemstats.http")

REQUEST_ID_HEADER = "X-Request-ID"
_STARTED_KEY = "holdemstats.started"


class RequestLoggingHooks:
    """httpx event hooks logging outgoing requests and their responses.

    Logs request method, path, and query parameters when sent.
    Logs response status code and duration when received.
    Adds an X-Request-ID header to each request for tracing.
    """

    def event_hooks(self) -> dict[str, list]:
        """Hooks in the shape httpx.AsyncClient(event_hooks=...) expects."""
        return {"request": [self.on_request], "response": [self.on_response]}

    async def on_request(self, request: httpx.Request) -> None:
        # Generate unique request ID for tracing
        request_id = str(uuid.uuid4())[:8]
        request.headers[REQUEST_ID_HEADER] = request_id
        request.extensions[_STARTED_KEY] = time.perf_counter()

        query = request.url.query.decode()
        logger.info(
            "[%s] %s %s%s",
            request_id,
            request.method,
            request.url.path,
            f"?{query}" if query else "",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query_params": query,
            },
        )

    async def on_response(self, response: httpx.Response) -> None:
        request = response.request
        request_id = request.headers.get(REQUEST_ID_HEADER, "-")
        duration_ms = elapsed_ms(request)

        log = logger.warning if response.is_error else logger.info
        log(
            "[%s] %s %s -> %d (%.2fms)",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )


def elapsed_ms(request: httpx.Request) -> float:
    """Milliseconds since on_request saw this request, 0.0 if it never did."""
    started = request.extensions.get(_STARTED_KEY)
    if started is None:
        return 0.0
    return (time.perf_counter() - started) * 1000
