# src/holdemstats/exceptions.py

"""Custom exception hierarchy for holdemstats.

Fetch errors are raised by transports and classified by the effect
coordinator into the single user-visible error message. Validation errors
are raised by the state container and the replay helpers when called with
values that would break a state invariant.
"""

from __future__ import annotations


class HoldemStatsError(Exception):
    """Base exception for all holdemstats errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Fetch Errors (raised by transports)
# =============================================================================


class FetchError(HoldemStatsError):
    """Base class for failures of the data-fetch capability."""

    pass


class TransportError(FetchError):
    """Raised when the request never reached the server or got no response."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message=message, details={"path": path})
        self.path = path


class HttpStatusError(FetchError):
    """Raised when the server answered with a 4xx/5xx status.

    Attributes:
        status_code: The HTTP status code
        status_text: The reason phrase sent with the status line
        server_message: Message extracted from the response body, if any
        path: The requested path
    """

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        server_message: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(
            message=f"HTTP {status_code} {status_text}".rstrip(),
            details={
                "status_code": status_code,
                "path": path,
                "server_message": server_message,
            },
        )
        self.status_code = status_code
        self.status_text = status_text
        self.server_message = server_message
        self.path = path


class NotFoundError(HttpStatusError):
    """Raised when the server answered 404."""

    def __init__(
        self,
        status_text: str = "Not Found",
        server_message: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(404, status_text, server_message, path)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(HoldemStatsError):
    """Base class for validation errors."""

    pass


class PaginationError(ValidationError):
    """Raised when a pagination cursor would leave [0, total_pages)."""

    def __init__(self, current_page: int, total_pages: int) -> None:
        super().__init__(
            message=f"Page {current_page} is outside of {total_pages} page(s)",
            details={"current_page": current_page, "total_pages": total_pages},
        )


class PageSizeError(ValidationError):
    """Raised when a page size is not a positive integer."""

    def __init__(self, page_size: int) -> None:
        super().__init__(
            message=f"Page size must be at least 1, got {page_size}",
            details={"page_size": page_size},
        )


class ReplayIndexError(ValidationError):
    """Raised when a replay cursor is moved outside of the hand's actions."""

    def __init__(self, index: int, total_actions: int) -> None:
        super().__init__(
            message=f"Action index {index} is outside of 0..{total_actions}",
            details={"index": index, "total_actions": total_actions},
        )
