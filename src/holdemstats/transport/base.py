# src/holdemstats/transport/base.py

"""The data-fetch capability the store depends on."""

from collections.abc import Mapping
from typing import Any, Protocol


class Fetcher(Protocol):
    """Anything that can GET a JSON document from the game API.

    Implementations return the decoded JSON body on success and raise a
    holdemstats.exceptions.FetchError subclass on failure.
    """

    async def fetch(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> Any: ...
