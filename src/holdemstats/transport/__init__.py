# src/holdemstats/transport/__init__.py

"""Transports implementing the data-fetch capability."""

from .base import Fetcher
from .httpx_fetcher import HttpxFetcher
from .logging import RequestLoggingHooks

__all__ = ["Fetcher", "HttpxFetcher", "RequestLoggingHooks"]
