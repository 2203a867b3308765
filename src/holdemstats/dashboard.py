# src/holdemstats/dashboard.py

"""Explicit ownership of one dashboard session's store."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from .config import API_URL
from .store import StatisticsEffects, StatisticsStore
from .transport import Fetcher, HttpxFetcher

logger = logging.getLogger(__name__)


class StatisticsDashboard:
    """Bundles the store, its effect coordinator and the fetcher they share.

    The dashboard owns the store: teardown() discards it, after which any
    fetch still in flight completes without writing anything.
    """

    def __init__(self, fetcher: Fetcher, store: StatisticsStore | None = None) -> None:
        self.fetcher = fetcher
        self.store = store if store is not None else StatisticsStore()
        self.effects = StatisticsEffects(self.store, fetcher)

    def teardown(self) -> None:
        self.store.discard()


@asynccontextmanager
async def open_dashboard(
    base_url: str = API_URL, *, fetcher: Fetcher | None = None
) -> AsyncIterator[StatisticsDashboard]:
    """Create a dashboard session and tear it down on exit.

    On exit the store is discarded and fetches still in flight are
    cancelled. When no fetcher is given an HttpxFetcher for `base_url` is
    created and closed with the session.
    """
    owned: HttpxFetcher | None = None
    if fetcher is None:
        fetcher = owned = HttpxFetcher(base_url)
    dashboard = StatisticsDashboard(fetcher)
    logger.debug("Dashboard session opened", extra={"base_url": base_url})
    try:
        yield dashboard
    finally:
        dashboard.teardown()
        await dashboard.effects.shutdown()
        if owned is not None:
            # Shutdown: close the HTTP connection pool
            await owned.aclose()
        logger.debug("Dashboard session closed")
