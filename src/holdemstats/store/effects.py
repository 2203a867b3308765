# src/holdemstats/store/effects.py

"""Async effect coordinator: turns intents into fetches and store writes.

Each trigger performs its pre-fetch writes synchronously, in the order the
triggers are called, then schedules the fetch as an asyncio task and
returns it. In-flight fetches are not cancelled while the session lives:
results are written in the order they complete, so for any slot the last
completed fetch wins. The one exception is load-more, which keeps a single
request live and drops pages fetched for a hand history since replaced.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable, Coroutine, Mapping
from typing import Any, NamedTuple, TypeVar

from pydantic import TypeAdapter

from holdemstats.config import DEFAULT_LEADERBOARD_LIMIT
from holdemstats.exceptions import (
    FetchError,
    HttpStatusError,
    NotFoundError,
    TransportError,
)
from holdemstats.schemas.hand_history import HandHistoryEntry
from holdemstats.schemas.pagination import HandHistoryPage
from holdemstats.schemas.statistics import LeaderboardEntry, PlayerStatistics
from holdemstats.transport.base import Fetcher

from .container import StatisticsStore
from .selectors import select_has_next_page

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PLAYER_STATS_LIST = TypeAdapter(list[PlayerStatistics])
_LEADERBOARD = TypeAdapter(list[LeaderboardEntry])


def describe_error(error: BaseException) -> str:
    """Classify a failed fetch into the single message shown to the user."""
    if isinstance(error, TransportError):
        return f"Error: {error.message}"
    if isinstance(error, HttpStatusError):
        if error.status_code == 404:
            return "Statistics not found"
        return (
            error.server_message
            or f"Error Code: {error.status_code}, Message: {error.status_text}"
        )
    return f"Unexpected error: {error}"


class DashboardLoad(NamedTuple):
    """The three independent loads started by initialize_dashboard().

    Each load manages the store's loading/error fields on its own; nothing
    here aggregates them. Await wait() for a single "all three finished"
    signal.
    """

    player_stats: asyncio.Task[None]
    leaderboard: asyncio.Task[None]
    hand_history: asyncio.Task[None]

    async def wait(self) -> None:
        await asyncio.gather(self.player_stats, self.leaderboard, self.hand_history)


class StatisticsEffects:
    """Runs the statistics store's data-fetch operations.

    Args:
        store: The container every result is written to
        fetcher: The data-fetch capability used for every request
    """

    def __init__(self, store: StatisticsStore, fetcher: Fetcher) -> None:
        self._store = store
        self._fetcher = fetcher
        self._tasks: set[asyncio.Task[None]] = set()
        # Bumped by every replacing load; pages fetched for an older list are dropped
        self._history_generation = 0
        self._more_history: asyncio.Task[None] | None = None

    @property
    def in_flight(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    # =========================================================================
    # Triggers
    # =========================================================================

    def load_player_stats(self, player_id: str) -> asyncio.Task[None]:
        return self._start(
            "load_player_stats",
            f"/statistics/player/{player_id}",
            None,
            PlayerStatistics.model_validate,
            self._store.set_player_stats,
        )

    def load_all_players_stats(self) -> asyncio.Task[None]:
        return self._start(
            "load_all_players_stats",
            "/statistics/all",
            None,
            _PLAYER_STATS_LIST.validate_python,
            self._store.set_all_players_stats,
        )

    def load_leaderboard(
        self, limit: int = DEFAULT_LEADERBOARD_LIMIT
    ) -> asyncio.Task[None]:
        return self._start(
            "load_leaderboard",
            "/statistics/leaderboard",
            {"limit": limit},
            _LEADERBOARD.validate_python,
            self._store.set_leaderboard,
        )

    def load_hand_history(self, player_id: str, page: int = 0) -> asyncio.Task[None]:
        """Load one page of hand history, replacing whatever was loaded."""
        page_size = self._store.state.page_size
        self._history_generation += 1
        self._more_history = None
        return self._start(
            "load_hand_history",
            f"/hand-history/player/{player_id}",
            {"page": page, "size": page_size},
            HandHistoryPage.model_validate,
            self._replace_page,
        )

    def load_more_history(self, player_id: str) -> asyncio.Task[None] | None:
        """Append the page after the current one.

        Only one load-more is live at a time: while one is in flight its task
        is returned and no second request is made. Returns None, without
        fetching or writing anything, when the last page is already loaded.
        """
        pending = self._more_history
        if pending is not None and not pending.done():
            logger.debug(
                "Hand history page already loading", extra={"player_id": player_id}
            )
            return pending

        state = self._store.state
        if not select_has_next_page(state):
            logger.debug(
                "No further hand history page",
                extra={
                    "player_id": player_id,
                    "current_page": state.current_page,
                    "total_pages": state.total_pages,
                },
            )
            return None
        self._more_history = self._start(
            "load_more_history",
            f"/hand-history/player/{player_id}",
            {"page": state.current_page + 1, "size": state.page_size},
            HandHistoryPage.model_validate,
            functools.partial(self._append_page, self._history_generation),
        )
        return self._more_history

    def load_hand_details(self, hand_id: str) -> asyncio.Task[None]:
        return self._start(
            "load_hand_details",
            f"/hand-history/{hand_id}",
            None,
            HandHistoryEntry.model_validate,
            self._store.set_selected_hand,
        )

    def initialize_dashboard(self, player_id: str) -> DashboardLoad:
        """Start the player stats, leaderboard and first history page loads."""
        self._store.set_loading(True)
        return DashboardLoad(
            player_stats=self.load_player_stats(player_id),
            leaderboard=self.load_leaderboard(limit=DEFAULT_LEADERBOARD_LIMIT),
            hand_history=self.load_hand_history(player_id, page=0),
        )

    async def wait_idle(self) -> None:
        """Wait until every fetch started so far has been written back."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    async def shutdown(self) -> None:
        """Cancel every fetch still in flight and wait for the tasks to end.

        Used at teardown, once the store no longer accepts writes.
        """
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug("Cancelled in-flight effects", extra={"count": len(pending)})
            await asyncio.gather(*pending, return_exceptions=True)

    # =========================================================================
    # Internals
    # =========================================================================

    def _replace_page(self, page: HandHistoryPage) -> None:
        self._store.set_hand_history(page.content)
        self._store.set_pagination(page.number, page.total_pages)

    def _append_page(self, generation: int, page: HandHistoryPage) -> None:
        if generation != self._history_generation:
            logger.debug(
                "Dropping page of a replaced hand history",
                extra={"page": page.number},
            )
            return
        self._store.append_hand_history(page.content)
        self._store.set_pagination(page.number, page.total_pages)

    def _start(
        self,
        operation: str,
        path: str,
        params: Mapping[str, Any] | None,
        parse: Callable[[Any], T],
        apply: Callable[[T], None],
    ) -> asyncio.Task[None]:
        task = self._spawn(
            self._run(operation, path, params, parse, apply), f"{operation}:{path}"
        )
        self._store.set_loading(True)
        return task

    def _spawn(
        self, coro: Coroutine[Any, Any, None], name: str
    ) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self,
        operation: str,
        path: str,
        params: Mapping[str, Any] | None,
        parse: Callable[[Any], T],
        apply: Callable[[T], None],
    ) -> None:
        # Parse fully before the first write so a bad payload changes nothing
        try:
            payload = await self._fetcher.fetch(path, params)
            result = parse(payload)
            apply(result)
        except Exception as e:
            self._handle_error(e, operation, path)
            return
        self._store.set_loading(False)
        logger.debug("Effect completed", extra={"operation": operation, "path": path})

    def _handle_error(self, error: Exception, operation: str, path: str) -> None:
        message = describe_error(error)
        self._store.set_error(message)

        log = logger.warning if isinstance(error, NotFoundError) else logger.error
        log(
            "[%s] %s",
            operation,
            message,
            extra={
                "operation": operation,
                "path": path,
                "error_type": type(error).__name__,
            },
            exc_info=not isinstance(error, FetchError),
        )
