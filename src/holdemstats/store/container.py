# src/holdemstats/store/container.py

"""The state container owned by one dashboard session."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from holdemstats.schemas.hand_history import HandHistoryEntry
from holdemstats.schemas.statistics import LeaderboardEntry, PlayerStatistics
from holdemstats.schemas.view_model import StatisticsViewModel

from . import state as updaters
from .state import StoreState, initial_state
from .view_model import build_view_model

logger = logging.getLogger(__name__)

T = TypeVar("T")

ViewModelCallback = Callable[[StatisticsViewModel], None]
Unsubscribe = Callable[[], None]


class _Watch:
    """A raw selector subscription that only fires on change."""

    def __init__(
        self,
        selector: Callable[[StoreState], Any],
        callback: Callable[[Any], None],
        value: Any,
    ) -> None:
        self.selector = selector
        self.callback = callback
        self.value = value

    def check(self, state: StoreState) -> None:
        value = self.selector(state)
        if value is self.value or value == self.value:
            return
        self.value = value
        self.callback(value)


class StatisticsStore:
    """Holds the canonical StoreState and notifies subscribers of changes.

    All writes go through the named updater methods; each one swaps in a new
    snapshot. Subscribers are notified once per event-loop tick in which any
    write happened, so an effect that issues several updater calls for one
    logical result produces a single view-model. Outside of a running loop
    notifications are delivered immediately.

    Once discarded, the store drops its subscribers and ignores every write.
    """

    def __init__(self, state: StoreState | None = None) -> None:
        self._state = state if state is not None else initial_state()
        self._subscribers: list[ViewModelCallback] = []
        self._watches: list[_Watch] = []
        self._pending: asyncio.Handle | None = None
        self._discarded = False

    # =========================================================================
    # Reads
    # =========================================================================

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def view_model(self) -> StatisticsViewModel:
        """A freshly derived view-model of the current snapshot."""
        return build_view_model(self._state)

    @property
    def discarded(self) -> bool:
        return self._discarded

    def select(self, selector: Callable[[StoreState], T]) -> T:
        return selector(self._state)

    def subscribe(self, callback: ViewModelCallback) -> Unsubscribe:
        """Receive the current view-model now and every recomputed one after.

        Returns a callable that removes the subscription.
        """
        self._subscribers.append(callback)
        callback(build_view_model(self._state))

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def watch(
        self, selector: Callable[[StoreState], T], callback: Callable[[T], None]
    ) -> Unsubscribe:
        """Receive the selected value now and whenever it changes."""
        current = selector(self._state)
        entry = _Watch(selector, callback, current)
        self._watches.append(entry)
        callback(current)

        def unsubscribe() -> None:
            if entry in self._watches:
                self._watches.remove(entry)

        return unsubscribe

    # =========================================================================
    # Updaters
    # =========================================================================

    def set_player_stats(self, stats: PlayerStatistics | None) -> None:
        self._apply(updaters.set_player_stats, stats)

    def set_all_players_stats(self, stats: Iterable[PlayerStatistics]) -> None:
        self._apply(updaters.set_all_players_stats, stats)

    def set_leaderboard(self, leaderboard: Iterable[LeaderboardEntry]) -> None:
        self._apply(updaters.set_leaderboard, leaderboard)

    def set_hand_history(self, hands: Iterable[HandHistoryEntry]) -> None:
        self._apply(updaters.set_hand_history, hands)

    def append_hand_history(self, hands: Iterable[HandHistoryEntry]) -> None:
        self._apply(updaters.append_hand_history, hands)

    def set_selected_hand(self, hand: HandHistoryEntry | None) -> None:
        self._apply(updaters.set_selected_hand, hand)

    def set_loading(self, is_loading: bool) -> None:
        self._apply(updaters.set_loading, is_loading)

    def set_error(self, error: str | None) -> None:
        self._apply(updaters.set_error, error)

    def set_pagination(self, current_page: int, total_pages: int) -> None:
        self._apply(updaters.set_pagination, current_page, total_pages)

    def set_page_size(self, page_size: int) -> None:
        self._apply(updaters.set_page_size, page_size)

    def reset(self) -> None:
        self._apply(updaters.reset)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def discard(self) -> None:
        """Tear the store down: reset to defaults and stop accepting writes."""
        if self._discarded:
            return
        self._state = initial_state()
        self._discarded = True
        self._subscribers.clear()
        self._watches.clear()
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        logger.debug("Statistics store discarded")

    # =========================================================================
    # Internals
    # =========================================================================

    def _apply(self, updater: Callable[..., StoreState], *payload: Any) -> None:
        if self._discarded:
            logger.debug(
                "Ignoring write to discarded store",
                extra={"updater": updater.__name__},
            )
            return
        self._state = updater(self._state, *payload)
        self._schedule_notify()

    def _schedule_notify(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._notify()
            return
        if self._pending is None:
            self._pending = loop.call_soon(self._notify)

    def _notify(self) -> None:
        self._pending = None
        if self._discarded:
            return
        snapshot = self._state
        if self._subscribers:
            view_model = build_view_model(snapshot)
            for callback in list(self._subscribers):
                self._deliver(callback, view_model)
        for entry in list(self._watches):
            self._deliver(entry.check, snapshot)

    @staticmethod
    def _deliver(callback: Callable[[Any], None], value: Any) -> None:
        try:
            callback(value)
        except Exception as e:
            # One failing subscriber must not starve the others
            logger.error("Store subscriber failed: %s", e, exc_info=True)
