# src/holdemstats/store/state.py

"""The canonical store snapshot and the updaters that replace it.

Every updater takes the previous snapshot and a payload and returns a new
snapshot. Snapshots are frozen; an updater never edits its input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from holdemstats.config import DEFAULT_PAGE_SIZE
from holdemstats.exceptions import PageSizeError, PaginationError
from holdemstats.schemas.hand_history import HandHistoryEntry
from holdemstats.schemas.statistics import LeaderboardEntry, PlayerStatistics


class StoreState(BaseModel):
    """Root aggregate holding everything the statistics dashboard shows.

    Attributes:
        player_stats: Statistics of the dashboard's player, if loaded
        all_players_stats: Statistics of every player, keyed by player_id
        leaderboard: Ranked rows, in server order
        hand_history: Loaded hand history pages, concatenated in order
        selected_hand: Hand opened for detail view (may not be in hand_history)
        is_loading: Coarse flag shared by every load operation
        error: Message of the most recent failure, cleared by the next write
        current_page: Zero-based index of the last hand history page loaded
        total_pages: Pages available for the loaded hand history
        page_size: Page size requested for hand history
    """

    player_stats: PlayerStatistics | None = None
    all_players_stats: Mapping[str, PlayerStatistics] = Field(
        default_factory=lambda: MappingProxyType({})
    )
    leaderboard: tuple[LeaderboardEntry, ...] = ()
    hand_history: tuple[HandHistoryEntry, ...] = ()
    selected_hand: HandHistoryEntry | None = None
    is_loading: bool = False
    error: str | None = None
    current_page: int = 0
    total_pages: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    model_config = ConfigDict(frozen=True)

    @field_validator("all_players_stats", mode="after")
    @classmethod
    def _read_only_players(
        cls, value: Mapping[str, PlayerStatistics]
    ) -> Mapping[str, PlayerStatistics]:
        return MappingProxyType(dict(value))


def initial_state() -> StoreState:
    """Return the all-defaults snapshot of a fresh dashboard session."""
    return StoreState()


# =============================================================================
# Data-bearing updaters (each one clears `error`)
# =============================================================================


def set_player_stats(state: StoreState, stats: PlayerStatistics | None) -> StoreState:
    return state.model_copy(update={"player_stats": stats, "error": None})


def set_all_players_stats(
    state: StoreState, stats: Iterable[PlayerStatistics]
) -> StoreState:
    by_player = MappingProxyType({s.player_id: s for s in stats})
    return state.model_copy(update={"all_players_stats": by_player, "error": None})


def set_leaderboard(
    state: StoreState, leaderboard: Iterable[LeaderboardEntry]
) -> StoreState:
    return state.model_copy(update={"leaderboard": tuple(leaderboard), "error": None})


def set_hand_history(
    state: StoreState, hands: Iterable[HandHistoryEntry]
) -> StoreState:
    """Replace the loaded hand history."""
    return state.model_copy(update={"hand_history": tuple(hands), "error": None})


def append_hand_history(
    state: StoreState, hands: Iterable[HandHistoryEntry]
) -> StoreState:
    """Concatenate a page after the hands already loaded, preserving order."""
    combined = state.hand_history + tuple(hands)
    return state.model_copy(update={"hand_history": combined, "error": None})


def set_selected_hand(
    state: StoreState, hand: HandHistoryEntry | None
) -> StoreState:
    return state.model_copy(update={"selected_hand": hand, "error": None})


# =============================================================================
# Flag and cursor updaters
# =============================================================================


def set_loading(state: StoreState, is_loading: bool) -> StoreState:
    return state.model_copy(update={"is_loading": is_loading})


def set_error(state: StoreState, error: str | None) -> StoreState:
    """Record a failure; a failed operation is never still loading."""
    return state.model_copy(update={"error": error, "is_loading": False})


def set_pagination(
    state: StoreState, current_page: int, total_pages: int
) -> StoreState:
    """Move the hand history cursor.

    Raises:
        PaginationError: If current_page is outside [0, total_pages) and the
            pair is not the unloaded (0, 0).
    """
    unloaded = current_page == 0 and total_pages == 0
    if not unloaded and not 0 <= current_page < total_pages:
        raise PaginationError(current_page, total_pages)
    return state.model_copy(
        update={"current_page": current_page, "total_pages": total_pages}
    )


def set_page_size(state: StoreState, page_size: int) -> StoreState:
    if page_size < 1:
        raise PageSizeError(page_size)
    return state.model_copy(update={"page_size": page_size})


def reset(state: StoreState | None = None) -> StoreState:
    """Return the default snapshot, whatever the previous one was."""
    return initial_state()
