# src/holdemstats/store/selectors.py

"""Read-only projections over a StoreState snapshot.

Selectors are pure functions of a snapshot. Presentation code reads state
only through these (or through the view-model built from them).
"""

from __future__ import annotations

from collections.abc import Mapping

from holdemstats.schemas.hand_history import HandHistoryEntry
from holdemstats.schemas.statistics import LeaderboardEntry, PlayerStatistics

from .state import StoreState

# =============================================================================
# Field selectors
# =============================================================================


def select_player_stats(state: StoreState) -> PlayerStatistics | None:
    return state.player_stats


def select_all_players_stats(state: StoreState) -> Mapping[str, PlayerStatistics]:
    return state.all_players_stats


def select_leaderboard(state: StoreState) -> tuple[LeaderboardEntry, ...]:
    return state.leaderboard


def select_hand_history(state: StoreState) -> tuple[HandHistoryEntry, ...]:
    return state.hand_history


def select_selected_hand(state: StoreState) -> HandHistoryEntry | None:
    return state.selected_hand


def select_is_loading(state: StoreState) -> bool:
    return state.is_loading


def select_error(state: StoreState) -> str | None:
    return state.error


def select_current_page(state: StoreState) -> int:
    return state.current_page


def select_total_pages(state: StoreState) -> int:
    return state.total_pages


def select_page_size(state: StoreState) -> int:
    return state.page_size


# =============================================================================
# Derived selectors
# =============================================================================


def select_has_next_page(state: StoreState) -> bool:
    return state.current_page < state.total_pages - 1


def select_has_prev_page(state: StoreState) -> bool:
    return state.current_page > 0


def select_top_three(state: StoreState) -> tuple[LeaderboardEntry, ...]:
    """First three leaderboard rows, or fewer if the board is shorter."""
    return state.leaderboard[:3]


def select_player_rank(state: StoreState) -> int | None:
    """Rank of the loaded player on the leaderboard, if they appear on it."""
    stats = state.player_stats
    if stats is None:
        return None
    # Leaderboards are a handful of rows, a scan is enough
    for entry in state.leaderboard:
        if entry.player_id == stats.player_id:
            return entry.rank
    return None
