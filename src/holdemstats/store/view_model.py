# src/holdemstats/store/view_model.py

"""Derived view-model engine.

Each derivation is a pure function of the current snapshot; the view-model
is rebuilt from scratch on every recomputation and never cached alongside
the state it came from.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from holdemstats.schemas.statistics import PlayerStatistics
from holdemstats.schemas.view_model import StatisticsViewModel
from holdemstats.services.player_profile import experience_tier, play_style

from . import selectors
from .state import StoreState


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def format_half_up(value: float, places: int) -> str:
    """Fixed-point text with ties rounded up, e.g. (6.25, 1) -> "6.3"."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def win_rate_formatted(stats: PlayerStatistics | None) -> str:
    if stats is None:
        return "N/A"
    return f"{format_half_up(stats.win_rate, 2)} BB/100"


def profit_loss(stats: PlayerStatistics | None) -> float:
    if stats is None:
        return 0
    return stats.total_winnings - stats.total_losses


def hands_played(stats: PlayerStatistics | None) -> int:
    return stats.total_hands if stats is not None else 0


def win_percentage(stats: PlayerStatistics | None) -> str:
    """Share of hands won, with one decimal, e.g. "25.0%"."""
    if stats is None or stats.total_hands == 0:
        return "0%"
    percentage = stats.hands_won / stats.total_hands * 100
    return f"{format_half_up(percentage, 1)}%"


def avg_pot_won(stats: PlayerStatistics | None) -> int:
    if stats is None or stats.hands_won == 0:
        return 0
    return round_half_up(stats.total_winnings / stats.hands_won)


def build_view_model(state: StoreState) -> StatisticsViewModel:
    """Build the render-ready snapshot for one StoreState."""
    stats = state.player_stats
    return StatisticsViewModel(
        player_stats=stats,
        leaderboard=state.leaderboard,
        hand_history=state.hand_history,
        selected_hand=state.selected_hand,
        is_loading=state.is_loading,
        error=state.error,
        win_rate=win_rate_formatted(stats),
        profit_loss=profit_loss(stats),
        hands_played=hands_played(stats),
        hands_won=stats.hands_won if stats is not None else 0,
        win_percentage=win_percentage(stats),
        avg_pot_won=avg_pot_won(stats),
        experience_tier=experience_tier(stats),
        play_style=play_style(stats),
        current_page=state.current_page,
        total_pages=state.total_pages,
        has_next_page=selectors.select_has_next_page(state),
        has_prev_page=selectors.select_has_prev_page(state),
        top_three=selectors.select_top_three(state),
        player_rank=selectors.select_player_rank(state),
    )
