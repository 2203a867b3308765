# src/holdemstats/schemas/view_model.py

"""The render-ready snapshot handed to presentation code."""

from pydantic import BaseModel, ConfigDict

from .hand_history import HandHistoryEntry
from .statistics import LeaderboardEntry, PlayerStatistics


class StatisticsViewModel(BaseModel):
    """Consolidated dashboard snapshot.

    Every field is derived from a single StoreState; nothing here is kept
    once the next snapshot has been built.
    """

    player_stats: PlayerStatistics | None
    leaderboard: tuple[LeaderboardEntry, ...]
    hand_history: tuple[HandHistoryEntry, ...]
    selected_hand: HandHistoryEntry | None
    is_loading: bool
    error: str | None

    # Formatted/computed player figures
    win_rate: str
    profit_loss: float
    hands_played: int
    hands_won: int
    win_percentage: str
    avg_pot_won: int
    experience_tier: str | None
    play_style: str | None

    # Pagination
    current_page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    # Leaderboard lookups
    top_three: tuple[LeaderboardEntry, ...]
    player_rank: int | None

    model_config = ConfigDict(frozen=True)
