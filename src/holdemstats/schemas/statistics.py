# src/holdemstats/schemas/statistics.py

"""Player statistics and leaderboard schemas."""

from datetime import datetime

from pydantic import Field

from .common import WireModel


class PlayerStatistics(WireModel):
    """Cumulative statistics for one player.

    Attributes:
        player_id: Identity of the player these counters belong to
        player_name: Display name
        total_games: Games the player sat down in
        total_hands: Hands dealt to the player
        hands_won: Hands the player won
        hands_lost: Hands the player lost
        total_winnings: Chips won over all hands
        total_losses: Chips lost over all hands
        biggest_pot_won: Largest single pot taken
        vpip: Voluntarily-put-money-in-pot percentage
        pfr: Pre-flop raise percentage
        aggression: Aggression factor, (bets + raises) / calls
        win_rate: Big blinds won per 100 hands
        showdown_win_rate: Percentage of showdowns won
    """

    id: str | None = None
    player_id: str
    player_name: str
    total_games: int = Field(0, ge=0)
    total_hands: int = Field(0, ge=0)
    hands_won: int = Field(0, ge=0)
    hands_lost: int = Field(0, ge=0)
    total_winnings: float = Field(0.0, ge=0)
    total_losses: float = Field(0.0, ge=0)
    biggest_pot_won: int = Field(0, ge=0)
    vpip: float = 0.0
    pfr: float = 0.0
    aggression: float = 0.0
    win_rate: float = 0.0
    showdown_win_rate: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LeaderboardEntry(WireModel):
    """Single row of the leaderboard.

    Rows arrive already ordered by the server; the list order is the rank
    order and is never re-sorted on the client.
    """

    rank: int = Field(..., ge=1, description="Position in leaderboard (1-indexed)")
    player_id: str
    player_name: str
    total_winnings: float = 0.0
    hands_won: int = Field(0, ge=0)
    win_rate: float = 0.0
