# src/holdemstats/schemas/hand_history.py

"""Pydantic schemas for recorded hands."""

from datetime import datetime

from pydantic import Field

from .common import WireModel


class HandHistoryPlayer(WireModel):
    """A seat in a recorded hand, with its chip movement."""

    player_id: str
    player_name: str
    starting_chips: int = Field(..., ge=0)
    ending_chips: int = Field(..., ge=0)
    # Only present for players whose cards were revealed
    hole_cards: tuple[str, ...] | None = None
    position: str = ""


class HandHistoryAction(WireModel):
    """One action taken during a recorded hand.

    Examples:
        {"phase": "PRE_FLOP", "playerId": "p1", "actionType": "RAISE", "amount": 40}
        {"phase": "FLOP", "playerId": "p2", "actionType": "CHECK"}
    """

    phase: str
    player_id: str
    player_name: str
    action_type: str
    amount: int | None = None
    timestamp: datetime | None = None


class HandHistoryEntry(WireModel):
    """An immutable record of one finished hand."""

    id: str
    hand_number: int = Field(..., ge=0)
    players: tuple[HandHistoryPlayer, ...] = ()
    community_cards: tuple[str, ...] = Field(default=(), max_length=5)
    pot_size: int = Field(0, ge=0)
    winner_id: str | None = None
    winner_name: str | None = None
    winning_hand: str | None = None
    timestamp: datetime | None = None
    actions: tuple[HandHistoryAction, ...] = ()
