# src/holdemstats/schemas/replay.py

"""Schemas describing a hand replay at a given action."""

from pydantic import BaseModel, ConfigDict

from .hand_history import HandHistoryAction


class PlayerReplayState(BaseModel):
    """A seat as it stands at the current replay position."""

    player_id: str
    player_name: str
    chips: int
    bet: int = 0
    folded: bool = False
    hole_cards: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class ReplayState(BaseModel):
    """The table after the first `action_index` actions have been applied."""

    players: tuple[PlayerReplayState, ...]
    pot: int
    current_bet: int
    phase: str
    board: tuple[str, ...]
    action_index: int
    total_actions: int
    current_action: HandHistoryAction | None
    is_complete: bool

    model_config = ConfigDict(frozen=True)
