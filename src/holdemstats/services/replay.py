# src/holdemstats/services/replay.py

"""Step-by-step reconstruction of a recorded hand."""

from __future__ import annotations

import logging

from holdemstats.exceptions import ReplayIndexError
from holdemstats.schemas.hand_history import HandHistoryAction, HandHistoryEntry
from holdemstats.schemas.replay import PlayerReplayState, ReplayState

logger = logging.getLogger(__name__)

INITIAL_PHASE = "PRE_FLOP"

# Community cards visible once a phase has been reached
BOARD_CARDS_BY_PHASE = {
    "PRE_FLOP": 0,
    "FLOP": 3,
    "TURN": 4,
    "RIVER": 5,
    "SHOWDOWN": 5,
}


class _Seat:
    """Mutable per-seat working state used while folding over actions."""

    def __init__(
        self,
        player_id: str,
        player_name: str,
        chips: int,
        hole_cards: tuple[str, ...],
    ) -> None:
        self.player_id = player_id
        self.player_name = player_name
        self.chips = chips
        self.bet = 0
        self.folded = False
        self.hole_cards = hole_cards

    def freeze(self) -> PlayerReplayState:
        return PlayerReplayState(
            player_id=self.player_id,
            player_name=self.player_name,
            chips=self.chips,
            bet=self.bet,
            folded=self.folded,
            hole_cards=self.hole_cards,
        )


def replay_state(hand: HandHistoryEntry, action_index: int) -> ReplayState:
    """Rebuild the table after the first `action_index` actions of `hand`.

    Bet and raise amounts are the total the player has put in on the
    current street. A phase change clears every street bet and reveals the
    board for that phase.

    Raises:
        ReplayIndexError: If action_index is outside [0, len(hand.actions)].
    """
    total_actions = len(hand.actions)
    if not 0 <= action_index <= total_actions:
        raise ReplayIndexError(action_index, total_actions)

    seats = {
        p.player_id: _Seat(
            p.player_id, p.player_name, p.starting_chips, p.hole_cards or ()
        )
        for p in hand.players
    }
    pot = 0
    current_bet = 0
    phase = INITIAL_PHASE
    visible = 0

    for action in hand.actions[:action_index]:
        seat = seats.get(action.player_id)
        if seat is None:
            logger.debug(
                "Skipping action of unseated player",
                extra={"hand_id": hand.id, "player_id": action.player_id},
            )
            continue

        if action.phase != phase:
            phase = action.phase
            current_bet = 0
            for other in seats.values():
                other.bet = 0
            visible = max(visible, BOARD_CARDS_BY_PHASE.get(phase, visible))

        action_type = action.action_type.upper()
        if action_type == "FOLD":
            seat.folded = True
        elif action_type == "CALL":
            call_amount = current_bet - seat.bet
            seat.chips -= call_amount
            seat.bet = current_bet
            pot += call_amount
        elif action_type in ("BET", "RAISE"):
            target = action.amount or 0
            added = target - seat.bet
            seat.chips -= added
            seat.bet = target
            current_bet = target
            pot += added
        # CHECK and unknown action types move no chips

    current_action: HandHistoryAction | None = (
        hand.actions[action_index - 1] if action_index > 0 else None
    )
    return ReplayState(
        players=tuple(seat.freeze() for seat in seats.values()),
        pot=pot,
        current_bet=current_bet,
        phase=phase,
        board=hand.community_cards[:visible],
        action_index=action_index,
        total_actions=total_actions,
        current_action=current_action,
        is_complete=action_index >= total_actions,
    )


class HandReplay:
    """A cursor stepping through one recorded hand."""

    def __init__(self, hand: HandHistoryEntry) -> None:
        self.hand = hand
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def state(self) -> ReplayState:
        return replay_state(self.hand, self._index)

    def next(self) -> ReplayState:
        if self._index < len(self.hand.actions):
            self._index += 1
        return self.state

    def previous(self) -> ReplayState:
        if self._index > 0:
            self._index -= 1
        return self.state

    def go_to(self, index: int) -> ReplayState:
        if not 0 <= index <= len(self.hand.actions):
            raise ReplayIndexError(index, len(self.hand.actions))
        self._index = index
        return self.state

    def reset(self) -> ReplayState:
        self._index = 0
        return self.state
