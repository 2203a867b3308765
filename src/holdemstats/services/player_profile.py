# src/holdemstats/services/player_profile.py

"""Qualitative labels derived from a player's statistics."""

from __future__ import annotations

from holdemstats.schemas.statistics import PlayerStatistics

# (minimum hands, tier) checked in order; below the last bound the tier is
# decided by win percentage instead
EXPERIENCE_BOUNDS = ((10, "Newcomer"), (50, "Beginner"), (200, "Amateur"))

# (minimum hand-win percentage, tier) for experienced players
SKILL_TIERS = ((60.0, "Pro"), (50.0, "Regular"), (40.0, "Casual"))
DEFAULT_SKILL_TIER = "Fish"

TIGHT_VPIP = 20.0
LOOSE_VPIP = 30.0
PASSIVE_AGGRESSION = 1.0
AGGRESSIVE_AGGRESSION = 2.0


def experience_tier(stats: PlayerStatistics | None) -> str | None:
    """Classify a player by volume first, then by how often they win.

    Returns None when no statistics are loaded.
    """
    if stats is None:
        return None
    for bound, tier in EXPERIENCE_BOUNDS:
        if stats.total_hands < bound:
            return tier

    win_percentage = stats.hands_won / stats.total_hands * 100
    for minimum, tier in SKILL_TIERS:
        if win_percentage >= minimum:
            return tier
    return DEFAULT_SKILL_TIER


def play_style(stats: PlayerStatistics | None) -> str | None:
    """Describe a player as e.g. "Tight-Aggressive" from VPIP and aggression."""
    if stats is None:
        return None

    if stats.vpip < TIGHT_VPIP:
        tightness = "Tight"
    elif stats.vpip > LOOSE_VPIP:
        tightness = "Loose"
    else:
        tightness = "Normal"

    if stats.aggression < PASSIVE_AGGRESSION:
        aggression = "Passive"
    elif stats.aggression > AGGRESSIVE_AGGRESSION:
        aggression = "Aggressive"
    else:
        aggression = "Balanced"

    return f"{tightness}-{aggression}"
