# src/holdemstats/schemas/__init__.py

"""Pydantic schemas for API payloads and derived snapshots."""

from .common import WireModel
from .hand_history import HandHistoryAction, HandHistoryEntry, HandHistoryPlayer
from .pagination import HandHistoryPage, Page
from .replay import PlayerReplayState, ReplayState
from .statistics import LeaderboardEntry, PlayerStatistics
from .view_model import StatisticsViewModel

__all__ = [
    # Common
    "WireModel",
    # Statistics
    "LeaderboardEntry",
    "PlayerStatistics",
    # Hand history
    "HandHistoryAction",
    "HandHistoryEntry",
    "HandHistoryPlayer",
    # Pagination
    "HandHistoryPage",
    "Page",
    # Replay
    "PlayerReplayState",
    "ReplayState",
    # View model
    "StatisticsViewModel",
]
