# src/holdemstats/__init__.py

"""Client-side statistics store for the Texas Hold'em dashboard."""

from .dashboard import StatisticsDashboard, open_dashboard
from .store import StatisticsEffects, StatisticsStore, StoreState

__all__ = [
    "StatisticsDashboard",
    "StatisticsEffects",
    "StatisticsStore",
    "StoreState",
    "open_dashboard",
]
