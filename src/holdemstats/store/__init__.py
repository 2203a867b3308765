# src/holdemstats/store/__init__.py

"""Statistics store: state container, view-model engine and effects."""

from .container import StatisticsStore
from .effects import DashboardLoad, StatisticsEffects, describe_error
from .state import StoreState, initial_state
from .view_model import build_view_model

__all__ = [
    "DashboardLoad",
    "StatisticsEffects",
    "StatisticsStore",
    "StoreState",
    "build_view_model",
    "describe_error",
    "initial_state",
]
