"""Goal progress, burn-down and daily planned-vs-actual tracking."""

from .tracker import (
    BurnDown,
    BurnDownPoint,
    GoalProgress,
    GranularGoalData,
    PaceStatus,
    burn_down,
    granular_goals,
    pace_status,
)
from .tracking import DailyActual, DailyPlan, TrackingRow, average_conversion_rate, daily_tracking

__all__ = [
    "BurnDown",
    "BurnDownPoint",
    "DailyActual",
    "DailyPlan",
    "GoalProgress",
    "GranularGoalData",
    "PaceStatus",
    "TrackingRow",
    "average_conversion_rate",
    "burn_down",
    "daily_tracking",
    "granular_goals",
    "pace_status",
]
