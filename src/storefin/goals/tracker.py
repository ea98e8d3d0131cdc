#!/usr/bin/env python3
"""
Goal Tracker

Progress of approved revenue against a monthly revenue goal: day, week and
month slices of the goal, and a burn-down comparing the cumulative pro-rata
target with the cumulative actual revenue of the month.

Weeks start on Sunday.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from ..core.dates import DateRange, days_in_month, start_of_month, start_of_week
from ..core.safe_math import safe_divide
from ..metrics.aggregator import approved_revenue, filter_records, index_by_date
from ..metrics.models import DailyRecord

logger = logging.getLogger(__name__)

# Achieved/expected ratio thresholds for the burn-down status.
AHEAD_RATIO = 1.05
BEHIND_RATIO = 0.95

WEEKS_PER_MONTH = 4


class PaceStatus(Enum):
    """Pace of actual revenue against the pro-rata target."""

    AHEAD = "ahead"
    ON_TRACK = "on_track"
    BEHIND = "behind"


@dataclass(frozen=True)
class GoalProgress:
    """Goal, achieved value and progress for one slice of the month."""

    goal: float
    achieved: float

    @property
    def progress_percent(self) -> float:
        return safe_divide(self.achieved, self.goal) * 100

    def to_dict(self) -> dict[str, float]:
        return {"goal": self.goal, "achieved": self.achieved, "progress_percent": self.progress_percent}


@dataclass(frozen=True)
class GranularGoalData:
    """Revenue goal progress for today, the week to date and the month to date."""

    day: GoalProgress
    week: GoalProgress
    month: GoalProgress

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day.to_dict(), "week": self.week.to_dict(), "month": self.month.to_dict()}


@dataclass(frozen=True)
class BurnDownPoint:
    date: date
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass(frozen=True)
class BurnDown:
    """
    Cumulative expected and actual revenue through the month.

    Attributes:
        expected_line: One point per day of the month, ending at the goal
        actual_line: One point per day from the first of the month to today
        remaining: Revenue still needed to reach the goal (never negative)
        status: Pace of the month so far
    """

    expected_line: tuple[BurnDownPoint, ...] = field(default_factory=tuple)
    actual_line: tuple[BurnDownPoint, ...] = field(default_factory=tuple)
    remaining: float = 0.0
    status: PaceStatus = PaceStatus.ON_TRACK

    @property
    def achieved(self) -> float:
        return self.actual_line[-1].value if self.actual_line else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_expected": [p.to_dict() for p in self.expected_line],
            "line_actual": [p.to_dict() for p in self.actual_line],
            "remaining": self.remaining,
            "status": self.status.value,
        }


def _achieved(records: list[DailyRecord], start: date, end: date) -> float:
    return approved_revenue(filter_records(records, start, end))


def granular_goals(records: Iterable[DailyRecord], monthly_goal: float, today: date) -> GranularGoalData:
    """
    Split the monthly goal into day, week and month slices and measure progress.

    Args:
        records: Daily records (any range; filtered here)
        monthly_goal: Revenue goal for the month of ``today``
        today: Reference day

    Returns:
        GranularGoalData with approved revenue achieved over today, the week
        starting Sunday through today, and the first of the month through today
    """
    records = list(records)
    return GranularGoalData(
        day=GoalProgress(
            goal=monthly_goal / days_in_month(today),
            achieved=_achieved(records, today, today),
        ),
        week=GoalProgress(
            goal=monthly_goal / WEEKS_PER_MONTH,
            achieved=_achieved(records, start_of_week(today), today),
        ),
        month=GoalProgress(
            goal=monthly_goal,
            achieved=_achieved(records, start_of_month(today), today),
        ),
    )


def pace_status(achieved: float, expected: float) -> PaceStatus:
    """Classify achieved against expected; nothing expected yet counts as on track."""
    if expected <= 0:
        return PaceStatus.ON_TRACK
    ratio = achieved / expected
    if ratio >= AHEAD_RATIO:
        return PaceStatus.AHEAD
    if ratio < BEHIND_RATIO:
        return PaceStatus.BEHIND
    return PaceStatus.ON_TRACK


def burn_down(records: Iterable[DailyRecord], monthly_goal: float, today: date) -> BurnDown:
    """
    Build the burn-down of the month containing ``today``.

    The expected line grows by goal / days-in-month each day and its last
    point equals the goal exactly. The actual line accumulates approved
    revenue up to and including today; days without a record add nothing.
    """
    month = DateRange.month_of(today)
    daily_target = monthly_goal / month.days
    by_date = index_by_date(filter_records(records, month.start, today))

    expected_line = []
    for i, day in enumerate(month.iter_days(), start=1):
        value = monthly_goal if day == month.end else daily_target * i
        expected_line.append(BurnDownPoint(date=day, value=value))

    actual_line = []
    cumulative = 0.0
    for day in DateRange(start=month.start, end=today).iter_days():
        record = by_date.get(day)
        if record is not None:
            cumulative += record.approved_revenue
        actual_line.append(BurnDownPoint(date=day, value=cumulative))

    expected_today = expected_line[today.day - 1].value
    status = pace_status(cumulative, expected_today)
    logger.debug(
        f"Burn-down {month}: achieved {cumulative:.2f} of {expected_today:.2f} expected ({status.value})"
    )

    return BurnDown(
        expected_line=tuple(expected_line),
        actual_line=tuple(actual_line),
        remaining=max(0.0, monthly_goal - cumulative),
        status=status,
    )
