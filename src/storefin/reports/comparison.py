#!/usr/bin/env python3
"""
Comparison Report

Approved revenue against the pro-rated monthly goal for yesterday, the week
to date (weeks start Sunday) and the month to date.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from ..core.dates import days_in_month, start_of_month, start_of_week
from ..metrics.aggregator import approved_revenue, filter_records
from ..metrics.models import DailyRecord
from .flags import report_flags
from .models import ComparisonReport, ComparisonRow, ComparisonStatus

GREEN_RATIO = 1.0
AMBER_RATIO = 0.9

KPI_APPROVED_REVENUE = "approved_revenue"


def comparison_status(actual: float, target: float) -> ComparisonStatus:
    """
    Traffic light for actual against target.

    Examples:
        >>> comparison_status(100, 100)
        <ComparisonStatus.GREEN: 'green'>
        >>> comparison_status(95, 100)
        <ComparisonStatus.AMBER: 'amber'>
        >>> comparison_status(10, 0)
        <ComparisonStatus.NEUTRAL: 'neutral'>
    """
    if target <= 0:
        return ComparisonStatus.NEUTRAL
    ratio = actual / target
    if ratio >= GREEN_RATIO:
        return ComparisonStatus.GREEN
    if ratio >= AMBER_RATIO:
        return ComparisonStatus.AMBER
    return ComparisonStatus.RED


def build_comparison_report(records: Iterable[DailyRecord], monthly_goal: float, today: date) -> ComparisonReport:
    """
    Build the plan-versus-actual table.

    Each period's target is the goal spread evenly over the days of the month
    of ``today``, times the number of days in the period.
    """
    records = list(records)
    daily_target = monthly_goal / days_in_month(today)
    yesterday = today - timedelta(days=1)
    week_start = start_of_week(today)
    month_start = start_of_month(today)

    periods = [
        ("D-1", yesterday, yesterday),
        ("WTD", week_start, today),
        ("MTD", month_start, today),
    ]

    table = []
    for label, start, end in periods:
        days = (end - start).days + 1
        target = daily_target * days
        actual = approved_revenue(filter_records(records, start, end))
        table.append(
            ComparisonRow(
                kpi=KPI_APPROVED_REVENUE,
                period=label,
                target=target,
                actual=actual,
                delta=actual - target,
                status=comparison_status(actual, target),
            )
        )

    earliest = min(yesterday, week_start, month_start)
    return ComparisonReport(
        periods=tuple(label for label, _, _ in periods),
        table=tuple(table),
        flags=report_flags(filter_records(records, earliest, today), earliest, today),
    )
