#!/usr/bin/env python3
"""
Daily Tracking

Planned versus actual figures for each day of a month. The daily plan is the
monthly funnel target spread evenly over the days of the month. Actual orders
are not entered by hand, so they are estimated from revenue and the planned
average ticket.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from ..core.dates import DateRange, days_in_month, end_of_month
from ..core.safe_math import safe_divide
from ..metrics.aggregator import index_by_date
from ..metrics.models import NOT_RECORDED, DailyRecord, DailyValue, PlanningInputs
from ..planning.targets import plan_targets


@dataclass(frozen=True)
class DailyPlan:
    """Per-day share of the monthly targets."""

    sessions: float
    orders: float
    revenue: float
    marketing_spend: float
    conversion_rate: float
    avg_ticket: float
    cps: float


@dataclass(frozen=True)
class DailyActual:
    """
    What happened on one day.

    Entered values keep their Recorded/NotRecorded tag; the derived figures
    treat unrecorded values as zero.
    """

    sessions: DailyValue
    revenue: DailyValue
    marketing_spend: DailyValue
    orders: float
    conversion_rate: float
    avg_ticket: float
    cps: float


@dataclass(frozen=True)
class TrackingRow:
    date: date
    planned: DailyPlan
    actual: DailyActual


def daily_plan(inputs: PlanningInputs, month_start: date) -> DailyPlan:
    """Spread the monthly targets over the days of the month."""
    results = plan_targets(inputs)
    days = days_in_month(month_start)
    return DailyPlan(
        sessions=results.sessions / days,
        orders=results.orders / days,
        revenue=results.revenue / days,
        marketing_spend=results.ad_spend / days,
        conversion_rate=inputs.conversion_rate,
        avg_ticket=safe_divide(results.revenue, results.orders),
        cps=results.cps,
    )


def daily_tracking(
    records: Iterable[DailyRecord],
    inputs: PlanningInputs,
    month_start: date,
    today: date,
) -> list[TrackingRow]:
    """
    Planned versus actual rows for the month starting at ``month_start``.

    Rows run from the first of the month through ``today`` when today falls in
    that month, otherwise through the end of the month. Newest first.

    Args:
        records: Daily records (any range)
        inputs: Planning inputs the daily plan derives from
        month_start: Any day of the month to track
        today: Reference day

    Returns:
        List of TrackingRow, most recent day first; empty for a future month
    """
    month = DateRange.month_of(month_start)
    last_day = min(today, end_of_month(month.start))
    if last_day < month.start:
        return []

    planned = daily_plan(inputs, month.start)
    by_date = index_by_date(records)

    rows = []
    for day in DateRange(start=month.start, end=last_day).iter_days():
        record = by_date.get(day)
        sessions = record.sessions if record else NOT_RECORDED
        revenue = record.revenue if record else NOT_RECORDED
        marketing = record.marketing_spend if record else NOT_RECORDED

        orders = safe_divide(revenue.value_or(0.0), planned.avg_ticket)
        rows.append(
            TrackingRow(
                date=day,
                planned=planned,
                actual=DailyActual(
                    sessions=sessions,
                    revenue=revenue,
                    marketing_spend=marketing,
                    orders=orders,
                    conversion_rate=safe_divide(orders, sessions.value_or(0.0)) * 100,
                    avg_ticket=safe_divide(revenue.value_or(0.0), orders),
                    cps=safe_divide(marketing.value_or(0.0), sessions.value_or(0.0)),
                ),
            )
        )

    rows.reverse()
    return rows


def average_conversion_rate(rows: Iterable[TrackingRow]) -> float:
    """Mean actual conversion rate over days where both sessions and revenue were recorded."""
    rates = [
        row.actual.conversion_rate
        for row in rows
        if row.actual.sessions.is_recorded and row.actual.revenue.is_recorded
    ]
    return safe_divide(sum(rates), len(rates))
