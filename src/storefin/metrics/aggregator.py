#!/usr/bin/env python3
"""
Metrics Aggregator

Turns a date-filtered set of daily records, the fee assumptions and the fixed
costs of the active annual plan into one standardized profit and loss
snapshot (DashboardData).

Every function here is total: empty input means "no activity" and yields
zeros, never an exception.

Key rules:
- Net revenue and order count come from approved payments only.
- Product cost is tracked against all revenue, so each day's cost is scaled
  by that day's approval ratio before it becomes COGS.
- Fees are one blended rate applied to the aggregate net revenue.
- Fixed costs are supplied by the caller for the month of the range start.
  Ranges spanning a month boundary are the caller's responsibility; see
  storefin.planning.opex.fixed_costs_for_range for the available policies.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date

from ..core.dates import DateRange
from ..core.safe_math import percent_change, safe_divide
from .models import (
    AccumulatedResults,
    DailyRecord,
    DashboardData,
    PaymentMethodsSummary,
    PaymentRail,
    PaymentStat,
    PlanningInputs,
    ProductRank,
    RailSummary,
    ZERO_STAT,
)

logger = logging.getLogger(__name__)

# Share of the revenue goal expected to end up as net profit.
NET_PROFIT_GOAL_RATIO = 0.20

# Card payments settle or fail; only boleto and pix pend.
PENDING_BUCKETS: dict[PaymentRail, str | None] = {
    PaymentRail.CARD: None,
    PaymentRail.BOLETO: "pending",
    PaymentRail.PIX: "pending",
}

REJECTED_BUCKET = "rejected"

# Bucket counted as rejected when a rail has no explicit "rejected" bucket.
REJECTION_FALLBACK: dict[PaymentRail, str | None] = {
    PaymentRail.CARD: "other",
    PaymentRail.PIX: "cancelled",
    PaymentRail.BOLETO: None,
}

FixedCostsFor = Callable[[DateRange], float]


def index_by_date(records: Iterable[DailyRecord]) -> dict[date, DailyRecord]:
    """Key records by their date (a later duplicate replaces an earlier one)."""
    return {record.date: record for record in records}


def filter_records(records: Iterable[DailyRecord], start: date, end: date) -> list[DailyRecord]:
    """Records whose date falls in [start, end], sorted by date."""
    return sorted((r for r in records if start <= r.date <= end), key=lambda r: r.date)


def approved_revenue(records: Iterable[DailyRecord]) -> float:
    """Sum of approved revenue across all rails."""
    return sum(record.approved_revenue for record in records)


def approved_cogs(record: DailyRecord) -> float:
    """
    Product cost attributable to the approved share of one day's revenue.

    A day without recorded (or with zero) total revenue carries no COGS.
    """
    total_revenue = record.revenue.value_or(0.0)
    if total_revenue <= 0:
        return 0.0
    return record.product_cost * safe_divide(record.approved_revenue, total_revenue)


def pending_stat(record: DailyRecord, rail: PaymentRail) -> PaymentStat:
    """Pending payments of one rail on one day (always zero for card)."""
    bucket = PENDING_BUCKETS[rail]
    if bucket is None:
        return ZERO_STAT
    return record.payment_breakdown.stat(rail, bucket)


def rejected_count(record: DailyRecord, rail: PaymentRail) -> tuple[int, bool]:
    """
    Rejected payments of one rail on one day.

    Gateways report rejections inconsistently. An explicit "rejected" bucket
    wins; otherwise the rail's failure bucket stands in for it (card "other",
    pix "cancelled") and boleto rejections count as zero.

    Returns:
        (count, approximated) where approximated is True when the count did
        not come from an explicit rejected bucket
    """
    buckets = record.payment_breakdown.rail(rail)
    if REJECTED_BUCKET in buckets:
        return buckets[REJECTED_BUCKET].count, False

    fallback = REJECTION_FALLBACK[rail]
    if fallback is None:
        return 0, True
    return record.payment_breakdown.stat(rail, fallback).count, True


def compute_metrics(
    records: Iterable[DailyRecord],
    fees: PlanningInputs,
    fixed_costs_for_month: float,
) -> DashboardData:
    """
    Compute the standardized metrics snapshot for a set of daily records.

    Args:
        records: Daily records already filtered to the period of interest
        fees: Planning inputs supplying the checkout, gateway and tax rates
        fixed_costs_for_month: Fixed costs of the month of the period start

    Returns:
        DashboardData with deltas left at zero (see compute_dashboard)
    """
    records = list(records)
    goals = {
        "revenue_goal": fees.revenue_goal,
        "net_profit_goal": fees.revenue_goal * NET_PROFIT_GOAL_RATIO,
    }
    if not records:
        return DashboardData(**goals)

    net_revenue = 0.0
    orders_count = 0
    total_cogs = 0.0
    total_marketing = 0.0
    sessions = 0.0
    pending_value = 0.0
    pending_count = 0

    for record in records:
        approved = record.payment_breakdown.approved
        pending = record.payment_breakdown.pending

        net_revenue += approved.value
        orders_count += approved.count
        total_cogs += approved_cogs(record)
        total_marketing += record.marketing_spend.value_or(0.0)
        sessions += record.sessions.value_or(0.0)
        pending_value += pending.value
        pending_count += pending.count

    total_fees = net_revenue * fees.blended_fee_pct / 100
    contribution_margin = net_revenue - total_cogs - total_marketing - total_fees
    net_profit = contribution_margin - fixed_costs_for_month

    logger.debug(
        f"Metrics over {len(records)} days: net revenue {net_revenue:.2f}, "
        f"contribution margin {contribution_margin:.2f}, net profit {net_profit:.2f}"
    )

    return DashboardData(
        net_revenue=net_revenue,
        total_cogs=total_cogs,
        total_marketing=total_marketing,
        total_fees=total_fees,
        contribution_margin=contribution_margin,
        contribution_margin_percent=safe_divide(contribution_margin, net_revenue) * 100,
        fixed_costs=fixed_costs_for_month,
        net_profit=net_profit,
        net_profit_margin=safe_divide(net_profit, net_revenue) * 100,
        sessions=sessions,
        roas=safe_divide(net_revenue, total_marketing),
        cpa=safe_divide(total_marketing, orders_count),
        avg_ticket=safe_divide(net_revenue, orders_count),
        orders_count=orders_count,
        pending_orders_value=pending_value,
        pending_orders_count=pending_count,
        **goals,
    )


def with_deltas(current: DashboardData, previous: DashboardData) -> DashboardData:
    """Fill the period-over-period deltas of ``current`` from ``previous``."""
    return replace(
        current,
        net_revenue_change=percent_change(current.net_revenue, previous.net_revenue),
        contribution_margin_change=percent_change(current.contribution_margin, previous.contribution_margin),
        net_profit_change=percent_change(current.net_profit, previous.net_profit),
        roas_change=percent_change(current.roas, previous.roas),
        cpa_change=percent_change(current.cpa, previous.cpa),
        avg_ticket_change=percent_change(current.avg_ticket, previous.avg_ticket),
    )


def compute_dashboard(
    records: Iterable[DailyRecord],
    start: date,
    end: date,
    fees: PlanningInputs,
    fixed_costs_for: FixedCostsFor | None = None,
) -> DashboardData:
    """
    Compute the snapshot for [start, end] with deltas against the previous period.

    The previous period is the immediately preceding, non-overlapping range
    with the same number of days.

    Args:
        records: Complete record history (filtered here)
        start: First day of the period
        end: Last day of the period
        fees: Planning inputs
        fixed_costs_for: Callable returning the fixed costs for a range
            (default: no fixed costs)

    Returns:
        DashboardData including deltas
    """
    records = list(records)
    current_range = DateRange(start=start, end=end)
    previous_range = current_range.previous()

    def fixed_costs(period: DateRange) -> float:
        return fixed_costs_for(period) if fixed_costs_for is not None else 0.0

    current = compute_metrics(
        filter_records(records, current_range.start, current_range.end), fees, fixed_costs(current_range)
    )
    previous = compute_metrics(
        filter_records(records, previous_range.start, previous_range.end), fees, fixed_costs(previous_range)
    )
    return with_deltas(current, previous)


def accumulate_actuals(records: Iterable[DailyRecord]) -> AccumulatedResults:
    """
    Storefront totals (sessions, revenue, spend, product orders) for a period.

    Unlike the approved-payments view of compute_metrics, revenue here is the
    total revenue the owner recorded.
    """
    sessions = 0.0
    revenue = 0.0
    marketing = 0.0
    orders = 0
    for record in records:
        sessions += record.sessions.value_or(0.0)
        revenue += record.revenue.value_or(0.0)
        marketing += record.marketing_spend.value_or(0.0)
        orders += record.product_orders

    return AccumulatedResults(
        sessions=sessions,
        orders=orders,
        revenue=revenue,
        marketing_spend=marketing,
        conversion_rate=safe_divide(orders, sessions) * 100,
        avg_ticket=safe_divide(revenue, orders),
        cps=safe_divide(marketing, sessions),
    )


def summarize_payment_methods(records: Iterable[DailyRecord]) -> PaymentMethodsSummary:
    """
    Approved/pending totals and conversion per rail.

    Conversion is approved over approved + pending + rejected counts, with
    rejections resolved as in rejected_count. Other buckets (card
    in_analysis, boleto compensated) are left out.
    """
    records = list(records)
    summaries = {}
    for rail in PaymentRail:
        approved = sum((r.payment_breakdown.stat(rail, "approved") for r in records), start=ZERO_STAT)
        pending = sum((pending_stat(r, rail) for r in records), start=ZERO_STAT)
        rejected = sum(rejected_count(r, rail)[0] for r in records)
        reported = approved.count + pending.count + rejected
        summaries[rail.value] = RailSummary(
            approved=approved,
            pending=pending,
            conversion=safe_divide(approved.count, reported) * 100,
        )
    return PaymentMethodsSummary(**summaries)


def rank_products(records: Iterable[DailyRecord], limit: int | None = None) -> list[ProductRank]:
    """
    Rank products by gross profit (revenue minus cost) over a period.

    Args:
        records: Daily records of the period
        limit: Keep only the first N products (default: all)

    Returns:
        ProductRank list, most profitable first
    """
    totals: dict[str, tuple[float, float]] = {}
    for record in records:
        for product in record.products:
            revenue, cost = totals.get(product.name, (0.0, 0.0))
            totals[product.name] = (revenue + product.revenue, cost + product.cost)

    ranked = sorted(
        (ProductRank(name=name, revenue=revenue, cost=cost) for name, (revenue, cost) in totals.items()),
        key=lambda p: p.profit,
        reverse=True,
    )
    return ranked[:limit] if limit is not None else ranked
