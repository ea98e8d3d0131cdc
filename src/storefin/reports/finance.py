#!/usr/bin/env python3
"""
Finance Report

Explains a period from revenue to profit: the waterfall of deductions, each
line as a share of net revenue, the most profitable products, and progress
against the monthly revenue goal.
"""

import logging
from collections.abc import Iterable
from datetime import date

from ..core.config import get_config
from ..core.dates import DateRange
from ..core.safe_math import safe_divide
from ..goals.tracker import burn_down
from ..metrics.aggregator import filter_records, rank_products
from ..metrics.models import DailyRecord, DashboardData
from .flags import period_flags
from .models import FinanceReport, GoalBlock, LineKind, TopMover, WaterfallLine

logger = logging.getLogger(__name__)

# Shipping subsidies are not tracked in daily records.
SUBSIDIZED_SHIPPING = 0.0


def build_waterfall(snapshot: DashboardData) -> tuple[WaterfallLine, ...]:
    """Ordered revenue-to-profit lines of a snapshot."""
    return (
        WaterfallLine("net_revenue", snapshot.net_revenue, LineKind.TOTAL),
        WaterfallLine("cogs", snapshot.total_cogs, LineKind.DEDUCTION),
        WaterfallLine("marketing", snapshot.total_marketing, LineKind.DEDUCTION),
        WaterfallLine("fees", snapshot.total_fees, LineKind.DEDUCTION),
        WaterfallLine("subsidized_shipping", SUBSIDIZED_SHIPPING, LineKind.DEDUCTION),
        WaterfallLine("contribution_margin", snapshot.contribution_margin, LineKind.SUBTOTAL),
        WaterfallLine("fixed_costs", snapshot.fixed_costs, LineKind.DEDUCTION),
        WaterfallLine("net_profit", snapshot.net_profit, LineKind.SUBTOTAL),
    )


def percent_of_revenue(waterfall: Iterable[WaterfallLine]) -> dict[str, float]:
    """Every line after net revenue as a percentage of net revenue."""
    lines = list(waterfall)
    net_revenue = lines[0].value
    return {line.key: safe_divide(line.value, net_revenue) * 100 for line in lines[1:]}


def build_finance_report(
    snapshot: DashboardData,
    records: Iterable[DailyRecord],
    start: date,
    end: date,
    monthly_goal: float,
    today: date,
    top_n: int | None = None,
) -> FinanceReport:
    """
    Build the finance report for [start, end].

    Args:
        snapshot: Metrics of the period (see compute_dashboard)
        records: Daily records (any range; filtered here)
        start: First day of the period
        end: Last day of the period
        monthly_goal: Revenue goal of the month of ``today``
        today: Reference day for the burn-down and completeness flags
        top_n: Number of top products (default: configured limit)

    Returns:
        FinanceReport
    """
    if top_n is None:
        top_n = get_config().reports.top_movers_limit

    records = list(records)
    period_records = filter_records(records, start, end)
    waterfall = build_waterfall(snapshot)

    top_movers = tuple(
        TopMover(name=product.name, profit=product.profit) for product in rank_products(period_records, top_n)
    )

    goal = GoalBlock(
        metric="revenue",
        value=monthly_goal,
        achieved=snapshot.net_revenue,
        progress_pct=safe_divide(snapshot.net_revenue, monthly_goal) * 100,
    )

    flags = period_flags(period_records, start, end, today)
    if flags.missing:
        logger.warning(f"Finance report {start}..{end} is missing {len(flags.missing)} day(s)")

    return FinanceReport(
        period=str(DateRange(start=start, end=end)),
        goal=goal,
        waterfall=waterfall,
        percent_of_revenue=percent_of_revenue(waterfall),
        top_movers=top_movers,
        burn_down=burn_down(records, monthly_goal, today),
        flags=flags,
    )
