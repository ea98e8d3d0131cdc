#!/usr/bin/env python3
"""
Goal Planning

Works a monthly revenue goal backwards through the sales funnel: how many
orders, sessions and how much ad spend it takes, and what contribution
margin is left once product cost, fees and marketing are paid.
"""

from dataclasses import asdict, dataclass
from typing import Any

from ..core.safe_math import safe_divide
from ..metrics.models import PlanningInputs

# Average days and weeks per month used for funnel averages.
DAYS_PER_MONTH = 30.5
WEEKS_PER_MONTH = 4.35


@dataclass(frozen=True)
class PlanningResults:
    """Monthly funnel targets derived from the planning inputs."""

    revenue: float
    orders: float
    sessions: float
    ad_spend: float
    cps: float
    roas: float
    ideal_cpa: float
    contribution_margin: float
    profit_margin: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FunnelRow:
    """A funnel metric per month with weekly and daily averages."""

    metric: str
    month: float
    week: float
    day: float


def plan_targets(inputs: PlanningInputs) -> PlanningResults:
    """
    Compute the funnel targets for a revenue goal.

    Product cost is a percentage of revenue, as are the fees and the
    marketing budget.

    Args:
        inputs: Revenue goal and percentage assumptions

    Returns:
        PlanningResults; every division is safe (zero inputs give zeros)
    """
    goal = inputs.revenue_goal
    orders = safe_divide(goal, inputs.avg_ticket)
    sessions = safe_divide(orders, inputs.conversion_rate / 100)
    ad_spend = goal * inputs.marketing_spend_percentage / 100

    product_cost = goal * inputs.avg_product_cost / 100
    fees = goal * inputs.blended_fee_pct / 100
    contribution_margin = goal - (product_cost + fees + ad_spend)

    return PlanningResults(
        revenue=goal,
        orders=orders,
        sessions=sessions,
        ad_spend=ad_spend,
        cps=safe_divide(ad_spend, sessions),
        roas=safe_divide(goal, ad_spend),
        ideal_cpa=safe_divide(contribution_margin, orders),
        contribution_margin=contribution_margin,
        profit_margin=safe_divide(contribution_margin, goal) * 100,
    )


def funnel_breakdown(results: PlanningResults) -> list[FunnelRow]:
    """Volume metrics of the funnel, monthly with weekly and daily averages."""
    volumes = [
        ("sessions", results.sessions),
        ("orders", results.orders),
        ("revenue", results.revenue),
        ("ad_spend", results.ad_spend),
        ("contribution_margin", results.contribution_margin),
    ]
    return [
        FunnelRow(metric=name, month=value, week=value / WEEKS_PER_MONTH, day=value / DAYS_PER_MONTH)
        for name, value in volumes
    ]
