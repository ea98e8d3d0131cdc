#!/usr/bin/env python3
"""
Pricing Engine

Unit economics of a product at a given sale price: what the percentage fees
and the marketing budget take, what profit is left, and the largest
acquisition cost that still breaks even. A markup table repeats the
calculation across candidate price points for side-by-side comparison.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from ..core.safe_math import safe_divide
from ..metrics.models import DailyRecord

logger = logging.getLogger(__name__)

DEFAULT_MARKUPS: tuple[float, ...] = (1.5, 1.75, 2.0, 2.25, 2.5, 2.75, 3.0, 3.25, 3.5, 3.75, 4.0)

# Markup applied to cost for the recommended price.
RECOMMENDED_MARKUP = 3.0


@dataclass(frozen=True)
class PricingFees:
    """
    Percentage fees charged on the sale price (0-100).

    Everything except marketing counts as a fixed percentage cost.
    """

    checkout: float = 2.5
    iof: float = 0.38
    platform: float = 0.0
    gateway: float = 5.99
    error_margin: float = 5.0
    tax: float = 6.0
    marketing: float = 25.0

    @property
    def fixed_costs_pct(self) -> float:
        return self.checkout + self.iof + self.platform + self.gateway + self.error_margin + self.tax


@dataclass(frozen=True)
class PricingResults:
    fixed_costs_pct: float
    fixed_costs_value: float
    marketing_value: float
    total_cost: float
    profit: float
    profit_pct: float
    max_cpa: float
    current_markup: float
    recommended_price: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MarkupScenario:
    """Unit economics at price = cost × markup."""

    markup: float
    final_price: float
    total_cost: float
    marketing_cost: float
    max_cpa: float
    profit: float
    profit_pct: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductUnitCost:
    """Unit sale price and unit cost of a product as first seen in the records."""

    name: str
    unit_price: float
    unit_cost: float

    @property
    def markup(self) -> float:
        return safe_divide(self.unit_price, self.unit_cost)


def price_unit_economics(cost: float, price: float, fees: PricingFees) -> PricingResults:
    """
    Compute the unit economics of selling at ``price`` a product costing ``cost``.

    The maximum CPA equals the profit: spending that much to acquire a
    customer for one unit breaks even.

    Args:
        cost: Unit product cost
        price: Sale price
        fees: Percentage fees on the sale price

    Returns:
        PricingResults
    """
    fixed_costs_value = price * fees.fixed_costs_pct / 100
    marketing_value = price * fees.marketing / 100
    total_cost = cost + fixed_costs_value + marketing_value
    profit = price - total_cost

    return PricingResults(
        fixed_costs_pct=fees.fixed_costs_pct,
        fixed_costs_value=fixed_costs_value,
        marketing_value=marketing_value,
        total_cost=total_cost,
        profit=profit,
        profit_pct=safe_divide(profit, price) * 100,
        max_cpa=profit,
        current_markup=safe_divide(price, cost),
        recommended_price=cost * RECOMMENDED_MARKUP,
    )


def markup_scenario_table(
    cost: float, fees: PricingFees, markups: Sequence[float] = DEFAULT_MARKUPS
) -> list[MarkupScenario]:
    """
    Unit economics for each candidate markup on ``cost``.

    A zero cost has no meaningful price points and yields an empty table.
    Non-positive markups are skipped.
    """
    if cost <= 0:
        return []

    table = []
    for markup in markups:
        if markup <= 0:
            logger.debug(f"Skipping non-positive markup {markup}")
            continue
        price = cost * markup
        result = price_unit_economics(cost, price, fees)
        table.append(
            MarkupScenario(
                markup=markup,
                final_price=price,
                total_cost=result.total_cost,
                marketing_cost=result.marketing_value,
                max_cpa=result.max_cpa,
                profit=result.profit,
                profit_pct=result.profit_pct,
            )
        )
    return table


def product_catalog(records: Iterable[DailyRecord]) -> list[ProductUnitCost]:
    """
    Unit price and cost per product from the first day it sold.

    Products are listed in order of first appearance; sales with no orders
    are ignored.
    """
    catalog: dict[str, ProductUnitCost] = {}
    for record in sorted(records, key=lambda r: r.date):
        for sale in record.products:
            if sale.name in catalog or sale.orders <= 0:
                continue
            catalog[sale.name] = ProductUnitCost(
                name=sale.name,
                unit_price=sale.revenue / sale.orders,
                unit_cost=sale.cost / sale.orders,
            )
    return list(catalog.values())
