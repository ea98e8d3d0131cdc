"""Unit economics and markup tables."""

from .calculator import (
    DEFAULT_MARKUPS,
    MarkupScenario,
    PricingFees,
    PricingResults,
    ProductUnitCost,
    markup_scenario_table,
    price_unit_economics,
    product_catalog,
)

__all__ = [
    "DEFAULT_MARKUPS",
    "MarkupScenario",
    "PricingFees",
    "PricingResults",
    "ProductUnitCost",
    "markup_scenario_table",
    "price_unit_economics",
    "product_catalog",
]
