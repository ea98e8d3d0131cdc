"""
Planning Package

Annual operating-expense plan (scenarios, monthly grid, fixed costs) and the
monthly funnel targets derived from planning inputs.
"""

from .models import (
    AnnualPlan,
    Assumptions,
    CategoryDetail,
    CategoryShare,
    CategoryVariance,
    FeePercentages,
    OpexCategory,
    OpexSubItem,
    PlanStatus,
    ScenarioData,
    ScenarioName,
)
from .opex import (
    annual_total,
    approve,
    budget_vs_actual,
    category_annual_total,
    create_default_plan,
    fixed_cost_provider,
    fixed_costs_for_month,
    fixed_costs_for_range,
    is_read_only,
    monthly_values,
    next_version,
    opex_to_revenue_pct,
    select_scenario,
    set_override,
    set_seasonal_weight,
    top_category,
    update_category,
    validate_plan,
    validate_scenario,
    weights_are_valid,
    with_active_scenario,
    year_over_year_delta,
)
from .targets import FunnelRow, PlanningResults, funnel_breakdown, plan_targets

__all__ = [
    # Models
    "AnnualPlan",
    "Assumptions",
    "CategoryDetail",
    "CategoryShare",
    "CategoryVariance",
    "FeePercentages",
    "OpexCategory",
    "OpexSubItem",
    "PlanStatus",
    "ScenarioData",
    "ScenarioName",
    # Opex grid
    "annual_total",
    "approve",
    "budget_vs_actual",
    "category_annual_total",
    "create_default_plan",
    "fixed_cost_provider",
    "fixed_costs_for_month",
    "fixed_costs_for_range",
    "is_read_only",
    "monthly_values",
    "next_version",
    "opex_to_revenue_pct",
    "select_scenario",
    "set_override",
    "set_seasonal_weight",
    "top_category",
    "update_category",
    "validate_plan",
    "validate_scenario",
    "weights_are_valid",
    "with_active_scenario",
    "year_over_year_delta",
    # Funnel targets
    "FunnelRow",
    "PlanningResults",
    "funnel_breakdown",
    "plan_targets",
]
