#!/usr/bin/env python3
"""
Annual Opex Planner

Monthly budget grid of the annual plan and everything derived from it:
annual totals, fixed costs for a month or a date range, budget versus actual,
plus immutable edits and advisory validation.

Edits never mutate their input. They return a new AnnualPlan in which only the
edited category is a new object; every other scenario and category is shared
with the input plan.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date

from ..core.config import FixedCostPolicy, get_config
from ..core.dates import DateRange, days_in_month
from ..core.safe_math import safe_divide
from .models import (
    MONTHS_PER_YEAR,
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

logger = logging.getLogger(__name__)


# Grid calculations


def monthly_values(detail: CategoryDetail) -> list[float]:
    """
    Budgeted value of a category for each month.

    Example:
        A category with 12000 of sub-items, even weights and an override of
        500 for January yields [500, 1000, 1000, ...].
    """
    annual = detail.sub_items_total
    return [
        override if override is not None else annual * weight
        for override, weight in zip(detail.monthly_overrides, detail.seasonal_weights, strict=True)
    ]


def category_annual_total(detail: CategoryDetail) -> float:
    """Sum of the twelve monthly values (overrides included)."""
    return sum(monthly_values(detail))


def annual_total(opex: dict[OpexCategory, CategoryDetail]) -> float:
    """Total budgeted opex for the year across all categories."""
    return sum(category_annual_total(detail) for detail in opex.values())


def _check_month(month_index: int) -> None:
    if not 0 <= month_index < MONTHS_PER_YEAR:
        raise ValueError(f"Month index must be between 0 and {MONTHS_PER_YEAR - 1}, got {month_index}")


def fixed_costs_for_month(scenario: ScenarioData, month_index: int) -> float:
    """
    Fixed costs of one month: the sum of every category's value for it.

    Args:
        scenario: Scenario whose opex grid is used
        month_index: 0 (January) to 11 (December)

    Returns:
        Fixed costs, 0 for a scenario without categories

    Raises:
        ValueError: If month_index is out of range
    """
    _check_month(month_index)
    return sum(monthly_values(detail)[month_index] for detail in scenario.opex.values())


def fixed_costs_for_range(
    scenario: ScenarioData,
    start: date,
    end: date,
    policy: FixedCostPolicy = FixedCostPolicy.START_MONTH,
) -> float:
    """
    Fixed costs attributed to a date range.

    START_MONTH charges the full fixed costs of the month containing ``start``
    regardless of the range length. PRO_RATED charges each spanned month in
    proportion to the days of the range that fall inside it.
    """
    period = DateRange(start=start, end=end)
    if policy == FixedCostPolicy.START_MONTH:
        return fixed_costs_for_month(scenario, period.start.month - 1)

    total = 0.0
    for month_start, covered in period.month_spans():
        month_cost = fixed_costs_for_month(scenario, month_start.month - 1)
        total += month_cost * covered / days_in_month(month_start)
    return total


def fixed_cost_provider(
    plan: AnnualPlan, policy: FixedCostPolicy | None = None
) -> Callable[[DateRange], float]:
    """
    Build the fixed-cost callable used by the metrics aggregator.

    Args:
        plan: Plan whose active scenario supplies the costs
        policy: Month-boundary policy (default: configured policy)
    """
    if policy is None:
        policy = get_config().planning.fixed_cost_policy
    scenario = select_scenario(plan)

    def fixed_costs_for(period: DateRange) -> float:
        return fixed_costs_for_range(scenario, period.start, period.end, policy)

    return fixed_costs_for


# Scenario selection


def select_scenario(plan: AnnualPlan, name: ScenarioName | None = None) -> ScenarioData:
    """Scenario by name (default: the active one); an empty scenario when absent."""
    name = name or plan.active_scenario
    scenario = plan.scenarios.get(name)
    if scenario is None:
        logger.warning(f"Scenario '{name.value}' missing from {plan.year} plan v{plan.version}")
        return ScenarioData()
    return scenario


def with_active_scenario(plan: AnnualPlan, name: ScenarioName) -> AnnualPlan:
    """Switch the active scenario."""
    return replace(plan, active_scenario=name)


# Immutable edits


def _category(plan: AnnualPlan, scenario_name: ScenarioName, category: OpexCategory) -> CategoryDetail:
    scenario = plan.scenarios.get(scenario_name)
    if scenario is None:
        raise ValueError(f"Unknown scenario: {scenario_name}")
    detail = scenario.opex.get(category)
    if detail is None:
        raise ValueError(f"Category {category} not present in scenario '{scenario_name.value}'")
    return detail


def update_category(
    plan: AnnualPlan, scenario_name: ScenarioName, category: OpexCategory, detail: CategoryDetail
) -> AnnualPlan:
    """
    Replace one category of one scenario.

    Raises:
        ValueError: If the scenario does not exist in the plan
    """
    scenario = plan.scenarios.get(scenario_name)
    if scenario is None:
        raise ValueError(f"Unknown scenario: {scenario_name}")

    new_scenario = replace(scenario, opex={**scenario.opex, category: detail})
    return replace(plan, scenarios={**plan.scenarios, scenario_name: new_scenario})


def set_override(
    plan: AnnualPlan,
    scenario_name: ScenarioName,
    category: OpexCategory,
    month_index: int,
    value: float | None,
) -> AnnualPlan:
    """
    Set (or clear, with ``value=None``) the override of one month.

    Raises:
        ValueError: On an out-of-range month or unknown scenario/category
    """
    _check_month(month_index)
    detail = _category(plan, scenario_name, category)

    overrides = list(detail.monthly_overrides)
    overrides[month_index] = None if value is None else float(value)
    return update_category(plan, scenario_name, category, replace(detail, monthly_overrides=tuple(overrides)))


def set_seasonal_weight(
    plan: AnnualPlan,
    scenario_name: ScenarioName,
    category: OpexCategory,
    month_index: int,
    weight_percent: float,
) -> AnnualPlan:
    """
    Set the seasonal weight of one month, given in percent.

    The other weights are left alone, so the twelve weights may stop summing
    to one; validate_scenario reports that.

    Raises:
        ValueError: On an out-of-range month or unknown scenario/category
    """
    _check_month(month_index)
    detail = _category(plan, scenario_name, category)

    weights = list(detail.seasonal_weights)
    weights[month_index] = weight_percent / 100
    return update_category(plan, scenario_name, category, replace(detail, seasonal_weights=tuple(weights)))


# Validation and lifecycle


def weights_are_valid(detail: CategoryDetail, tolerance: float | None = None) -> bool:
    """Check that the seasonal weights sum to one within the tolerance."""
    if tolerance is None:
        tolerance = get_config().planning.weight_tolerance
    return abs(sum(detail.seasonal_weights) - 1) <= tolerance


def validate_scenario(scenario: ScenarioData, tolerance: float | None = None) -> list[str]:
    """Return a list of problems with a scenario (empty when valid)."""
    errors = []

    if not scenario.opex:
        errors.append("Scenario has no opex categories")

    for category, detail in scenario.opex.items():
        if not weights_are_valid(detail, tolerance):
            errors.append(
                f"{category.value}: seasonal weights sum to {sum(detail.seasonal_weights):.4f}, expected 1"
            )
        for item in detail.sub_items:
            if item.value < 0:
                errors.append(f"{category.value}: sub-item '{item.name}' has negative value")
        if any(v is not None and v < 0 for v in detail.monthly_overrides):
            errors.append(f"{category.value}: negative monthly override")

    if scenario.assumptions.projected_revenue < 0:
        errors.append("Projected revenue must be non-negative")

    return errors


def validate_plan(plan: AnnualPlan, tolerance: float | None = None) -> list[str]:
    """
    Validate every scenario of a plan.

    Problems are logged as warnings and returned, never raised.
    """
    errors = []
    if plan.active_scenario not in plan.scenarios:
        errors.append(f"Active scenario '{plan.active_scenario.value}' is missing")

    for name in ScenarioName:
        if name not in plan.scenarios:
            errors.append(f"Scenario '{name.value}' is missing")
            continue
        errors.extend(f"{name.value}: {error}" for error in validate_scenario(plan.scenarios[name], tolerance))

    for error in errors:
        logger.warning(f"Plan {plan.year} v{plan.version}: {error}")
    return errors


def is_read_only(plan: AnnualPlan) -> bool:
    """Approved plans are frozen for editing."""
    return plan.status == PlanStatus.APPROVED


def approve(plan: AnnualPlan) -> AnnualPlan:
    return replace(plan, status=PlanStatus.APPROVED)


def next_version(plan: AnnualPlan) -> AnnualPlan:
    """Copy of the plan as a new editable draft version."""
    return replace(plan, version=plan.version + 1, status=PlanStatus.DRAFT)


# Default plan

BASE_OPEX: dict[OpexCategory, tuple[str, list[tuple[str, float]]]] = {
    OpexCategory.RENT: ("Financeiro", [("Escritório", 18000.0)]),
    OpexCategory.INTERNET: ("TI", [("Link Fibra", 1800.0)]),
    OpexCategory.SOFTWARE: ("TI", [("Shopify Plus", 2400.0), ("Klaviyo", 1800.0), ("Outros", 1800.0)]),
    OpexCategory.PAYROLL: ("RH", [("Salários + Encargos", 84000.0)]),
    OpexCategory.OTHER: ("Financeiro", [("Despesas Gerais", 3000.0)]),
}

BASE_FEES = FeePercentages(tax=6.0, checkout=2.5, gateway=4.99, platform=1.5, iof=0.38, shipping=5.0)

BASE_ASSUMPTIONS = Assumptions(
    projected_revenue=600000.0,
    projected_orders=1542,
    runway_months=12,
    opex_to_revenue_target=22.0,
)

# Per-category multipliers applied to Base sub-items, plus a revenue multiplier.
SCENARIO_ADJUSTMENTS: dict[ScenarioName, tuple[dict[OpexCategory, float], float]] = {
    ScenarioName.COST_CUTTING: (
        {
            OpexCategory.RENT: 1.0,
            OpexCategory.INTERNET: 1.0,
            OpexCategory.SOFTWARE: 0.75,
            OpexCategory.PAYROLL: 0.85,
            OpexCategory.OTHER: 0.6,
        },
        0.9,
    ),
    ScenarioName.GROWTH_BET: (
        {
            OpexCategory.RENT: 1.0,
            OpexCategory.INTERNET: 1.5,
            OpexCategory.SOFTWARE: 1.5,
            OpexCategory.PAYROLL: 1.35,
            OpexCategory.OTHER: 1.25,
        },
        1.3,
    ),
}


def _base_scenario() -> ScenarioData:
    opex = {
        category: CategoryDetail(
            sub_items=tuple(
                OpexSubItem(id=str(i), name=name, value=value) for i, (name, value) in enumerate(items, start=1)
            ),
            owner=owner,
        )
        for category, (owner, items) in BASE_OPEX.items()
    }
    return ScenarioData(
        opex=opex,
        notes="Premissas iniciais para o plano base",
        fee_percentages=BASE_FEES,
        assumptions=BASE_ASSUMPTIONS,
    )


def _derived_scenario(base: ScenarioData, name: ScenarioName) -> ScenarioData:
    multipliers, revenue_multiplier = SCENARIO_ADJUSTMENTS[name]
    opex = {
        category: replace(
            detail,
            sub_items=tuple(replace(item, value=item.value * multipliers[category]) for item in detail.sub_items),
        )
        for category, detail in base.opex.items()
    }
    assumptions = replace(
        base.assumptions,
        projected_revenue=base.assumptions.projected_revenue * revenue_multiplier,
        projected_orders=round(base.assumptions.projected_orders * revenue_multiplier),
    )
    return replace(base, opex=opex, notes=f"Derivado do cenário Base ({name.value})", assumptions=assumptions)


def create_default_plan(year: int) -> AnnualPlan:
    """
    Create a fully populated draft plan for a year.

    Every scenario is populated: Base from the default budget, the others
    derived from Base.

    Raises:
        ValueError: If the generated plan fails validation
    """
    base = _base_scenario()
    scenarios = {ScenarioName.BASE: base}
    for name in SCENARIO_ADJUSTMENTS:
        scenarios[name] = _derived_scenario(base, name)

    plan = AnnualPlan(year=year, effective_from=f"{year}-01", scenarios=scenarios)

    errors = validate_plan(plan)
    if errors:
        raise ValueError(f"Default plan is invalid: {'; '.join(errors)}")

    logger.info(f"Created default annual plan for {year}")
    return plan


# Analysis


def budget_vs_actual(
    scenario: ScenarioData, actuals: dict[OpexCategory, list[float]]
) -> list[CategoryVariance]:
    """
    Compare planned monthly values with actual spend per category.

    Categories without actuals compare against zeros.

    Raises:
        ValueError: If an actuals series does not have twelve months
    """
    variances = []
    for category, detail in scenario.opex.items():
        actual = actuals.get(category, [0.0] * MONTHS_PER_YEAR)
        if len(actual) != MONTHS_PER_YEAR:
            raise ValueError(f"Actuals for {category.value} must have {MONTHS_PER_YEAR} months")
        variances.append(
            CategoryVariance(
                category=category,
                planned=tuple(monthly_values(detail)),
                actual=tuple(float(v) for v in actual),
            )
        )
    return variances


def opex_to_revenue_pct(scenario: ScenarioData) -> float:
    """Annual opex as a percentage of projected revenue."""
    return safe_divide(annual_total(scenario.opex), scenario.assumptions.projected_revenue) * 100


def top_category(scenario: ScenarioData) -> CategoryShare | None:
    """Category with the largest annual amount, None when all are zero."""
    total = annual_total(scenario.opex)
    best: CategoryShare | None = None
    for category, detail in scenario.opex.items():
        value = category_annual_total(detail)
        if value > 0 and (best is None or value > best.value):
            best = CategoryShare(category=category, value=value, percent=safe_divide(value, total) * 100)
    return best


def year_over_year_delta(scenario: ScenarioData, previous_year_opex: dict[OpexCategory, float]) -> float:
    """Annual opex minus last year's total (positive means spending more)."""
    return annual_total(scenario.opex) - sum(previous_year_opex.values())
