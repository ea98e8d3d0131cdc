"""
storefin - Storefront Financial Aggregation and Planning Engine

Pure calculations that turn a store's daily transactional records into
profit and loss metrics, goal tracking, reports and pricing guidance, plus the
annual operating-expense plan that supplies fixed costs.

Domain Packages:
- core: Safe math, date ranges, configuration, persistence contracts
- metrics: Daily record models and the metrics aggregator
- planning: Annual opex plan and monthly funnel targets
- goals: Goal progress, burn-down and daily tracking
- reports: Finance, payments and comparison reports
- pricing: Unit economics and markup tables
- storage: File-backed plan and planning-input stores

Example Usage:
    from storefin.metrics import DailyRecord, PlanningInputs, compute_dashboard
    from storefin.planning import create_default_plan, fixed_cost_provider

    plan = create_default_plan(2025)
    snapshot = compute_dashboard(records, start, end, PlanningInputs(), fixed_cost_provider(plan))
"""

__version__ = "0.1.0"

from .core.config import Environment, get_config
from .core.safe_math import percent_change, safe_divide
from .metrics.aggregator import compute_dashboard, compute_metrics
from .metrics.models import DailyRecord, DashboardData, PlanningInputs
from .planning.models import AnnualPlan
from .planning.opex import create_default_plan

__all__ = [
    # Core
    "safe_divide",
    "percent_change",
    # Metrics
    "DailyRecord",
    "DashboardData",
    "PlanningInputs",
    "compute_metrics",
    "compute_dashboard",
    # Planning
    "AnnualPlan",
    "create_default_plan",
    # Configuration
    "get_config",
    "Environment",
]
