"""
Core Utilities Package

Shared building blocks used across all storefin domains.

This package provides:
- Division that never fails on zero or non-finite denominators
- Immutable date ranges and calendar helpers
- Configuration management for environment-specific settings
- JSON helpers and persistence contracts
"""

from .config import (
    Config,
    Environment,
    FixedCostPolicy,
    get_config,
    is_test,
    reload_config,
)
from .datastore import AnnualPlanRepository, PlanningInputsRepository
from .dates import (
    DateRange,
    date_range_for_preset,
    days_in_month,
    end_of_month,
    parse_iso_date,
    start_of_month,
    start_of_week,
)
from .safe_math import percent_change, safe_divide

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "FixedCostPolicy",
    "get_config",
    "is_test",
    "reload_config",
    # Persistence contracts
    "AnnualPlanRepository",
    "PlanningInputsRepository",
    # Dates
    "DateRange",
    "date_range_for_preset",
    "days_in_month",
    "end_of_month",
    "parse_iso_date",
    "start_of_month",
    "start_of_week",
    # Math
    "percent_change",
    "safe_divide",
]
