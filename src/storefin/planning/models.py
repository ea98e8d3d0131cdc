#!/usr/bin/env python3
"""
Annual Plan Data Models

Data structures for the annual operating-expense plan: scenarios, opex
categories with their sub-items, seasonal weights and monthly overrides, fee
percentages and headline assumptions.

All models are frozen. Edits produce new instances (see storefin.planning.opex);
the twelve-month arrays are tuples and indexed 0 (January) to 11 (December).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MONTHS_PER_YEAR = 12


class ScenarioName(Enum):
    """Named scenarios of an annual plan."""

    BASE = "Base"
    COST_CUTTING = "Cost Cutting"
    GROWTH_BET = "Growth Bet"


class OpexCategory(Enum):
    """Operating expense categories."""

    RENT = "rent"
    INTERNET = "internet"
    SOFTWARE = "software"
    PAYROLL = "payroll"
    OTHER = "other"


class PlanStatus(Enum):
    """Approval workflow status of a plan."""

    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"


def even_weights() -> tuple[float, ...]:
    """Twelve equal seasonal weights."""
    return tuple(1 / MONTHS_PER_YEAR for _ in range(MONTHS_PER_YEAR))


def no_overrides() -> tuple[float | None, ...]:
    return tuple(None for _ in range(MONTHS_PER_YEAR))


@dataclass(frozen=True)
class OpexSubItem:
    """One budget line inside a category (annual value)."""

    id: str
    name: str
    value: float
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "value": self.value, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpexSubItem":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            value=float(data.get("value", 0.0)),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class CategoryDetail:
    """
    Budget detail for one opex category.

    The annual amount is the sum of the sub-items. A month's value is the
    override when one is set, otherwise annual amount times the month's weight.
    """

    sub_items: tuple[OpexSubItem, ...] = ()
    monthly_overrides: tuple[float | None, ...] = field(default_factory=no_overrides)
    seasonal_weights: tuple[float, ...] = field(default_factory=even_weights)
    owner: str = ""

    def __post_init__(self):
        if len(self.monthly_overrides) != MONTHS_PER_YEAR:
            raise ValueError(f"monthly_overrides must have {MONTHS_PER_YEAR} entries")
        if len(self.seasonal_weights) != MONTHS_PER_YEAR:
            raise ValueError(f"seasonal_weights must have {MONTHS_PER_YEAR} entries")

    @property
    def sub_items_total(self) -> float:
        return sum(item.value for item in self.sub_items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sub_items": [item.to_dict() for item in self.sub_items],
            "monthly_overrides": list(self.monthly_overrides),
            "seasonal_weights": list(self.seasonal_weights),
            "owner": self.owner,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryDetail":
        overrides = data.get("monthly_overrides")
        weights = data.get("seasonal_weights")
        return cls(
            sub_items=tuple(OpexSubItem.from_dict(item) for item in data.get("sub_items", [])),
            monthly_overrides=(
                tuple(None if v is None else float(v) for v in overrides) if overrides else no_overrides()
            ),
            seasonal_weights=tuple(float(w) for w in weights) if weights else even_weights(),
            owner=data.get("owner", ""),
        )


@dataclass(frozen=True)
class FeePercentages:
    """Revenue-proportional fee assumptions of a scenario (0-100)."""

    tax: float = 0.0
    checkout: float = 0.0
    gateway: float = 0.0
    platform: float = 0.0
    iof: float = 0.0
    shipping: float = 0.0

    @property
    def total(self) -> float:
        return self.tax + self.checkout + self.gateway + self.platform + self.iof + self.shipping

    def to_dict(self) -> dict[str, float]:
        return {
            "tax": self.tax,
            "checkout": self.checkout,
            "gateway": self.gateway,
            "platform": self.platform,
            "iof": self.iof,
            "shipping": self.shipping,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeePercentages":
        return cls(**{key: float(data.get(key, 0.0)) for key in cls().to_dict()})


@dataclass(frozen=True)
class Assumptions:
    """Headline projections a scenario is built around."""

    projected_revenue: float = 0.0
    projected_orders: int = 0
    runway_months: int = 0
    opex_to_revenue_target: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "projected_revenue": self.projected_revenue,
            "projected_orders": self.projected_orders,
            "runway_months": self.runway_months,
            "opex_to_revenue_target": self.opex_to_revenue_target,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Assumptions":
        return cls(
            projected_revenue=float(data.get("projected_revenue", 0.0)),
            projected_orders=int(data.get("projected_orders", 0)),
            runway_months=int(data.get("runway_months", 0)),
            opex_to_revenue_target=float(data.get("opex_to_revenue_target", 0.0)),
        )


@dataclass(frozen=True)
class ScenarioData:
    """One scenario: opex per category plus its fee and revenue assumptions."""

    opex: dict[OpexCategory, CategoryDetail] = field(default_factory=dict)
    notes: str = ""
    fee_percentages: FeePercentages = field(default_factory=FeePercentages)
    assumptions: Assumptions = field(default_factory=Assumptions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "opex": {category.value: detail.to_dict() for category, detail in self.opex.items()},
            "notes": self.notes,
            "fee_percentages": self.fee_percentages.to_dict(),
            "assumptions": self.assumptions.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScenarioData":
        return cls(
            opex={
                OpexCategory(category): CategoryDetail.from_dict(detail)
                for category, detail in (data.get("opex") or {}).items()
            },
            notes=data.get("notes", ""),
            fee_percentages=FeePercentages.from_dict(data.get("fee_percentages") or {}),
            assumptions=Assumptions.from_dict(data.get("assumptions") or {}),
        )


@dataclass(frozen=True)
class AnnualPlan:
    """
    A versioned annual plan for one year.

    Attributes:
        year: Calendar year the plan covers
        active_scenario: Scenario used for fixed costs and reports
        status: Approval status (approved plans are read-only)
        version: Version number, starting at 1
        effective_from: First month the plan applies to ("YYYY-MM")
        scenarios: Scenario data keyed by name
    """

    year: int
    active_scenario: ScenarioName = ScenarioName.BASE
    status: PlanStatus = PlanStatus.DRAFT
    version: int = 1
    effective_from: str = ""
    scenarios: dict[ScenarioName, ScenarioData] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "year": self.year,
            "active_scenario": self.active_scenario.value,
            "status": self.status.value,
            "version": self.version,
            "effective_from": self.effective_from,
            "scenarios": {name.value: scenario.to_dict() for name, scenario in self.scenarios.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnnualPlan":
        """Create AnnualPlan from dictionary."""
        year = int(data["year"])
        return cls(
            year=year,
            active_scenario=ScenarioName(data.get("active_scenario", ScenarioName.BASE.value)),
            status=PlanStatus(data.get("status", PlanStatus.DRAFT.value)),
            version=int(data.get("version", 1)),
            effective_from=data.get("effective_from") or f"{year}-01",
            scenarios={
                ScenarioName(name): ScenarioData.from_dict(scenario)
                for name, scenario in (data.get("scenarios") or {}).items()
            },
        )


@dataclass(frozen=True)
class CategoryVariance:
    """Planned versus actual spend for one category over the year."""

    category: OpexCategory
    planned: tuple[float, ...]
    actual: tuple[float, ...]

    @property
    def planned_total(self) -> float:
        return sum(self.planned)

    @property
    def actual_total(self) -> float:
        return sum(self.actual)

    @property
    def variance(self) -> float:
        """Actual minus planned (positive means overspent)."""
        return self.actual_total - self.planned_total

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "planned": list(self.planned),
            "actual": list(self.actual),
            "planned_total": self.planned_total,
            "actual_total": self.actual_total,
            "variance": self.variance,
        }


@dataclass(frozen=True)
class CategoryShare:
    """Annual amount of one category and its share of total opex."""

    category: OpexCategory
    value: float
    percent: float

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category.value, "value": self.value, "percent": self.percent}
