#!/usr/bin/env python3
"""
Report Document Models

Plain, serializable report documents built from a metrics snapshot: the
finance report (revenue-to-profit waterfall), the payments report (approval
by rail and reconciliation) and the plan-versus-actual comparison.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..goals.tracker import BurnDown


class LineKind(Enum):
    """Role of a line in the waterfall."""

    TOTAL = "total"
    DEDUCTION = "deduction"
    SUBTOTAL = "subtotal"


class ComparisonStatus(Enum):
    """Traffic-light status of actual against target."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class ReportFlags:
    """Data completeness of the reported period."""

    partial: bool = False
    missing: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"partial": self.partial, "missing": list(self.missing)}


@dataclass(frozen=True)
class WaterfallLine:
    """
    One step from revenue to profit.

    Deductions carry a positive amount that is subtracted from the running
    total; subtotals carry the running total itself.
    """

    key: str
    value: float
    kind: LineKind

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value, "kind": self.kind.value}


@dataclass(frozen=True)
class TopMover:
    """Product ranked by gross profit over the period."""

    name: str
    profit: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "profit": self.profit}


@dataclass(frozen=True)
class GoalBlock:
    metric: str
    value: float
    achieved: float
    progress_pct: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric,
            "value": self.value,
            "achieved": self.achieved,
            "progress_pct": self.progress_pct,
        }


@dataclass(frozen=True)
class FinanceReport:
    """Revenue-to-profit explanation of a period."""

    period: str
    goal: GoalBlock
    waterfall: tuple[WaterfallLine, ...]
    percent_of_revenue: dict[str, float]
    top_movers: tuple[TopMover, ...]
    burn_down: BurnDown
    flags: ReportFlags = field(default_factory=ReportFlags)

    def line(self, key: str) -> WaterfallLine:
        """Waterfall line by key."""
        for line in self.waterfall:
            if line.key == key:
                return line
        raise KeyError(key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "goal": self.goal.to_dict(),
            "waterfall": [line.to_dict() for line in self.waterfall],
            "percent_of_revenue": dict(self.percent_of_revenue),
            "top_movers": [mover.to_dict() for mover in self.top_movers],
            "burn_down": self.burn_down.to_dict(),
            "flags": self.flags.to_dict(),
        }


@dataclass(frozen=True)
class RailApproval:
    """Payment counts of one rail by outcome."""

    approved: int = 0
    pending: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.approved + self.pending + self.rejected

    def to_dict(self) -> dict[str, int]:
        return {"approved": self.approved, "pending": self.pending, "rejected": self.rejected}


@dataclass(frozen=True)
class EffectiveFees:
    gateway_pct: float
    platform_pct: float
    iof_pct: float

    def to_dict(self) -> dict[str, float]:
        return {"gateway_pct": self.gateway_pct, "platform_pct": self.platform_pct, "iof_pct": self.iof_pct}


@dataclass(frozen=True)
class Reconciliation:
    """
    Store-side approved orders against gateway-side approved payments.

    Attributes:
        orders_approved: Orders reported by the storefront
        payments_approved: Payments the gateway reported as approved
        delta_pct: Payments relative to orders, in percent
        alert: Whether the delta exceeds the tolerance
    """

    orders_approved: int
    payments_approved: int
    delta_pct: float
    alert: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "orders_approved": self.orders_approved,
            "payments_approved": self.payments_approved,
            "delta_pct": self.delta_pct,
            "alert": self.alert,
        }


@dataclass(frozen=True)
class PaymentsReport:
    """Approval by payment rail, effective fees and reconciliation."""

    period: str
    approval: dict[str, RailApproval]
    rates: dict[str, float]
    fees_effective: EffectiveFees
    reconciliation: Reconciliation
    notes: tuple[str, ...] = ()
    flags: ReportFlags = field(default_factory=ReportFlags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "approval": {rail: counts.to_dict() for rail, counts in self.approval.items()},
            "rates": dict(self.rates),
            "fees_effective": self.fees_effective.to_dict(),
            "reconciliation": self.reconciliation.to_dict(),
            "notes": list(self.notes),
            "flags": self.flags.to_dict(),
        }


@dataclass(frozen=True)
class ComparisonRow:
    kpi: str
    period: str
    target: float
    actual: float
    delta: float
    status: ComparisonStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "kpi": self.kpi,
            "period": self.period,
            "target": self.target,
            "actual": self.actual,
            "delta": self.delta,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ComparisonReport:
    """Planned versus achieved approved revenue for yesterday, week and month to date."""

    periods: tuple[str, ...]
    table: tuple[ComparisonRow, ...]
    flags: ReportFlags = field(default_factory=ReportFlags)

    def row(self, period: str) -> ComparisonRow:
        for row in self.table:
            if row.period == period:
                return row
        raise KeyError(period)

    def to_dict(self) -> dict[str, Any]:
        return {
            "periods": list(self.periods),
            "table": [row.to_dict() for row in self.table],
            "flags": self.flags.to_dict(),
        }
