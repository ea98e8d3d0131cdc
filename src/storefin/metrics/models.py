#!/usr/bin/env python3
"""
Metrics Data Models

Daily transactional records as delivered by the ingestion layer, the planning
assumptions used to price fees, and the derived snapshot structures returned
by the aggregator.

Daily input fields that a user may leave blank (sessions, revenue, marketing
spend, new customers) are tagged values: ``Recorded(value)`` when something was
entered (zero included) and ``NOT_RECORDED`` when nothing was.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Union

from ..core.dates import parse_iso_date
from ..core.safe_math import safe_divide


@dataclass(frozen=True)
class Recorded:
    """A daily value that was entered, possibly as zero."""

    value: float

    @property
    def is_recorded(self) -> bool:
        return True

    def value_or(self, default: float = 0.0) -> float:
        return self.value


@dataclass(frozen=True)
class NotRecorded:
    """Marker for a daily value that was never entered."""

    @property
    def is_recorded(self) -> bool:
        return False

    def value_or(self, default: float = 0.0) -> float:
        return default


NOT_RECORDED = NotRecorded()

DailyValue = Union[Recorded, NotRecorded]


def to_daily_value(raw: Any) -> DailyValue:
    """Tag a raw optional number (None means not recorded)."""
    if isinstance(raw, (Recorded, NotRecorded)):
        return raw
    if raw is None:
        return NOT_RECORDED
    return Recorded(float(raw))


def from_daily_value(value: DailyValue) -> float | None:
    """Inverse of to_daily_value, for serialization."""
    return value.value if isinstance(value, Recorded) else None


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in ``data`` (snake_case or camelCase)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


class PaymentRail(Enum):
    """Payment rails accepted by the store."""

    CARD = "card"
    BOLETO = "boleto"
    PIX = "pix"


# Status buckets reported by the gateway for each rail.
RAIL_BUCKETS: dict[PaymentRail, tuple[str, ...]] = {
    PaymentRail.CARD: ("approved", "in_analysis", "other"),
    PaymentRail.BOLETO: ("approved", "pending", "compensated"),
    PaymentRail.PIX: ("approved", "pending", "cancelled"),
}

# Rails that carry a "pending" bucket. Card payments settle or fail, they never pend.
PENDING_RAILS = (PaymentRail.BOLETO, PaymentRail.PIX)


@dataclass(frozen=True)
class PaymentStat:
    """Value and count of payments in a single status bucket."""

    value: float = 0.0
    count: int = 0

    def __add__(self, other: "PaymentStat") -> "PaymentStat":
        return PaymentStat(value=self.value + other.value, count=self.count + other.count)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PaymentStat":
        if not data:
            return cls()
        return cls(value=float(data.get("value") or 0), count=int(data.get("count") or 0))


ZERO_STAT = PaymentStat()


@dataclass(frozen=True)
class PaymentBreakdown:
    """Per-rail payment buckets for one day."""

    card: dict[str, PaymentStat] = field(default_factory=dict)
    boleto: dict[str, PaymentStat] = field(default_factory=dict)
    pix: dict[str, PaymentStat] = field(default_factory=dict)

    def rail(self, rail: PaymentRail) -> dict[str, PaymentStat]:
        """Buckets of a rail."""
        return getattr(self, rail.value)

    def stat(self, rail: PaymentRail, bucket: str) -> PaymentStat:
        """Bucket of a rail, zero when the gateway did not report it."""
        return self.rail(rail).get(bucket, ZERO_STAT)

    def total(self, bucket: str, rails: tuple[PaymentRail, ...] = tuple(PaymentRail)) -> PaymentStat:
        """Sum a bucket across rails."""
        result = ZERO_STAT
        for rail in rails:
            result = result + self.stat(rail, bucket)
        return result

    @property
    def approved(self) -> PaymentStat:
        return self.total("approved")

    @property
    def pending(self) -> PaymentStat:
        return self.total("pending", PENDING_RAILS)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PaymentBreakdown":
        """Create from the gateway's nested {rail: {bucket: {value, count}}} shape."""
        data = data or {}
        return cls(
            **{
                rail.value: {
                    bucket: PaymentStat.from_dict(stat)
                    for bucket, stat in (data.get(rail.value) or {}).items()
                }
                for rail in PaymentRail
            }
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            rail.value: {bucket: asdict(stat) for bucket, stat in self.rail(rail).items()}
            for rail in PaymentRail
        }


@dataclass(frozen=True)
class ProductSale:
    """Sales of one product on one day."""

    name: str
    revenue: float = 0.0
    cost: float = 0.0
    orders: int = 0

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductSale":
        return cls(
            name=data["name"],
            revenue=float(data.get("revenue") or 0),
            cost=float(data.get("cost") or 0),
            orders=int(data.get("orders") or 0),
        )


@dataclass(frozen=True)
class DailyRecord:
    """
    Everything known about one calendar day of trading.

    The date is the unique key; records are never mutated once produced.
    """

    date: date
    sessions: DailyValue = NOT_RECORDED
    revenue: DailyValue = NOT_RECORDED
    marketing_spend: DailyValue = NOT_RECORDED
    new_customers: DailyValue = NOT_RECORDED
    products: tuple[ProductSale, ...] = ()
    payment_breakdown: PaymentBreakdown = field(default_factory=PaymentBreakdown)
    returning_customer_revenue: float = 0.0
    returning_customer_orders: int = 0

    @property
    def approved_revenue(self) -> float:
        """Revenue approved across all payment rails."""
        return self.payment_breakdown.approved.value

    @property
    def product_cost(self) -> float:
        """Cost of every product sold that day, approved or not."""
        return sum(p.cost for p in self.products)

    @property
    def product_orders(self) -> int:
        """Orders reported by the storefront for that day."""
        return sum(p.orders for p in self.products)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DailyRecord":
        """Create a record from ingestion data (snake_case or camelCase keys)."""
        return cls(
            date=parse_iso_date(data["date"]),
            sessions=to_daily_value(data.get("sessions")),
            revenue=to_daily_value(data.get("revenue")),
            marketing_spend=to_daily_value(_pick(data, "marketing_spend", "marketingSpend")),
            new_customers=to_daily_value(_pick(data, "new_customers", "newCustomers")),
            products=tuple(ProductSale.from_dict(p) for p in data.get("products") or []),
            payment_breakdown=PaymentBreakdown.from_dict(_pick(data, "payment_breakdown", "paymentBreakdown")),
            returning_customer_revenue=float(
                _pick(data, "returning_customer_revenue", "returningCustomerRevenue", default=0) or 0
            ),
            returning_customer_orders=int(
                _pick(data, "returning_customer_orders", "returningCustomerOrders", default=0) or 0
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "sessions": from_daily_value(self.sessions),
            "revenue": from_daily_value(self.revenue),
            "marketing_spend": from_daily_value(self.marketing_spend),
            "new_customers": from_daily_value(self.new_customers),
            "products": [asdict(p) for p in self.products],
            "payment_breakdown": self.payment_breakdown.to_dict(),
            "returning_customer_revenue": self.returning_customer_revenue,
            "returning_customer_orders": self.returning_customer_orders,
        }


@dataclass(frozen=True)
class PlanningInputs:
    """
    Monthly goal and percentage assumptions entered by the store owner.

    Percentages are expressed on a 0-100 scale. Replace as a whole with
    dataclasses.replace; there is no partial mutation.
    """

    revenue_goal: float = 50000.0
    conversion_rate: float = 1.05
    avg_ticket: float = 389.0
    avg_product_cost: float = 35.0
    checkout_fee: float = 1.0
    payment_gateway_fee: float = 6.99
    tax_rate: float = 8.0
    marketing_spend_percentage: float = 25.0

    @property
    def blended_fee_pct(self) -> float:
        """Checkout + gateway + tax, applied to approved revenue."""
        return self.checkout_fee + self.payment_gateway_fee + self.tax_rate

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanningInputs":
        """Create from stored data, falling back to defaults for absent fields."""
        known = {name: float(data[name]) for name in cls.__dataclass_fields__ if data.get(name) is not None}
        return cls(**known)


@dataclass(frozen=True)
class DashboardData:
    """Standardized profit and loss snapshot for a period."""

    net_revenue: float = 0.0
    total_cogs: float = 0.0
    total_marketing: float = 0.0
    total_fees: float = 0.0
    contribution_margin: float = 0.0
    contribution_margin_percent: float = 0.0
    fixed_costs: float = 0.0
    net_profit: float = 0.0
    net_profit_margin: float = 0.0

    sessions: float = 0.0
    roas: float = 0.0
    cpa: float = 0.0
    avg_ticket: float = 0.0

    orders_count: int = 0
    pending_orders_value: float = 0.0
    pending_orders_count: int = 0

    net_revenue_change: float = 0.0
    contribution_margin_change: float = 0.0
    net_profit_change: float = 0.0
    roas_change: float = 0.0
    cpa_change: float = 0.0
    avg_ticket_change: float = 0.0

    revenue_goal: float = 0.0
    net_profit_goal: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AccumulatedResults:
    """Storefront totals for a period, as typed in by the owner."""

    sessions: float = 0.0
    orders: int = 0
    revenue: float = 0.0
    marketing_spend: float = 0.0
    conversion_rate: float = 0.0
    avg_ticket: float = 0.0
    cps: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RailSummary:
    """Approved and pending totals for one rail with its conversion rate."""

    approved: PaymentStat = ZERO_STAT
    pending: PaymentStat = ZERO_STAT
    conversion: float = 0.0


@dataclass(frozen=True)
class PaymentMethodsSummary:
    """Per-rail payment summary for a period."""

    card: RailSummary = field(default_factory=RailSummary)
    boleto: RailSummary = field(default_factory=RailSummary)
    pix: RailSummary = field(default_factory=RailSummary)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductRank:
    """Product ranked by gross profit over a period."""

    name: str
    revenue: float
    cost: float

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    @property
    def margin_percent(self) -> float:
        return safe_divide(self.profit, self.revenue) * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "revenue": self.revenue,
            "cost": self.cost,
            "profit": self.profit,
            "margin_percent": self.margin_percent,
        }
