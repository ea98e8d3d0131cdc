#!/usr/bin/env python3
"""
Payments Report

Approval counts per payment rail, the effective fee rates, and a
reconciliation of store-side orders against gateway-side approved payments.

Rejections are resolved by storefin.metrics.aggregator.rejected_count. Rails
counted through a stand-in bucket are listed in the report notes. Card
payments have no pending state.
"""

import logging
from collections.abc import Iterable
from datetime import date

from ..core.config import get_config
from ..core.dates import DateRange
from ..core.safe_math import percent_change, safe_divide
from ..metrics.aggregator import REJECTION_FALLBACK, filter_records, pending_stat, rejected_count
from ..metrics.models import DailyRecord, DashboardData, PaymentRail, PlanningInputs
from .flags import period_flags
from .models import EffectiveFees, PaymentsReport, RailApproval, Reconciliation

logger = logging.getLogger(__name__)


def rail_approval(records: Iterable[DailyRecord], rail: PaymentRail) -> tuple[RailApproval, bool]:
    """Approved, pending and rejected counts of a rail over a period."""
    approved = pending = rejected = 0
    approximated = False
    for record in records:
        approved += record.payment_breakdown.stat(rail, "approved").count
        pending += pending_stat(record, rail).count
        count, approx = rejected_count(record, rail)
        rejected += count
        approximated = approximated or approx
    return RailApproval(approved=approved, pending=pending, rejected=rejected), approximated


def reconcile(orders_approved: int, payments_approved: int, tolerance_pct: float) -> Reconciliation:
    """
    Compare store orders with gateway approvals.

    With no store orders, any approved payment is a +100% divergence. The
    alert is advisory: it is logged and returned, never raised.
    """
    delta_pct = percent_change(payments_approved, orders_approved)
    alert = abs(delta_pct) > tolerance_pct
    if alert:
        logger.warning(
            f"Payment reconciliation off by {delta_pct:.2f}% "
            f"({payments_approved} payments vs {orders_approved} orders, tolerance {tolerance_pct}%)"
        )
    return Reconciliation(
        orders_approved=orders_approved,
        payments_approved=payments_approved,
        delta_pct=delta_pct,
        alert=alert,
    )


def build_payments_report(
    records: Iterable[DailyRecord],
    snapshot: DashboardData,
    start: date,
    end: date,
    fees: PlanningInputs,
    tolerance_pct: float | None = None,
    today: date | None = None,
) -> PaymentsReport:
    """
    Build the payments report for [start, end].

    Args:
        records: Daily records (any range; filtered here)
        snapshot: Metrics of the period; its order count is the gateway's
            approved payment count
        start: First day of the period
        end: Last day of the period
        fees: Planning inputs supplying gateway and checkout rates
        tolerance_pct: Reconciliation tolerance (default: configured value)
        today: Reference day for the completeness flags (default: the
            current date)

    Returns:
        PaymentsReport
    """
    config = get_config()
    if tolerance_pct is None:
        tolerance_pct = config.reports.reconciliation_tolerance_pct

    if today is None:
        today = date.today()

    period_records = filter_records(records, start, end)

    approval = {}
    rates = {}
    notes = []
    for rail in PaymentRail:
        counts, approximated = rail_approval(period_records, rail)
        approval[rail.value] = counts
        rates[f"{rail.value}_approval_pct"] = safe_divide(counts.approved, counts.total) * 100
        if approximated and period_records:
            fallback = REJECTION_FALLBACK[rail]
            source = f"'{fallback}' bucket" if fallback else "not reported, counted as 0"
            notes.append(f"{rail.value} rejections approximated ({source})")

    orders_approved = sum(record.product_orders for record in period_records)

    return PaymentsReport(
        period=str(DateRange(start=start, end=end)),
        approval=approval,
        rates=rates,
        fees_effective=EffectiveFees(
            gateway_pct=fees.payment_gateway_fee,
            platform_pct=fees.checkout_fee,
            iof_pct=config.reports.iof_pct,
        ),
        reconciliation=reconcile(orders_approved, snapshot.orders_count, tolerance_pct),
        notes=tuple(notes),
        flags=period_flags(period_records, start, end, today),
    )
