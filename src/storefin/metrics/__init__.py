"""
Metrics Package

Daily record models and the aggregator that turns them into a profit and loss
snapshot (DashboardData), with pandas series for charts.
"""

from .aggregator import (
    accumulate_actuals,
    compute_dashboard,
    compute_metrics,
    filter_records,
    index_by_date,
    rank_products,
    summarize_payment_methods,
)
from .frame import daily_profit_series, monthly_approved_revenue, records_to_frame
from .models import (
    NOT_RECORDED,
    AccumulatedResults,
    DailyRecord,
    DashboardData,
    NotRecorded,
    PaymentBreakdown,
    PaymentMethodsSummary,
    PaymentRail,
    PaymentStat,
    PlanningInputs,
    ProductRank,
    ProductSale,
    Recorded,
)

__all__ = [
    "NOT_RECORDED",
    "AccumulatedResults",
    "DailyRecord",
    "DashboardData",
    "NotRecorded",
    "PaymentBreakdown",
    "PaymentMethodsSummary",
    "PaymentRail",
    "PaymentStat",
    "PlanningInputs",
    "ProductRank",
    "ProductSale",
    "Recorded",
    "accumulate_actuals",
    "compute_dashboard",
    "compute_metrics",
    "daily_profit_series",
    "filter_records",
    "index_by_date",
    "monthly_approved_revenue",
    "rank_products",
    "records_to_frame",
    "summarize_payment_methods",
]
