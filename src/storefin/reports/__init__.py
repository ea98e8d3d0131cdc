"""
Reports Package

Builders for the finance, payments and comparison report documents.
"""

from .comparison import build_comparison_report, comparison_status
from .finance import build_finance_report
from .models import (
    ComparisonReport,
    ComparisonRow,
    ComparisonStatus,
    FinanceReport,
    PaymentsReport,
    ReportFlags,
)
from .payments import build_payments_report

__all__ = [
    "ComparisonReport",
    "ComparisonRow",
    "ComparisonStatus",
    "FinanceReport",
    "PaymentsReport",
    "ReportFlags",
    "build_comparison_report",
    "build_finance_report",
    "build_payments_report",
    "comparison_status",
]
