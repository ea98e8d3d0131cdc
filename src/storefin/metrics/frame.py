#!/usr/bin/env python3
"""
Daily Record Frames

pandas views over daily records for chart-ready series: per-day profit and
approved revenue bucketed by calendar month.
"""

import logging
from collections.abc import Iterable
from typing import Any

import pandas as pd

from .aggregator import approved_cogs
from .models import DailyRecord, PlanningInputs

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["Date", "Revenue", "Approved_Revenue", "COGS", "Marketing", "Sessions", "Orders"]


def records_to_frame(records: Iterable[DailyRecord]) -> pd.DataFrame:
    """
    Build a date-indexed frame with one row per record.

    Values left unrecorded become 0. An empty input yields an empty frame with
    the expected columns.
    """
    rows = [
        {
            "Date": pd.to_datetime(record.date),
            "Revenue": record.revenue.value_or(0.0),
            "Approved_Revenue": record.approved_revenue,
            "COGS": approved_cogs(record),
            "Marketing": record.marketing_spend.value_or(0.0),
            "Sessions": record.sessions.value_or(0.0),
            "Orders": record.payment_breakdown.approved.count,
        }
        for record in records
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df.set_index("Date", inplace=True)
    df.sort_index(inplace=True)
    return df


def daily_profit_series(records: Iterable[DailyRecord], fees: PlanningInputs) -> list[dict[str, Any]]:
    """
    Per-day contribution margin, sorted by date.

    Each day's fees are the blended fee rate applied to that day's approved
    revenue, so the series sums to the period contribution margin.

    Returns:
        List of {"date": "YYYY-MM-DD", "profit": float}
    """
    df = records_to_frame(records)
    if df.empty:
        return []

    df["Fees"] = df["Approved_Revenue"] * fees.blended_fee_pct / 100
    df["Profit"] = df["Approved_Revenue"] - df["COGS"] - df["Marketing"] - df["Fees"]

    return [{"date": ts.strftime("%Y-%m-%d"), "profit": float(profit)} for ts, profit in df["Profit"].items()]


def monthly_approved_revenue(records: Iterable[DailyRecord]) -> list[float]:
    """
    Approved revenue per calendar month, January first.

    Records from different years fall into the same month bucket; callers
    filter to one year first.
    """
    df = records_to_frame(records)
    if df.empty:
        return [0.0] * 12

    by_month = df.groupby(df.index.month)["Approved_Revenue"].sum()
    by_month = by_month.reindex(range(1, 13), fill_value=0.0)
    logger.debug(f"Monthly approved revenue over {len(df)} days: {by_month.sum():.2f}")
    return [float(v) for v in by_month]
