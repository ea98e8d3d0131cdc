#!/usr/bin/env python3
"""Completeness flags shared by the report builders."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date

from ..core.dates import iter_days
from ..metrics.models import DailyRecord
from .models import ReportFlags


def report_flags(records: Iterable[DailyRecord], start: date, end: date) -> ReportFlags:
    """
    Flag the days of [start, end] that have no record.

    A range ending before it starts (a period entirely in the future) has
    nothing missing yet but is still partial.
    """
    if end < start:
        return ReportFlags(partial=True)

    present = {record.date for record in records}
    missing = tuple(day.isoformat() for day in iter_days(start, end) if day not in present)
    return ReportFlags(partial=bool(missing), missing=missing)


def period_flags(records: Iterable[DailyRecord], start: date, end: date, today: date) -> ReportFlags:
    """
    Flags of [start, end] as seen on ``today``.

    Days after today are not yet missing, but a period still running past
    today is partial.
    """
    flags = report_flags(records, start, min(end, today))
    if end > today:
        flags = replace(flags, partial=True)
    return flags
