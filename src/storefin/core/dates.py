#!/usr/bin/env python3
"""
Date Range Primitives

Immutable inclusive date ranges and calendar helpers used to slice daily
records into reporting periods (MTD, WTD, previous period, presets).
"""

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta


def parse_iso_date(value: "str | date | datetime") -> date:
    """
    Parse an ISO date string (YYYY-MM-DD) or normalize a date/datetime.

    Args:
        value: ISO string, date or datetime

    Returns:
        date object
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def days_in_month(day: date) -> int:
    """Number of days in the calendar month containing ``day``."""
    return calendar.monthrange(day.year, day.month)[1]


def start_of_month(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    """Last day of the month containing ``day``."""
    return day.replace(day=days_in_month(day))


def start_of_week(day: date) -> date:
    """Sunday on or before ``day`` (weeks start on Sunday)."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Date range end {self.end} is before start {self.start}")

    @classmethod
    def from_strings(cls, start: str, end: str) -> "DateRange":
        """Build a range from two ISO date strings."""
        return cls(start=parse_iso_date(start), end=parse_iso_date(end))

    @classmethod
    def single_day(cls, day: date) -> "DateRange":
        """Range covering exactly one day."""
        return cls(start=day, end=day)

    @classmethod
    def month_of(cls, day: date) -> "DateRange":
        """Whole calendar month containing ``day``."""
        return cls(start=start_of_month(day), end=end_of_month(day))

    @property
    def days(self) -> int:
        """Number of days in the range (inclusive)."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        """Check whether ``day`` falls inside the range."""
        return self.start <= day <= self.end

    def previous(self) -> "DateRange":
        """
        Immediately preceding range of identical length.

        The returned range ends the day before this one starts, so the two
        never overlap.
        """
        prev_end = self.start - timedelta(days=1)
        return DateRange(start=prev_end - timedelta(days=self.days - 1), end=prev_end)

    def iter_days(self) -> Iterator[date]:
        """Yield every day of the range."""
        return iter_days(self.start, self.end)

    def month_spans(self) -> list[tuple[date, int]]:
        """
        Split the range by calendar month.

        Returns:
            List of (first day of month, days of the range inside that month)
        """
        spans: list[tuple[date, int]] = []
        cursor = self.start
        while cursor <= self.end:
            span_end = min(end_of_month(cursor), self.end)
            spans.append((start_of_month(cursor), (span_end - cursor).days + 1))
            cursor = span_end + timedelta(days=1)
        return spans

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


DATE_PRESETS = (
    "today",
    "yesterday",
    "last_7_days",
    "last_14_days",
    "last_60_days",
    "last_90_days",
    "this_month",
)


def date_range_for_preset(preset: str, today: date | None = None) -> DateRange:
    """
    Resolve a named preset into a concrete date range.

    Args:
        preset: One of DATE_PRESETS
        today: Reference day (default: today)

    Returns:
        DateRange for the preset

    Raises:
        ValueError: If the preset is unknown
    """
    if today is None:
        today = date.today()

    trailing = {
        "last_7_days": 7,
        "last_14_days": 14,
        "last_60_days": 60,
        "last_90_days": 90,
    }

    if preset == "today":
        return DateRange.single_day(today)
    if preset == "yesterday":
        return DateRange.single_day(today - timedelta(days=1))
    if preset in trailing:
        return DateRange(start=today - timedelta(days=trailing[preset] - 1), end=today)
    if preset == "this_month":
        return DateRange.month_of(today)
    raise ValueError(f"Unknown date preset: {preset!r}")
