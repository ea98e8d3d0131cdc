#!/usr/bin/env python3
"""Tests for daily planned-versus-actual tracking."""

from datetime import date

import pytest

from storefin.goals.tracking import average_conversion_rate, daily_tracking
from storefin.metrics.models import NOT_RECORDED, DailyRecord, PlanningInputs, Recorded
from tests.fixtures.synthetic_data import card_only_day


@pytest.fixture
def inputs() -> PlanningInputs:
    """31000 goal at a 100 ticket and 2% conversion: 10 orders and 500 sessions a day in March."""
    return PlanningInputs(
        revenue_goal=31000.0,
        conversion_rate=2.0,
        avg_ticket=100.0,
        marketing_spend_percentage=20.0,
    )


@pytest.mark.unit
@pytest.mark.goals
class TestDailyTracking:
    """Test per-day rows."""

    def test_rows_newest_first_through_today(self, inputs):
        rows = daily_tracking([], inputs, date(2024, 3, 1), date(2024, 3, 3))

        assert [row.date for row in rows] == [date(2024, 3, 3), date(2024, 3, 2), date(2024, 3, 1)]

    def test_past_month_runs_to_month_end(self, inputs):
        rows = daily_tracking([], inputs, date(2024, 2, 1), date(2024, 3, 10))
        assert len(rows) == 29

    def test_future_month_is_empty(self, inputs):
        assert daily_tracking([], inputs, date(2024, 4, 1), date(2024, 3, 10)) == []

    def test_daily_plan(self, inputs):
        planned = daily_tracking([], inputs, date(2024, 3, 1), date(2024, 3, 1))[0].planned

        assert planned.revenue == pytest.approx(1000.0)
        assert planned.orders == pytest.approx(10.0)
        assert planned.sessions == pytest.approx(500.0)
        assert planned.marketing_spend == pytest.approx(200.0)
        assert planned.avg_ticket == pytest.approx(100.0)
        assert planned.conversion_rate == 2.0
        assert planned.cps == pytest.approx(0.4)

    def test_actuals_estimated_from_planned_ticket(self, inputs):
        records = [card_only_day(date(2024, 3, 1), revenue=1000.0, orders=7, sessions=1000.0, marketing=100.0)]
        actual = daily_tracking(records, inputs, date(2024, 3, 1), date(2024, 3, 1))[0].actual

        assert actual.revenue == Recorded(1000.0)
        assert actual.orders == pytest.approx(10.0)
        assert actual.conversion_rate == pytest.approx(1.0)
        assert actual.avg_ticket == pytest.approx(100.0)
        assert actual.cps == pytest.approx(0.1)

    def test_days_without_record_are_not_recorded(self, inputs):
        actual = daily_tracking([], inputs, date(2024, 3, 1), date(2024, 3, 1))[0].actual

        assert actual.sessions is NOT_RECORDED
        assert actual.revenue is NOT_RECORDED
        assert actual.marketing_spend is NOT_RECORDED
        assert actual.orders == 0.0
        assert actual.conversion_rate == 0.0


@pytest.mark.unit
@pytest.mark.goals
class TestAverageConversionRate:
    """Test averaging over recorded days only."""

    def test_skips_unrecorded_days(self, inputs):
        records = [
            card_only_day(date(2024, 3, 1), revenue=1000.0, orders=10, sessions=1000.0),
            card_only_day(date(2024, 3, 2), revenue=2000.0, orders=20, sessions=1000.0),
            DailyRecord.from_dict({"date": "2024-03-03", "sessions": 500}),
        ]
        rows = daily_tracking(records, inputs, date(2024, 3, 1), date(2024, 3, 4))

        assert average_conversion_rate(rows) == pytest.approx(1.5)

    def test_recorded_zero_counts(self, inputs):
        """Test that an entered zero revenue is a real day of zero conversion."""
        records = [
            card_only_day(date(2024, 3, 1), revenue=1000.0, orders=10, sessions=1000.0),
            DailyRecord.from_dict({"date": "2024-03-02", "sessions": 1000, "revenue": 0}),
        ]
        rows = daily_tracking(records, inputs, date(2024, 3, 1), date(2024, 3, 2))

        assert average_conversion_rate(rows) == pytest.approx(0.5)

    def test_no_rows(self):
        assert average_conversion_rate([]) == 0.0
