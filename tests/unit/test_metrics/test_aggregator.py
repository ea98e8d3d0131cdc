#!/usr/bin/env python3
"""Tests for the metrics aggregator."""

import random
from dataclasses import fields
from datetime import date

import pytest

from storefin.core.dates import DateRange
from storefin.metrics.aggregator import (
    accumulate_actuals,
    compute_dashboard,
    compute_metrics,
    filter_records,
    rank_products,
    summarize_payment_methods,
)
from storefin.metrics.models import DailyRecord, DashboardData, PlanningInputs
from tests.fixtures.synthetic_data import card_only_day, generate_daily_records


def _record(data: dict) -> DailyRecord:
    return DailyRecord.from_dict(data)


@pytest.mark.unit
@pytest.mark.metrics
class TestComputeMetrics:
    """Test the standardized profit and loss snapshot."""

    def test_three_card_days(self, three_card_days, example_fees):
        """Test the worked example: 3000 revenue, 30% COGS, 300 marketing, 16% fees."""
        result = compute_metrics(three_card_days, example_fees, fixed_costs_for_month=0.0)

        assert result.net_revenue == pytest.approx(3000.0)
        assert result.total_cogs == pytest.approx(900.0)
        assert result.total_marketing == pytest.approx(300.0)
        assert result.total_fees == pytest.approx(480.0)
        assert result.contribution_margin == pytest.approx(1320.0)
        assert result.contribution_margin_percent == pytest.approx(44.0)
        assert result.orders_count == 30
        assert result.avg_ticket == pytest.approx(100.0)
        assert result.roas == pytest.approx(10.0)
        assert result.cpa == pytest.approx(10.0)
        assert result.sessions == pytest.approx(3000.0)

    def test_fixed_costs_reduce_net_profit(self, three_card_days, example_fees):
        result = compute_metrics(three_card_days, example_fees, fixed_costs_for_month=1000.0)

        assert result.fixed_costs == 1000.0
        assert result.net_profit == pytest.approx(320.0)
        assert result.net_profit_margin == pytest.approx(320.0 / 3000.0 * 100)

    def test_empty_records_are_all_zero(self, example_fees):
        """Test that no activity yields zeros everywhere, fixed costs included."""
        result = compute_metrics([], example_fees, fixed_costs_for_month=9999.0)

        for f in fields(DashboardData):
            if f.name in ("revenue_goal", "net_profit_goal"):
                continue
            assert getattr(result, f.name) == 0, f.name

    def test_goals(self, three_card_days):
        result = compute_metrics(three_card_days, PlanningInputs(revenue_goal=60000), 0.0)

        assert result.revenue_goal == 60000
        assert result.net_profit_goal == pytest.approx(12000.0)

    def test_cogs_scaled_by_approval_ratio(self, example_fees):
        """Test that only the approved share of product cost becomes COGS."""
        record = _record(
            {
                "date": "2024-03-01",
                "revenue": 1000,
                "products": [{"name": "Test Sneaker", "revenue": 1000, "cost": 400, "orders": 4}],
                "payment_breakdown": {
                    "card": {"approved": {"value": 500, "count": 2}},
                    "pix": {"pending": {"value": 500, "count": 2}},
                },
            }
        )
        result = compute_metrics([record], example_fees, 0.0)

        assert result.total_cogs == pytest.approx(200.0)
        assert result.pending_orders_value == 500.0
        assert result.pending_orders_count == 2

    @pytest.mark.parametrize("revenue", [None, 0], ids=["not_recorded", "zero"])
    def test_no_total_revenue_means_no_cogs(self, revenue, example_fees):
        record = _record(
            {
                "date": "2024-03-01",
                "revenue": revenue,
                "products": [{"name": "Test Sneaker", "revenue": 100, "cost": 40, "orders": 1}],
                "payment_breakdown": {"card": {"approved": {"value": 100, "count": 1}}},
            }
        )
        assert compute_metrics([record], example_fees, 0.0).total_cogs == 0.0

    def test_unrecorded_marketing_counts_as_zero(self, example_fees):
        record = _record({"date": "2024-03-01", "payment_breakdown": {"card": {"approved": {"value": 100, "count": 1}}}})
        result = compute_metrics([record], example_fees, 0.0)

        assert result.total_marketing == 0.0
        assert result.roas == 0.0
        assert result.cpa == 0.0

    def test_card_in_analysis_is_not_pending(self, example_fees):
        record = _record(
            {"date": "2024-03-01", "payment_breakdown": {"card": {"in_analysis": {"value": 100, "count": 1}}}}
        )
        result = compute_metrics([record], example_fees, 0.0)

        assert result.pending_orders_count == 0
        assert result.net_revenue == 0.0


@pytest.mark.unit
@pytest.mark.metrics
class TestComputeDashboard:
    """Test period filtering and period-over-period deltas."""

    def test_deltas_against_previous_period(self, example_fees):
        records = [
            card_only_day(date(2024, 3, 1), revenue=1000.0, orders=10),
            card_only_day(date(2024, 3, 2), revenue=1500.0, orders=15),
        ]
        result = compute_dashboard(records, date(2024, 3, 2), date(2024, 3, 2), example_fees)

        assert result.net_revenue == pytest.approx(1500.0)
        assert result.net_revenue_change == pytest.approx(50.0)
        assert result.avg_ticket_change == pytest.approx(0.0)

    def test_empty_previous_period_reports_hundred(self, three_card_days, example_fees):
        result = compute_dashboard(three_card_days, date(2024, 3, 1), date(2024, 3, 3), example_fees)

        assert result.net_revenue_change == 100.0
        assert result.contribution_margin == pytest.approx(1320.0)

    def test_fixed_costs_callable_receives_ranges(self, three_card_days, example_fees):
        """Test that the fixed-cost callable is asked for both periods."""
        seen = []

        def fixed_costs_for(period: DateRange) -> float:
            seen.append(period)
            return 100.0

        result = compute_dashboard(three_card_days, date(2024, 3, 1), date(2024, 3, 3), example_fees, fixed_costs_for)

        assert seen == [DateRange(date(2024, 3, 1), date(2024, 3, 3)), DateRange(date(2024, 2, 27), date(2024, 2, 29))]
        assert result.net_profit == pytest.approx(1220.0)

    def test_records_outside_range_ignored(self, three_card_days, example_fees):
        result = compute_dashboard(three_card_days, date(2024, 3, 2), date(2024, 3, 2), example_fees)
        assert result.net_revenue == pytest.approx(900.0)


@pytest.mark.unit
@pytest.mark.metrics
class TestRecordHelpers:
    """Test filtering, accumulation, rail summaries and product ranking."""

    def test_filter_records_sorted_and_inclusive(self, three_card_days):
        shuffled = [three_card_days[2], three_card_days[0], three_card_days[1]]
        result = filter_records(shuffled, date(2024, 3, 1), date(2024, 3, 2))

        assert [r.date for r in result] == [date(2024, 3, 1), date(2024, 3, 2)]

    def test_accumulate_actuals(self, three_card_days):
        result = accumulate_actuals(three_card_days)

        assert result.sessions == 3000.0
        assert result.orders == 30
        assert result.revenue == pytest.approx(3000.0)
        assert result.marketing_spend == pytest.approx(300.0)
        assert result.conversion_rate == pytest.approx(1.0)
        assert result.avg_ticket == pytest.approx(100.0)
        assert result.cps == pytest.approx(0.1)

    def test_accumulate_empty(self):
        result = accumulate_actuals([])
        assert result.conversion_rate == 0.0
        assert result.avg_ticket == 0.0

    def test_summarize_payment_methods(self):
        record = _record(
            {
                "date": "2024-03-01",
                "payment_breakdown": {
                    "card": {
                        "approved": {"value": 800, "count": 8},
                        "in_analysis": {"value": 100, "count": 1},
                        "other": {"value": 100, "count": 1},
                    },
                    "pix": {"approved": {"value": 300, "count": 3}, "pending": {"value": 100, "count": 1}},
                },
            }
        )
        summary = summarize_payment_methods([record])

        assert summary.card.approved.count == 8
        assert summary.card.pending.count == 0
        assert summary.card.conversion == pytest.approx(800 / 9)
        assert summary.pix.conversion == pytest.approx(75.0)
        assert summary.boleto.conversion == 0.0

    def test_conversion_ignores_in_analysis_and_compensated(self):
        record = _record(
            {
                "date": "2024-03-01",
                "payment_breakdown": {
                    "card": {"approved": {"value": 1000, "count": 10}, "in_analysis": {"value": 500, "count": 5}},
                    "boleto": {
                        "approved": {"value": 200, "count": 2},
                        "pending": {"value": 200, "count": 2},
                        "compensated": {"value": 400, "count": 4},
                    },
                },
            }
        )
        summary = summarize_payment_methods([record])

        assert summary.card.pending.count == 0
        assert summary.card.conversion == pytest.approx(100.0)
        assert summary.boleto.pending.count == 2
        assert summary.boleto.conversion == pytest.approx(50.0)

    def test_explicit_rejections_count_against_conversion(self):
        record = _record(
            {
                "date": "2024-03-01",
                "payment_breakdown": {
                    "pix": {
                        "approved": {"value": 300, "count": 3},
                        "cancelled": {"value": 900, "count": 9},
                        "rejected": {"value": 100, "count": 1},
                    },
                },
            }
        )
        assert summarize_payment_methods([record]).pix.conversion == pytest.approx(75.0)

    def test_rank_products_by_profit(self):
        records = [
            _record(
                {
                    "date": "2024-03-01",
                    "products": [
                        {"name": "Cheap", "revenue": 1000, "cost": 900, "orders": 10},
                        {"name": "Premium", "revenue": 500, "cost": 100, "orders": 1},
                    ],
                }
            ),
            _record(
                {
                    "date": "2024-03-02",
                    "products": [{"name": "Cheap", "revenue": 1000, "cost": 900, "orders": 10}],
                }
            ),
        ]
        ranked = rank_products(records)

        assert [p.name for p in ranked] == ["Premium", "Cheap"]
        assert ranked[0].profit == pytest.approx(400.0)
        assert ranked[1].profit == pytest.approx(200.0)
        assert rank_products(records, limit=1)[0].name == "Premium"


ADDITIVE_FIELDS = (
    "net_revenue",
    "total_cogs",
    "total_marketing",
    "total_fees",
    "contribution_margin",
    "sessions",
    "orders_count",
    "pending_orders_value",
    "pending_orders_count",
)


@pytest.mark.unit
@pytest.mark.metrics
class TestAggregationProperties:
    """Test that aggregation is order-independent and additive."""

    @pytest.fixture
    def history(self):
        return generate_daily_records(date(2024, 3, 1), days=20, seed=11)

    def test_shuffled_input_gives_same_snapshot(self, history, example_fees):
        shuffled = list(history)
        random.Random(3).shuffle(shuffled)

        expected = compute_metrics(history, example_fees, 500.0)
        actual = compute_metrics(shuffled, example_fees, 500.0)

        for f in fields(DashboardData):
            assert getattr(actual, f.name) == pytest.approx(getattr(expected, f.name)), f.name

    def test_disjoint_ranges_add_up(self, history, example_fees):
        first = compute_metrics(filter_records(history, date(2024, 3, 1), date(2024, 3, 9)), example_fees, 0.0)
        second = compute_metrics(filter_records(history, date(2024, 3, 10), date(2024, 3, 20)), example_fees, 0.0)
        combined = compute_metrics(history, example_fees, 0.0)

        assert combined.net_revenue > 0
        for name in ADDITIVE_FIELDS:
            assert getattr(first, name) + getattr(second, name) == pytest.approx(getattr(combined, name)), name
