#!/usr/bin/env python3
"""Tests for monthly funnel targets."""

import pytest

from storefin.metrics.models import PlanningInputs
from storefin.planning.targets import DAYS_PER_MONTH, WEEKS_PER_MONTH, funnel_breakdown, plan_targets


@pytest.mark.unit
@pytest.mark.planning
class TestPlanTargets:
    """Test goal-to-funnel calculations."""

    @pytest.fixture
    def inputs(self) -> PlanningInputs:
        return PlanningInputs(
            revenue_goal=100000.0,
            conversion_rate=2.0,
            avg_ticket=200.0,
            avg_product_cost=30.0,
            checkout_fee=1.0,
            payment_gateway_fee=5.0,
            tax_rate=4.0,
            marketing_spend_percentage=20.0,
        )

    def test_funnel(self, inputs):
        results = plan_targets(inputs)

        assert results.revenue == 100000.0
        assert results.orders == pytest.approx(500.0)
        assert results.sessions == pytest.approx(25000.0)
        assert results.ad_spend == pytest.approx(20000.0)
        assert results.cps == pytest.approx(0.8)
        assert results.roas == pytest.approx(5.0)

    def test_margin(self, inputs):
        """Test margin after 30% product cost, 10% fees and 20% marketing."""
        results = plan_targets(inputs)

        assert results.contribution_margin == pytest.approx(40000.0)
        assert results.ideal_cpa == pytest.approx(80.0)
        assert results.profit_margin == pytest.approx(40.0)

    def test_zero_inputs_never_fail(self):
        results = plan_targets(
            PlanningInputs(revenue_goal=0.0, conversion_rate=0.0, avg_ticket=0.0, marketing_spend_percentage=0.0)
        )

        assert results.orders == 0.0
        assert results.sessions == 0.0
        assert results.roas == 0.0
        assert results.profit_margin == 0.0

    def test_breakdown_averages(self, inputs):
        rows = {row.metric: row for row in funnel_breakdown(plan_targets(inputs))}

        assert rows["revenue"].week == pytest.approx(100000.0 / WEEKS_PER_MONTH)
        assert rows["orders"].day == pytest.approx(500.0 / DAYS_PER_MONTH)
        assert set(rows) == {"sessions", "orders", "revenue", "ad_spend", "contribution_margin"}
