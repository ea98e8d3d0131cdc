#!/usr/bin/env python3
"""Tests for annual plan serialization."""

import pytest

from storefin.planning.models import AnnualPlan, CategoryDetail, OpexCategory, PlanStatus, ScenarioName
from storefin.planning.opex import approve, create_default_plan, set_override


@pytest.mark.unit
@pytest.mark.planning
class TestAnnualPlanSerialization:
    """Test plain-dictionary conversion of plans."""

    def test_round_trip(self):
        plan = set_override(approve(create_default_plan(2025)), ScenarioName.GROWTH_BET, OpexCategory.RENT, 4, 123.0)

        assert AnnualPlan.from_dict(plan.to_dict()) == plan

    def test_to_dict_uses_plain_values(self):
        data = create_default_plan(2025).to_dict()

        assert data["status"] == "draft"
        assert set(data["scenarios"]) == {"Base", "Cost Cutting", "Growth Bet"}
        assert set(data["scenarios"]["Base"]["opex"]) == {"rent", "internet", "software", "payroll", "other"}
        assert data["scenarios"]["Base"]["opex"]["rent"]["monthly_overrides"] == [None] * 12

    def test_from_dict_defaults(self):
        plan = AnnualPlan.from_dict({"year": 2025})

        assert plan.status == PlanStatus.DRAFT
        assert plan.version == 1
        assert plan.effective_from == "2025-01"
        assert plan.scenarios == {}

    def test_category_detail_defaults(self):
        detail = CategoryDetail.from_dict({})

        assert detail.seasonal_weights == pytest.approx((1 / 12,) * 12)
        assert detail.monthly_overrides == (None,) * 12
