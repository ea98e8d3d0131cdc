"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from storefin.core.config import reload_config
from storefin.metrics.models import DailyRecord, PlanningInputs
from tests.fixtures.synthetic_data import card_only_day, generate_daily_records


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def example_fees() -> PlanningInputs:
    """Planning inputs with a 16% blended fee (1% checkout, 7% gateway, 8% tax)."""
    return PlanningInputs(checkout_fee=1.0, payment_gateway_fee=7.0, tax_rate=8.0)


@pytest.fixture
def three_card_days() -> list[DailyRecord]:
    """Three card-only days of 1000, 900 and 1100 approved revenue, 30% product cost, 100 marketing each."""
    return [
        card_only_day(date(2024, 3, 1), revenue=1000.0, orders=10),
        card_only_day(date(2024, 3, 2), revenue=900.0, orders=9),
        card_only_day(date(2024, 3, 3), revenue=1100.0, orders=11),
    ]


@pytest.fixture
def month_of_records() -> list[DailyRecord]:
    """Thirty-one synthetic days covering March 2024."""
    return generate_daily_records(date(2024, 3, 1), days=31, seed=7)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    # Ensure tests don't use production data
    monkeypatch.setenv("STOREFIN_ENV", "test")
    monkeypatch.setenv("STOREFIN_DATA_DIR", str(Path(tempfile.gettempdir()) / "test_storefin_data"))
    for name in (
        "RECONCILIATION_TOLERANCE_PCT",
        "IOF_PCT",
        "TOP_MOVERS_LIMIT",
        "FIXED_COST_POLICY",
        "WEIGHT_TOLERANCE",
        "LOG_LEVEL",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "metrics: Tests for the metrics aggregator")
    config.addinivalue_line("markers", "planning: Tests for annual and monthly planning")
    config.addinivalue_line("markers", "goals: Tests for goal tracking")
    config.addinivalue_line("markers", "reports: Tests for report builders")
    config.addinivalue_line("markers", "pricing: Tests for the pricing engine")
    config.addinivalue_line("markers", "storage: Tests for plan and input stores")
