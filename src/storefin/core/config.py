#!/usr/bin/env python3
"""
Configuration Management for storefin

Handles environment-based configuration with sensible defaults and validation.
Supports multiple environments (development, test, production); report
tolerances, planning policies and storage locations are all overridable
through environment variables or a local .env file.

Loading configuration creates no directories; callers that persist
data call Config.ensure_dirs first.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class FixedCostPolicy(Enum):
    """How fixed costs are attributed to a date range spanning several months."""

    START_MONTH = "start_month"  # whole month of the range start
    PRO_RATED = "pro_rated"  # each spanned month weighted by days covered


@dataclass
class ReportsConfig:
    """Report generation settings."""

    reconciliation_tolerance_pct: float = 2.0
    iof_pct: float = 0.38
    top_movers_limit: int = 3


@dataclass
class PlanningConfig:
    """Annual plan settings."""

    fixed_cost_policy: FixedCostPolicy = FixedCostPolicy.START_MONTH
    weight_tolerance: float = 0.001


@dataclass
class StorageConfig:
    """Local persistence locations."""

    plans_dir: Path
    inputs_dir: Path


@dataclass
class Config:
    """
    Main configuration class for storefin.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment
    data_dir: Path

    # Component configurations
    reports: ReportsConfig
    planning: PlanningConfig
    storage: StorageConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("STOREFIN_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_storefin"
            data_dir = Path(os.getenv("STOREFIN_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("STOREFIN_DATA_DIR", "./data")).expanduser().resolve()

        storage = StorageConfig(
            plans_dir=data_dir / "annual_plans",
            inputs_dir=data_dir / "planning_inputs",
        )

        reports = ReportsConfig(
            reconciliation_tolerance_pct=float(os.getenv("RECONCILIATION_TOLERANCE_PCT", "2.0")),
            iof_pct=float(os.getenv("IOF_PCT", "0.38")),
            top_movers_limit=int(os.getenv("TOP_MOVERS_LIMIT", "3")),
        )

        planning = PlanningConfig(
            fixed_cost_policy=FixedCostPolicy(os.getenv("FIXED_COST_POLICY", "start_month").lower()),
            weight_tolerance=float(os.getenv("WEIGHT_TOLERANCE", "0.001")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            reports=reports,
            planning=planning,
            storage=storage,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.reports.reconciliation_tolerance_pct < 0:
            errors.append("Reconciliation tolerance must be non-negative")
        if self.reports.iof_pct < 0:
            errors.append("IOF percentage must be non-negative")
        if self.reports.top_movers_limit <= 0:
            errors.append("Top movers limit must be positive")
        if not 0 < self.planning.weight_tolerance < 1:
            errors.append("Seasonal weight tolerance must be between 0 and 1")

        return errors

    def ensure_dirs(self) -> None:
        """Create the data and storage directories."""
        for directory in [self.data_dir, self.storage.plans_dir, self.storage.inputs_dir]:
            directory.mkdir(parents=True, exist_ok=True)

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                result[field_name] = {
                    nested_name: _plain(nested_value)
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            else:
                result[field_name] = _plain(field_value)

        return result


def _plain(value: Any) -> Any:
    """Convert Path/Enum values to their plain representation."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
