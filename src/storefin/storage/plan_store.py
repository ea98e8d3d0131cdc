#!/usr/bin/env python3
"""
Annual Plan Store

JSON files, one per (user, year, version):

    <base_dir>/<user_id>/<year>_v<version>.json

Saving is explicit and synchronous; callers decide when to batch edits.
"""

import logging
import re
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from ..core.json_utils import read_json, write_json
from ..planning.models import AnnualPlan, PlanStatus
from .base import FileStoreMixin

logger = logging.getLogger(__name__)

_PLAN_FILE_PATTERN = re.compile(r"^(\d{4})_v(\d+)\.json$")


class AnnualPlanStore(FileStoreMixin):
    """
    File-backed store for versioned annual plans.

    Example:
        >>> store = AnnualPlanStore(Path("data/annual_plans"))
        >>> store.save("user-1", create_default_plan(2025))
        >>> store.load("user-1", 2025).version
        1
    """

    def __init__(self, base_dir: Path):
        """
        Initialize the store.

        Args:
            base_dir: Directory holding one subdirectory per user
        """
        self.base_dir = Path(base_dir)

    def _plan_path(self, user_id: str, year: int, version: int) -> Path:
        return self._user_dir(user_id) / f"{year}_v{version}.json"

    def _versions(self, user_id: str, year: int) -> list[int]:
        return sorted(version for plan_year, version in self.list_plans(user_id) if plan_year == year)

    def list_plans(self, user_id: str) -> list[tuple[int, int]]:
        """
        Stored plans of a user.

        Returns:
            Sorted list of (year, version)
        """
        user_dir = self._user_dir(user_id)
        if not user_dir.exists():
            return []

        plans = []
        for path in user_dir.iterdir():
            match = _PLAN_FILE_PATTERN.match(path.name)
            if match:
                plans.append((int(match.group(1)), int(match.group(2))))
        return sorted(plans)

    def exists(self, user_id: str, year: int) -> bool:
        return bool(self._versions(user_id, year))

    def load(self, user_id: str, year: int, version: int | None = None) -> AnnualPlan | None:
        """
        Load a plan.

        Args:
            user_id: Owner of the plan
            year: Plan year
            version: Specific version (default: highest stored)

        Returns:
            AnnualPlan, or None if not stored

        Raises:
            ValueError: If the plan file is corrupted
        """
        if version is None:
            versions = self._versions(user_id, year)
            if not versions:
                return None
            version = versions[-1]

        path = self._plan_path(user_id, year, version)
        if not path.exists():
            return None

        data = read_json(path)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid annual plan in {path}: expected a JSON object")

        try:
            return AnnualPlan.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid annual plan in {path}: {e}") from e

    def save(self, user_id: str, plan: AnnualPlan) -> None:
        """Insert or replace the plan stored under its year and version."""
        path = self._plan_path(user_id, plan.year, plan.version)
        write_json(path, plan.to_dict())
        logger.info(f"Saved {plan.year} plan v{plan.version} ({plan.status.value}) for {user_id}")

    def create_new_version(self, user_id: str, plan: AnnualPlan) -> AnnualPlan:
        """
        Save a copy of ``plan`` as a new draft version after the latest stored one.

        Returns:
            The newly saved plan
        """
        versions = self._versions(user_id, plan.year)
        next_version = (versions[-1] if versions else 0) + 1
        new_plan = replace(plan, version=next_version, status=PlanStatus.DRAFT)
        self.save(user_id, new_plan)
        return new_plan

    def last_modified(self, user_id: str, year: int) -> datetime | None:
        """Modification time of the latest version of a year's plan."""
        versions = self._versions(user_id, year)
        if not versions:
            return None
        return self._modified_at(self._plan_path(user_id, year, versions[-1]))

