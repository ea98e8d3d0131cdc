#!/usr/bin/env python3
"""
DataStore Protocols - Persistence contracts for plans and planning inputs.

The calculation engine never performs I/O. Callers load plans and inputs
through these interfaces, compute, and save explicitly; how and where the
data lives is up to the implementation (see storefin.storage).
"""

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from storefin.metrics.models import PlanningInputs
    from storefin.planning.models import AnnualPlan


class AnnualPlanRepository(Protocol):
    """
    Versioned annual plans keyed by (user, year, version).

    Saving a plan replaces the stored plan with the same key. Loading returns
    the highest version of the year.
    """

    def exists(self, user_id: str, year: int) -> bool:
        """
        Check if any version of a year's plan is stored.

        Returns:
            True if at least one version exists, False otherwise
        """
        ...

    def load(self, user_id: str, year: int) -> "AnnualPlan | None":
        """
        Load the latest version of a year's plan.

        Returns:
            AnnualPlan, or None if no plan is stored

        Raises:
            ValueError: If stored data is invalid/corrupted
        """
        ...

    def save(self, user_id: str, plan: "AnnualPlan") -> None:
        """
        Save (insert or replace) a plan under its year and version.

        Args:
            user_id: Owner of the plan
            plan: Plan to persist
        """
        ...

    def last_modified(self, user_id: str, year: int) -> datetime | None:
        """
        Get timestamp of the latest save of a year's plan.

        Returns:
            datetime of last modification, or None if no plan is stored
        """
        ...


class PlanningInputsRepository(Protocol):
    """Monthly planning inputs, one set per user."""

    def exists(self, user_id: str) -> bool:
        ...

    def load(self, user_id: str) -> "PlanningInputs | None":
        """
        Load a user's planning inputs.

        Returns:
            PlanningInputs, or None if none are stored

        Raises:
            ValueError: If stored data is invalid/corrupted
        """
        ...

    def save(self, user_id: str, inputs: "PlanningInputs") -> None:
        ...
