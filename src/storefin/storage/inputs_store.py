#!/usr/bin/env python3
"""
Planning Inputs Store

One YAML file per user:

    <base_dir>/<user_id>/planning_inputs.yaml
"""

import logging
from datetime import datetime
from pathlib import Path

import yaml

from ..metrics.models import PlanningInputs
from .base import FileStoreMixin

logger = logging.getLogger(__name__)

INPUTS_FILENAME = "planning_inputs.yaml"


class PlanningInputsStore(FileStoreMixin):
    """File-backed store for each user's monthly planning inputs."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def _inputs_path(self, user_id: str) -> Path:
        return self._user_dir(user_id) / INPUTS_FILENAME

    def exists(self, user_id: str) -> bool:
        return self._inputs_path(user_id).exists()

    def load(self, user_id: str) -> PlanningInputs | None:
        """
        Load a user's planning inputs.

        Missing fields take their defaults.

        Returns:
            PlanningInputs, or None if none are stored

        Raises:
            ValueError: If the file is not valid YAML or not a mapping
        """
        path = self._inputs_path(user_id)
        if not path.exists():
            return None

        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid planning inputs in {path}: expected a mapping")

        try:
            return PlanningInputs.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid planning inputs in {path}: {e}") from e

    def save(self, user_id: str, inputs: PlanningInputs) -> None:
        """Replace a user's planning inputs."""
        path = self._inputs_path(user_id)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(inputs.to_dict(), f, default_flow_style=False, sort_keys=True)
        logger.info(f"Saved planning inputs for {user_id}")

    def last_modified(self, user_id: str) -> datetime | None:
        return self._modified_at(self._inputs_path(user_id))
