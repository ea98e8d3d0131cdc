"""
Storage Package

File-backed implementations of the plan and planning-input repositories.
"""

from .inputs_store import PlanningInputsStore
from .plan_store import AnnualPlanStore

__all__ = ["AnnualPlanStore", "PlanningInputsStore"]
