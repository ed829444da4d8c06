"""Calculation services for body metrics."""

from .activity_service import (
    resolve_activity_factor,
    suggest_activity,
    suggest_activity_factor,
    suggest_goal_adjustment,
)
from .anthropometry_service import AnthropometryService
from .composition_service import CompositionService
from .energy_service import EnergyService, apply_goal, compute_get, explain_get
from .exercise_service import MET_CATALOGUE, daily_exercise_kcal, exercise_kcal
from .goal_service import GoalService
from .projection_service import ProjectionService
from .somatotype_service import SomatotypeService, frame_size

__all__ = [
    "AnthropometryService",
    "CompositionService",
    "EnergyService",
    "GoalService",
    "ProjectionService",
    "SomatotypeService",
    "compute_get",
    "apply_goal",
    "explain_get",
    "frame_size",
    "suggest_activity",
    "suggest_activity_factor",
    "suggest_goal_adjustment",
    "resolve_activity_factor",
    "MET_CATALOGUE",
    "exercise_kcal",
    "daily_exercise_kcal",
]
