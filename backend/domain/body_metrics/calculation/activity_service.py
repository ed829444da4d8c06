"""ActivityService - activity factor and goal adjustment suggestions."""

import re
from typing import Optional, Union

import structlog

from ..core.value_objects.activity_level import DEFAULT_ACTIVITY_FACTOR, ExerciseFrequency
from ..core.value_objects.suggestion import Suggestion

logger = structlog.get_logger(__name__)

ACTIVITY_FACTOR_FIELD = "activity_factor"
GOAL_ADJUSTMENT_FIELD = "goal_adjustment_kcal"

# Daily adjustment suggested for each goal type. Words match whole; stems
# (emagrec, hipertrof, manuten) match at the start of a word.
_GOAL_ADJUSTMENTS = (
    (
        re.compile(r"\b(?:weight[_ ]loss|fat loss|perda|cut(?:ting)?\b|emagrec)"),
        -500,
        "Weight loss",
    ),
    (
        re.compile(r"\b(?:hypertrophy|muscle gain|ganho|bulk(?:ing)?\b|hipertrof)"),
        300,
        "Hypertrophy",
    ),
    (re.compile(r"\b(?:maintenance|maintain|manuten)"), 0, "Maintenance"),
)


def suggest_activity_factor(
    frequency: Union[ExerciseFrequency, str, None],
) -> Optional[float]:
    """Activity factor matching a habitual exercise-frequency bucket.

    Args:
        frequency: Bucket or free text ("sedentary", "1-3", "3 a 5", "2x")

    Returns:
        Optional[float]: 1.2, 1.375, 1.55, 1.725 or 1.9; None if the
            frequency is not recognized

    Example:
        >>> suggest_activity_factor("3-5x per week")
        1.55
    """
    bucket = ExerciseFrequency.parse(frequency)
    if bucket is None:
        return None
    return bucket.activity_level.pal_multiplier()


def suggest_activity(
    frequency: Union[ExerciseFrequency, str, None],
) -> Optional[Suggestion]:
    """Same as ``suggest_activity_factor`` wrapped as a ``Suggestion``."""
    bucket = ExerciseFrequency.parse(frequency)
    if bucket is None:
        logger.debug("activity_frequency_unrecognized", frequency=frequency)
        return None
    level = bucket.activity_level
    return Suggestion(
        field=ACTIVITY_FACTOR_FIELD,
        value=level.pal_multiplier(),
        label=level.description(),
        source="exercise_frequency",
    )


def suggest_goal_adjustment(goal_type: Optional[str]) -> Optional[Suggestion]:
    """Suggest a daily calorie adjustment for a goal type.

    Weight loss suggests -500 kcal, hypertrophy +300 kcal and maintenance
    0 kcal.

    Returns:
        Optional[Suggestion]: Suggestion, None for an unknown goal type
    """
    if not goal_type:
        return None
    text = goal_type.strip().lower()
    for pattern, adjustment, label in _GOAL_ADJUSTMENTS:
        if pattern.search(text):
            return Suggestion(
                field=GOAL_ADJUSTMENT_FIELD,
                value=adjustment,
                label=label,
                source="goal_type",
            )
    return None


def resolve_activity_factor(
    manual_factor: Optional[float] = None,
    suggestion: Optional[Union[Suggestion, float]] = None,
    default: float = DEFAULT_ACTIVITY_FACTOR,
) -> float:
    """Pick the activity factor to use.

    A manual factor always wins. Otherwise an accepted suggestion is used,
    and failing that the default.

    Args:
        manual_factor: Factor explicitly entered by the user
        suggestion: Suggestion the caller chose to accept
        default: Fallback factor

    Returns:
        float: Activity factor (not validated here; ``compute_get`` does)
    """
    if manual_factor is not None:
        return float(manual_factor)
    if isinstance(suggestion, Suggestion):
        if suggestion.field != ACTIVITY_FACTOR_FIELD:
            raise ValueError(
                f"Suggestion for '{suggestion.field}' is not an activity factor"
            )
        return float(suggestion.value)
    if suggestion is not None:
        return float(suggestion)
    return default
