"""ExerciseService - MET based exercise energy expenditure."""

from typing import Iterable, Optional

import structlog

from ..core.value_objects.biometric_profile import positive_or_none
from ..core.value_objects.exercise import (
    ExerciseActivity,
    ExerciseIntensity,
    ExerciseSession,
)

logger = structlog.get_logger(__name__)

_L, _M, _V = ExerciseIntensity.LIGHT, ExerciseIntensity.MODERATE, ExerciseIntensity.VIGOROUS

MET_CATALOGUE: tuple[ExerciseActivity, ...] = (
    ExerciseActivity("walking_slow", "Walking, slow", "cardio", 2.0, _L),
    ExerciseActivity("walking_moderate", "Walking, moderate", "cardio", 3.5, _L),
    ExerciseActivity("walking_brisk", "Walking, brisk", "cardio", 5.0, _M),
    ExerciseActivity("cycling_light", "Cycling, light", "cardio", 4.0, _L),
    ExerciseActivity("cycling_moderate", "Cycling, moderate", "cardio", 6.0, _M),
    ExerciseActivity("cycling_vigorous", "Cycling, vigorous", "cardio", 10.0, _V),
    ExerciseActivity("swimming_light", "Swimming, light", "cardio", 5.0, _L),
    ExerciseActivity("swimming_moderate", "Swimming, moderate", "cardio", 7.0, _M),
    ExerciseActivity("swimming_vigorous", "Swimming, vigorous", "cardio", 10.0, _V),
    ExerciseActivity("running_8kmh", "Running (8 km/h)", "cardio", 8.0, _M),
    ExerciseActivity("running_10kmh", "Running (10 km/h)", "cardio", 10.0, _V),
    ExerciseActivity("running_12kmh", "Running (12+ km/h)", "cardio", 12.0, _V),
    ExerciseActivity("elliptical", "Elliptical trainer", "cardio", 5.0, _M),
    ExerciseActivity("stair_climber", "Stair climber", "cardio", 8.0, _V),
    ExerciseActivity("rowing", "Rowing machine", "cardio", 7.0, _M),
    ExerciseActivity("step_class", "Step class", "cardio", 8.0, _V),
    ExerciseActivity("zumba", "Zumba", "cardio", 7.0, _M),
    ExerciseActivity("spinning", "Spinning", "cardio", 9.0, _V),
    ExerciseActivity("weights_light", "Weight training, light", "strength", 3.0, _L),
    ExerciseActivity("weights_moderate", "Weight training, moderate", "strength", 5.0, _M),
    ExerciseActivity("weights_vigorous", "Weight training, vigorous", "strength", 6.0, _V),
    ExerciseActivity("crossfit", "CrossFit", "strength", 8.0, _V),
    ExerciseActivity("functional", "Functional training", "strength", 6.0, _M),
    ExerciseActivity("pilates", "Pilates", "strength", 3.0, _L),
    ExerciseActivity("yoga", "Yoga", "strength", 2.5, _L),
    ExerciseActivity("soccer", "Soccer", "sport", 7.0, _V),
    ExerciseActivity("basketball", "Basketball", "sport", 8.0, _V),
    ExerciseActivity("tennis", "Tennis", "sport", 7.0, _V),
    ExerciseActivity("volleyball", "Volleyball", "sport", 3.0, _M),
    ExerciseActivity("dance", "Dance", "sport", 4.5, _M),
    ExerciseActivity("martial_arts", "Martial arts", "sport", 10.0, _V),
)

_BY_CODE = {activity.code: activity for activity in MET_CATALOGUE}


def find_activity(code: str) -> Optional[ExerciseActivity]:
    """Look up a catalogue activity by code."""
    return _BY_CODE.get(code)


def exercise_kcal(met: float, weight_kg: Optional[float], minutes: float) -> float:
    """Energy spent in one session: MET × weight (kg) × hours.

    Returns:
        float: kcal, 0.0 when weight or duration is missing

    Example:
        >>> exercise_kcal(8.0, 70, 30)
        280.0
    """
    weight = positive_or_none(weight_kg)
    if weight is None or minutes <= 0:
        return 0.0
    return met * weight * minutes / 60


def daily_exercise_kcal(
    sessions: Iterable[ExerciseSession], weight_kg: Optional[float]
) -> float:
    """Average daily expenditure of a weekly training schedule."""
    weekly = sum(
        exercise_kcal(session.met, weight_kg, session.minutes) * session.sessions_per_week
        for session in sessions
    )
    daily = weekly / 7
    logger.debug("exercise_expenditure_computed", weekly_kcal=weekly, daily_kcal=daily)
    return daily
