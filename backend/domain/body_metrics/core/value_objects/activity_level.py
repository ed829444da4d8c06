"""ActivityLevel and ExerciseFrequency value objects."""

import math
from enum import Enum
from typing import Optional


class ActivityLevel(str, Enum):
    """Physical Activity Level (PAL) used to scale BMR into GET.

    - SEDENTARY: Little or no exercise
    - LIGHT: Light exercise 1-3 days/week
    - MODERATE: Moderate exercise 3-5 days/week
    - ACTIVE: Hard exercise 6-7 days/week
    - VERY_ACTIVE: Physical job or training twice a day
    """

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    def pal_multiplier(self) -> float:
        """Get PAL multiplier.

        Returns:
            float: Multiplier for BMR to calculate GET

        Example:
            >>> ActivityLevel.MODERATE.pal_multiplier()
            1.55
        """
        return _MULTIPLIERS[self]

    def description(self) -> str:
        """Get human-readable description."""
        return _DESCRIPTIONS[self]

    @classmethod
    def from_factor(cls, factor: float) -> Optional["ActivityLevel"]:
        """Find the level whose multiplier equals ``factor``.

        Returns:
            Optional[ActivityLevel]: Matching level, or None for arbitrary
                factors
        """
        for level, multiplier in _MULTIPLIERS.items():
            if math.isclose(factor, multiplier, rel_tol=0.0, abs_tol=1e-9):
                return level
        return None


_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

_DESCRIPTIONS = {
    ActivityLevel.SEDENTARY: "Little or no exercise",
    ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
    ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
    ActivityLevel.ACTIVE: "Hard exercise 6-7 days/week",
    ActivityLevel.VERY_ACTIVE: "Physical job or training twice a day",
}

# Ordered from lowest to highest
ALLOWED_ACTIVITY_FACTORS: tuple[float, ...] = tuple(_MULTIPLIERS[level] for level in ActivityLevel)

DEFAULT_ACTIVITY_FACTOR = ActivityLevel.MODERATE.pal_multiplier()


class ExerciseFrequency(str, Enum):
    """Habitual exercise-frequency bucket reported in the anamnesis."""

    NONE = "none"
    ONE_TO_THREE = "1-3x"
    THREE_TO_FIVE = "3-5x"
    SIX_TO_SEVEN = "6-7x"
    TWICE_DAILY = "2x_daily"

    @classmethod
    def parse(cls, raw: object) -> Optional["ExerciseFrequency"]:
        """Normalize a free-text frequency answer into a bucket.

        Matching is by keyword, checked in bucket order, so "1-3" wins over
        any later bucket.

        Args:
            raw: Bucket instance or text such as ``"3-5x per week"``,
                ``"sedentary"``, ``"0"``, ``"2x per day"``

        Returns:
            Optional[ExerciseFrequency]: Bucket, or None if unrecognized
        """
        if isinstance(raw, ExerciseFrequency):
            return raw
        if raw is None:
            return None

        text = str(raw).strip().lower()
        if not text:
            return None
        for bucket in cls:
            if text == bucket.value:
                return bucket

        if text == "0":
            return cls.NONE
        for bucket, keywords in _FREQUENCY_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                return bucket
        return None

    @property
    def activity_level(self) -> ActivityLevel:
        return _FREQUENCY_LEVELS[self]


_FREQUENCY_KEYWORDS = (
    (ExerciseFrequency.NONE, ("sedent", "none", "never", "não", "nao")),
    (ExerciseFrequency.ONE_TO_THREE, ("1-3", "1 a 3", "1 to 3", "leve", "light")),
    (ExerciseFrequency.THREE_TO_FIVE, ("3-5", "3 a 5", "3 to 5", "moder")),
    (ExerciseFrequency.SIX_TO_SEVEN, ("6-7", "6 a 7", "6 to 7", "muito")),
    (ExerciseFrequency.TWICE_DAILY, ("2x", "duas", "twice", "extrem")),
)

_FREQUENCY_LEVELS = {
    ExerciseFrequency.NONE: ActivityLevel.SEDENTARY,
    ExerciseFrequency.ONE_TO_THREE: ActivityLevel.LIGHT,
    ExerciseFrequency.THREE_TO_FIVE: ActivityLevel.MODERATE,
    ExerciseFrequency.SIX_TO_SEVEN: ActivityLevel.ACTIVE,
    ExerciseFrequency.TWICE_DAILY: ActivityLevel.VERY_ACTIVE,
}
