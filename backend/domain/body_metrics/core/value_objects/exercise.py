"""Exercise value objects - MET catalogue entries and sessions."""

from dataclasses import dataclass
from enum import Enum


class ExerciseIntensity(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    VIGOROUS = "vigorous"


@dataclass(frozen=True)
class ExerciseActivity:
    """Catalogue entry: an activity and its metabolic equivalent."""

    code: str
    name: str
    category: str
    met: float
    intensity: ExerciseIntensity

    def __post_init__(self) -> None:
        if self.met <= 0:
            raise ValueError(f"MET must be positive, got {self.met}")


@dataclass(frozen=True)
class ExerciseSession:
    """A recurring training session within a weekly schedule.

    Attributes:
        met: Metabolic equivalent of the activity
        minutes: Duration of one session
        sessions_per_week: How many times the session happens per week
    """

    met: float
    minutes: float
    sessions_per_week: float = 1

    def __post_init__(self) -> None:
        if self.met <= 0:
            raise ValueError(f"MET must be positive, got {self.met}")
        if self.minutes < 0:
            raise ValueError(f"Minutes cannot be negative, got {self.minutes}")
        if self.sessions_per_week < 0:
            raise ValueError(
                f"Sessions per week cannot be negative, got {self.sessions_per_week}"
            )
