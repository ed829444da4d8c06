"""Goal plan value objects - viability score, warnings and deadlines."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class GoalDirection(str, Enum):
    LOSS = "loss"
    GAIN = "gain"
    MAINTAIN = "maintain"


class WarningSeverity(str, Enum):
    """How far the required rate exceeds the maximum safe rate."""

    ELEVATED = "elevated"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class GoalWarning:
    """Warning attached to an aggressive weight goal."""

    code: str
    severity: WarningSeverity
    message: str


class ProgressStatus(str, Enum):
    AHEAD = "ahead"
    ON_TRACK = "on_track"
    BEHIND = "behind"


@dataclass(frozen=True)
class GoalPlan:
    """Viability assessment of a weight goal.

    Attributes:
        initial_weight_kg: Weight at start_date
        target_weight_kg: Desired weight
        start_date: First day of the plan
        target_date: Requested completion date
        viability_score: 5 (comfortable) down to 1 (unsafe)
        warnings: Rate warnings, empty when the rate is within safe limits
        notes: Informational observations that do not affect the score
        minimum_deadline_days: Days needed at the maximum safe rate
        ideal_deadline_days: Days needed at the conservative rate
        minimum_deadline_date: start_date + minimum_deadline_days
        ideal_deadline_date: start_date + ideal_deadline_days
        required_weekly_rate_kg: |delta| per week to meet target_date
        required_daily_energy_balance_kcal: Signed daily balance to meet
            target_date (negative is a deficit)
        daily_calorie_goal_kcal: GET plus the required balance, when GET is known
    """

    initial_weight_kg: float
    target_weight_kg: float
    start_date: date
    target_date: date
    viability_score: int
    required_weekly_rate_kg: float
    required_daily_energy_balance_kcal: float
    warnings: tuple[GoalWarning, ...] = field(default_factory=tuple)
    notes: tuple[str, ...] = field(default_factory=tuple)
    minimum_deadline_days: Optional[int] = None
    ideal_deadline_days: Optional[int] = None
    minimum_deadline_date: Optional[date] = None
    ideal_deadline_date: Optional[date] = None
    daily_calorie_goal_kcal: Optional[float] = None

    def __post_init__(self) -> None:
        if not 1 <= self.viability_score <= 5:
            raise ValueError(f"Viability score must be 1-5, got {self.viability_score}")
        if (
            self.minimum_deadline_days is not None
            and self.ideal_deadline_days is not None
            and self.minimum_deadline_days > self.ideal_deadline_days
        ):
            raise ValueError("Minimum deadline cannot be later than ideal deadline")

    @property
    def delta_kg(self) -> float:
        return self.target_weight_kg - self.initial_weight_kg

    @property
    def direction(self) -> GoalDirection:
        if self.delta_kg < 0:
            return GoalDirection.LOSS
        if self.delta_kg > 0:
            return GoalDirection.GAIN
        return GoalDirection.MAINTAIN

    @property
    def total_days(self) -> int:
        return (self.target_date - self.start_date).days
