"""GoalService - weight goal viability and deadline estimation."""

import math
from datetime import date, datetime, timedelta
from numbers import Real
from typing import Optional, Union

import structlog

from ..core.exceptions.domain_errors import InvalidDateRangeError, InvalidGoalError
from ..core.ports.calculators import IGoalPlanner
from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from ..core.value_objects.goal_plan import (
    GoalDirection,
    GoalPlan,
    GoalWarning,
    ProgressStatus,
    WarningSeverity,
)

logger = structlog.get_logger(__name__)

DateLike = Union[date, datetime, str]

SHORT_WINDOW_DAYS = 7
LONG_WINDOW_DAYS = 365
PROGRESS_TOLERANCE_POINTS = 10.0

# (upper bound as a multiple of the max safe rate, score, severity)
_AGGRESSIVE_BANDS = (
    (1.25, 3, WarningSeverity.ELEVATED),
    (1.5, 2, WarningSeverity.HIGH),
)


def parse_date(value: DateLike, name: str) -> date:
    """Coerce a date, datetime or ISO-8601 string into a date.

    Raises:
        InvalidGoalError: If the value is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            raise InvalidGoalError(f"{name} is not a valid ISO date: {value!r}") from None
    raise InvalidGoalError(f"{name} must be a date, got {value!r}")


def _validate_weight(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InvalidGoalError(f"{name} must be a number, got {value!r}")
    if value <= 0:
        raise InvalidGoalError(f"{name} must be positive, got {value}")
    return float(value)


def _ceil_days(value: float) -> int:
    # Round first so that 11.000000000002 stays 11
    return math.ceil(round(value, 9))


class GoalService(IGoalPlanner):
    """Assess how realistic a weight goal is.

    The required weekly rate is compared against rates derived from the
    configured daily energy limits (rate = kcal × 7 / kcal_per_kg):

        - <= conservative rate:     score 5
        - <= max safe rate:         score 4
        - <= 1.25 × max safe rate:  score 3, elevated warning
        - <= 1.5 × max safe rate:   score 2, high warning
        - otherwise:                score 1, critical warning

    Loss plans use the deficit limits, gain plans the surplus limits.
    """

    def __init__(self, settings: CalculationSettings = DEFAULT_SETTINGS):
        self._settings = settings

    def plan(
        self,
        initial_weight_kg: float,
        target_weight_kg: float,
        start_date: DateLike,
        target_date: DateLike,
        get_kcal: Optional[float] = None,
    ) -> GoalPlan:
        """Assess a weight goal.

        Args:
            initial_weight_kg: Weight at start_date
            target_weight_kg: Desired weight
            start_date: First day of the plan
            target_date: Requested completion date
            get_kcal: Total energy expenditure, to derive a calorie goal

        Returns:
            GoalPlan: Score, warnings, notes and deadline estimates

        Raises:
            InvalidDateRangeError: If target_date is not after start_date
            InvalidGoalError: If a date is malformed or a weight is not positive
        """
        initial = _validate_weight(initial_weight_kg, "initial_weight_kg")
        target = _validate_weight(target_weight_kg, "target_weight_kg")
        start = parse_date(start_date, "start_date")
        end = parse_date(target_date, "target_date")
        if end <= start:
            raise InvalidDateRangeError(start, end)

        settings = self._settings
        days = (end - start).days
        delta = target - initial
        weekly_rate = abs(delta) / (days / 7)
        balance = delta * settings.kcal_per_kg_body_weight / days

        notes = self._window_notes(days)
        warnings: list[GoalWarning] = []
        minimum_days = ideal_days = None

        if delta == 0:
            score = 5
        else:
            if delta < 0:
                max_kcal = settings.max_safe_deficit_kcal
                conservative_kcal = settings.conservative_deficit_kcal
                if abs(balance) < settings.min_effective_deficit_kcal:
                    notes.append(
                        f"Required deficit of {abs(balance):.0f} kcal/day is below the "
                        f"minimum effective deficit of "
                        f"{settings.min_effective_deficit_kcal:.0f} kcal/day"
                    )
            else:
                max_kcal = settings.max_safe_surplus_kcal
                conservative_kcal = settings.conservative_surplus_kcal

            score, warning = self._score(weekly_rate, max_kcal, conservative_kcal, delta)
            if warning is not None:
                warnings.append(warning)

            energy_needed = abs(delta) * settings.kcal_per_kg_body_weight
            minimum_days = _ceil_days(energy_needed / max_kcal)
            ideal_days = _ceil_days(energy_needed / conservative_kcal)

        plan = GoalPlan(
            initial_weight_kg=initial,
            target_weight_kg=target,
            start_date=start,
            target_date=end,
            viability_score=score,
            required_weekly_rate_kg=weekly_rate,
            required_daily_energy_balance_kcal=balance,
            warnings=tuple(warnings),
            notes=tuple(notes),
            minimum_deadline_days=minimum_days,
            ideal_deadline_days=ideal_days,
            minimum_deadline_date=(
                start + timedelta(days=minimum_days) if minimum_days is not None else None
            ),
            ideal_deadline_date=(
                start + timedelta(days=ideal_days) if ideal_days is not None else None
            ),
            daily_calorie_goal_kcal=get_kcal + balance if get_kcal is not None else None,
        )

        logger.info(
            "goal_plan_evaluated",
            delta_kg=delta,
            days=days,
            weekly_rate_kg=round(weekly_rate, 3),
            viability_score=score,
            warnings=len(warnings),
        )
        return plan

    def progress_status(
        self,
        plan: GoalPlan,
        current_weight_kg: float,
        as_of: DateLike,
    ) -> ProgressStatus:
        """Compare actual progress with the linear expectation.

        Progress more than 10 percentage points ahead of (behind) the
        expected share of the change is ``ahead`` (``behind``).
        """
        current = _validate_weight(current_weight_kg, "current_weight_kg")
        as_of_date = parse_date(as_of, "as_of")
        if plan.direction is GoalDirection.MAINTAIN:
            return ProgressStatus.ON_TRACK

        elapsed = (as_of_date - plan.start_date).days
        expected = min(max(elapsed / plan.total_days, 0.0), 1.0) * 100
        actual = (current - plan.initial_weight_kg) / plan.delta_kg * 100

        if actual > expected + PROGRESS_TOLERANCE_POINTS:
            return ProgressStatus.AHEAD
        if actual < expected - PROGRESS_TOLERANCE_POINTS:
            return ProgressStatus.BEHIND
        return ProgressStatus.ON_TRACK

    def _score(
        self,
        weekly_rate: float,
        max_kcal: float,
        conservative_kcal: float,
        delta: float,
    ) -> tuple[int, Optional[GoalWarning]]:
        kcal_per_kg = self._settings.kcal_per_kg_body_weight
        max_rate = max_kcal * 7 / kcal_per_kg
        conservative_rate = conservative_kcal * 7 / kcal_per_kg

        if weekly_rate <= conservative_rate:
            return 5, None
        if weekly_rate <= max_rate:
            return 4, None

        score, severity = 1, WarningSeverity.CRITICAL
        for multiple, band_score, band_severity in _AGGRESSIVE_BANDS:
            if weekly_rate <= multiple * max_rate:
                score, severity = band_score, band_severity
                break

        kind = "loss" if delta < 0 else "gain"
        warning = GoalWarning(
            code=f"rate_{severity.value}",
            severity=severity,
            message=(
                f"Required {kind} rate of {weekly_rate:.2f} kg/week exceeds the "
                f"maximum safe rate of {max_rate:.2f} kg/week"
            ),
        )
        return score, warning

    @staticmethod
    def _window_notes(days: int) -> list[str]:
        if days < SHORT_WINDOW_DAYS:
            return [f"Goal window of {days} days is shorter than one week"]
        if days > LONG_WINDOW_DAYS:
            return [f"Goal window of {days} days is longer than one year"]
        return []
