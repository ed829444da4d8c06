"""Stateless entry points of the body metrics engine.

Each function builds the service it needs from the given settings and
returns a fresh value object. Nothing is cached between calls.
"""

from datetime import date
from typing import Iterable, Optional, Sequence, Union

from .calculation.activity_service import suggest_activity_factor as _suggest_factor
from .calculation.anthropometry_service import AnthropometryService
from .calculation.composition_service import CompositionOutcome, CompositionService
from .calculation.energy_service import EnergyService
from .calculation.energy_service import apply_goal as _apply_goal
from .calculation.energy_service import compute_get as _compute_get
from .calculation.energy_service import explain_get as _explain_get
from .calculation.exercise_service import daily_exercise_kcal
from .calculation.goal_service import DateLike, GoalService
from .calculation.projection_service import ProjectionService
from .core.settings import DEFAULT_SETTINGS, CalculationSettings
from .core.value_objects.activity_level import ExerciseFrequency
from .core.value_objects.anthropometry import AnthropometricIndices
from .core.value_objects.biometric_profile import BiometricProfile
from .core.value_objects.composition import CompositionProtocol
from .core.value_objects.energy import (
    BMRProtocol,
    EnergyResult,
    FormulaBreakdown,
    ProtocolEstimate,
)
from .core.value_objects.exercise import ExerciseSession
from .core.value_objects.goal_plan import GoalPlan
from .core.value_objects.measurements import CircumferenceSet, SkinfoldSet
from .core.value_objects.projection import WeightProjection
from .core.value_objects.resolved_profile import ResolvedProfile
from .resolution.data_source_resolver import DataSourceResolver
from .resolution.records import AnthropometryRecord, ManualEntry, ProfileRecord


def compute_anthropometric_indices(
    profile: BiometricProfile,
    circumferences: Optional[CircumferenceSet] = None,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> AnthropometricIndices:
    """BMI, ideal weight range, WHR and frame size for a profile."""
    return AnthropometryService(settings).compute(profile, circumferences)


def estimate_body_composition(
    protocol: Union[CompositionProtocol, str],
    profile: BiometricProfile,
    skinfolds: Optional[SkinfoldSet] = None,
    bioimpedance_body_fat_percent: Optional[float] = None,
) -> CompositionOutcome:
    """Body fat, fat mass and lean mass with one protocol.

    Returns ``NotComputable`` instead of raising when inputs are missing or
    the estimate is out of range.
    """
    return CompositionService().estimate(
        CompositionProtocol(protocol), profile, skinfolds, bioimpedance_body_fat_percent
    )


def compare_composition_protocols(
    profile: BiometricProfile,
    skinfolds: Optional[SkinfoldSet] = None,
    bioimpedance_body_fat_percent: Optional[float] = None,
) -> dict[CompositionProtocol, CompositionOutcome]:
    """Outcome of every composition protocol for the same inputs."""
    return CompositionService().compare(profile, skinfolds, bioimpedance_body_fat_percent)


def compare_energy_protocols(
    profile: BiometricProfile,
    lean_mass_kg: Optional[float] = None,
    protocols: Optional[Sequence[Union[BMRProtocol, str]]] = None,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> list[ProtocolEstimate]:
    """BMR from every protocol of the comparison set, one recommended."""
    selected = [BMRProtocol(p) for p in protocols] if protocols else None
    return EnergyService(settings).compare_protocols(profile, lean_mass_kg, selected)


def compute_get(bmr_kcal: Optional[float], activity_factor: float) -> Optional[float]:
    """GET = BMR × activity factor (factor must be an allowed multiplier)."""
    return _compute_get(bmr_kcal, activity_factor)


def apply_goal(
    get_kcal: float,
    adjustment_kcal: int,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> float:
    """Calorie target = GET + adjustment (adjustment range enforced)."""
    return _apply_goal(get_kcal, adjustment_kcal, settings)


def build_energy_result(
    bmr_kcal: Optional[float],
    activity_factor: float,
    goal_adjustment_kcal: int = 0,
    exercise_kcal: Optional[float] = None,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> Optional[EnergyResult]:
    """BMR, GET, exercise and calorie target in one value; None without a BMR."""
    return EnergyService(settings).build_result(
        bmr_kcal, activity_factor, goal_adjustment_kcal, exercise_kcal
    )


def explain_bmr(
    protocol: Union[BMRProtocol, str],
    profile: BiometricProfile,
    lean_mass_kg: Optional[float] = None,
) -> Optional[FormulaBreakdown]:
    """Step-by-step rendering of one BMR protocol."""
    return EnergyService().explain_bmr(BMRProtocol(protocol), profile, lean_mass_kg)


def explain_get(bmr_kcal: Optional[float], activity_factor: float) -> Optional[FormulaBreakdown]:
    """Step-by-step rendering of GET = BMR × activity factor."""
    return _explain_get(bmr_kcal, activity_factor)


def estimate_exercise_expenditure(
    sessions: Iterable[ExerciseSession], weight_kg: Optional[float]
) -> float:
    """Average daily kcal of a weekly training schedule."""
    return daily_exercise_kcal(sessions, weight_kg)


def project_weight(
    daily_energy_balance_kcal: float,
    current_weight_kg: Optional[float] = None,
    weeks: int = 12,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> WeightProjection:
    """Expected weekly and monthly weight change for a daily balance."""
    return ProjectionService(settings).project(
        daily_energy_balance_kcal, current_weight_kg, weeks
    )


def suggest_activity_factor(
    frequency: Union[ExerciseFrequency, str, None],
) -> Optional[float]:
    """Activity factor for an exercise-frequency bucket, None if unknown."""
    return _suggest_factor(frequency)


def plan_goal_viability(
    initial_weight_kg: float,
    target_weight_kg: float,
    start_date: DateLike,
    target_date: DateLike,
    get_kcal: Optional[float] = None,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> GoalPlan:
    """Viability score, warnings and deadlines for a weight goal."""
    return GoalService(settings).plan(
        initial_weight_kg, target_weight_kg, start_date, target_date, get_kcal
    )


def resolve_data_sources(
    anthropometry: Iterable[AnthropometryRecord] = (),
    profile: Optional[ProfileRecord] = None,
    manual: Optional[ManualEntry] = None,
    reference_date: Optional[date] = None,
) -> ResolvedProfile:
    """Merge record sources into a profile with per-field provenance."""
    return DataSourceResolver().resolve(anthropometry, profile, manual, reference_date)
