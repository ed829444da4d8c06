"""AssessmentOrchestrator - runs the full body metrics pipeline."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import structlog

from domain.body_metrics.calculation.activity_service import (
    resolve_activity_factor,
    suggest_activity,
)
from domain.body_metrics.calculation.anthropometry_service import AnthropometryService
from domain.body_metrics.calculation.composition_service import (
    CompositionOutcome,
    CompositionService,
)
from domain.body_metrics.calculation.energy_service import EnergyService
from domain.body_metrics.calculation.exercise_service import daily_exercise_kcal
from domain.body_metrics.calculation.goal_service import DateLike, GoalService
from domain.body_metrics.calculation.projection_service import ProjectionService
from domain.body_metrics.calculation.somatotype_service import SomatotypeService
from domain.body_metrics.core.settings import DEFAULT_SETTINGS, CalculationSettings
from domain.body_metrics.core.value_objects.anthropometry import AnthropometricIndices
from domain.body_metrics.core.value_objects.biometric_profile import (
    BiometricProfile,
    positive_or_none,
)
from domain.body_metrics.core.value_objects.composition import (
    CompositionProtocol,
    CompositionResult,
)
from domain.body_metrics.core.value_objects.energy import (
    BMRProtocol,
    EnergyResult,
    ProtocolEstimate,
)
from domain.body_metrics.core.value_objects.exercise import ExerciseSession
from domain.body_metrics.core.value_objects.goal_plan import GoalPlan
from domain.body_metrics.core.value_objects.measurements import (
    CircumferenceSet,
    SkinfoldSet,
)
from domain.body_metrics.core.value_objects.projection import WeightProjection
from domain.body_metrics.core.value_objects.resolved_profile import ResolvedProfile
from domain.body_metrics.core.value_objects.somatotype import BoneBreadths, Somatotype
from domain.body_metrics.core.value_objects.suggestion import Suggestion

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WeightGoal:
    """Target weight and the requested window."""

    target_weight_kg: float
    start_date: DateLike
    target_date: DateLike


@dataclass(frozen=True)
class Assessment:
    """Result of a full assessment."""

    profile: BiometricProfile
    indices: AnthropometricIndices
    composition: Optional[CompositionOutcome]
    protocols: tuple[ProtocolEstimate, ...]
    bmr_protocol: Optional[BMRProtocol]
    energy: Optional[EnergyResult]
    activity_suggestion: Optional[Suggestion]
    goal_plan: Optional[GoalPlan] = None
    somatotype: Optional[Somatotype] = None
    projection: Optional[WeightProjection] = None
    notes: tuple[str, ...] = field(default_factory=tuple)


class AssessmentOrchestrator:
    """
    Orchestrates body metrics services for a complete assessment.

    Flow:
    1. Anthropometric indices (BMI, ideal weight, WHR, frame size)
    2. Body composition with the requested protocol
    3. BMR across protocols, lean mass taken from step 2 when the profile
       has none
    4. Activity factor (manual > accepted suggestion > default), GET and
       the calorie target including planned exercise
    5. Weight goal viability against the resulting GET
    6. Weight projection for the goal adjustment
    7. Somatotype when bone breadths are available
    """

    def __init__(
        self,
        settings: CalculationSettings = DEFAULT_SETTINGS,
        anthropometry_service: Optional[AnthropometryService] = None,
        composition_service: Optional[CompositionService] = None,
        energy_service: Optional[EnergyService] = None,
        goal_service: Optional[GoalService] = None,
        somatotype_service: Optional[SomatotypeService] = None,
        projection_service: Optional[ProjectionService] = None,
    ):
        self._settings = settings
        self._anthropometry = anthropometry_service or AnthropometryService(settings)
        self._composition = composition_service or CompositionService()
        self._energy = energy_service or EnergyService(settings)
        self._goals = goal_service or GoalService(settings)
        self._somatotype = somatotype_service or SomatotypeService()
        self._projection = projection_service or ProjectionService(settings)

    def assess(
        self,
        profile: Union[BiometricProfile, ResolvedProfile],
        skinfolds: Optional[SkinfoldSet] = None,
        circumferences: Optional[CircumferenceSet] = None,
        composition_protocol: Optional[CompositionProtocol] = None,
        bioimpedance_body_fat_percent: Optional[float] = None,
        bmr_protocol: Optional[BMRProtocol] = None,
        activity_factor: Optional[float] = None,
        exercise_frequency: Optional[str] = None,
        accept_activity_suggestion: bool = False,
        goal_adjustment_kcal: int = 0,
        goal: Optional[WeightGoal] = None,
        breadths: Optional[BoneBreadths] = None,
        exercise_sessions: Sequence[ExerciseSession] = (),
    ) -> Assessment:
        """
        Run every calculator that has enough input.

        Args:
            profile: Biometric inputs, optionally with provenance
            skinfolds: Caliper readings
            circumferences: Tape measurements
            composition_protocol: Body composition protocol to use
            bioimpedance_body_fat_percent: Measured body fat
            bmr_protocol: BMR protocol to use (default: recommended one)
            activity_factor: Manually chosen activity factor
            exercise_frequency: Anamnesis answer used for the suggestion
            accept_activity_suggestion: Use the suggestion when no manual
                factor is given
            goal_adjustment_kcal: Signed daily calorie adjustment
            goal: Weight goal to evaluate
            breadths: Bone breadths for the somatotype
            exercise_sessions: Weekly training schedule added to the target

        Returns:
            Assessment with all computed outputs

        Raises:
            InvalidActivityFactorError: If the resolved factor is not allowed
            GoalAdjustmentOutOfRangeError: If the adjustment is not allowed
            InvalidGoalError: If the weight goal is invalid
        """
        if isinstance(profile, ResolvedProfile):
            profile = profile.profile
        skinfolds = skinfolds or SkinfoldSet()
        circumferences = circumferences or CircumferenceSet()
        notes: list[str] = []

        # Step 1: Anthropometric indices
        indices = self._anthropometry.compute(profile, circumferences)

        # Step 2: Body composition
        composition = None
        lean_mass = profile.lean_mass_kg
        if composition_protocol is not None:
            composition = self._composition.estimate(
                composition_protocol, profile, skinfolds, bioimpedance_body_fat_percent
            )
            if isinstance(composition, CompositionResult) and positive_or_none(lean_mass) is None:
                lean_mass = composition.lean_mass_kg
                notes.append(f"Lean mass taken from {composition_protocol.value}")

        # Step 3: BMR protocols
        protocols = self._energy.compare_protocols(profile, lean_mass)
        selected = bmr_protocol or next(
            (estimate.protocol for estimate in protocols if estimate.recommended), None
        )
        bmr = (
            self._energy.compute_bmr(selected, profile, lean_mass)
            if selected is not None
            else None
        )

        # Step 4: Activity factor and GET
        suggestion = suggest_activity(exercise_frequency)
        factor = resolve_activity_factor(
            manual_factor=activity_factor,
            suggestion=suggestion if accept_activity_suggestion else None,
            default=self._settings.default_activity_factor,
        )
        exercise_kcal = None
        if exercise_sessions:
            exercise_kcal = daily_exercise_kcal(exercise_sessions, profile.weight_kg)
            if positive_or_none(profile.weight_kg) is None:
                notes.append("Exercise not counted: current weight unavailable")
        energy = self._energy.build_result(bmr, factor, goal_adjustment_kcal, exercise_kcal)
        if energy is None:
            notes.append("Energy expenditure not computable: BMR unavailable")

        # Step 5: Goal viability
        goal_plan = None
        if goal is not None:
            if profile.weight_kg is None or profile.weight_kg <= 0:
                notes.append("Goal not evaluated: current weight unavailable")
            else:
                goal_plan = self._goals.plan(
                    initial_weight_kg=profile.weight_kg,
                    target_weight_kg=goal.target_weight_kg,
                    start_date=goal.start_date,
                    target_date=goal.target_date,
                    get_kcal=energy.get_kcal if energy else None,
                )

        # Step 6: Weight projection
        projection = None
        if energy is not None:
            projection = self._projection.project(
                energy.goal_adjustment_kcal, profile.weight_kg
            )

        # Step 7: Somatotype
        somatotype = None
        if breadths is not None:
            somatotype = self._somatotype.calculate(
                profile, skinfolds, circumferences, breadths
            )

        logger.info(
            "assessment_completed",
            bmr_protocol=selected.value if selected else None,
            activity_factor=factor,
            has_energy=energy is not None,
            has_goal_plan=goal_plan is not None,
        )

        return Assessment(
            profile=profile,
            indices=indices,
            composition=composition,
            protocols=tuple(protocols),
            bmr_protocol=selected,
            energy=energy,
            activity_suggestion=suggestion,
            goal_plan=goal_plan,
            somatotype=somatotype,
            projection=projection,
            notes=tuple(notes),
        )
