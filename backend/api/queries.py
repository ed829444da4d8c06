"""Query resolvers for the body metrics domain.

Every resolver is a thin async wrapper around a pure domain call:
- anthropometricIndices: BMI, ideal weight, WHR, frame size
- bodyComposition: skinfold or bioimpedance body fat
- energyProtocols: BMR across protocols with a recommendation
- energyResult: GET, planned exercise and calorie target
- bmrBreakdown: one BMR formula rendered step by step
- exerciseCatalogue / exerciseExpenditure: MET activities and daily kcal
- weightProjection: expected weight change for a daily balance
- activitySuggestion: activity factor for an exercise frequency
- goalPlan: weight goal viability and deadlines
- assessment: all of the above in one pass
"""

from datetime import date
from typing import List, Optional

import strawberry
import structlog
from graphql import GraphQLError

from api.types import (
    AnthropometricIndicesType,
    AssessmentType,
    BiometricProfileInput,
    BodyCompositionType,
    BoneBreadthsInput,
    CircumferencesInput,
    EnergyResultType,
    ExerciseActivityType,
    ExerciseSessionInput,
    FormulaBreakdownType,
    GoalPlanType,
    ProtocolEstimateType,
    SkinfoldsInput,
    SuggestionType,
    WeightProjectionType,
)
from application.body_metrics.orchestrators.assessment_orchestrator import WeightGoal
from domain.body_metrics import engine
from domain.body_metrics.calculation.activity_service import suggest_activity
from domain.body_metrics.calculation.energy_service import EnergyService
from domain.body_metrics.calculation.exercise_service import MET_CATALOGUE
from domain.body_metrics.core.exceptions.domain_errors import BodyMetricsDomainError
from domain.body_metrics.core.settings import DEFAULT_SETTINGS, CalculationSettings
from domain.body_metrics.core.value_objects import BMRProtocol, CompositionProtocol

logger = structlog.get_logger(__name__)


# ============================================
# HELPER FUNCTIONS
# ============================================


def get_settings(info: strawberry.types.Info) -> CalculationSettings:
    """Settings injected in the context, defaults when absent."""
    settings = info.context.get("settings")
    return settings if isinstance(settings, CalculationSettings) else DEFAULT_SETTINGS


def domain_error(error: BodyMetricsDomainError) -> GraphQLError:
    """Translate a domain error into a GraphQL error carrying its message."""
    logger.info(
        "body_metrics_request_rejected",
        error=type(error).__name__,
        message=str(error),
    )
    return GraphQLError(str(error), extensions={"code": type(error).__name__})


# ============================================
# QUERY RESOLVERS
# ============================================


@strawberry.type
class BodyMetricsQueries:
    """GraphQL queries for body metrics calculations."""

    @strawberry.field
    async def anthropometric_indices(
        self,
        info: strawberry.types.Info,
        profile: BiometricProfileInput,
        circumferences: Optional[CircumferencesInput] = None,
    ) -> AnthropometricIndicesType:
        """Compute BMI, ideal weight range, WHR and frame size.

        Example:
            query {
              anthropometricIndices(profile: {weightKg: 70, heightCm: 170}) {
                bmi
                bmiCategory
                idealWeightRange { minKg maxKg status }
              }
            }
        """
        try:
            indices = engine.compute_anthropometric_indices(
                profile.to_domain(),
                circumferences.to_domain() if circumferences else None,
                settings=get_settings(info),
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return AnthropometricIndicesType.from_domain(indices)

    @strawberry.field
    async def body_composition(
        self,
        info: strawberry.types.Info,
        protocol: CompositionProtocol,
        profile: BiometricProfileInput,
        skinfolds: Optional[SkinfoldsInput] = None,
        bioimpedance_body_fat_percent: Optional[float] = None,
    ) -> BodyCompositionType:
        """Estimate body composition with one protocol.

        Example:
            query {
              bodyComposition(
                protocol: SKINFOLD_3
                profile: {weightKg: 80, ageYears: 30, sex: MALE}
                skinfolds: {triceps: 12, subscapular: 10, suprailiac: 14}
              ) {
                computable
                bodyFatPercent
                reason
              }
            }
        """
        try:
            outcome = engine.estimate_body_composition(
                protocol,
                profile.to_domain(),
                skinfolds.to_domain() if skinfolds else None,
                bioimpedance_body_fat_percent,
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return BodyCompositionType.from_domain(outcome)

    @strawberry.field
    async def energy_protocols(
        self,
        info: strawberry.types.Info,
        profile: BiometricProfileInput,
        lean_mass_kg: Optional[float] = None,
        protocols: Optional[List[BMRProtocol]] = None,
    ) -> List[ProtocolEstimateType]:
        """Compare BMR protocols; unavailable ones have a null bmrKcal."""
        try:
            estimates = engine.compare_energy_protocols(
                profile.to_domain(),
                lean_mass_kg=lean_mass_kg,
                protocols=protocols,
                settings=get_settings(info),
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return [ProtocolEstimateType.from_domain(e) for e in estimates]

    @strawberry.field
    async def energy_result(
        self,
        info: strawberry.types.Info,
        bmr_kcal: float,
        activity_factor: float,
        goal_adjustment_kcal: int = 0,
        exercise_kcal: Optional[float] = None,
    ) -> Optional[EnergyResultType]:
        """Compute GET and the calorie target (GET + exercise + adjustment).

        Returns null when the BMR is not positive. An activity factor or
        goal adjustment outside the allowed values is an error.
        """
        try:
            result = EnergyService(get_settings(info)).build_result(
                bmr_kcal, activity_factor, goal_adjustment_kcal, exercise_kcal
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return EnergyResultType.from_domain(result) if result else None

    @strawberry.field
    async def bmr_breakdown(
        self,
        info: strawberry.types.Info,
        protocol: BMRProtocol,
        profile: BiometricProfileInput,
        lean_mass_kg: Optional[float] = None,
    ) -> Optional[FormulaBreakdownType]:
        """Show how one BMR protocol is computed; null when unavailable."""
        try:
            breakdown = engine.explain_bmr(protocol, profile.to_domain(), lean_mass_kg)
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return FormulaBreakdownType.from_domain(breakdown) if breakdown else None

    @strawberry.field
    async def exercise_catalogue(
        self,
        info: strawberry.types.Info,
        category: Optional[str] = None,
    ) -> List[ExerciseActivityType]:
        """MET values of common activities, optionally for one category."""
        return [
            ExerciseActivityType.from_domain(activity)
            for activity in MET_CATALOGUE
            if category is None or activity.category == category
        ]

    @strawberry.field
    async def exercise_expenditure(
        self,
        info: strawberry.types.Info,
        weight_kg: float,
        sessions: List[ExerciseSessionInput],
    ) -> float:
        """Average daily kcal of a weekly training schedule.

        Example:
            query {
              exerciseExpenditure(
                weightKg: 70
                sessions: [{activity: "running_8kmh", minutes: 30, sessionsPerWeek: 3}]
              )
            }
        """
        try:
            return engine.estimate_exercise_expenditure(
                [session.to_domain() for session in sessions], weight_kg
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e

    @strawberry.field
    async def weight_projection(
        self,
        info: strawberry.types.Info,
        daily_energy_balance_kcal: float,
        current_weight_kg: Optional[float] = None,
        weeks: int = 12,
    ) -> WeightProjectionType:
        """Expected weekly and monthly weight change for a daily balance."""
        projection = engine.project_weight(
            daily_energy_balance_kcal,
            current_weight_kg,
            weeks,
            settings=get_settings(info),
        )
        return WeightProjectionType.from_domain(projection)

    @strawberry.field
    async def activity_suggestion(
        self,
        info: strawberry.types.Info,
        exercise_frequency: str,
    ) -> Optional[SuggestionType]:
        """Suggest an activity factor; null when the frequency is unknown."""
        suggestion = suggest_activity(exercise_frequency)
        return SuggestionType.from_domain(suggestion) if suggestion else None

    @strawberry.field
    async def goal_plan(
        self,
        info: strawberry.types.Info,
        initial_weight_kg: float,
        target_weight_kg: float,
        start_date: date,
        target_date: date,
        get_kcal: Optional[float] = None,
    ) -> GoalPlanType:
        """Evaluate a weight goal.

        Example:
            query {
              goalPlan(
                initialWeightKg: 80
                targetWeightKg: 75
                startDate: "2024-01-01"
                targetDate: "2024-02-01"
              ) {
                viabilityScore
                warnings { severity message }
                minimumDeadlineDays
              }
            }
        """
        try:
            plan = engine.plan_goal_viability(
                initial_weight_kg,
                target_weight_kg,
                start_date,
                target_date,
                get_kcal,
                settings=get_settings(info),
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return GoalPlanType.from_domain(plan)

    @strawberry.field
    async def assessment(
        self,
        info: strawberry.types.Info,
        profile: BiometricProfileInput,
        skinfolds: Optional[SkinfoldsInput] = None,
        circumferences: Optional[CircumferencesInput] = None,
        composition_protocol: Optional[CompositionProtocol] = None,
        bioimpedance_body_fat_percent: Optional[float] = None,
        bmr_protocol: Optional[BMRProtocol] = None,
        activity_factor: Optional[float] = None,
        exercise_frequency: Optional[str] = None,
        accept_activity_suggestion: bool = False,
        goal_adjustment_kcal: int = 0,
        target_weight_kg: Optional[float] = None,
        start_date: Optional[date] = None,
        target_date: Optional[date] = None,
        breadths: Optional[BoneBreadthsInput] = None,
        exercise_sessions: Optional[List[ExerciseSessionInput]] = None,
    ) -> AssessmentType:
        """Run the full assessment pipeline in one call.

        The weight goal is evaluated only when targetWeightKg, startDate and
        targetDate are all given; the somatotype only when breadths are.
        """
        orchestrator = info.context.get("assessment_orchestrator")
        if not orchestrator:
            raise Exception("Missing assessment_orchestrator in GraphQL context")

        goal = None
        if target_weight_kg is not None and start_date and target_date:
            goal = WeightGoal(
                target_weight_kg=target_weight_kg,
                start_date=start_date,
                target_date=target_date,
            )

        try:
            result = orchestrator.assess(
                profile.to_domain(),
                skinfolds=skinfolds.to_domain() if skinfolds else None,
                circumferences=circumferences.to_domain() if circumferences else None,
                composition_protocol=composition_protocol,
                bioimpedance_body_fat_percent=bioimpedance_body_fat_percent,
                bmr_protocol=bmr_protocol,
                activity_factor=activity_factor,
                exercise_frequency=exercise_frequency,
                accept_activity_suggestion=accept_activity_suggestion,
                goal_adjustment_kcal=goal_adjustment_kcal,
                goal=goal,
                breadths=breadths.to_domain() if breadths else None,
                exercise_sessions=[s.to_domain() for s in exercise_sessions or ()],
            )
        except BodyMetricsDomainError as e:
            raise domain_error(e) from e
        return AssessmentType.from_domain(result)
