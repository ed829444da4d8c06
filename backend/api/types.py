"""GraphQL types for the body metrics domain.

Domain enums are exposed directly; value objects are mapped to output
types by the ``from_domain`` helpers.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Union

import strawberry

from application.body_metrics.orchestrators.assessment_orchestrator import Assessment
from domain.body_metrics.calculation.exercise_service import find_activity
from domain.body_metrics.core.exceptions.domain_errors import InvalidMeasurementError
from domain.body_metrics.core.value_objects import (
    AnthropometricIndices,
    BMICategory,
    BMRProtocol,
    BiometricProfile,
    BoneBreadths,
    CircumferenceSet,
    CompositionProtocol,
    CompositionResult,
    EnergyResult,
    ExerciseActivity,
    ExerciseIntensity,
    ExerciseSession,
    FormulaBreakdown,
    FrameSize,
    GoalPlan,
    NotComputable,
    ProtocolEstimate,
    Sex,
    SkinfoldSet,
    Somatotype,
    SomatotypeComponent,
    Suggestion,
    WarningSeverity,
    WeightProjection,
    WeightStatus,
    WHRRisk,
)

__all__ = [
    # Enums
    "SexEnum",
    "BMICategoryEnum",
    "WHRRiskEnum",
    "WeightStatusEnum",
    "FrameSizeEnum",
    "CompositionProtocolEnum",
    "BMRProtocolEnum",
    "WarningSeverityEnum",
    "SomatotypeComponentEnum",
    "ExerciseIntensityEnum",
    # Input types
    "BiometricProfileInput",
    "SkinfoldsInput",
    "CircumferencesInput",
    "BoneBreadthsInput",
    "ExerciseSessionInput",
    # Output types
    "IdealWeightRangeType",
    "FrameSizeType",
    "AnthropometricIndicesType",
    "BodyCompositionType",
    "BreakdownStepType",
    "FormulaBreakdownType",
    "ProtocolEstimateType",
    "EnergyResultType",
    "SuggestionType",
    "GoalWarningType",
    "GoalPlanType",
    "SomatotypeType",
    "ExerciseActivityType",
    "WeightProjectionType",
    "AssessmentType",
]


# ============================================
# ENUMS
# ============================================

SexEnum = strawberry.enum(Sex, name="Sex", description="Biological sex")
BMICategoryEnum = strawberry.enum(BMICategory, name="BMICategory")
WHRRiskEnum = strawberry.enum(WHRRisk, name="WHRRisk")
WeightStatusEnum = strawberry.enum(WeightStatus, name="WeightStatus")
FrameSizeEnum = strawberry.enum(FrameSize, name="FrameSize")
CompositionProtocolEnum = strawberry.enum(CompositionProtocol, name="CompositionProtocol")
BMRProtocolEnum = strawberry.enum(BMRProtocol, name="BMRProtocol")
WarningSeverityEnum = strawberry.enum(WarningSeverity, name="WarningSeverity")
SomatotypeComponentEnum = strawberry.enum(SomatotypeComponent, name="SomatotypeComponent")
ExerciseIntensityEnum = strawberry.enum(ExerciseIntensity, name="ExerciseIntensity")


# ============================================
# INPUT TYPES
# ============================================


@strawberry.input
class BiometricProfileInput:
    """Biometric inputs; every field is optional."""

    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age_years: Optional[float] = None
    sex: Optional[Sex] = None
    lean_mass_kg: Optional[float] = None

    def to_domain(self) -> BiometricProfile:
        return BiometricProfile(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age_years=self.age_years,
            sex=self.sex,
            lean_mass_kg=self.lean_mass_kg,
        )


@strawberry.input
class SkinfoldsInput:
    """Skinfold thicknesses in millimeters."""

    triceps: Optional[float] = None
    biceps: Optional[float] = None
    subscapular: Optional[float] = None
    suprailiac: Optional[float] = None
    abdominal: Optional[float] = None
    thigh: Optional[float] = None
    chest: Optional[float] = None
    axillary: Optional[float] = None
    calf: Optional[float] = None

    def to_domain(self) -> SkinfoldSet:
        values = {
            name: getattr(self, name)
            for name in (
                "triceps",
                "biceps",
                "subscapular",
                "suprailiac",
                "abdominal",
                "thigh",
                "chest",
                "axillary",
                "calf",
            )
            if getattr(self, name) is not None
        }
        return SkinfoldSet.from_mapping(values)


@strawberry.input
class CircumferencesInput:
    """Circumferences in centimeters."""

    waist: Optional[float] = None
    hip: Optional[float] = None
    wrist: Optional[float] = None
    arm: Optional[float] = None
    calf: Optional[float] = None

    def to_domain(self) -> CircumferenceSet:
        values = {
            name: getattr(self, name)
            for name in ("waist", "hip", "wrist", "arm", "calf")
            if getattr(self, name) is not None
        }
        return CircumferenceSet.from_mapping(values)


@strawberry.input
class BoneBreadthsInput:
    """Biepicondylar breadths in centimeters."""

    humerus_cm: Optional[float] = None
    femur_cm: Optional[float] = None

    def to_domain(self) -> BoneBreadths:
        return BoneBreadths(humerus_cm=self.humerus_cm, femur_cm=self.femur_cm)


@strawberry.input
class ExerciseSessionInput:
    """Recurring training session: a catalogue activity or an explicit MET."""

    minutes: float
    sessions_per_week: float = 1
    activity: Optional[str] = None
    met: Optional[float] = None

    def to_domain(self) -> ExerciseSession:
        met = self.met
        if met is None and self.activity is not None:
            entry = find_activity(self.activity)
            if entry is None:
                raise InvalidMeasurementError(self.activity, "unknown activity")
            met = entry.met
        if met is None:
            raise InvalidMeasurementError("exercise", "activity or met is required")
        try:
            return ExerciseSession(
                met=met, minutes=self.minutes, sessions_per_week=self.sessions_per_week
            )
        except ValueError as e:
            raise InvalidMeasurementError(self.activity or "exercise", str(e)) from e


# ============================================
# OUTPUT TYPES
# ============================================


@strawberry.type
class IdealWeightRangeType:
    """Weight band for a normal BMI (18.5-24.9)."""

    min_kg: float
    max_kg: float
    current_kg: Optional[float] = None
    status: Optional[WeightStatus] = None


@strawberry.type
class FrameSizeType:
    size: FrameSize
    ratio: float


@strawberry.type
class AnthropometricIndicesType:
    """BMI, ideal weight range, waist-hip ratio and frame size."""

    bmi: Optional[float]
    bmi_category: Optional[BMICategory]
    ideal_weight_range: Optional[IdealWeightRangeType]
    whr: Optional[float]
    whr_category: Optional[WHRRisk]
    frame_size: Optional[FrameSizeType]

    @staticmethod
    def from_domain(indices: AnthropometricIndices) -> AnthropometricIndicesType:
        ideal = indices.ideal_weight_range
        frame = indices.frame_size
        return AnthropometricIndicesType(
            bmi=indices.bmi,
            bmi_category=indices.bmi_category,
            ideal_weight_range=(
                IdealWeightRangeType(
                    min_kg=ideal.min_kg,
                    max_kg=ideal.max_kg,
                    current_kg=ideal.current_kg,
                    status=ideal.status,
                )
                if ideal
                else None
            ),
            whr=indices.whr,
            whr_category=indices.whr_category,
            frame_size=FrameSizeType(size=frame.size, ratio=frame.ratio) if frame else None,
        )


@strawberry.type
class BodyCompositionType:
    """Body composition estimate or the reason it could not be computed."""

    protocol: CompositionProtocol
    computable: bool
    body_density: Optional[float] = None
    body_fat_percent: Optional[float] = None
    fat_mass_kg: Optional[float] = None
    lean_mass_kg: Optional[float] = None
    reason: Optional[str] = None
    detail: Optional[str] = None

    @staticmethod
    def from_domain(
        outcome: Union[CompositionResult, NotComputable],
    ) -> BodyCompositionType:
        if isinstance(outcome, NotComputable):
            return BodyCompositionType(
                protocol=outcome.protocol,
                computable=False,
                reason=outcome.reason.value,
                detail=outcome.detail,
            )
        return BodyCompositionType(
            protocol=outcome.protocol,
            computable=True,
            body_density=outcome.body_density,
            body_fat_percent=outcome.body_fat_percent,
            fat_mass_kg=outcome.fat_mass_kg,
            lean_mass_kg=outcome.lean_mass_kg,
        )


@strawberry.type
class BreakdownStepType:
    label: str
    value: str


@strawberry.type
class FormulaBreakdownType:
    """Formula rendered step by step for display."""

    name: str
    equation: str
    applied: str
    steps: List[BreakdownStepType]
    result_kcal: float

    @staticmethod
    def from_domain(breakdown: FormulaBreakdown) -> FormulaBreakdownType:
        return FormulaBreakdownType(
            name=breakdown.name,
            equation=breakdown.equation,
            applied=breakdown.applied,
            steps=[BreakdownStepType(label=s.label, value=s.value) for s in breakdown.steps],
            result_kcal=breakdown.result_kcal,
        )


@strawberry.type
class ProtocolEstimateType:
    """BMR estimate of one protocol."""

    protocol: BMRProtocol
    label: str
    bmr_kcal: Optional[float]
    available: bool
    recommended: bool
    requires_lean_mass: bool
    breakdown: Optional[FormulaBreakdownType] = None

    @staticmethod
    def from_domain(estimate: ProtocolEstimate) -> ProtocolEstimateType:
        return ProtocolEstimateType(
            protocol=estimate.protocol,
            label=estimate.protocol.label,
            bmr_kcal=estimate.bmr_kcal,
            available=estimate.available,
            recommended=estimate.recommended,
            requires_lean_mass=estimate.requires_lean_mass,
            breakdown=(
                FormulaBreakdownType.from_domain(estimate.breakdown)
                if estimate.breakdown
                else None
            ),
        )


@strawberry.type
class EnergyResultType:
    """Total energy expenditure and calorie target (kcal/day)."""

    bmr_kcal: float
    activity_factor: float
    get_kcal: float
    exercise_kcal: float
    total_expenditure_kcal: float
    goal_adjustment_kcal: int
    target_kcal: float
    breakdown: Optional[FormulaBreakdownType] = None

    @staticmethod
    def from_domain(result: EnergyResult) -> EnergyResultType:
        return EnergyResultType(
            bmr_kcal=result.bmr_kcal,
            activity_factor=result.activity_factor,
            get_kcal=result.get_kcal,
            exercise_kcal=result.exercise_kcal,
            total_expenditure_kcal=result.total_expenditure_kcal,
            goal_adjustment_kcal=result.goal_adjustment_kcal,
            target_kcal=result.target_kcal,
            breakdown=(
                FormulaBreakdownType.from_domain(result.breakdown) if result.breakdown else None
            ),
        )


@strawberry.type
class SuggestionType:
    """Advisory value; never applied unless the client sends it back."""

    field: str
    value: float
    label: str
    source: str

    @staticmethod
    def from_domain(suggestion: Suggestion) -> SuggestionType:
        return SuggestionType(
            field=suggestion.field,
            value=float(suggestion.value),
            label=suggestion.label,
            source=suggestion.source,
        )


@strawberry.type
class GoalWarningType:
    code: str
    severity: WarningSeverity
    message: str


@strawberry.type
class GoalPlanType:
    """Weight goal viability assessment."""

    initial_weight_kg: float
    target_weight_kg: float
    start_date: date
    target_date: date
    viability_score: int
    warnings: List[GoalWarningType]
    notes: List[str]
    minimum_deadline_days: Optional[int]
    ideal_deadline_days: Optional[int]
    minimum_deadline_date: Optional[date]
    ideal_deadline_date: Optional[date]
    required_weekly_rate_kg: float
    required_daily_energy_balance_kcal: float
    daily_calorie_goal_kcal: Optional[float]

    @staticmethod
    def from_domain(plan: GoalPlan) -> GoalPlanType:
        return GoalPlanType(
            initial_weight_kg=plan.initial_weight_kg,
            target_weight_kg=plan.target_weight_kg,
            start_date=plan.start_date,
            target_date=plan.target_date,
            viability_score=plan.viability_score,
            warnings=[
                GoalWarningType(code=w.code, severity=w.severity, message=w.message)
                for w in plan.warnings
            ],
            notes=list(plan.notes),
            minimum_deadline_days=plan.minimum_deadline_days,
            ideal_deadline_days=plan.ideal_deadline_days,
            minimum_deadline_date=plan.minimum_deadline_date,
            ideal_deadline_date=plan.ideal_deadline_date,
            required_weekly_rate_kg=plan.required_weekly_rate_kg,
            required_daily_energy_balance_kcal=plan.required_daily_energy_balance_kcal,
            daily_calorie_goal_kcal=plan.daily_calorie_goal_kcal,
        )


@strawberry.type
class SomatotypeType:
    """Heath-Carter somatotype and somatochart position."""

    endomorphy: float
    mesomorphy: float
    ectomorphy: float
    x: float
    y: float
    dominant: Optional[SomatotypeComponent]
    description: str
    rating: str

    @staticmethod
    def from_domain(somatotype: Somatotype) -> SomatotypeType:
        return SomatotypeType(
            endomorphy=somatotype.endomorphy,
            mesomorphy=somatotype.mesomorphy,
            ectomorphy=somatotype.ectomorphy,
            x=somatotype.x,
            y=somatotype.y,
            dominant=somatotype.dominant,
            description=somatotype.description,
            rating=str(somatotype),
        )


@strawberry.type
class ExerciseActivityType:
    code: str
    name: str
    category: str
    met: float
    intensity: ExerciseIntensity

    @staticmethod
    def from_domain(activity: ExerciseActivity) -> ExerciseActivityType:
        return ExerciseActivityType(
            code=activity.code,
            name=activity.name,
            category=activity.category,
            met=activity.met,
            intensity=activity.intensity,
        )


@strawberry.type
class WeightProjectionType:
    """Expected weight change for a sustained daily energy balance."""

    daily_energy_balance_kcal: float
    direction: int
    weekly_change_kg: float
    weekly_change_min_kg: float
    weekly_change_max_kg: float
    monthly_change_kg: float
    trajectory_kg: List[float]

    @staticmethod
    def from_domain(projection: WeightProjection) -> WeightProjectionType:
        return WeightProjectionType(
            daily_energy_balance_kcal=projection.daily_energy_balance_kcal,
            direction=projection.direction,
            weekly_change_kg=projection.weekly_change_kg,
            weekly_change_min_kg=projection.weekly_change_min_kg,
            weekly_change_max_kg=projection.weekly_change_max_kg,
            monthly_change_kg=projection.monthly_change_kg,
            trajectory_kg=list(projection.trajectory_kg),
        )


@strawberry.type
class AssessmentType:
    """Full assessment: every output the inputs allow."""

    indices: AnthropometricIndicesType
    composition: Optional[BodyCompositionType]
    protocols: List[ProtocolEstimateType]
    bmr_protocol: Optional[BMRProtocol]
    energy: Optional[EnergyResultType]
    activity_suggestion: Optional[SuggestionType]
    goal_plan: Optional[GoalPlanType]
    somatotype: Optional[SomatotypeType]
    projection: Optional[WeightProjectionType]
    notes: List[str]

    @staticmethod
    def from_domain(assessment: Assessment) -> AssessmentType:
        return AssessmentType(
            indices=AnthropometricIndicesType.from_domain(assessment.indices),
            composition=(
                BodyCompositionType.from_domain(assessment.composition)
                if assessment.composition
                else None
            ),
            protocols=[ProtocolEstimateType.from_domain(p) for p in assessment.protocols],
            bmr_protocol=assessment.bmr_protocol,
            energy=EnergyResultType.from_domain(assessment.energy) if assessment.energy else None,
            activity_suggestion=(
                SuggestionType.from_domain(assessment.activity_suggestion)
                if assessment.activity_suggestion
                else None
            ),
            goal_plan=GoalPlanType.from_domain(assessment.goal_plan) if assessment.goal_plan else None,
            somatotype=(
                SomatotypeType.from_domain(assessment.somatotype)
                if assessment.somatotype
                else None
            ),
            projection=(
                WeightProjectionType.from_domain(assessment.projection)
                if assessment.projection
                else None
            ),
            notes=list(assessment.notes),
        )
