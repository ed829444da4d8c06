"""Value objects for body metrics domain."""

from .activity_level import (
    ALLOWED_ACTIVITY_FACTORS,
    DEFAULT_ACTIVITY_FACTOR,
    ActivityLevel,
    ExerciseFrequency,
)
from .anthropometry import (
    AnthropometricIndices,
    BMICategory,
    FrameSize,
    FrameSizeResult,
    IdealWeightRange,
    WeightStatus,
    WHRRisk,
)
from .biometric_profile import BiometricProfile, positive_or_none
from .composition import (
    CompositionProtocol,
    CompositionResult,
    NotComputable,
    NotComputableReason,
)
from .energy import (
    CORE_BMR_PROTOCOLS,
    BMRProtocol,
    BreakdownStep,
    EnergyInput,
    EnergyResult,
    FormulaBreakdown,
    FormulaTerm,
    ProtocolEstimate,
)
from .exercise import ExerciseActivity, ExerciseIntensity, ExerciseSession
from .goal_plan import (
    GoalDirection,
    GoalPlan,
    GoalWarning,
    ProgressStatus,
    WarningSeverity,
)
from .measurements import (
    CircumferenceSet,
    CircumferenceSite,
    SkinfoldSet,
    SkinfoldSite,
)
from .projection import WeightProjection
from .provenance import Provenance
from .resolved_profile import ResolvedProfile
from .sex import Sex
from .somatotype import BoneBreadths, Somatotype, SomatotypeComponent
from .suggestion import Suggestion

__all__ = [
    "Sex",
    "BiometricProfile",
    "positive_or_none",
    "SkinfoldSite",
    "SkinfoldSet",
    "CircumferenceSite",
    "CircumferenceSet",
    "Provenance",
    "ResolvedProfile",
    "Suggestion",
    "ActivityLevel",
    "ExerciseFrequency",
    "ALLOWED_ACTIVITY_FACTORS",
    "DEFAULT_ACTIVITY_FACTOR",
    "AnthropometricIndices",
    "BMICategory",
    "IdealWeightRange",
    "WeightStatus",
    "WHRRisk",
    "FrameSize",
    "FrameSizeResult",
    "CompositionProtocol",
    "CompositionResult",
    "NotComputable",
    "NotComputableReason",
    "BMRProtocol",
    "EnergyInput",
    "CORE_BMR_PROTOCOLS",
    "ProtocolEstimate",
    "EnergyResult",
    "FormulaTerm",
    "FormulaBreakdown",
    "BreakdownStep",
    "GoalPlan",
    "GoalWarning",
    "GoalDirection",
    "WarningSeverity",
    "ProgressStatus",
    "BoneBreadths",
    "Somatotype",
    "SomatotypeComponent",
    "ExerciseActivity",
    "ExerciseIntensity",
    "ExerciseSession",
    "WeightProjection",
]
