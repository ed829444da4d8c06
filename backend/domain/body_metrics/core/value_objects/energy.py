"""Energy expenditure value objects - BMR protocols and GET results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EnergyInput(str, Enum):
    """Inputs a BMR protocol may depend on."""

    WEIGHT = "weight_kg"
    HEIGHT = "height_cm"
    AGE = "age_years"
    SEX = "sex"
    LEAN_MASS = "lean_mass_kg"


class BMRProtocol(str, Enum):
    """Published resting energy expenditure equations.

    Each protocol declares the inputs it needs; a protocol whose inputs are
    not all available is reported as unavailable instead of raising.
    """

    HARRIS_BENEDICT = "harris_benedict"
    MIFFLIN_ST_JEOR = "mifflin_st_jeor"
    FAO_WHO = "fao_who"
    CUNNINGHAM = "cunningham"
    TINSLEY = "tinsley"
    SCHOFIELD = "schofield"
    FAO_WHO_UNU_2001 = "fao_who_unu_2001"
    OWEN = "owen"
    KATCH_MCARDLE = "katch_mcardle"
    DE_LORENZO = "de_lorenzo"

    @property
    def required_inputs(self) -> frozenset[EnergyInput]:
        return _REQUIRED_INPUTS[self]

    @property
    def requires_lean_mass(self) -> bool:
        return EnergyInput.LEAN_MASS in self.required_inputs

    @property
    def label(self) -> str:
        return _LABELS[self]


_W, _H, _A, _S, _L = (
    EnergyInput.WEIGHT,
    EnergyInput.HEIGHT,
    EnergyInput.AGE,
    EnergyInput.SEX,
    EnergyInput.LEAN_MASS,
)

_REQUIRED_INPUTS = {
    BMRProtocol.HARRIS_BENEDICT: frozenset({_W, _H, _A, _S}),
    BMRProtocol.MIFFLIN_ST_JEOR: frozenset({_W, _H, _A, _S}),
    # Height and age are not terms of the formula but are required inputs
    BMRProtocol.FAO_WHO: frozenset({_W, _H, _A, _S}),
    BMRProtocol.CUNNINGHAM: frozenset({_L}),
    BMRProtocol.TINSLEY: frozenset({_L}),
    BMRProtocol.SCHOFIELD: frozenset({_W, _A, _S}),
    BMRProtocol.FAO_WHO_UNU_2001: frozenset({_W, _H, _A, _S}),
    BMRProtocol.OWEN: frozenset({_W, _S}),
    BMRProtocol.KATCH_MCARDLE: frozenset({_L}),
    BMRProtocol.DE_LORENZO: frozenset({_L}),
}

_LABELS = {
    BMRProtocol.HARRIS_BENEDICT: "Harris-Benedict (revised 1984)",
    BMRProtocol.MIFFLIN_ST_JEOR: "Mifflin-St Jeor",
    BMRProtocol.FAO_WHO: "FAO/WHO",
    BMRProtocol.CUNNINGHAM: "Cunningham",
    BMRProtocol.TINSLEY: "Tinsley",
    BMRProtocol.SCHOFIELD: "Schofield",
    BMRProtocol.FAO_WHO_UNU_2001: "FAO/WHO/UNU 2001",
    BMRProtocol.OWEN: "Owen",
    BMRProtocol.KATCH_MCARDLE: "Katch-McArdle",
    BMRProtocol.DE_LORENZO: "De Lorenzo (1999)",
}

CORE_BMR_PROTOCOLS: tuple[BMRProtocol, ...] = (
    BMRProtocol.HARRIS_BENEDICT,
    BMRProtocol.MIFFLIN_ST_JEOR,
    BMRProtocol.FAO_WHO,
    BMRProtocol.CUNNINGHAM,
    BMRProtocol.TINSLEY,
)


@dataclass(frozen=True)
class FormulaTerm:
    """One additive term of a linear BMR equation.

    A term without symbol is the equation constant.
    """

    coefficient: float
    symbol: Optional[str] = None
    value: float = 1.0

    @property
    def contribution(self) -> float:
        return self.coefficient * self.value

    @property
    def is_constant(self) -> bool:
        return self.symbol is None


@dataclass(frozen=True)
class BreakdownStep:
    label: str
    value: str


@dataclass(frozen=True)
class FormulaBreakdown:
    """Step-by-step rendering of a calculation, for display.

    Attributes:
        name: Formula name, with the coefficient set when sex-specific
        equation: Symbolic equation, e.g. ``10 × W + 6.25 × H - 5 × A + 5``
        applied: Equation with the input values substituted
        steps: Intermediate values, last one is the result
        result_kcal: Value the equation evaluates to
    """

    name: str
    equation: str
    applied: str
    steps: tuple[BreakdownStep, ...]
    result_kcal: float


@dataclass(frozen=True)
class ProtocolEstimate:
    """BMR estimate of one protocol for one profile.

    Attributes:
        protocol: Equation used
        bmr_kcal: Estimated BMR, None when the protocol is unavailable
        available: True when every required input was present
        recommended: True for the single advisory recommendation
        requires_lean_mass: True for lean-mass based protocols
        breakdown: Formula rendering, only for available protocols
    """

    protocol: BMRProtocol
    bmr_kcal: Optional[float]
    available: bool
    recommended: bool
    requires_lean_mass: bool
    breakdown: Optional[FormulaBreakdown] = None

    def __post_init__(self) -> None:
        if self.available != (self.bmr_kcal is not None):
            raise ValueError("bmr_kcal must be set exactly when the protocol is available")
        if self.recommended and not self.available:
            raise ValueError("Only an available protocol can be recommended")
        if self.breakdown is not None and not self.available:
            raise ValueError("Only an available protocol has a breakdown")


@dataclass(frozen=True)
class EnergyResult:
    """Total energy expenditure and calorie target.

    Attributes:
        bmr_kcal: Basal metabolic rate
        activity_factor: PAL multiplier applied
        get_kcal: Total energy expenditure (bmr × activity_factor)
        goal_adjustment_kcal: Signed daily adjustment
        target_kcal: get_kcal + exercise_kcal + goal_adjustment_kcal
        exercise_kcal: Daily average of planned exercise
        breakdown: GET rendering for display
    """

    bmr_kcal: float
    activity_factor: float
    get_kcal: float
    goal_adjustment_kcal: int
    target_kcal: float
    exercise_kcal: float = 0.0
    breakdown: Optional[FormulaBreakdown] = None

    @property
    def total_expenditure_kcal(self) -> float:
        """GET plus planned exercise."""
        return self.get_kcal + self.exercise_kcal

    def __str__(self) -> str:
        exercise = f" + {self.exercise_kcal:.0f} exercise" if self.exercise_kcal else ""
        return (
            f"GET {self.get_kcal:.0f} kcal{exercise} "
            f"({self.goal_adjustment_kcal:+d}) -> {self.target_kcal:.0f} kcal"
        )
