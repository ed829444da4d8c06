"""EnergyService - BMR protocols, GET and calorie goal adjustment."""

import math
from numbers import Real
from typing import Callable, Optional, Sequence

import structlog

from ..core.exceptions.domain_errors import (
    GoalAdjustmentOutOfRangeError,
    InvalidActivityFactorError,
)
from ..core.ports.calculators import IEnergyExpenditureCalculator
from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from ..core.value_objects.activity_level import ALLOWED_ACTIVITY_FACTORS, ActivityLevel
from ..core.value_objects.biometric_profile import BiometricProfile, positive_or_none
from ..core.value_objects.energy import (
    BMRProtocol,
    BreakdownStep,
    EnergyInput,
    EnergyResult,
    FormulaBreakdown,
    FormulaTerm,
    ProtocolEstimate,
)
from ..core.value_objects.sex import Sex

logger = structlog.get_logger(__name__)

Terms = tuple[FormulaTerm, ...]

# Symbols used in equations: W weight (kg), H height (cm), Hm height (m),
# A age (years), LBM lean body mass (kg)
_SYMBOL_LABELS = {
    "W": "Weight",
    "H": "Height",
    "Hm": "Height (m)",
    "A": "Age",
    "LBM": "Lean mass",
}


def _c(value: float) -> FormulaTerm:
    return FormulaTerm(coefficient=value)


def _t(coefficient: float, symbol: str, value: float) -> FormulaTerm:
    return FormulaTerm(coefficient=coefficient, symbol=symbol, value=value)


def _harris_benedict(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    if sex is Sex.MALE:
        return (_c(88.362), _t(13.397, "W", w), _t(4.799, "H", h), _t(-5.677, "A", a))
    return (_c(447.593), _t(9.247, "W", w), _t(3.098, "H", h), _t(-4.330, "A", a))


def _mifflin_st_jeor(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    return (
        _t(10, "W", w),
        _t(6.25, "H", h),
        _t(-5, "A", a),
        _c(5 if sex is Sex.MALE else -161),
    )


def _fao_who(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    if sex is Sex.MALE:
        return (_t(15.3, "W", w), _c(679))
    return (_t(14.7, "W", w), _c(496))


def _cunningham(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    return (_c(500), _t(22, "LBM", lbm))


def _de_lorenzo(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    # Same coefficients as Cunningham, validated on athletes
    return (_c(500), _t(22, "LBM", lbm))


def _tinsley(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    return (_t(25.9, "LBM", lbm), _c(284))


def _katch_mcardle(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    return (_c(370), _t(21.6, "LBM", lbm))


def _schofield(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    # Adults under 18 fall back to the 18-30 band
    if sex is Sex.MALE:
        if a <= 30:
            return (_t(15.057, "W", w), _c(692.2))
        if a <= 60:
            return (_t(11.472, "W", w), _c(873.1))
        return (_t(11.711, "W", w), _c(587.7))
    if a <= 30:
        return (_t(13.623, "W", w), _c(112.4))
    if a <= 60:
        return (_t(8.126, "W", w), _c(845.6))
    return (_t(9.082, "W", w), _c(658.5))


def _fao_who_unu_2001(w: float, h: float, a: float, sex: Sex, lbm: float) -> Terms:
    height_m = h / 100
    if sex is Sex.MALE:
        if a <= 30:
            return (_t(15.4, "W", w), _t(-27, "Hm", height_m), _c(717))
        return (_t(11.3, "W", w), _t(16, "Hm", height_m), _c(901))
    if a <= 30:
        return (_t(13.3, "W", w), _t(334, "Hm", height_m), _c(35))
    if a <= 60:
        return (_t(8.7, "W", w), _t(-25, "Hm", height_m), _c(865))
    return (_t(9.2, "W", w), _t(637, "Hm", height_m), _c(-302))


def _owen(w: float, h: float, a: float, sex: Sex, lbm: float) -> Optional[Terms]:
    # Female-only equation
    if sex is not Sex.FEMALE:
        return None
    return (_c(795), _t(7.18, "W", w))


_FORMULAS: dict[BMRProtocol, Callable[..., Optional[Terms]]] = {
    BMRProtocol.HARRIS_BENEDICT: _harris_benedict,
    BMRProtocol.MIFFLIN_ST_JEOR: _mifflin_st_jeor,
    BMRProtocol.FAO_WHO: _fao_who,
    BMRProtocol.CUNNINGHAM: _cunningham,
    BMRProtocol.TINSLEY: _tinsley,
    BMRProtocol.SCHOFIELD: _schofield,
    BMRProtocol.FAO_WHO_UNU_2001: _fao_who_unu_2001,
    BMRProtocol.OWEN: _owen,
    BMRProtocol.KATCH_MCARDLE: _katch_mcardle,
    BMRProtocol.DE_LORENZO: _de_lorenzo,
}


def _num(value: float) -> str:
    return f"{value:g}"


def _render(terms: Terms, substitute: bool) -> str:
    parts: list[str] = []
    for term in terms:
        magnitude = abs(term.coefficient)
        if term.is_constant:
            text = _num(magnitude)
        else:
            operand = _num(term.value) if substitute else term.symbol
            text = f"{_num(magnitude)} × {operand}"
        if not parts:
            parts.append(f"-{text}" if term.coefficient < 0 else text)
        else:
            parts.append(f"- {text}" if term.coefficient < 0 else f"+ {text}")
    return " ".join(parts)


def _breakdown(protocol: BMRProtocol, sex: Optional[Sex], terms: Terms) -> FormulaBreakdown:
    result = sum(term.contribution for term in terms)
    steps = [
        BreakdownStep(label="Constant", value=_num(term.coefficient))
        if term.is_constant
        else BreakdownStep(
            label=_SYMBOL_LABELS[term.symbol],
            value=f"{_num(term.coefficient)} × {_num(term.value)} = {term.contribution:.2f}",
        )
        for term in terms
    ]
    steps.append(BreakdownStep(label="Result", value=f"{result:.0f} kcal"))

    name = protocol.label
    if sex is not None and EnergyInput.SEX in protocol.required_inputs:
        name = f"{name} ({sex.value})"
    return FormulaBreakdown(
        name=name,
        equation=_render(terms, substitute=False),
        applied=_render(terms, substitute=True),
        steps=tuple(steps),
        result_kcal=result,
    )


def compute_get(bmr_kcal: Optional[float], activity_factor: float) -> Optional[float]:
    """Total energy expenditure: BMR × activity factor.

    Args:
        bmr_kcal: Basal metabolic rate
        activity_factor: One of 1.2, 1.375, 1.55, 1.725, 1.9

    Returns:
        Optional[float]: GET in kcal/day, None when BMR is missing or <= 0

    Raises:
        InvalidActivityFactorError: If the factor is not an allowed multiplier

    Example:
        >>> compute_get(1500, 1.55)
        2325.0
    """
    if (
        isinstance(activity_factor, bool)
        or not isinstance(activity_factor, Real)
        or not any(
            math.isclose(activity_factor, allowed, rel_tol=0.0, abs_tol=1e-9)
            for allowed in ALLOWED_ACTIVITY_FACTORS
        )
    ):
        raise InvalidActivityFactorError(activity_factor, ALLOWED_ACTIVITY_FACTORS)

    bmr = positive_or_none(bmr_kcal)
    if bmr is None:
        return None
    return bmr * activity_factor


def explain_get(bmr_kcal: Optional[float], activity_factor: float) -> Optional[FormulaBreakdown]:
    """Render GET = BMR × activity factor step by step.

    Returns:
        Optional[FormulaBreakdown]: Breakdown, None when BMR is missing

    Raises:
        InvalidActivityFactorError: If the factor is not an allowed multiplier
    """
    get_kcal = compute_get(bmr_kcal, activity_factor)
    if get_kcal is None:
        return None
    bmr = float(bmr_kcal)
    level = ActivityLevel.from_factor(activity_factor)
    factor_text = _num(activity_factor)
    if level is not None:
        factor_text = f"{factor_text} ({level.description()})"
    return FormulaBreakdown(
        name="Total energy expenditure (GET)",
        equation="BMR × activity factor",
        applied=f"{bmr:.0f} × {_num(activity_factor)} = {get_kcal:.0f}",
        steps=(
            BreakdownStep(label="BMR", value=f"{bmr:.0f} kcal"),
            BreakdownStep(label="Activity factor", value=factor_text),
            BreakdownStep(label="GET", value=f"{get_kcal:.0f} kcal/day"),
        ),
        result_kcal=get_kcal,
    )


def apply_goal(
    get_kcal: float,
    adjustment_kcal: int,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> float:
    """Apply a signed daily calorie adjustment to GET.

    Raises:
        GoalAdjustmentOutOfRangeError: If the adjustment is not an integral
            number within the configured range
    """
    minimum = settings.goal_adjustment_min_kcal
    maximum = settings.goal_adjustment_max_kcal
    if (
        isinstance(adjustment_kcal, bool)
        or not isinstance(adjustment_kcal, Real)
        or not math.isfinite(adjustment_kcal)
        or adjustment_kcal != int(adjustment_kcal)
        or not minimum <= adjustment_kcal <= maximum
    ):
        raise GoalAdjustmentOutOfRangeError(adjustment_kcal, minimum, maximum)
    return get_kcal + int(adjustment_kcal)


class EnergyService(IEnergyExpenditureCalculator):
    """Estimate resting and total energy expenditure.

    Supports ten published BMR equations, all linear in their inputs.
    Protocols whose inputs are missing are reported as unavailable;
    nothing here raises for missing data.
    """

    def __init__(self, settings: CalculationSettings = DEFAULT_SETTINGS):
        self._settings = settings

    def compute_bmr(
        self,
        protocol: BMRProtocol,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float] = None,
    ) -> Optional[float]:
        """Compute BMR with one protocol.

        Args:
            protocol: Equation to use
            profile: Biometric inputs
            lean_mass_kg: Overrides ``profile.lean_mass_kg`` when usable

        Returns:
            Optional[float]: BMR in kcal/day, None if an input is missing
        """
        terms = self._terms(protocol, profile, lean_mass_kg)
        if terms is None:
            return None
        bmr = sum(term.contribution for term in terms)
        if bmr <= 0:
            return None
        return bmr

    def explain_bmr(
        self,
        protocol: BMRProtocol,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float] = None,
    ) -> Optional[FormulaBreakdown]:
        """Render one protocol step by step, None when it is unavailable."""
        if self.compute_bmr(protocol, profile, lean_mass_kg) is None:
            return None
        terms = self._terms(protocol, profile, lean_mass_kg)
        return _breakdown(protocol, profile.sex, terms)

    def compare_protocols(
        self,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float] = None,
        protocols: Optional[Sequence[BMRProtocol]] = None,
    ) -> list[ProtocolEstimate]:
        """Evaluate every protocol and flag one recommendation.

        The recommendation is advisory: the first available lean-mass
        protocol when lean mass is known, otherwise Mifflin-St Jeor,
        otherwise the first available protocol.

        Args:
            profile: Biometric inputs
            lean_mass_kg: Overrides ``profile.lean_mass_kg`` when usable
            protocols: Comparison set (default from settings)

        Returns:
            list[ProtocolEstimate]: One entry per protocol, in input order
        """
        selected = tuple(
            dict.fromkeys(protocols or self._settings.energy_comparison_protocols)
        )
        values = {
            protocol: self.compute_bmr(protocol, profile, lean_mass_kg)
            for protocol in selected
        }
        recommended = self._recommend(values)

        estimates = [
            ProtocolEstimate(
                protocol=protocol,
                bmr_kcal=bmr,
                available=bmr is not None,
                recommended=protocol is recommended,
                requires_lean_mass=protocol.requires_lean_mass,
                breakdown=(
                    self.explain_bmr(protocol, profile, lean_mass_kg)
                    if bmr is not None
                    else None
                ),
            )
            for protocol, bmr in values.items()
        ]
        logger.debug(
            "energy_protocols_compared",
            available=[e.protocol.value for e in estimates if e.available],
            recommended=recommended.value if recommended else None,
        )
        return estimates

    def build_result(
        self,
        bmr_kcal: Optional[float],
        activity_factor: float,
        goal_adjustment_kcal: int = 0,
        exercise_kcal: Optional[float] = None,
    ) -> Optional[EnergyResult]:
        """Combine BMR, activity factor, planned exercise and goal adjustment.

        target = GET + daily exercise + goal adjustment. A missing or
        non-positive exercise value counts as no exercise.

        Returns:
            Optional[EnergyResult]: Result, None when BMR is unavailable

        Raises:
            InvalidActivityFactorError: Factor not allowed
            GoalAdjustmentOutOfRangeError: Adjustment not allowed
        """
        get_kcal = compute_get(bmr_kcal, activity_factor)
        if get_kcal is None:
            return None
        exercise = positive_or_none(exercise_kcal) or 0.0
        target = apply_goal(get_kcal + exercise, goal_adjustment_kcal, self._settings)

        return EnergyResult(
            bmr_kcal=float(bmr_kcal),
            activity_factor=float(activity_factor),
            get_kcal=get_kcal,
            goal_adjustment_kcal=int(goal_adjustment_kcal),
            target_kcal=target,
            exercise_kcal=exercise,
            breakdown=explain_get(bmr_kcal, activity_factor),
        )

    @staticmethod
    def _terms(
        protocol: BMRProtocol,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float],
    ) -> Optional[Terms]:
        # An unusable explicit lean mass falls back to the profile value
        lean_mass = positive_or_none(lean_mass_kg)
        if lean_mass is None:
            lean_mass = positive_or_none(profile.lean_mass_kg)
        inputs = {
            EnergyInput.WEIGHT: positive_or_none(profile.weight_kg),
            EnergyInput.HEIGHT: positive_or_none(profile.height_cm),
            EnergyInput.AGE: positive_or_none(profile.age_years),
            EnergyInput.SEX: profile.sex,
            EnergyInput.LEAN_MASS: lean_mass,
        }
        if any(inputs[name] is None for name in protocol.required_inputs):
            return None
        return _FORMULAS[protocol](
            inputs[EnergyInput.WEIGHT],
            inputs[EnergyInput.HEIGHT],
            inputs[EnergyInput.AGE],
            inputs[EnergyInput.SEX],
            inputs[EnergyInput.LEAN_MASS],
        )

    @staticmethod
    def _recommend(values: dict[BMRProtocol, Optional[float]]) -> Optional[BMRProtocol]:
        available = [protocol for protocol, bmr in values.items() if bmr is not None]
        if not available:
            return None
        for protocol in available:
            if protocol.requires_lean_mass:
                return protocol
        if BMRProtocol.MIFFLIN_ST_JEOR in available:
            return BMRProtocol.MIFFLIN_ST_JEOR
        return available[0]
