"""CompositionService - body density and body fat estimation."""

import math
from typing import Optional, Union

import structlog

from ..core.ports.calculators import IBodyCompositionEstimator
from ..core.value_objects.biometric_profile import BiometricProfile, positive_or_none
from ..core.value_objects.composition import (
    CompositionProtocol,
    CompositionResult,
    DensityForm,
    NotComputable,
    NotComputableReason,
    SkinfoldEquation,
)
from ..core.value_objects.measurements import SkinfoldSet
from ..core.value_objects.sex import Sex

logger = structlog.get_logger(__name__)

CompositionOutcome = Union[CompositionResult, NotComputable]


def body_density(equation: SkinfoldEquation, sex: Sex, skinfold_sum: float, age: float) -> float:
    """Evaluate a skinfold regression.

    Args:
        equation: Protocol equation
        sex: Selects the coefficient set
        skinfold_sum: Sum of the protocol's sites in mm (must be > 0)
        age: Age in years (ignored by the log form)

    Returns:
        float: Body density in g/cm³
    """
    c = equation.coefficients(sex)
    if equation.form is DensityForm.LOG10:
        return c.c0 - c.c1 * math.log10(skinfold_sum)
    return c.c0 - c.c1 * skinfold_sum + c.c2 * skinfold_sum**2 - c.c3 * age


def siri_body_fat(density: float) -> Optional[float]:
    """Siri equation: bf% = (4.95 / density - 4.5) × 100.

    Returns:
        Optional[float]: Body fat percent, None for a non-positive density
    """
    if density <= 0:
        return None
    return (4.95 / density - 4.5) * 100


class CompositionService(IBodyCompositionEstimator):
    """Estimate body composition from skinfolds or bioimpedance.

    Skinfold protocols:
        - skinfold_3: Jackson & Pollock 3-site (1978/1980)
        - skinfold_7: Jackson & Pollock 7-site (1978/1980)
        - skinfold_4: Weltman 4-site, log form, age independent

    Results whose body fat falls outside (0, 100) are discarded, never
    clamped.
    """

    def estimate(
        self,
        protocol: CompositionProtocol,
        profile: BiometricProfile,
        skinfolds: Optional[SkinfoldSet] = None,
        bioimpedance_body_fat_percent: Optional[float] = None,
    ) -> CompositionOutcome:
        """Estimate body composition with a single protocol.

        Example:
            >>> folds = SkinfoldSet.from_mapping(
            ...     {"triceps": 12, "subscapular": 10, "suprailiac": 14}
            ... )
            >>> profile = BiometricProfile(weight_kg=80, age_years=30, sex="male")
            >>> result = CompositionService().estimate(
            ...     CompositionProtocol.SKINFOLD_3, profile, folds
            ... )
            >>> round(result.body_fat_percent, 2)
            10.91
        """
        weight = positive_or_none(profile.weight_kg)
        if weight is None:
            return self._not_computable(
                protocol, NotComputableReason.MISSING_INPUT, "weight_kg is required"
            )

        if protocol is CompositionProtocol.BIOIMPEDANCE:
            if bioimpedance_body_fat_percent is None:
                return self._not_computable(
                    protocol,
                    NotComputableReason.MISSING_INPUT,
                    "bioimpedance body fat percent is required",
                )
            return self._build(protocol, None, float(bioimpedance_body_fat_percent), weight)

        equation = protocol.equation
        skinfolds = skinfolds or SkinfoldSet()

        missing = []
        if profile.sex is None:
            missing.append("sex")
        age = positive_or_none(profile.age_years)
        if equation.requires_age and age is None:
            missing.append("age_years")
        missing.extend(site.value for site in skinfolds.missing(equation.required_sites))
        if missing:
            return self._not_computable(
                protocol,
                NotComputableReason.MISSING_INPUT,
                f"missing: {', '.join(missing)}",
            )

        skinfold_sum = skinfolds.sum_of(equation.required_sites)
        density = body_density(equation, profile.sex, skinfold_sum, age or 0.0)
        body_fat = siri_body_fat(density)
        if body_fat is None:
            return self._not_computable(
                protocol,
                NotComputableReason.OUT_OF_RANGE,
                f"body density {density:.4f} is not positive",
            )
        return self._build(protocol, density, body_fat, weight)

    def compare(
        self,
        profile: BiometricProfile,
        skinfolds: Optional[SkinfoldSet] = None,
        bioimpedance_body_fat_percent: Optional[float] = None,
    ) -> dict[CompositionProtocol, CompositionOutcome]:
        """Evaluate every composition protocol with the same inputs."""
        return {
            protocol: self.estimate(
                protocol, profile, skinfolds, bioimpedance_body_fat_percent
            )
            for protocol in CompositionProtocol
        }

    def _build(
        self,
        protocol: CompositionProtocol,
        density: Optional[float],
        body_fat_percent: float,
        weight: float,
    ) -> CompositionOutcome:
        if not 0 < body_fat_percent < 100:
            return self._not_computable(
                protocol,
                NotComputableReason.OUT_OF_RANGE,
                f"body fat {body_fat_percent:.2f}% is outside (0, 100)",
            )

        fat_mass = weight * body_fat_percent / 100
        result = CompositionResult(
            protocol=protocol,
            body_density=density,
            body_fat_percent=body_fat_percent,
            fat_mass_kg=fat_mass,
            lean_mass_kg=weight - fat_mass,
        )
        logger.debug(
            "body_composition_estimated",
            protocol=protocol.value,
            body_density=density,
            body_fat_percent=body_fat_percent,
        )
        return result

    @staticmethod
    def _not_computable(
        protocol: CompositionProtocol, reason: NotComputableReason, detail: str
    ) -> NotComputable:
        logger.info(
            "body_composition_not_computable",
            protocol=protocol.value,
            reason=reason.value,
            detail=detail,
        )
        return NotComputable(protocol=protocol, reason=reason, detail=detail)
