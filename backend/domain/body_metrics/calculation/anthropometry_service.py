"""AnthropometryService - BMI, ideal weight range and waist-hip ratio."""

from typing import Optional

import structlog

from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from ..core.value_objects.anthropometry import (
    AnthropometricIndices,
    BMICategory,
    IdealWeightRange,
    WeightStatus,
    WHRRisk,
)
from ..core.value_objects.biometric_profile import BiometricProfile, positive_or_none
from ..core.value_objects.measurements import CircumferenceSet, CircumferenceSite
from ..core.value_objects.sex import Sex
from .somatotype_service import frame_size

logger = structlog.get_logger(__name__)

BMI_NORMAL_MIN = 18.5
BMI_NORMAL_MAX = 24.9
BMI_OVERWEIGHT_MIN = 25.0
BMI_OBESE_MIN = 30.0

# (moderate_from, high_from); lower bound of each band inclusive
_WHR_SHARED_CUTS = (0.85, 0.95)
_WHR_SEX_CUTS = {
    Sex.MALE: (0.95, 1.0),
    Sex.FEMALE: (0.80, 0.85),
}


def compute_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    """Body-mass index: weight / height².

    Args:
        weight_kg: Body weight in kilograms
        height_cm: Height in centimeters

    Returns:
        Optional[float]: BMI in kg/m², None if either input is missing or <= 0

    Example:
        >>> round(compute_bmi(70, 170), 2)
        24.22
    """
    weight = positive_or_none(weight_kg)
    height = positive_or_none(height_cm)
    if weight is None or height is None:
        return None
    height_m = height / 100.0
    return weight / (height_m**2)


def classify_bmi(bmi: float) -> BMICategory:
    """Classify BMI; each band includes its lower bound."""
    if bmi < BMI_NORMAL_MIN:
        return BMICategory.UNDERWEIGHT
    if bmi < BMI_OVERWEIGHT_MIN:
        return BMICategory.NORMAL
    if bmi < BMI_OBESE_MIN:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def ideal_weight_range(
    height_cm: Optional[float], current_weight_kg: Optional[float] = None
) -> Optional[IdealWeightRange]:
    """Weight band matching BMI 18.5-24.9 for the given height.

    Args:
        height_cm: Height in centimeters
        current_weight_kg: Current weight, used to fill ``status``

    Returns:
        Optional[IdealWeightRange]: Band, None when height is unavailable
    """
    height = positive_or_none(height_cm)
    if height is None:
        return None

    height_sq = (height / 100.0) ** 2
    min_kg = BMI_NORMAL_MIN * height_sq
    max_kg = BMI_NORMAL_MAX * height_sq

    current = positive_or_none(current_weight_kg)
    status = None
    if current is not None:
        if current < min_kg:
            status = WeightStatus.BELOW
        elif current > max_kg:
            status = WeightStatus.ABOVE
        else:
            status = WeightStatus.WITHIN

    return IdealWeightRange(min_kg=min_kg, max_kg=max_kg, current_kg=current, status=status)


def compute_whr(waist_cm: Optional[float], hip_cm: Optional[float]) -> Optional[float]:
    """Waist-hip ratio, None if either circumference is missing or <= 0."""
    waist = positive_or_none(waist_cm)
    hip = positive_or_none(hip_cm)
    if waist is None or hip is None:
        return None
    return waist / hip


def classify_whr(
    whr: float, sex: Optional[Sex] = None, sex_specific: bool = False
) -> WHRRisk:
    """Classify a waist-hip ratio into a risk band.

    By default everyone shares the 0.85 / 0.95 cut points. With
    ``sex_specific`` the male (0.95 / 1.0) and female (0.80 / 0.85) cut
    points are used, falling back to the shared ones when sex is unknown.
    """
    moderate_from, high_from = _WHR_SHARED_CUTS
    if sex_specific and sex is not None:
        moderate_from, high_from = _WHR_SEX_CUTS[sex]

    if whr < moderate_from:
        return WHRRisk.LOW
    if whr < high_from:
        return WHRRisk.MODERATE
    return WHRRisk.HIGH


class AnthropometryService:
    """Compute every anthropometric index available for a profile."""

    def __init__(self, settings: CalculationSettings = DEFAULT_SETTINGS):
        self._settings = settings

    def compute(
        self,
        profile: BiometricProfile,
        circumferences: Optional[CircumferenceSet] = None,
    ) -> AnthropometricIndices:
        """Compute BMI, ideal weight range, WHR and frame size.

        Indices whose inputs are missing are left as None.

        Args:
            profile: Biometric inputs
            circumferences: Tape measurements (waist, hip, wrist)

        Returns:
            AnthropometricIndices: Computed indices
        """
        circumferences = circumferences or CircumferenceSet()

        bmi = compute_bmi(profile.weight_kg, profile.height_cm)
        ideal = ideal_weight_range(profile.height_cm, profile.weight_kg)

        whr = compute_whr(
            circumferences.get(CircumferenceSite.WAIST),
            circumferences.get(CircumferenceSite.HIP),
        )
        whr_category = (
            classify_whr(whr, profile.sex, self._settings.whr_sex_specific)
            if whr is not None
            else None
        )

        frame = frame_size(
            profile.height_cm, circumferences.get(CircumferenceSite.WRIST), profile.sex
        )

        indices = AnthropometricIndices(
            bmi=bmi,
            bmi_category=classify_bmi(bmi) if bmi is not None else None,
            ideal_weight_range=ideal,
            whr=whr,
            whr_category=whr_category,
            frame_size=frame,
        )

        logger.debug(
            "anthropometric_indices_computed",
            bmi=bmi,
            bmi_category=indices.bmi_category,
            whr=whr,
            whr_category=whr_category,
        )
        return indices
