"""SomatotypeService - Heath-Carter somatotype and skeletal frame size."""

from typing import Optional

import structlog

from ..core.value_objects.anthropometry import FrameSize, FrameSizeResult
from ..core.value_objects.biometric_profile import BiometricProfile, positive_or_none
from ..core.value_objects.measurements import (
    CircumferenceSet,
    CircumferenceSite,
    SkinfoldSet,
    SkinfoldSite,
)
from ..core.value_objects.sex import Sex
from ..core.value_objects.somatotype import BoneBreadths, Somatotype, SomatotypeComponent

logger = structlog.get_logger(__name__)

MIN_COMPONENT = 0.1
# Components closer than this are considered equal when naming the category
DOMINANCE_MARGIN = 0.5

ENDOMORPHY_SITES = (SkinfoldSite.TRICEPS, SkinfoldSite.SUBSCAPULAR, SkinfoldSite.SUPRAILIAC)
REFERENCE_HEIGHT_CM = 170.18

# (small_above, medium_above) thresholds for height / wrist
_FRAME_THRESHOLDS = {
    Sex.MALE: (10.9, 9.9),
    Sex.FEMALE: (11.0, 10.1),
}


def frame_size(
    height_cm: Optional[float], wrist_cm: Optional[float], sex: Optional[Sex]
) -> Optional[FrameSizeResult]:
    """Classify skeletal frame from the height/wrist circumference ratio.

    Args:
        height_cm: Height in centimeters
        wrist_cm: Wrist circumference in centimeters
        sex: Biological sex

    Returns:
        Optional[FrameSizeResult]: Frame size, None if any input is missing
    """
    height = positive_or_none(height_cm)
    wrist = positive_or_none(wrist_cm)
    if height is None or wrist is None or sex is None:
        return None

    ratio = height / wrist
    small_above, medium_above = _FRAME_THRESHOLDS[sex]
    if ratio > small_above:
        size = FrameSize.SMALL
    elif ratio > medium_above:
        size = FrameSize.MEDIUM
    else:
        size = FrameSize.LARGE
    return FrameSizeResult(size=size, ratio=ratio)


def endomorphy(skinfolds: SkinfoldSet, height_cm: Optional[float]) -> Optional[float]:
    """Height-corrected endomorphy from triceps, subscapular and suprailiac."""
    height = positive_or_none(height_cm)
    total = skinfolds.sum_of(ENDOMORPHY_SITES)
    if height is None or total is None:
        return None
    x = total * REFERENCE_HEIGHT_CM / height
    value = -0.7182 + 0.1451 * x - 0.00068 * x**2 + 0.0000014 * x**3
    return max(value, MIN_COMPONENT)


def mesomorphy(
    skinfolds: SkinfoldSet,
    circumferences: CircumferenceSet,
    breadths: BoneBreadths,
    height_cm: Optional[float],
) -> Optional[float]:
    """Mesomorphy from bone breadths and skinfold-corrected girths.

    Arm and calf girths are corrected by subtracting the triceps and calf
    skinfolds (converted from mm to cm).
    """
    inputs = (
        positive_or_none(height_cm),
        positive_or_none(breadths.humerus_cm),
        positive_or_none(breadths.femur_cm),
        circumferences.get(CircumferenceSite.ARM),
        circumferences.get(CircumferenceSite.CALF),
        skinfolds.get(SkinfoldSite.TRICEPS),
        skinfolds.get(SkinfoldSite.CALF),
    )
    if any(value is None for value in inputs):
        return None
    height, humerus, femur, arm, calf, triceps_fold, calf_fold = inputs

    corrected_arm = arm - triceps_fold / 10.0
    corrected_calf = calf - calf_fold / 10.0
    value = (
        0.858 * humerus
        + 0.601 * femur
        + 0.188 * corrected_arm
        + 0.161 * corrected_calf
        - 0.131 * height
        + 4.5
    )
    return max(value, MIN_COMPONENT)


def ectomorphy(height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
    """Ectomorphy from the height-weight ratio (height / cube root of weight)."""
    height = positive_or_none(height_cm)
    weight = positive_or_none(weight_kg)
    if height is None or weight is None:
        return None
    hwr = height / weight ** (1.0 / 3.0)
    if hwr >= 40.75:
        value = 0.732 * hwr - 28.58
    elif hwr > 38.25:
        value = 0.463 * hwr - 17.63
    else:
        value = MIN_COMPONENT
    return max(value, MIN_COMPONENT)


def describe(
    endo: float, meso: float, ecto: float
) -> tuple[Optional[SomatotypeComponent], str]:
    """Name the somatotype category.

    Returns:
        Tuple of (dominant component or None, category description)
    """
    ranked = sorted(
        (
            (endo, SomatotypeComponent.ENDOMORPHY),
            (meso, SomatotypeComponent.MESOMORPHY),
            (ecto, SomatotypeComponent.ECTOMORPHY),
        ),
        key=lambda item: item[0],
        reverse=True,
    )
    (first, top), (second, runner_up), (third, _) = ranked

    if first - second < DOMINANCE_MARGIN:
        if second - third < DOMINANCE_MARGIN:
            return None, "central"
        return None, f"{top.noun}-{runner_up.noun}"
    if second - third < DOMINANCE_MARGIN:
        return top, f"balanced {top.noun}"
    return top, f"{runner_up.adjective} {top.noun}"


class SomatotypeService:
    """Compute the Heath-Carter anthropometric somatotype."""

    def calculate(
        self,
        profile: BiometricProfile,
        skinfolds: SkinfoldSet,
        circumferences: CircumferenceSet,
        breadths: BoneBreadths,
    ) -> Optional[Somatotype]:
        """Compute all three components and the somatochart coordinates.

        Args:
            profile: Height and weight
            skinfolds: Triceps, subscapular, suprailiac and calf skinfolds
            circumferences: Arm and calf girths
            breadths: Humerus and femur breadths

        Returns:
            Optional[Somatotype]: Rating, None unless every component is
                computable
        """
        endo = endomorphy(skinfolds, profile.height_cm)
        meso = mesomorphy(skinfolds, circumferences, breadths, profile.height_cm)
        ecto = ectomorphy(profile.height_cm, profile.weight_kg)

        if endo is None or meso is None or ecto is None:
            logger.debug(
                "somatotype_incomplete",
                endomorphy=endo,
                mesomorphy=meso,
                ectomorphy=ecto,
            )
            return None

        dominant, description = describe(endo, meso, ecto)
        return Somatotype(
            endomorphy=endo,
            mesomorphy=meso,
            ectomorphy=ecto,
            x=ecto - endo,
            y=2 * meso - (endo + ecto),
            dominant=dominant,
            description=description,
        )
