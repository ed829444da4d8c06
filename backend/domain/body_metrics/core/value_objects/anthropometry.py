"""Anthropometric index value objects - BMI, ideal weight, WHR, frame size."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BMICategory(str, Enum):
    """BMI band, lower bound of each band inclusive."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class WHRRisk(str, Enum):
    """Waist-hip ratio risk band."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class WeightStatus(str, Enum):
    """Current weight compared with the ideal-weight band."""

    BELOW = "below"
    WITHIN = "within"
    ABOVE = "above"


class FrameSize(str, Enum):
    """Skeletal frame size from the height/wrist ratio."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass(frozen=True)
class IdealWeightRange:
    """Weight band matching a normal BMI for a given height.

    Attributes:
        min_kg: Weight at BMI 18.5
        max_kg: Weight at BMI 24.9
        current_kg: Current weight, when supplied
        status: Position of the current weight against the band
    """

    min_kg: float
    max_kg: float
    current_kg: Optional[float] = None
    status: Optional[WeightStatus] = None

    def __post_init__(self) -> None:
        if self.min_kg > self.max_kg:
            raise ValueError(
                f"Ideal weight min must not exceed max, got {self.min_kg} > {self.max_kg}"
            )


@dataclass(frozen=True)
class FrameSizeResult:
    """Frame size classification with the ratio it was derived from."""

    size: FrameSize
    ratio: float


@dataclass(frozen=True)
class AnthropometricIndices:
    """All anthropometric indices computable from a profile.

    Fields are None when their inputs are missing.
    """

    bmi: Optional[float]
    bmi_category: Optional[BMICategory]
    ideal_weight_range: Optional[IdealWeightRange]
    whr: Optional[float] = None
    whr_category: Optional[WHRRisk] = None
    frame_size: Optional[FrameSizeResult] = None
