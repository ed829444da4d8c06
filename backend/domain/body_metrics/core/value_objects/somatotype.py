"""Somatotype value objects (Heath-Carter method)."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class BoneBreadths:
    """Biepicondylar bone breadths in centimeters."""

    humerus_cm: Optional[float] = None
    femur_cm: Optional[float] = None


class SomatotypeComponent(str, Enum):
    ENDOMORPHY = "endomorphy"
    MESOMORPHY = "mesomorphy"
    ECTOMORPHY = "ectomorphy"

    @property
    def noun(self) -> str:
        """``endomorphy`` -> ``endomorph``."""
        return self.value[:-1]

    @property
    def adjective(self) -> str:
        """``endomorphy`` -> ``endomorphic``."""
        return self.value[:-1] + "ic"


@dataclass(frozen=True)
class Somatotype:
    """Heath-Carter somatotype rating.

    Attributes:
        endomorphy: Relative fatness
        mesomorphy: Relative musculo-skeletal robustness
        ectomorphy: Relative linearity
        x: Somatochart abscissa (ecto - endo)
        y: Somatochart ordinate (2*meso - (endo + ecto))
        dominant: Component exceeding both others by at least half a unit,
            None when no single component dominates
        description: Category name, e.g. ``"endomorphic mesomorph"``
    """

    endomorphy: float
    mesomorphy: float
    ectomorphy: float
    x: float
    y: float
    dominant: Optional[SomatotypeComponent]
    description: str

    def __str__(self) -> str:
        return f"{self.endomorphy:.1f}-{self.mesomorphy:.1f}-{self.ectomorphy:.1f}"
