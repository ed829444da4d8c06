"""Body composition value objects and skinfold protocol tables."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .measurements import SkinfoldSite
from .sex import Sex


class DensityForm(str, Enum):
    """Functional form of a skinfold regression."""

    QUADRATIC = "quadratic"  # c0 - c1*S + c2*S^2 - c3*age
    LOG10 = "log10"  # c0 - c1*log10(S)


@dataclass(frozen=True)
class DensityCoefficients:
    """Regression coefficients for one sex of one protocol."""

    c0: float
    c1: float
    c2: float = 0.0
    c3: float = 0.0


@dataclass(frozen=True)
class SkinfoldEquation:
    """Everything needed to evaluate a density regression."""

    form: DensityForm
    required_sites: tuple[SkinfoldSite, ...]
    requires_age: bool
    male: DensityCoefficients
    female: DensityCoefficients

    def coefficients(self, sex: Sex) -> DensityCoefficients:
        return self.male if sex is Sex.MALE else self.female


class CompositionProtocol(str, Enum):
    """Body composition protocol.

    Skinfold protocols produce a body density that is converted with the
    Siri equation; bioimpedance supplies body fat percent directly.
    """

    SKINFOLD_3 = "skinfold_3"  # Jackson & Pollock 3-site
    SKINFOLD_7 = "skinfold_7"  # Jackson & Pollock 7-site
    SKINFOLD_4 = "skinfold_4"  # Weltman 4-site
    BIOIMPEDANCE = "bioimpedance"

    @property
    def equation(self) -> Optional[SkinfoldEquation]:
        """Density equation, or None for bioimpedance."""
        return _EQUATIONS.get(self)

    @property
    def required_sites(self) -> tuple[SkinfoldSite, ...]:
        equation = self.equation
        return equation.required_sites if equation else ()

    @property
    def uses_density(self) -> bool:
        return self.equation is not None


_EQUATIONS = {
    CompositionProtocol.SKINFOLD_3: SkinfoldEquation(
        form=DensityForm.QUADRATIC,
        required_sites=(
            SkinfoldSite.TRICEPS,
            SkinfoldSite.SUBSCAPULAR,
            SkinfoldSite.SUPRAILIAC,
        ),
        requires_age=True,
        male=DensityCoefficients(c0=1.10938, c1=0.0008267, c2=0.0000016, c3=0.0002574),
        female=DensityCoefficients(c0=1.0994921, c1=0.0009929, c2=0.0000023, c3=0.0001392),
    ),
    CompositionProtocol.SKINFOLD_7: SkinfoldEquation(
        form=DensityForm.QUADRATIC,
        required_sites=(
            SkinfoldSite.CHEST,
            SkinfoldSite.AXILLARY,
            SkinfoldSite.TRICEPS,
            SkinfoldSite.SUBSCAPULAR,
            SkinfoldSite.ABDOMINAL,
            SkinfoldSite.SUPRAILIAC,
            SkinfoldSite.THIGH,
        ),
        requires_age=True,
        male=DensityCoefficients(c0=1.112, c1=0.00043499, c2=0.00000055, c3=0.00028826),
        female=DensityCoefficients(c0=1.097, c1=0.00046971, c2=0.00000056, c3=0.00012828),
    ),
    CompositionProtocol.SKINFOLD_4: SkinfoldEquation(
        form=DensityForm.LOG10,
        required_sites=(
            SkinfoldSite.TRICEPS,
            SkinfoldSite.BICEPS,
            SkinfoldSite.SUBSCAPULAR,
            SkinfoldSite.SUPRAILIAC,
        ),
        requires_age=False,
        male=DensityCoefficients(c0=1.1714, c1=0.0671),
        female=DensityCoefficients(c0=1.1665, c1=0.0706),
    ),
}


class NotComputableReason(str, Enum):
    MISSING_INPUT = "missing_input"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class CompositionResult:
    """Estimated body composition.

    Attributes:
        protocol: Protocol that produced the estimate
        body_density: Body density in g/cm³ (None for bioimpedance)
        body_fat_percent: Body fat percentage, strictly between 0 and 100
        fat_mass_kg: Fat mass in kg
        lean_mass_kg: Fat-free mass in kg
    """

    protocol: CompositionProtocol
    body_density: Optional[float]
    body_fat_percent: float
    fat_mass_kg: float
    lean_mass_kg: float

    def __post_init__(self) -> None:
        if not 0 < self.body_fat_percent < 100:
            raise ValueError(
                f"Body fat percent must be in (0, 100), got {self.body_fat_percent}"
            )


@dataclass(frozen=True)
class NotComputable:
    """Outcome of a composition estimate that could not be produced.

    Attributes:
        protocol: Protocol that was requested
        reason: Missing input or out-of-range result
        detail: Human-readable explanation
    """

    protocol: CompositionProtocol
    reason: NotComputableReason
    detail: str
