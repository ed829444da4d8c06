"""BiometricProfile value object - inputs shared by every calculator."""

import math
from dataclasses import dataclass, replace
from numbers import Real
from typing import Optional, Union

from ..exceptions.domain_errors import InvalidBiometricDataError
from .sex import Sex


def positive_or_none(value: Optional[float]) -> Optional[float]:
    """Return value as float when it is present, finite and > 0, else None.

    Formulas treat a missing, non-finite or non-positive measurement the
    same way: the dependent output is omitted.
    """
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return float(value)


@dataclass(frozen=True)
class BiometricProfile:
    """Biometric data for a single calculation call.

    Immutable value object built fresh from the current record state.
    Every field is optional so that partially filled forms can be
    evaluated; formulas that need a missing field are simply skipped.

    Attributes:
        weight_kg: Body weight in kilograms
        height_cm: Height in centimeters
        age_years: Age in whole years
        sex: Biological sex (strings such as ``"M"`` are normalized)
        lean_mass_kg: Fat-free mass in kilograms, when known
    """

    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age_years: Optional[float] = None
    sex: Optional[Union[Sex, str]] = None
    lean_mass_kg: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate field types and normalize sex.

        Raises:
            InvalidBiometricDataError: If a number is not a finite real
                value or sex is not recognized
        """
        for name in ("weight_kg", "height_cm", "age_years", "lean_mass_kg"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidBiometricDataError(
                    f"{name} must be a number, got {value!r}"
                )
            if not math.isfinite(value):
                raise InvalidBiometricDataError(f"{name} must be finite, got {value}")

        if self.sex is not None:
            parsed = Sex.parse(self.sex)
            if parsed is None:
                raise InvalidBiometricDataError(
                    f"Sex must be 'male' or 'female', got {self.sex!r}"
                )
            object.__setattr__(self, "sex", parsed)

    @property
    def height_m(self) -> Optional[float]:
        """Height in meters, or None when height is unavailable."""
        height = positive_or_none(self.height_cm)
        return height / 100.0 if height is not None else None

    def with_lean_mass(self, lean_mass_kg: Optional[float]) -> "BiometricProfile":
        """Return a copy carrying the given lean mass."""
        return replace(self, lean_mass_kg=lean_mass_kg)
