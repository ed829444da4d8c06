"""Skinfold and circumference measurement sets."""

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Type, TypeVar, Union

from ..exceptions.domain_errors import InvalidMeasurementError


class SkinfoldSite(str, Enum):
    """Named caliper sites, values in millimeters."""

    TRICEPS = "triceps"
    BICEPS = "biceps"
    SUBSCAPULAR = "subscapular"
    SUPRAILIAC = "suprailiac"
    ABDOMINAL = "abdominal"
    THIGH = "thigh"
    CHEST = "chest"
    AXILLARY = "axillary"
    CALF = "calf"


class CircumferenceSite(str, Enum):
    """Named tape-measure sites, values in centimeters."""

    WAIST = "waist"
    HIP = "hip"
    WRIST = "wrist"
    ARM = "arm"
    CALF = "calf"


SiteT = TypeVar("SiteT", SkinfoldSite, CircumferenceSite)


def _normalize(
    raw: Mapping[Union[str, SiteT], Optional[float]],
    site_type: Type[SiteT],
) -> Mapping[SiteT, Optional[float]]:
    normalized: dict = {}
    for key, value in raw.items():
        try:
            site = site_type(key.strip().lower() if isinstance(key, str) else key)
        except ValueError:
            raise InvalidMeasurementError(str(key), "unknown site") from None

        if value is not None:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidMeasurementError(site.value, f"not a number: {value!r}")
            if not math.isfinite(value):
                raise InvalidMeasurementError(site.value, f"not finite: {value}")
        normalized[site] = value
    return MappingProxyType(normalized)


class _MeasurementSet:
    values: Mapping

    def get(self, site: SiteT) -> Optional[float]:
        """Return the measurement if present and > 0, else None."""
        value = self.values.get(site)
        if value is None or value <= 0:
            return None
        return float(value)

    def has_all(self, sites: Iterable[SiteT]) -> bool:
        return all(self.get(site) is not None for site in sites)

    def missing(self, sites: Iterable[SiteT]) -> list[SiteT]:
        """Sites among ``sites`` that are absent or not positive."""
        return [site for site in sites if self.get(site) is None]

    def sum_of(self, sites: Iterable[SiteT]) -> Optional[float]:
        """Sum the given sites.

        Returns:
            Optional[float]: Sum, or None unless every site is present and > 0
        """
        readings = [self.get(site) for site in sites]
        if any(reading is None for reading in readings):
            return None
        return float(sum(readings))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class SkinfoldSet(_MeasurementSet):
    """Skinfold thicknesses by site in millimeters.

    Example:
        >>> folds = SkinfoldSet.from_mapping({"triceps": 12, "subscapular": 10})
        >>> folds.get(SkinfoldSite.TRICEPS)
        12.0
    """

    values: Mapping[SkinfoldSite, Optional[float]] = field(
        default_factory=lambda: MappingProxyType({}), compare=True, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _normalize(self.values, SkinfoldSite))

    @classmethod
    def from_mapping(
        cls, raw: Mapping[Union[str, SkinfoldSite], Optional[float]]
    ) -> "SkinfoldSet":
        return cls(values=raw)


@dataclass(frozen=True)
class CircumferenceSet(_MeasurementSet):
    """Body circumferences by site in centimeters."""

    values: Mapping[CircumferenceSite, Optional[float]] = field(
        default_factory=lambda: MappingProxyType({}), compare=True, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _normalize(self.values, CircumferenceSite))

    @classmethod
    def from_mapping(
        cls, raw: Mapping[Union[str, CircumferenceSite], Optional[float]]
    ) -> "CircumferenceSet":
        return cls(values=raw)
