"""Source records consumed by the data source resolver.

Fields are typed loosely on purpose: records come straight from storage
or forms and may hold strings, blanks or zeros. The resolver decides what
is usable.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Union

DateLike = Union[date, str]


def _field(data: Mapping[str, Any], name: str, alias: str) -> Any:
    """Value under ``name``, or under ``alias`` when ``name`` is missing or None."""
    value = data.get(name)
    return value if value is not None else data.get(alias)


@dataclass(frozen=True)
class AnthropometryRecord:
    """One dated anthropometric assessment."""

    record_date: Optional[DateLike] = None
    weight_kg: Any = None
    height_cm: Any = None
    lean_mass_kg: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AnthropometryRecord":
        return cls(
            record_date=data.get("record_date"),
            weight_kg=_field(data, "weight_kg", "weight"),
            height_cm=_field(data, "height_cm", "height"),
            lean_mass_kg=_field(data, "lean_mass_kg", "lean_mass"),
        )


@dataclass(frozen=True)
class ProfileRecord:
    """Patient profile (registration data)."""

    weight_kg: Any = None
    height_cm: Any = None
    lean_mass_kg: Any = None
    sex: Any = None
    birth_date: Optional[DateLike] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProfileRecord":
        return cls(
            weight_kg=_field(data, "weight_kg", "weight"),
            height_cm=_field(data, "height_cm", "height"),
            lean_mass_kg=_field(data, "lean_mass_kg", "lean_mass"),
            sex=_field(data, "sex", "gender"),
            birth_date=data.get("birth_date"),
        )


@dataclass(frozen=True)
class ManualEntry:
    """Values typed directly into a calculation form."""

    weight_kg: Any = None
    height_cm: Any = None
    lean_mass_kg: Any = None
    sex: Any = None
    age_years: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ManualEntry":
        return cls(
            weight_kg=_field(data, "weight_kg", "weight"),
            height_cm=_field(data, "height_cm", "height"),
            lean_mass_kg=_field(data, "lean_mass_kg", "lean_mass"),
            sex=_field(data, "sex", "gender"),
            age_years=_field(data, "age_years", "age"),
        )
