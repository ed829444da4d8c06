"""ResolvedProfile value object - merged inputs with per-field provenance."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .biometric_profile import BiometricProfile
from .provenance import Provenance


@dataclass(frozen=True)
class ResolvedProfile:
    """Biometric profile assembled from several record sources.

    Attributes:
        profile: Merged inputs ready for the calculators
        provenance: Source of each resolved field, keyed by field name;
            fields that could not be resolved are absent
    """

    profile: BiometricProfile
    provenance: Mapping[str, Provenance] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "provenance", MappingProxyType(dict(self.provenance)))

    def source_of(self, field_name: str) -> Optional[Provenance]:
        return self.provenance.get(field_name)
