"""DataSourceResolver - merge anthropometry, profile and manual inputs."""

import math
from datetime import date, datetime
from numbers import Real
from typing import Any, Iterable, Optional

import structlog

from ..core.value_objects.biometric_profile import BiometricProfile
from ..core.value_objects.provenance import Provenance
from ..core.value_objects.resolved_profile import ResolvedProfile
from ..core.value_objects.sex import Sex
from .records import AnthropometryRecord, DateLike, ManualEntry, ProfileRecord

logger = structlog.get_logger(__name__)

MEASURED_FIELDS = ("weight_kg", "height_cm", "lean_mass_kg")


def usable_number(value: Any) -> Optional[float]:
    """Return value as a positive float, or None if it cannot be used.

    Numeric strings (``"72.5"``, ``"72,5"``) are accepted since records
    often store form input verbatim.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _as_date(value: Optional[DateLike]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def age_on(birth_date: Optional[DateLike], reference_date: date) -> Optional[int]:
    """Completed years between birth_date and reference_date.

    Returns:
        Optional[int]: Age, None if birth_date is missing, malformed or in
            the future
    """
    born = _as_date(birth_date)
    if born is None or born > reference_date:
        return None
    had_birthday = (reference_date.month, reference_date.day) >= (born.month, born.day)
    return reference_date.year - born.year - (0 if had_birthday else 1)


class DataSourceResolver:
    """Assemble a BiometricProfile from several record sources.

    Precedence:
        - weight, height, lean mass: latest anthropometry record, then the
          profile record, then manual entry
        - sex, age: profile record (age from birth date), then manual entry

    Absent, non-numeric and non-positive values are skipped so that the
    next source is tried.
    """

    def resolve(
        self,
        anthropometry: Iterable[AnthropometryRecord] = (),
        profile: Optional[ProfileRecord] = None,
        manual: Optional[ManualEntry] = None,
        reference_date: Optional[date] = None,
    ) -> ResolvedProfile:
        """Resolve every input field.

        Args:
            anthropometry: Assessment history, in any order
            profile: Registration record
            manual: Values typed into the form
            reference_date: Date for age computation (default: today)

        Returns:
            ResolvedProfile: Merged profile with per-field provenance
        """
        reference = reference_date or date.today()
        latest = self._latest(anthropometry)
        profile = profile or ProfileRecord()
        manual = manual or ManualEntry()

        values: dict[str, Any] = {}
        provenance: dict[str, Provenance] = {}

        for name in MEASURED_FIELDS:
            candidates = (
                (getattr(latest, name, None), Provenance.ANTHROPOMETRY),
                (getattr(profile, name), Provenance.PROFILE),
                (getattr(manual, name), Provenance.MANUAL),
            )
            for raw, source in candidates:
                number = usable_number(raw)
                if number is not None:
                    values[name] = number
                    provenance[name] = source
                    break

        for raw, source in ((profile.sex, Provenance.PROFILE), (manual.sex, Provenance.MANUAL)):
            sex = Sex.parse(raw)
            if sex is not None:
                values["sex"] = sex
                provenance["sex"] = source
                break

        age = age_on(profile.birth_date, reference)
        if age is not None and age > 0:
            values["age_years"] = age
            provenance["age_years"] = Provenance.PROFILE
        else:
            manual_age = usable_number(manual.age_years)
            if manual_age is not None:
                values["age_years"] = manual_age
                provenance["age_years"] = Provenance.MANUAL

        resolved = ResolvedProfile(profile=BiometricProfile(**values), provenance=provenance)
        logger.debug(
            "data_sources_resolved",
            provenance={name: source.value for name, source in provenance.items()},
        )
        return resolved

    @staticmethod
    def _latest(records: Iterable[AnthropometryRecord]) -> Optional[AnthropometryRecord]:
        """Most recent record by date; undated records rank last."""
        latest = None
        latest_date = None
        for record in records:
            record_date = _as_date(record.record_date)
            if latest is None or (
                record_date is not None and (latest_date is None or record_date > latest_date)
            ):
                latest, latest_date = record, record_date
        return latest
