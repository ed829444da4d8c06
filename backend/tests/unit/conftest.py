"""Unit test configuration.

Shared biometric fixtures. Unit tests do not depend on app.py.
"""

import pytest

from domain.body_metrics.core.value_objects import BiometricProfile, Sex, SkinfoldSet


@pytest.fixture
def male_profile() -> BiometricProfile:
    """80 kg, 180 cm, 30 year old male."""
    return BiometricProfile(weight_kg=80.0, height_cm=180.0, age_years=30, sex=Sex.MALE)


@pytest.fixture
def female_profile() -> BiometricProfile:
    """60 kg, 165 cm, 40 year old female."""
    return BiometricProfile(weight_kg=60.0, height_cm=165.0, age_years=40, sex=Sex.FEMALE)


@pytest.fixture
def three_site_skinfolds() -> SkinfoldSet:
    """Triceps 12 mm, subscapular 10 mm, suprailiac 14 mm (sum 36)."""
    return SkinfoldSet.from_mapping({"triceps": 12, "subscapular": 10, "suprailiac": 14})
