"""Unit tests for DataSourceResolver."""

from datetime import date

import pytest
from freezegun import freeze_time

from domain.body_metrics.core.value_objects import Provenance, Sex
from domain.body_metrics.resolution import (
    AnthropometryRecord,
    DataSourceResolver,
    ManualEntry,
    ProfileRecord,
    age_on,
    usable_number,
)


class TestUsableNumber:
    """Test record value coercion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [(72.5, 72.5), (80, 80.0), ("72.5", 72.5), ("72,5", 72.5), (" 180 ", 180.0)],
    )
    def test_usable(self, raw, expected):
        assert usable_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", 0, -3, "0", True, float("nan")])
    def test_unusable(self, raw):
        assert usable_number(raw) is None


class TestAgeOn:
    """Test completed-years age."""

    def test_birthday_not_reached(self):
        assert age_on(date(1990, 6, 16), date(2024, 6, 15)) == 33

    def test_birthday_today(self):
        assert age_on("1990-06-15", date(2024, 6, 15)) == 34

    def test_future_or_malformed(self):
        assert age_on(date(2030, 1, 1), date(2024, 6, 15)) is None
        assert age_on("15/06/1990", date(2024, 6, 15)) is None
        assert age_on(None, date(2024, 6, 15)) is None


class TestDataSourceResolver:
    """Test precedence between record sources."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = DataSourceResolver()

    def test_latest_anthropometry_wins(self):
        records = [
            AnthropometryRecord(record_date=date(2024, 1, 1), weight_kg=82, height_cm=178),
            AnthropometryRecord(record_date="2024-03-01", weight_kg=80),
            AnthropometryRecord(record_date=None, weight_kg=90),
        ]
        profile = ProfileRecord(weight_kg=85, height_cm=175, sex="M")
        manual = ManualEntry(weight_kg=70, height_cm=170, lean_mass_kg=60)

        resolved = self.resolver.resolve(records, profile, manual, date(2024, 6, 15))

        assert resolved.profile.weight_kg == 80
        assert resolved.source_of("weight_kg") == Provenance.ANTHROPOMETRY
        # Latest record has no height: the profile is next, not an older record
        assert resolved.profile.height_cm == 175
        assert resolved.source_of("height_cm") == Provenance.PROFILE
        assert resolved.profile.lean_mass_kg == 60
        assert resolved.source_of("lean_mass_kg") == Provenance.MANUAL

    def test_non_positive_values_fall_through(self):
        records = [AnthropometryRecord(record_date="2024-03-01", weight_kg=0)]
        profile = ProfileRecord(weight_kg="", height_cm="175,5")
        manual = ManualEntry(weight_kg="72.5")

        resolved = self.resolver.resolve(records, profile, manual, date(2024, 6, 15))

        assert resolved.profile.weight_kg == 72.5
        assert resolved.source_of("weight_kg") == Provenance.MANUAL
        assert resolved.profile.height_cm == 175.5

    def test_sex_profile_then_manual(self):
        resolved = self.resolver.resolve(
            profile=ProfileRecord(sex="unknown"),
            manual=ManualEntry(sex="F"),
            reference_date=date(2024, 6, 15),
        )

        assert resolved.profile.sex is Sex.FEMALE
        assert resolved.source_of("sex") == Provenance.MANUAL

    def test_age_from_birth_date(self):
        resolved = self.resolver.resolve(
            profile=ProfileRecord(birth_date="1990-06-16"),
            manual=ManualEntry(age_years=50),
            reference_date=date(2024, 6, 15),
        )

        assert resolved.profile.age_years == 33
        assert resolved.source_of("age_years") == Provenance.PROFILE

    def test_future_birth_date_uses_manual_age(self):
        resolved = self.resolver.resolve(
            profile=ProfileRecord(birth_date="2030-01-01"),
            manual=ManualEntry(age_years="41"),
            reference_date=date(2024, 6, 15),
        )

        assert resolved.profile.age_years == 41
        assert resolved.source_of("age_years") == Provenance.MANUAL

    @freeze_time("2024-06-15")
    def test_reference_date_defaults_to_today(self):
        resolved = self.resolver.resolve(profile=ProfileRecord(birth_date="1990-06-15"))

        assert resolved.profile.age_years == 34

    def test_nothing_available(self):
        resolved = self.resolver.resolve()

        assert resolved.profile.weight_kg is None
        assert resolved.profile.sex is None
        assert dict(resolved.provenance) == {}

    def test_from_mapping_aliases(self):
        record = AnthropometryRecord.from_mapping({"record_date": "2024-01-01", "weight": 80})
        profile = ProfileRecord.from_mapping({"gender": "male", "height": 180})
        manual = ManualEntry.from_mapping({"age": 30})

        resolved = self.resolver.resolve([record], profile, manual, date(2024, 6, 15))

        assert resolved.profile.weight_kg == 80
        assert resolved.profile.height_cm == 180
        assert resolved.profile.sex is Sex.MALE
        assert resolved.profile.age_years == 30

    def test_from_mapping_null_field_uses_alias(self):
        record = AnthropometryRecord.from_mapping(
            {"record_date": "2024-01-01", "weight_kg": None, "weight": 72}
        )
        profile = ProfileRecord.from_mapping({"sex": None, "gender": "female"})
        manual = ManualEntry.from_mapping({"age_years": None, "age": 41})

        assert record.weight_kg == 72
        assert profile.sex == "female"
        assert manual.age_years == 41

    def test_from_mapping_prefers_field_over_alias(self):
        record = AnthropometryRecord.from_mapping(
            {"record_date": "2024-01-01", "weight_kg": 70, "weight": 72}
        )

        assert record.weight_kg == 70
