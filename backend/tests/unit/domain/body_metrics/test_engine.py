"""Unit tests for the body metrics engine entry points."""

from datetime import date

import pytest

from domain.body_metrics import engine
from domain.body_metrics.core.exceptions.domain_errors import (
    GoalAdjustmentOutOfRangeError,
    InvalidActivityFactorError,
    InvalidDateRangeError,
)
from domain.body_metrics.core.settings import CalculationSettings
from domain.body_metrics.core.value_objects import (
    BiometricProfile,
    BMICategory,
    BMRProtocol,
    CompositionProtocol,
    CompositionResult,
    ExerciseSession,
    Provenance,
    Sex,
)
from domain.body_metrics.resolution import ManualEntry, ProfileRecord


def test_compute_anthropometric_indices():
    """70 kg at 170 cm is a normal BMI."""
    indices = engine.compute_anthropometric_indices(BiometricProfile(weight_kg=70, height_cm=170))

    assert indices.bmi == pytest.approx(24.22, abs=0.01)
    assert indices.bmi_category == BMICategory.NORMAL
    assert indices.ideal_weight_range.min_kg == pytest.approx(53.47, abs=0.01)
    assert indices.ideal_weight_range.max_kg == pytest.approx(71.96, abs=0.01)


def test_estimate_body_composition_accepts_protocol_id(three_site_skinfolds):
    profile = BiometricProfile(weight_kg=80, age_years=30, sex=Sex.MALE)

    result = engine.estimate_body_composition("skinfold_3", profile, three_site_skinfolds)

    assert isinstance(result, CompositionResult)
    assert round(result.body_fat_percent, 2) == 10.91


def test_estimate_body_composition_unknown_protocol():
    with pytest.raises(ValueError):
        engine.estimate_body_composition("calipers_99", BiometricProfile(weight_kg=80))


def test_compare_energy_protocols(male_profile):
    estimates = engine.compare_energy_protocols(
        male_profile, protocols=["mifflin_st_jeor", "cunningham"]
    )

    assert [e.protocol for e in estimates] == [
        BMRProtocol.MIFFLIN_ST_JEOR,
        BMRProtocol.CUNNINGHAM,
    ]
    assert estimates[0].bmr_kcal == 1780.0
    assert estimates[0].recommended is True
    assert estimates[1].available is False


def test_compute_get_and_apply_goal():
    get_kcal = engine.compute_get(1500, 1.55)

    assert get_kcal == pytest.approx(2325.0)
    assert engine.apply_goal(get_kcal, -500) == pytest.approx(1825.0)

    with pytest.raises(InvalidActivityFactorError):
        engine.compute_get(1500, 1.4)
    with pytest.raises(GoalAdjustmentOutOfRangeError):
        engine.apply_goal(get_kcal, -1500)


def test_apply_goal_custom_range():
    settings = CalculationSettings(goal_adjustment_min_kcal=-1500)

    assert engine.apply_goal(2500.0, -1500, settings) == pytest.approx(1000.0)


def test_suggest_activity_factor():
    assert engine.suggest_activity_factor("3-5x") == 1.55
    assert engine.suggest_activity_factor("unknown") is None


def test_plan_goal_viability():
    plan = engine.plan_goal_viability(80, 75, "2024-01-01", "2024-02-01")

    assert plan.viability_score == 3
    assert plan.minimum_deadline_days == 39
    assert plan.ideal_deadline_days == 77

    with pytest.raises(InvalidDateRangeError):
        engine.plan_goal_viability(80, 75, "2024-02-01", "2024-01-01")


def test_resolve_data_sources():
    resolved = engine.resolve_data_sources(
        profile=ProfileRecord(height_cm=170, sex="F", birth_date="1984-03-10"),
        manual=ManualEntry(weight_kg=62),
        reference_date=date(2024, 3, 10),
    )

    assert resolved.profile == BiometricProfile(
        weight_kg=62, height_cm=170, age_years=40, sex=Sex.FEMALE
    )
    assert resolved.source_of("weight_kg") == Provenance.MANUAL


def test_calls_are_independent():
    """Identical inputs give identical results; nothing is cached."""
    profile = BiometricProfile(weight_kg=70, height_cm=170)

    first = engine.compute_anthropometric_indices(profile)
    second = engine.compute_anthropometric_indices(profile)

    assert first == second
    assert first is not second


def test_compare_composition_protocols(three_site_skinfolds):
    profile = BiometricProfile(weight_kg=80, age_years=30, sex=Sex.MALE)

    outcomes = engine.compare_composition_protocols(profile, three_site_skinfolds)

    assert set(outcomes) == set(CompositionProtocol)
    assert isinstance(outcomes[CompositionProtocol.SKINFOLD_3], CompositionResult)
    assert not isinstance(outcomes[CompositionProtocol.BIOIMPEDANCE], CompositionResult)


def test_build_energy_result():
    result = engine.build_energy_result(1500, 1.55, -500)

    assert result is not None
    assert result.get_kcal == pytest.approx(2325.0)
    assert result.target_kcal == pytest.approx(1825.0)
    assert engine.build_energy_result(None, 1.55) is None


def test_build_energy_result_with_exercise():
    result = engine.build_energy_result(1500, 1.55, -500, exercise_kcal=280)

    assert result.target_kcal == pytest.approx(2105.0)
    assert result.total_expenditure_kcal == pytest.approx(2605.0)


def test_explain_bmr(male_profile):
    breakdown = engine.explain_bmr(BMRProtocol.MIFFLIN_ST_JEOR, male_profile)

    assert breakdown.result_kcal == pytest.approx(1780.0)
    assert engine.explain_bmr(BMRProtocol.DE_LORENZO, male_profile) is None
    assert engine.explain_bmr(
        BMRProtocol.DE_LORENZO, male_profile, lean_mass_kg=64
    ).result_kcal == pytest.approx(1908.0)


def test_explain_get():
    assert engine.explain_get(1500, 1.55).result_kcal == pytest.approx(2325.0)


def test_estimate_exercise_expenditure():
    sessions = [
        ExerciseSession(met=8.0, minutes=30, sessions_per_week=7),
        ExerciseSession(met=3.0, minutes=60, sessions_per_week=0),
    ]

    # 8 MET * 70 kg * 0.5 h every day
    assert engine.estimate_exercise_expenditure(sessions, 70) == pytest.approx(280.0)
    assert engine.estimate_exercise_expenditure(sessions, None) == 0.0


def test_project_weight():
    projection = engine.project_weight(-500, current_weight_kg=80, weeks=4)

    assert projection.direction == -1
    assert projection.weekly_change_kg == pytest.approx(0.4545, abs=1e-4)
    assert len(projection.trajectory_kg) == 4
    assert projection.trajectory_kg[-1] == pytest.approx(80 - 4 * 500 * 7 / 7700, abs=0.01)


def test_project_weight_custom_energy_density():
    settings = CalculationSettings(kcal_per_kg_body_weight=7000)

    projection = engine.project_weight(350, settings=settings)

    assert projection.direction == 1
    assert projection.weekly_change_kg == pytest.approx(0.35)
    assert projection.trajectory_kg == ()
