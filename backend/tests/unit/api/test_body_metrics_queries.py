"""Unit tests for body metrics query resolvers.

Resolvers are called directly with a mocked Strawberry Info whose context
exposes the settings and the assessment orchestrator.
"""

from datetime import date
from typing import Any
from unittest.mock import MagicMock

import pytest
from graphql import GraphQLError

from api.queries import BodyMetricsQueries
from api.types import (
    BiometricProfileInput,
    BoneBreadthsInput,
    CircumferencesInput,
    ExerciseSessionInput,
    SkinfoldsInput,
)
from application.body_metrics.orchestrators import AssessmentOrchestrator
from domain.body_metrics.core.settings import CalculationSettings
from domain.body_metrics.core.value_objects import (
    BMICategory,
    BMRProtocol,
    CompositionProtocol,
    Sex,
    SomatotypeComponent,
    WarningSeverity,
    WHRRisk,
)


def make_info(mocks: dict) -> Any:
    """Create mock Strawberry Info object backed by ``mocks``."""
    context = MagicMock()
    context.get = MagicMock(side_effect=lambda key: mocks.get(key))
    info = MagicMock()
    info.context = context
    return info


@pytest.fixture
def settings() -> CalculationSettings:
    return CalculationSettings()


@pytest.fixture
def mock_info(settings: CalculationSettings) -> Any:
    return make_info(
        {
            "settings": settings,
            "assessment_orchestrator": AssessmentOrchestrator(settings),
        }
    )


@pytest.fixture
def queries() -> BodyMetricsQueries:
    return BodyMetricsQueries()


@pytest.mark.asyncio
async def test_anthropometric_indices(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.anthropometric_indices(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=70, height_cm=170),
        circumferences=CircumferencesInput(waist=80, hip=100),
    )

    assert result.bmi == pytest.approx(24.22, abs=0.01)
    assert result.bmi_category == BMICategory.NORMAL
    assert result.ideal_weight_range.min_kg == pytest.approx(53.465, abs=1e-3)
    assert result.whr_category == WHRRisk.LOW
    assert result.frame_size is None


@pytest.mark.asyncio
async def test_settings_from_context(queries: BodyMetricsQueries) -> None:
    info = make_info({"settings": CalculationSettings(whr_sex_specific=True)})

    result = await queries.anthropometric_indices(  # type: ignore[misc,call-arg]
        info=info,
        profile=BiometricProfileInput(sex=Sex.MALE),
        circumferences=CircumferencesInput(waist=90, hip=100),
    )

    assert result.whr_category == WHRRisk.LOW


@pytest.mark.asyncio
async def test_default_settings_when_missing(queries: BodyMetricsQueries) -> None:
    info = make_info({})

    result = await queries.anthropometric_indices(  # type: ignore[misc,call-arg]
        info=info,
        profile=BiometricProfileInput(sex=Sex.MALE),
        circumferences=CircumferencesInput(waist=90, hip=100),
    )

    assert result.whr_category == WHRRisk.MODERATE


@pytest.mark.asyncio
async def test_body_composition(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.body_composition(  # type: ignore[misc,call-arg]
        info=mock_info,
        protocol=CompositionProtocol.SKINFOLD_3,
        profile=BiometricProfileInput(weight_kg=80, age_years=30, sex=Sex.MALE),
        skinfolds=SkinfoldsInput(triceps=12, subscapular=10, suprailiac=14),
    )

    assert result.computable is True
    assert round(result.body_fat_percent, 2) == 10.91
    assert result.reason is None


@pytest.mark.asyncio
async def test_body_composition_not_computable(
    queries: BodyMetricsQueries, mock_info: Any
) -> None:
    result = await queries.body_composition(  # type: ignore[misc,call-arg]
        info=mock_info,
        protocol=CompositionProtocol.SKINFOLD_3,
        profile=BiometricProfileInput(weight_kg=80, age_years=30, sex=Sex.MALE),
        skinfolds=SkinfoldsInput(triceps=12),
    )

    assert result.computable is False
    assert result.reason == "missing_input"
    assert result.body_fat_percent is None


@pytest.mark.asyncio
async def test_energy_protocols(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.energy_protocols(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE),
    )

    by_protocol = {p.protocol: p for p in result}
    assert by_protocol[BMRProtocol.MIFFLIN_ST_JEOR].bmr_kcal == 1780.0
    assert by_protocol[BMRProtocol.MIFFLIN_ST_JEOR].recommended is True
    assert by_protocol[BMRProtocol.MIFFLIN_ST_JEOR].label == "Mifflin-St Jeor"
    assert by_protocol[BMRProtocol.CUNNINGHAM].available is False


@pytest.mark.asyncio
async def test_energy_result(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.energy_result(  # type: ignore[misc,call-arg]
        info=mock_info,
        bmr_kcal=1500,
        activity_factor=1.55,
        goal_adjustment_kcal=-500,
    )

    assert result.get_kcal == pytest.approx(2325.0)
    assert result.target_kcal == pytest.approx(1825.0)


@pytest.mark.asyncio
async def test_energy_result_invalid_factor(queries: BodyMetricsQueries, mock_info: Any) -> None:
    with pytest.raises(GraphQLError) as exc_info:
        await queries.energy_result(  # type: ignore[misc,call-arg]
            info=mock_info,
            bmr_kcal=1500,
            activity_factor=1.5,
        )

    assert exc_info.value.extensions == {"code": "InvalidActivityFactorError"}


@pytest.mark.asyncio
async def test_energy_result_without_bmr(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.energy_result(  # type: ignore[misc,call-arg]
        info=mock_info,
        bmr_kcal=0,
        activity_factor=1.55,
    )

    assert result is None


@pytest.mark.asyncio
async def test_activity_suggestion(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.activity_suggestion(  # type: ignore[misc,call-arg]
        info=mock_info,
        exercise_frequency="3-5x",
    )

    assert result.value == 1.55
    assert result.field == "activity_factor"

    unknown = await queries.activity_suggestion(  # type: ignore[misc,call-arg]
        info=mock_info,
        exercise_frequency="irregularly",
    )
    assert unknown is None


@pytest.mark.asyncio
async def test_goal_plan(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.goal_plan(  # type: ignore[misc,call-arg]
        info=mock_info,
        initial_weight_kg=80,
        target_weight_kg=75,
        start_date=date(2024, 1, 1),
        target_date=date(2024, 2, 1),
    )

    assert result.viability_score == 3
    assert result.warnings[0].severity == WarningSeverity.ELEVATED
    assert result.minimum_deadline_days == 39
    assert result.ideal_deadline_date == date(2024, 3, 18)


@pytest.mark.asyncio
async def test_goal_plan_invalid_dates(queries: BodyMetricsQueries, mock_info: Any) -> None:
    with pytest.raises(GraphQLError) as exc_info:
        await queries.goal_plan(  # type: ignore[misc,call-arg]
            info=mock_info,
            initial_weight_kg=80,
            target_weight_kg=75,
            start_date=date(2024, 2, 1),
            target_date=date(2024, 1, 1),
        )

    assert exc_info.value.extensions == {"code": "InvalidDateRangeError"}


@pytest.mark.asyncio
async def test_assessment(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.assessment(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE),
        skinfolds=SkinfoldsInput(triceps=12, subscapular=10, suprailiac=14),
        composition_protocol=CompositionProtocol.SKINFOLD_3,
        target_weight_kg=75,
        start_date=date(2024, 1, 1),
        target_date=date(2024, 2, 1),
    )

    assert result.composition.computable is True
    assert result.bmr_protocol == BMRProtocol.CUNNINGHAM
    assert result.energy is not None
    assert result.goal_plan.viability_score == 3
    assert "Lean mass taken from skinfold_3" in result.notes


@pytest.mark.asyncio
async def test_assessment_goal_needs_all_fields(
    queries: BodyMetricsQueries, mock_info: Any
) -> None:
    result = await queries.assessment(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE),
        target_weight_kg=75,
    )

    assert result.goal_plan is None


@pytest.mark.asyncio
async def test_assessment_missing_orchestrator(queries: BodyMetricsQueries) -> None:
    info = make_info({"settings": CalculationSettings()})

    with pytest.raises(Exception, match="Missing assessment_orchestrator"):
        await queries.assessment(  # type: ignore[misc,call-arg]
            info=info,
            profile=BiometricProfileInput(weight_kg=80),
        )


@pytest.mark.asyncio
async def test_energy_protocols_carry_breakdown(
    queries: BodyMetricsQueries, mock_info: Any
) -> None:
    result = await queries.energy_protocols(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE),
    )

    by_protocol = {p.protocol: p for p in result}
    mifflin = by_protocol[BMRProtocol.MIFFLIN_ST_JEOR].breakdown
    assert mifflin.applied == "10 × 80 + 6.25 × 180 - 5 × 30 + 5"
    assert mifflin.steps[-1].value == "1780 kcal"
    assert by_protocol[BMRProtocol.CUNNINGHAM].breakdown is None


@pytest.mark.asyncio
async def test_energy_result_with_exercise(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.energy_result(  # type: ignore[misc,call-arg]
        info=mock_info,
        bmr_kcal=1500,
        activity_factor=1.55,
        goal_adjustment_kcal=-500,
        exercise_kcal=280,
    )

    assert result.exercise_kcal == pytest.approx(280.0)
    assert result.total_expenditure_kcal == pytest.approx(2605.0)
    assert result.target_kcal == pytest.approx(2105.0)
    assert result.breakdown.applied == "1500 × 1.55 = 2325"


@pytest.mark.asyncio
async def test_bmr_breakdown(queries: BodyMetricsQueries, mock_info: Any) -> None:
    profile = BiometricProfileInput(weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE)

    result = await queries.bmr_breakdown(  # type: ignore[misc,call-arg]
        info=mock_info,
        protocol=BMRProtocol.DE_LORENZO,
        profile=profile,
        lean_mass_kg=64,
    )

    assert result.name == "De Lorenzo (1999)"
    assert result.equation == "500 + 22 × LBM"
    assert result.result_kcal == pytest.approx(1908.0)

    unavailable = await queries.bmr_breakdown(  # type: ignore[misc,call-arg]
        info=mock_info,
        protocol=BMRProtocol.DE_LORENZO,
        profile=profile,
    )
    assert unavailable is None


@pytest.mark.asyncio
async def test_exercise_catalogue(queries: BodyMetricsQueries, mock_info: Any) -> None:
    everything = await queries.exercise_catalogue(info=mock_info)  # type: ignore[misc,call-arg]
    sports = await queries.exercise_catalogue(  # type: ignore[misc,call-arg]
        info=mock_info, category="sport"
    )

    assert {a.code for a in sports} < {a.code for a in everything}
    assert all(a.category == "sport" for a in sports)
    running = next(a for a in everything if a.code == "running_8kmh")
    assert running.met == 8.0


@pytest.mark.asyncio
async def test_exercise_expenditure(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.exercise_expenditure(  # type: ignore[misc,call-arg]
        info=mock_info,
        weight_kg=70,
        sessions=[
            ExerciseSessionInput(activity="running_8kmh", minutes=30, sessions_per_week=7),
        ],
    )

    assert result == pytest.approx(280.0)


@pytest.mark.asyncio
async def test_exercise_expenditure_explicit_met(
    queries: BodyMetricsQueries, mock_info: Any
) -> None:
    result = await queries.exercise_expenditure(  # type: ignore[misc,call-arg]
        info=mock_info,
        weight_kg=70,
        sessions=[ExerciseSessionInput(met=4.0, minutes=60, sessions_per_week=7)],
    )

    assert result == pytest.approx(280.0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "session",
    [
        ExerciseSessionInput(activity="underwater_chess", minutes=30),
        ExerciseSessionInput(minutes=30),
        ExerciseSessionInput(met=5.0, minutes=-10),
    ],
)
async def test_exercise_expenditure_invalid_session(
    queries: BodyMetricsQueries, mock_info: Any, session: ExerciseSessionInput
) -> None:
    with pytest.raises(GraphQLError) as exc_info:
        await queries.exercise_expenditure(  # type: ignore[misc,call-arg]
            info=mock_info, weight_kg=70, sessions=[session]
        )

    assert exc_info.value.extensions == {"code": "InvalidMeasurementError"}


@pytest.mark.asyncio
async def test_weight_projection(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.weight_projection(  # type: ignore[misc,call-arg]
        info=mock_info,
        daily_energy_balance_kcal=-500,
        current_weight_kg=80,
        weeks=2,
    )

    assert result.direction == -1
    assert result.weekly_change_kg == pytest.approx(0.4545, abs=1e-4)
    assert result.trajectory_kg == [79.55, 79.09]


@pytest.mark.asyncio
async def test_assessment_with_breadths(queries: BodyMetricsQueries, mock_info: Any) -> None:
    result = await queries.assessment(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE),
        skinfolds=SkinfoldsInput(triceps=10, subscapular=12, suprailiac=14, calf=8),
        circumferences=CircumferencesInput(arm=35, calf=38),
        breadths=BoneBreadthsInput(humerus_cm=7.0, femur_cm=9.8),
    )

    assert result.somatotype.dominant == SomatotypeComponent.MESOMORPHY
    assert result.somatotype.description == "endomorphic mesomorph"
    assert result.somatotype.rating == "3.5-5.2-2.0"


@pytest.mark.asyncio
async def test_assessment_with_exercise_sessions(
    queries: BodyMetricsQueries, mock_info: Any
) -> None:
    result = await queries.assessment(  # type: ignore[misc,call-arg]
        info=mock_info,
        profile=BiometricProfileInput(weight_kg=70, height_cm=175, age_years=30, sex=Sex.MALE),
        goal_adjustment_kcal=-500,
        exercise_sessions=[
            ExerciseSessionInput(activity="running_8kmh", minutes=30, sessions_per_week=7)
        ],
    )

    assert result.energy.exercise_kcal == pytest.approx(280.0)
    assert result.energy.target_kcal == pytest.approx(result.energy.get_kcal + 280 - 500)
    assert result.projection.direction == -1
    assert result.somatotype is None
