"""Unit tests for GoalService."""

from datetime import date, datetime

import pytest

from domain.body_metrics.calculation.goal_service import GoalService, parse_date
from domain.body_metrics.core.exceptions.domain_errors import (
    InvalidDateRangeError,
    InvalidGoalError,
)
from domain.body_metrics.core.settings import CalculationSettings
from domain.body_metrics.core.value_objects import (
    GoalDirection,
    ProgressStatus,
    WarningSeverity,
)


class TestParseDate:
    """Test date coercion."""

    def test_accepts_date_datetime_and_iso(self):
        assert parse_date(date(2024, 1, 1), "d") == date(2024, 1, 1)
        assert parse_date(datetime(2024, 1, 1, 15, 30), "d") == date(2024, 1, 1)
        assert parse_date("2024-01-01", "d") == date(2024, 1, 1)
        assert parse_date("2024-01-01T08:00:00", "d") == date(2024, 1, 1)

    @pytest.mark.parametrize("value", ["01/02/2024", "not a date", 20240101, None])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidGoalError):
            parse_date(value, "start_date")


class TestGoalViability:
    """Test viability scoring and deadlines."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = GoalService()

    def test_aggressive_loss(self):
        """80 -> 75 kg in 31 days is above the max safe rate."""
        plan = self.service.plan(80, 75, date(2024, 1, 1), date(2024, 2, 1))

        assert plan.direction == GoalDirection.LOSS
        assert plan.total_days == 31
        assert plan.required_weekly_rate_kg == pytest.approx(1.129, abs=1e-3)
        assert plan.required_daily_energy_balance_kcal == pytest.approx(-1241.94, abs=0.01)
        # 1.129 / 0.909 = 1.24 -> elevated
        assert plan.viability_score == 3
        assert len(plan.warnings) == 1
        assert plan.warnings[0].severity == WarningSeverity.ELEVATED
        assert plan.warnings[0].code == "rate_elevated"
        assert "exceeds the maximum safe rate" in plan.warnings[0].message

    def test_deadlines(self):
        plan = self.service.plan(80, 75, date(2024, 1, 1), date(2024, 2, 1))

        # 5 kg * 7700 = 38500 kcal at 1000 and 500 kcal/day
        assert plan.minimum_deadline_days == 39
        assert plan.ideal_deadline_days == 77
        assert plan.minimum_deadline_date == date(2024, 2, 9)
        assert plan.ideal_deadline_date == date(2024, 3, 18)

    @pytest.mark.parametrize("target_weight", [50, 65, 79.5, 80.2, 84, 100])
    @pytest.mark.parametrize("get_kcal", [None, 1400, 2500, 3800])
    def test_minimum_deadline_not_after_ideal(self, target_weight, get_kcal):
        plan = self.service.plan(
            80, target_weight, date(2024, 1, 1), date(2024, 4, 1), get_kcal
        )

        assert plan.minimum_deadline_days is not None
        assert plan.minimum_deadline_days <= plan.ideal_deadline_days
        assert plan.minimum_deadline_date <= plan.ideal_deadline_date

    @pytest.mark.parametrize(
        "target_weight, days, expected_score, expected_severity",
        [
            (75, 120, 5, None),
            (76, 42, 4, None),
            (75, 31, 3, WarningSeverity.ELEVATED),
            (75, 26, 2, WarningSeverity.HIGH),
            (70, 30, 1, WarningSeverity.CRITICAL),
        ],
    )
    def test_score_bands(self, target_weight, days, expected_score, expected_severity):
        start = date(2024, 1, 1)
        plan = self.service.plan(80, target_weight, start, date.fromordinal(start.toordinal() + days))

        assert plan.viability_score == expected_score
        if expected_severity is None:
            assert plan.warnings == ()
        else:
            assert [w.severity for w in plan.warnings] == [expected_severity]

    def test_maintenance(self):
        plan = self.service.plan(70, 70, "2024-01-01", "2024-03-01")

        assert plan.direction == GoalDirection.MAINTAIN
        assert plan.viability_score == 5
        assert plan.required_weekly_rate_kg == 0
        assert plan.minimum_deadline_days is None
        assert plan.ideal_deadline_days is None

    def test_gain_uses_surplus_limits(self):
        plan = self.service.plan(70, 71, date(2024, 1, 1), date(2024, 3, 1))

        assert plan.direction == GoalDirection.GAIN
        assert plan.viability_score == 5
        assert plan.required_daily_energy_balance_kcal > 0
        # 7700 kcal at 500 and 300 kcal/day
        assert plan.minimum_deadline_days == 16
        assert plan.ideal_deadline_days == 26

    def test_aggressive_gain(self):
        plan = self.service.plan(70, 72, date(2024, 1, 1), date(2024, 1, 31))

        assert plan.viability_score == 3
        assert "gain rate" in plan.warnings[0].message

    def test_slow_loss_note(self):
        plan = self.service.plan(80, 79, date(2024, 1, 1), date(2024, 6, 29))

        assert plan.viability_score == 5
        assert any("minimum effective deficit" in note for note in plan.notes)

    def test_short_and_long_window_notes(self):
        short = self.service.plan(80, 79.5, date(2024, 1, 1), date(2024, 1, 4))
        long = self.service.plan(80, 70, date(2024, 1, 1), date(2025, 6, 1))

        assert any("shorter than one week" in note for note in short.notes)
        assert any("longer than one year" in note for note in long.notes)

    def test_daily_calorie_goal(self):
        plan = self.service.plan(80, 75, date(2024, 1, 1), date(2024, 2, 1), get_kcal=2500)

        assert plan.daily_calorie_goal_kcal == pytest.approx(2500 - 1241.94, abs=0.01)

    def test_no_calorie_goal_without_get(self):
        plan = self.service.plan(80, 75, date(2024, 1, 1), date(2024, 2, 1))

        assert plan.daily_calorie_goal_kcal is None

    @pytest.mark.parametrize(
        "start, end",
        [(date(2024, 2, 1), date(2024, 1, 1)), (date(2024, 1, 1), date(2024, 1, 1))],
    )
    def test_invalid_date_range(self, start, end):
        with pytest.raises(InvalidDateRangeError):
            self.service.plan(80, 75, start, end)

    @pytest.mark.parametrize("initial, target", [(0, 75), (80, -1), ("80", 75)])
    def test_invalid_weights(self, initial, target):
        with pytest.raises(InvalidGoalError):
            self.service.plan(initial, target, date(2024, 1, 1), date(2024, 2, 1))

    def test_custom_limits(self):
        settings = CalculationSettings(max_safe_deficit_kcal=1500, conservative_deficit_kcal=750)

        plan = GoalService(settings).plan(80, 75, date(2024, 1, 1), date(2024, 2, 1))

        # max safe rate is now 1.36 kg/week
        assert plan.viability_score == 4
        assert plan.minimum_deadline_days == 26


class TestProgressStatus:
    """Test progress against the linear expectation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = GoalService()
        self.plan = self.service.plan(80, 75, date(2024, 1, 1), date(2024, 2, 1))

    @pytest.mark.parametrize(
        "current, expected",
        [
            (77.5, ProgressStatus.ON_TRACK),
            (76.0, ProgressStatus.AHEAD),
            (79.5, ProgressStatus.BEHIND),
        ],
    )
    def test_progress(self, current, expected):
        # 15 of 31 days elapsed: 48% of the change expected
        assert self.service.progress_status(self.plan, current, date(2024, 1, 16)) == expected

    def test_maintenance_is_on_track(self):
        plan = self.service.plan(70, 70, date(2024, 1, 1), date(2024, 2, 1))

        assert self.service.progress_status(plan, 72, date(2024, 1, 15)) == ProgressStatus.ON_TRACK
