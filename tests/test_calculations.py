#!/usr/bin/env python3
"""Tests for PM due calculation helpers."""
from datetime import date

import pytest

from fleet import (
    Baseline,
    DueStatus,
    NextDue,
    TriggerType,
    Unscheduled,
    ValidationError,
    check_status,
    compute_next_due,
    due_status,
    progress_percent,
)
from fleet.calculations import remaining


class TestComputeNextDue:
    """Tests for compute_next_due."""

    def test_mileage(self):
        """baseline mileage + interval."""
        result = compute_next_due("mileage", 5000, Baseline(mileage=50000))
        assert isinstance(result, NextDue)
        assert result.next_due_mileage == 55000
        assert result.next_due_date is None
        assert result.next_due_engine_hours is None

    def test_mileage_from_zero(self):
        result = compute_next_due(TriggerType.MILEAGE, 7500, Baseline(mileage=0))
        assert result.next_due_mileage == 7500

    def test_hours(self):
        result = compute_next_due("hours", 250, Baseline(engine_hours=1200.5))
        assert result.next_due_engine_hours == 1450.5
        assert result.next_due_mileage is None

    def test_days_across_leap_february(self):
        """2024-01-01 + 90 days lands on 2024-03-31 (Feb has 29 days)."""
        result = compute_next_due("days", 90, Baseline(date=date(2024, 1, 1)))
        assert result.next_due_date == date(2024, 3, 31)

    def test_days_accepts_iso_string_baseline(self):
        result = compute_next_due("days", 30, Baseline(date="2023-01-01"))
        assert result.next_due_date == date(2023, 1, 31)

    def test_only_trigger_dimension_used(self):
        """Other baseline readings don't leak into the result."""
        baseline = Baseline(date=date(2024, 1, 1), mileage=100, engine_hours=5)
        result = compute_next_due("mileage", 1000, baseline)
        assert result.to_dict() == {"nextDueMileage": 1100}

    def test_missing_baseline_is_unscheduled(self):
        """No baseline for the dimension is an explicit outcome, not an error."""
        result = compute_next_due("mileage", 5000, Baseline(date=date(2024, 1, 1)))
        assert isinstance(result, Unscheduled)
        assert result.trigger_type == TriggerType.MILEAGE
        assert "mileage" in result.reason
        assert result.to_dict() == {}

    def test_missing_baseline_date_is_unscheduled(self):
        assert isinstance(compute_next_due("days", 30, Baseline()), Unscheduled)
        assert isinstance(compute_next_due("hours", 30, Baseline()), Unscheduled)

    @pytest.mark.parametrize("interval", [0, -5000, "5000", None, True])
    def test_bad_interval_raises(self, interval):
        with pytest.raises(ValidationError):
            compute_next_due("mileage", interval, Baseline(mileage=50000))

    def test_bad_interval_raises_even_without_baseline(self):
        with pytest.raises(ValidationError):
            compute_next_due("mileage", 0, Baseline())

    def test_fractional_days_raises(self):
        with pytest.raises(ValidationError):
            compute_next_due("days", 1.5, Baseline(date=date(2024, 1, 1)))

    def test_negative_baseline_raises(self):
        with pytest.raises(ValidationError):
            compute_next_due("mileage", 5000, Baseline(mileage=-1))

    @pytest.mark.parametrize(
        "baseline",
        [
            Baseline(date=date(2024, 1, 1), mileage="abc"),
            Baseline(date=date(2024, 1, 1), mileage=-5),
            Baseline(date=date(2024, 1, 1), engine_hours=True),
        ],
    )
    def test_bad_reading_outside_trigger_dimension_raises(self, baseline):
        """Readings for other dimensions are still checked."""
        with pytest.raises(ValidationError):
            compute_next_due("days", 90, baseline)

    def test_unknown_trigger_type_raises(self):
        with pytest.raises(ValidationError):
            compute_next_due("job_count", 10, Baseline(mileage=0))


class TestNextDueToDict:
    def test_days_serializes_iso(self):
        result = NextDue(TriggerType.DAYS, next_due_date=date(2024, 3, 31))
        assert result.to_dict() == {"nextDueDate": "2024-03-31"}

    def test_hours(self):
        result = NextDue(TriggerType.HOURS, next_due_engine_hours=500)
        assert result.to_dict() == {"nextDueEngineHours": 500}
        assert result.value == 500


class TestCheckStatus:
    """Tests for check_status helper function."""

    def test_overdue(self):
        """OVERDUE only once current passes due."""
        assert check_status(101, 100, 10) == DueStatus.OVERDUE

    def test_due_soon(self):
        """DUE_SOON when current >= due - threshold, including at due."""
        assert check_status(100, 100, 10) == DueStatus.DUE_SOON
        assert check_status(90, 100, 10) == DueStatus.DUE_SOON

    def test_on_track(self):
        assert check_status(89, 100, 10) == DueStatus.ON_TRACK
        assert check_status(0, 100, 10) == DueStatus.ON_TRACK


class TestDueStatus:
    """Tests for due_status."""

    TODAY = date(2024, 1, 20)

    def test_mileage_overdue_scenario(self):
        """Baseline 50000, interval 5000, current 56000 is overdue."""
        next_due = compute_next_due("mileage", 5000, Baseline(mileage=50000))
        assert due_status(next_due, self.TODAY, 56000, 5000) == DueStatus.OVERDUE

    def test_mileage_due_soon_within_fraction(self):
        """Default due-soon band is 5% of the interval (250 mi of 5000)."""
        next_due = NextDue(TriggerType.MILEAGE, next_due_mileage=55000)
        assert due_status(next_due, self.TODAY, 54750, 5000) == DueStatus.DUE_SOON
        assert due_status(next_due, self.TODAY, 54749, 5000) == DueStatus.ON_TRACK

    def test_custom_fraction(self):
        next_due = NextDue(TriggerType.HOURS, next_due_engine_hours=1000)
        assert (
            due_status(next_due, self.TODAY, 800, 1000, due_soon_fraction=0.2)
            == DueStatus.DUE_SOON
        )

    def test_mileage_without_interval_only_checks_overdue(self):
        next_due = NextDue(TriggerType.MILEAGE, next_due_mileage=55000)
        assert due_status(next_due, self.TODAY, 54999) == DueStatus.ON_TRACK
        assert due_status(next_due, self.TODAY, 55001) == DueStatus.OVERDUE

    def test_missing_reading_is_unknown(self):
        next_due = NextDue(TriggerType.MILEAGE, next_due_mileage=55000)
        assert due_status(next_due, self.TODAY, None, 5000) == DueStatus.UNKNOWN

    def test_unscheduled(self):
        outcome = Unscheduled(TriggerType.DAYS, "no baseline date")
        assert due_status(outcome, self.TODAY) == DueStatus.UNSCHEDULED

    def test_date_overdue(self):
        next_due = NextDue(TriggerType.DAYS, next_due_date=date(2024, 1, 19))
        assert due_status(next_due, self.TODAY) == DueStatus.OVERDUE

    def test_date_due_soon_window(self):
        """Due today through 7 days out is due soon."""
        for due in (date(2024, 1, 20), date(2024, 1, 27)):
            next_due = NextDue(TriggerType.DAYS, next_due_date=due)
            assert due_status(next_due, self.TODAY) == DueStatus.DUE_SOON

    def test_date_on_track(self):
        next_due = NextDue(TriggerType.DAYS, next_due_date=date(2024, 1, 28))
        assert due_status(next_due, self.TODAY) == DueStatus.ON_TRACK

    def test_date_ignores_readings(self):
        next_due = NextDue(TriggerType.DAYS, next_due_date=date(2024, 3, 31))
        assert due_status(next_due, self.TODAY, current_reading=None) == DueStatus.ON_TRACK


class TestRemaining:
    def test_days(self):
        next_due = NextDue(TriggerType.DAYS, next_due_date=date(2024, 1, 27))
        assert remaining(next_due, date(2024, 1, 20)) == 7

    def test_mileage(self):
        next_due = NextDue(TriggerType.MILEAGE, next_due_mileage=55000)
        assert remaining(next_due, date(2024, 1, 20), 56000) == -1000
        assert remaining(next_due, date(2024, 1, 20), None) is None


class TestProgressPercent:
    """Tests for progress_percent."""

    def test_midway(self):
        assert progress_percent(50000, 55000, 52500) == 50.0

    def test_clamped(self):
        assert progress_percent(50000, 55000, 60000) == 100.0
        assert progress_percent(50000, 55000, 40000) == 0.0

    def test_no_reading(self):
        assert progress_percent(50000, 55000, None) is None

    def test_empty_span(self):
        assert progress_percent(100, 100, 100) == 0.0
