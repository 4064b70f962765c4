#!/usr/bin/env python3
"""Tests for PMTemplate, TriggerType and PMSchedule."""
from datetime import date

import pytest

from fleet import (
    Baseline,
    NextDue,
    PMSchedule,
    PMTemplate,
    TriggerType,
    Unscheduled,
    ValidationError,
)


class TestTriggerType:
    def test_parse(self):
        assert TriggerType.parse("mileage") is TriggerType.MILEAGE
        assert TriggerType.parse(" Hours ") is TriggerType.HOURS
        assert TriggerType.parse(TriggerType.DAYS) is TriggerType.DAYS

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="weeks"):
            TriggerType.parse("weeks")

    def test_unit(self):
        assert TriggerType.MILEAGE.unit == "mi"
        assert TriggerType.HOURS.unit == "hr"
        assert TriggerType.DAYS.unit == "days"


class TestPMTemplate:
    """Tests for PMTemplate class."""

    def test_display_name(self):
        assert PMTemplate("oil", "mileage", 5000, name="Oil Change").display_name == "Oil Change"
        assert PMTemplate("oil", "mileage", 5000).display_name == "oil"

    def test_interval_label(self):
        assert PMTemplate("oil", "mileage", 5000).interval_label == "5,000 mi"
        assert PMTemplate("pump", "hours", 250).interval_label == "250 hr"
        assert PMTemplate("inspect", "days", 90).interval_label == "90 days"

    def test_lists_default_empty(self):
        template = PMTemplate("oil", "mileage", 5000)
        assert template.checklist == []
        assert template.parts == []

    @pytest.mark.parametrize("interval", [0, -100, "5000", True, None])
    def test_bad_interval(self, interval):
        with pytest.raises(ValidationError):
            PMTemplate("oil", "mileage", interval)


class TestPMSchedule:
    """Tests for PMSchedule class."""

    def test_status_label(self):
        assert PMSchedule("oil", "v1").status_label == "active"
        assert PMSchedule("oil", "v1", active=False).status_label == "paused"

    def test_baseline_parses_date(self):
        schedule = PMSchedule("inspect", "v1", baseline_date="2024-01-01", baseline_mileage=10)
        assert schedule.baseline == Baseline(date=date(2024, 1, 1), mileage=10)

    def test_next_due_uses_template_dimension(self):
        """Only the field matching the trigger type counts."""
        schedule = PMSchedule("oil", "v1", next_due_mileage=55000, next_due_date="2024-03-31")
        assert schedule.next_due(TriggerType.MILEAGE) == NextDue(
            TriggerType.MILEAGE, next_due_mileage=55000
        )
        assert schedule.next_due(TriggerType.DAYS) == NextDue(
            TriggerType.DAYS, next_due_date=date(2024, 3, 31)
        )
        assert schedule.next_due(TriggerType.HOURS) == Unscheduled(
            TriggerType.HOURS, "no next due engine hours"
        )

    def test_next_due_missing(self):
        assert isinstance(PMSchedule("oil", "v1").next_due(TriggerType.MILEAGE), Unscheduled)
