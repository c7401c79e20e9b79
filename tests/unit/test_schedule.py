"""
Unit tests for the IATF milestone schedule.
"""
import pytest

from iatf.schedule import PROTOCOL_SCHEDULE, MilestoneCategory, MilestoneDefinition


class TestSchedule:
    def test_canonical_offsets(self):
        spans = [(d.day_offset_start, d.day_offset_end) for d in PROTOCOL_SCHEDULE]
        assert spans == [(0, 0), (7, 8), (9, 10), (10, 11)]

    def test_only_insemination_is_removal_relative(self):
        relative = [d for d in PROTOCOL_SCHEDULE if d.removal_relative]
        assert len(relative) == 1
        iatf = relative[0]
        assert iatf.category == MilestoneCategory.IATF
        assert (iatf.hours_after_removal_start, iatf.hours_after_removal_end) == (48, 56)

    def test_category_values_match_calendar_titles(self):
        assert [d.category.value for d in PROTOCOL_SCHEDULE] == ["Dia 0", "Dia 7/8", "Dia 9/10", "IATF"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"day_offset_start": -1, "day_offset_end": 0},
            {"day_offset_start": 5, "day_offset_end": 4},
            {"day_offset_start": 0, "day_offset_end": 1, "hours_after_removal_start": 48},
            {"day_offset_start": 0, "day_offset_end": 1, "hours_after_removal_start": 56, "hours_after_removal_end": 48},
        ],
    )
    def test_invalid_definitions_rejected(self, kwargs):
        with pytest.raises(ValueError):
            MilestoneDefinition(category=MilestoneCategory.DAY_0, label="x", **kwargs)
