"""
Unit tests for calendar event building.
"""
from datetime import datetime

from iatf.calendar_events import CATEGORY_COLORS, to_calendar_events, to_calendar_events_for
from iatf.schedule import MilestoneCategory
from iatf.timeline import ProtocolAnchor


def _anchor(start="2024-01-01", pid="p1", name="Lote A", removal=None):
    return ProtocolAnchor(
        protocol_id=pid, name=name, start_date=start, implant_removal_date=removal
    )


class TestCalendarEvents:
    def test_one_event_per_milestone(self):
        events = to_calendar_events(_anchor())
        assert [e.title for e in events] == [
            '"Lote A" - Dia 0',
            '"Lote A" - Dia 7/8',
            '"Lote A" - Dia 9/10',
            '"Lote A" - IATF',
        ]
        assert all(e.all_day for e in events)
        assert all(e.protocol_id == "p1" for e in events)

    def test_category_is_structured(self):
        events = to_calendar_events(_anchor(name="IATF Dia 0 lote"))
        assert [e.category for e in events] == list(MilestoneCategory)

    def test_colors_follow_category(self):
        events = to_calendar_events(_anchor())
        assert [e.color for e in events] == ["#fcd34d", "#60a5fa", "#86efac", "#fca5a5"]
        assert set(CATEGORY_COLORS) == set(MilestoneCategory)

    def test_event_spans_match_projection(self):
        events = to_calendar_events(_anchor(removal="2024-01-10T08:00:00"))
        assert (events[1].start, events[1].end) == (datetime(2024, 1, 8), datetime(2024, 1, 9))
        assert (events[3].start, events[3].end) == (datetime(2024, 1, 12, 8), datetime(2024, 1, 12, 16))

    def test_protocol_without_start_has_no_events(self):
        assert to_calendar_events(_anchor(start=None)) == []

    def test_many_protocols(self):
        events = to_calendar_events_for([_anchor(pid="a"), _anchor(pid="b", start=None), _anchor(pid="c")])
        assert len(events) == 8
        assert {e.protocol_id for e in events} == {"a", "c"}

    def test_raw_record(self):
        events = to_calendar_events({"id": 9, "name": "Lote Z", "startDate": "2024-01-01"})
        assert events[0].title == '"Lote Z" - Dia 0'
        assert events[0].protocol_id == "9"
