# iatf/calendar_events.py
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from iatf.schedule import MilestoneCategory
from iatf.timeline import AnchorLike, as_anchor, project

# monitoring calendar palette
CATEGORY_COLORS: Dict[MilestoneCategory, str] = {
    MilestoneCategory.DAY_0: "#fcd34d",
    MilestoneCategory.DAY_7_8: "#60a5fa",
    MilestoneCategory.DAY_9_10: "#86efac",
    MilestoneCategory.IATF: "#fca5a5",
}


@dataclass(frozen=True)
class CalendarEvent:
    title: str
    start: datetime
    end: datetime
    category: MilestoneCategory
    protocol_id: Optional[str]
    all_day: bool = True

    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self.category]


def event_title(protocol_name: str, category: MilestoneCategory) -> str:
    return f'"{protocol_name}" - {category.value}'


def to_calendar_events(anchor: AnchorLike) -> List[CalendarEvent]:
    """One all-day event per projected milestone of the protocol."""
    anchor = as_anchor(anchor)
    return [
        CalendarEvent(
            title=event_title(anchor.name, m.category),
            start=m.start,
            end=m.end,
            category=m.category,
            protocol_id=m.protocol_id,
        )
        for m in project(anchor)
    ]


def to_calendar_events_for(anchors: Iterable[AnchorLike]) -> List[CalendarEvent]:
    events: List[CalendarEvent] = []
    for anchor in anchors:
        events.extend(to_calendar_events(anchor))
    return events
