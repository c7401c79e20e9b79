# iatf/__init__.py
"""Timeline and proximity-notification engine for IATF protocols."""

from iatf.errors import InvalidAnchor
from iatf.schedule import PROTOCOL_SCHEDULE, MilestoneCategory, MilestoneDefinition
from iatf.timeline import ProjectedMilestone, ProtocolAnchor, project
from iatf.proximity import (
    ProximityResult,
    count_nearby_protocols,
    evaluate_milestones,
    evaluate_protocol,
    is_near,
)
from iatf.calendar_events import CalendarEvent, to_calendar_events, to_calendar_events_for
from iatf.notifications import NotificationSummary, load_anchors, summarize, summarize_records

__all__ = [
    "InvalidAnchor",
    "PROTOCOL_SCHEDULE",
    "MilestoneCategory",
    "MilestoneDefinition",
    "ProjectedMilestone",
    "ProtocolAnchor",
    "project",
    "ProximityResult",
    "count_nearby_protocols",
    "evaluate_milestones",
    "evaluate_protocol",
    "is_near",
    "CalendarEvent",
    "to_calendar_events",
    "to_calendar_events_for",
    "NotificationSummary",
    "load_anchors",
    "summarize",
    "summarize_records",
]
