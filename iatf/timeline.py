# iatf/timeline.py
"""
Timeline projection: anchor dates -> concrete milestone instants.

All instants handled here are naive datetimes. Timezone-aware values coming
from the outside are converted to UTC and stripped of their tzinfo before any
arithmetic, so aware and naive values are never compared.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from iatf.errors import InvalidAnchor
from iatf.schedule import PROTOCOL_SCHEDULE, MilestoneCategory, MilestoneDefinition

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Date parsing
# ---------------------------------------------------------------------


def _parse_iso_datetime(text: str) -> datetime:
    # datetime.fromisoformat only learned the "Z" suffix in 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def as_instant(value: Union[date, datetime]) -> datetime:
    """Naive datetime for `value`; a plain date means midnight of that day."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"expected date or datetime, got {type(value).__name__}")


def parse_start_date(value: Any, protocol_id: Optional[str] = None) -> Optional[date]:
    """
    Parse a protocol start date.

    Missing values (None or an empty string) mean the protocol has not
    started and return None. Timestamps keep the calendar date as written,
    without timezone conversion.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return _parse_iso_datetime(text).date()
        except ValueError:
            raise InvalidAnchor(protocol_id, "startDate", value) from None
    raise InvalidAnchor(protocol_id, "startDate", value)


def parse_instant(text: str) -> datetime:
    """Parse an ISO date or timestamp into a naive instant; ValueError if malformed."""
    text = text.strip()
    if len(text) == 10:
        return as_instant(date.fromisoformat(text))
    return as_instant(_parse_iso_datetime(text))


def parse_removal_date(value: Any, protocol_id: Optional[str] = None) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return as_instant(value)
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_instant(value)
        except ValueError:
            raise InvalidAnchor(protocol_id, "implantRemovalDate", value) from None
    raise InvalidAnchor(protocol_id, "implantRemovalDate", value)


_TRUE_FLAGS = ("on", "yes", "true", "1")
_FALSE_FLAGS = ("off", "no", "false", "0")


def parse_flag(value: Any, protocol_id: Optional[str] = None) -> bool:
    """
    Convert a stored on/off switch to bool.

    Storage exports may carry the flag as a string ("false", "0", "on").
    None means the switch was never set and counts as on.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_FLAGS:
            return True
        if v in _FALSE_FLAGS:
            return False
    raise InvalidAnchor(protocol_id, "notifications", value)


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class ProtocolAnchor:
    """
    The part of a protocol record the engine reads.

    `start_date`, `implant_removal_date` and `notifications` accept strings
    too and are normalized on construction; an unparseable value raises
    InvalidAnchor.
    """

    protocol_id: Optional[str]
    name: str
    start_date: Optional[date] = None
    implant_removal_date: Optional[datetime] = None
    notifications: bool = True

    def __post_init__(self):
        object.__setattr__(
            self, "start_date", parse_start_date(self.start_date, self.protocol_id)
        )
        object.__setattr__(
            self,
            "implant_removal_date",
            parse_removal_date(self.implant_removal_date, self.protocol_id),
        )
        object.__setattr__(
            self, "notifications", parse_flag(self.notifications, self.protocol_id)
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ProtocolAnchor":
        """Build an anchor from a storage record (camelCase keys)."""
        raw_id = record.get("id")
        return cls(
            protocol_id=None if raw_id is None else str(raw_id),
            name=record.get("name") or "",
            start_date=record.get("startDate"),
            implant_removal_date=record.get("implantRemovalDate"),
            notifications=record.get("notifications"),
        )


@dataclass(frozen=True)
class ProjectedMilestone:
    protocol_id: Optional[str]
    category: MilestoneCategory
    label: str
    start: datetime
    end: datetime


AnchorLike = Union[ProtocolAnchor, Mapping[str, Any]]


def as_anchor(value: AnchorLike) -> ProtocolAnchor:
    if isinstance(value, ProtocolAnchor):
        return value
    return ProtocolAnchor.from_record(value)


# ---------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------


def _day_span(start_date: date, definition: MilestoneDefinition) -> Tuple[datetime, datetime]:
    # whole calendar days on the date, then midnight: no DST drift
    start = start_date + timedelta(days=definition.day_offset_start)
    end = start_date + timedelta(days=definition.day_offset_end)
    return as_instant(start), as_instant(end)


def _project_one(anchor: ProtocolAnchor, definition: MilestoneDefinition) -> ProjectedMilestone:
    removal = anchor.implant_removal_date
    if definition.removal_relative and removal is not None:
        start = removal + timedelta(hours=definition.hours_after_removal_start)
        end = removal + timedelta(hours=definition.hours_after_removal_end)
    else:
        # without a removal date the removal-relative milestone falls back
        # to its day offsets from the start date
        start, end = _day_span(anchor.start_date, definition)
    return ProjectedMilestone(
        protocol_id=anchor.protocol_id,
        category=definition.category,
        label=definition.label,
        start=start,
        end=end,
    )


def project(
    anchor: AnchorLike,
    schedule: Sequence[MilestoneDefinition] = PROTOCOL_SCHEDULE,
) -> Tuple[ProjectedMilestone, ...]:
    """
    Project the schedule onto the calendar for one protocol.

    Returns milestones in schedule order. A protocol without a start date
    has no timeline and yields an empty tuple.
    """
    anchor = as_anchor(anchor)
    if anchor.start_date is None:
        logger.debug("protocol %s has no start date; nothing to project", anchor.protocol_id)
        return ()
    return tuple(_project_one(anchor, definition) for definition in schedule)
