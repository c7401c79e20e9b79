# iatf/notifications.py
"""
Notification summary shared by the header badge and the dashboard KPI.

Both surfaces read the same NotificationSummary so they can never disagree
on which protocols need attention.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from iatf.errors import InvalidAnchor
from iatf.proximity import PROXIMITY_WINDOW_DAYS, Instant, count_nearby_protocols
from iatf.timeline import ProtocolAnchor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationSummary:
    nearby_count: int
    total_protocols: int = 0
    notifications_enabled: int = 0
    skipped: Tuple[Optional[str], ...] = field(default_factory=tuple)

    @property
    def has_any(self) -> bool:
        return self.nearby_count > 0


def load_anchors(
    records: Iterable[Mapping[str, Any]],
) -> Tuple[List[ProtocolAnchor], List[Optional[str]]]:
    """
    Convert storage records into anchors.

    Records with malformed dates are left out and their ids returned in the
    second list; the rest of the batch is still usable.
    """
    anchors: List[ProtocolAnchor] = []
    skipped: List[Optional[str]] = []
    for record in records:
        try:
            anchors.append(ProtocolAnchor.from_record(record))
        except InvalidAnchor as e:
            logger.warning("skipping protocol %s: %s", e.protocol_id, e)
            skipped.append(e.protocol_id)
    return anchors, skipped


def summarize(
    anchors: Iterable[ProtocolAnchor],
    now: Instant,
    window_days: float = PROXIMITY_WINDOW_DAYS,
    skipped: Iterable[Optional[str]] = (),
) -> NotificationSummary:
    anchors = list(anchors)
    skipped = tuple(skipped)
    return NotificationSummary(
        nearby_count=count_nearby_protocols(anchors, now, window_days),
        total_protocols=len(anchors) + len(skipped),
        notifications_enabled=sum(1 for a in anchors if a.notifications),
        skipped=skipped,
    )


def summarize_records(
    records: Iterable[Mapping[str, Any]],
    now: Instant,
    window_days: float = PROXIMITY_WINDOW_DAYS,
) -> NotificationSummary:
    anchors, skipped = load_anchors(records)
    return summarize(anchors, now, window_days, skipped=skipped)
