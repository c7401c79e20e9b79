# iatf/proximity.py
import logging
import math
import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from iatf.schedule import MilestoneCategory
from iatf.timeline import AnchorLike, ProjectedMilestone, as_instant, project

logger = logging.getLogger(__name__)

# days ahead of "now" in which a milestone needs attention
PROXIMITY_WINDOW_DAYS = int(os.getenv("IATF_PROXIMITY_WINDOW_DAYS", "3"))

Instant = Union[date, datetime]


@dataclass(frozen=True)
class ProximityResult:
    protocol_id: Optional[str]
    category: MilestoneCategory
    label: str
    is_near: bool


def window_delta(window_days: float) -> timedelta:
    """Lookahead window as a timedelta; ValueError unless 0 <= days <= timedelta.max.days."""
    if not math.isfinite(window_days) or not 0 <= window_days <= timedelta.max.days:
        raise ValueError(
            f"window_days must be between 0 and {timedelta.max.days}, got {window_days}"
        )
    return timedelta(days=window_days)


def is_near(
    milestone: ProjectedMilestone,
    now: Instant,
    window_days: float = PROXIMITY_WINDOW_DAYS,
) -> bool:
    """
    True when the milestone starts or ends within `window_days` from `now`,
    or is in progress at `now`. Bounds are inclusive.
    """
    window = window_delta(window_days)
    now = as_instant(now)
    start, end = milestone.start, milestone.end

    if now <= start and start - now <= window:
        return True
    if now <= end and end - now <= window:
        return True
    return start <= now <= end


def evaluate_milestones(
    anchor: AnchorLike,
    now: Instant,
    window_days: float = PROXIMITY_WINDOW_DAYS,
) -> List[ProximityResult]:
    return [
        ProximityResult(
            protocol_id=m.protocol_id,
            category=m.category,
            label=m.label,
            is_near=is_near(m, now, window_days),
        )
        for m in project(anchor)
    ]


def evaluate_protocol(
    anchor: AnchorLike,
    now: Instant,
    window_days: float = PROXIMITY_WINDOW_DAYS,
) -> bool:
    """True when at least one milestone of the protocol is near `now`."""
    return any(is_near(m, now, window_days) for m in project(anchor))


def count_nearby_protocols(
    anchors: Iterable[AnchorLike],
    now: Instant,
    window_days: float = PROXIMITY_WINDOW_DAYS,
) -> int:
    window_delta(window_days)
    count = sum(1 for a in anchors if evaluate_protocol(a, now, window_days))
    logger.debug("%d protocol(s) with milestones within %s day(s)", count, window_days)
    return count
