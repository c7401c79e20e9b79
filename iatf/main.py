# iatf/main.py
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from iatf.calendar_events import to_calendar_events_for
from iatf.errors import InvalidAnchor
from iatf.notifications import load_anchors, summarize
from iatf.proximity import PROXIMITY_WINDOW_DAYS, evaluate_milestones, window_delta
from iatf.schedule import MilestoneCategory
from iatf.stats import pregnancy_rate_by_protocol, pregnancy_success
from iatf.timeline import ProtocolAnchor, as_instant, parse_instant, project

# ---------------------------------------------------------------------
# App, logging
# ---------------------------------------------------------------------

LOG_LEVEL = os.getenv("IATF_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="IATF Protocol Monitor")


# ---------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------


class ProtocolRecord(BaseModel):
    """A protocol as the storage API returns it; dates stay raw strings."""

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str, None] = None
    name: str = ""
    start_date: Optional[str] = Field(default=None, alias="startDate")
    implant_removal_date: Optional[str] = Field(default=None, alias="implantRemovalDate")
    notifications: Optional[bool] = None

    def as_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class MilestoneOut(BaseModel):
    category: MilestoneCategory
    label: str
    start: datetime
    end: datetime
    is_near: bool


class TimelineResponse(BaseModel):
    protocol_id: Optional[str]
    name: str
    milestones: List[MilestoneOut]
    needs_attention: bool


class NotificationResponse(BaseModel):
    nearby_count: int
    has_any: bool
    total_protocols: int
    notifications_enabled: int
    skipped: List[Optional[str]]


class CalendarEventOut(BaseModel):
    title: str
    start: datetime
    end: datetime
    all_day: bool
    category: MilestoneCategory
    color: str
    protocol_id: Optional[str]


class CalendarResponse(BaseModel):
    events: List[CalendarEventOut]
    skipped: List[Optional[str]]


class AnimalStats(BaseModel):
    total_animals: int = 0
    pregnant_animals: int = 0


class ProtocolStatsItem(BaseModel):
    name: str
    total: Union[int, str, None] = None
    pregnant_count: Union[int, str, None] = Field(default=None, alias="pregnantCount")


class DashboardRequest(BaseModel):
    protocols: List[ProtocolRecord] = Field(default_factory=list)
    animal_stats: Optional[AnimalStats] = None
    protocol_stats: List[ProtocolStatsItem] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    total_protocols: int
    nearby_events: int
    notifications_enabled: int
    pregnant: Optional[int] = None
    not_pregnant: Optional[int] = None
    pregnancy_rate_by_protocol: List[Dict[str, Any]]
    skipped: List[Optional[str]]


# ---------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------


def utc_now() -> datetime:
    """Server clock as a naive UTC instant, the convention of the engine."""
    return as_instant(datetime.now(timezone.utc))


def resolve_now(now: Optional[str]) -> datetime:
    """Instant the request is evaluated at; the server clock when omitted."""
    if not now:
        return utc_now()
    try:
        return parse_instant(now)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid 'now': {now!r}")


def resolve_window(window: Optional[float]) -> float:
    if window is None:
        return PROXIMITY_WINDOW_DAYS
    try:
        window_delta(window)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return window


# ---------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/protocols/timeline", response_model=TimelineResponse)
def protocol_timeline(
    protocol: ProtocolRecord,
    now: Optional[str] = None,
    window: Optional[float] = None,
):
    at = resolve_now(now)
    window_days = resolve_window(window)
    try:
        anchor = ProtocolAnchor.from_record(protocol.as_record())
    except InvalidAnchor as e:
        raise HTTPException(status_code=400, detail=str(e))

    nearness = evaluate_milestones(anchor, at, window_days)
    milestones = [
        MilestoneOut(
            category=m.category,
            label=m.label,
            start=m.start,
            end=m.end,
            is_near=result.is_near,
        )
        for m, result in zip(project(anchor), nearness)
    ]
    return TimelineResponse(
        protocol_id=anchor.protocol_id,
        name=anchor.name,
        milestones=milestones,
        needs_attention=any(r.is_near for r in nearness),
    )


@app.post("/protocols/notifications", response_model=NotificationResponse)
def protocol_notifications(
    protocols: List[ProtocolRecord],
    now: Optional[str] = None,
    window: Optional[float] = None,
):
    at = resolve_now(now)
    window_days = resolve_window(window)
    anchors, skipped = load_anchors(p.as_record() for p in protocols)
    summary = summarize(anchors, at, window_days, skipped=skipped)
    return NotificationResponse(
        nearby_count=summary.nearby_count,
        has_any=summary.has_any,
        total_protocols=summary.total_protocols,
        notifications_enabled=summary.notifications_enabled,
        skipped=list(summary.skipped),
    )


@app.post("/protocols/calendar", response_model=CalendarResponse)
def protocol_calendar(protocols: List[ProtocolRecord]):
    anchors, skipped = load_anchors(p.as_record() for p in protocols)
    events = [
        CalendarEventOut(
            title=e.title,
            start=e.start,
            end=e.end,
            all_day=e.all_day,
            category=e.category,
            color=e.color,
            protocol_id=e.protocol_id,
        )
        for e in to_calendar_events_for(anchors)
    ]
    return CalendarResponse(events=events, skipped=skipped)


@app.post("/dashboard", response_model=DashboardResponse)
def dashboard(
    body: DashboardRequest,
    now: Optional[str] = None,
    window: Optional[float] = None,
):
    at = resolve_now(now)
    window_days = resolve_window(window)
    anchors, skipped = load_anchors(p.as_record() for p in body.protocols)
    summary = summarize(anchors, at, window_days, skipped=skipped)

    pregnant = not_pregnant = None
    if body.animal_stats is not None:
        try:
            split = pregnancy_success(
                body.animal_stats.total_animals, body.animal_stats.pregnant_animals
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        pregnant, not_pregnant = split.pregnant, split.not_pregnant

    try:
        rates = pregnancy_rate_by_protocol(
            s.model_dump(by_alias=True) for s in body.protocol_stats
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        "dashboard: %d/%d protocol(s) need attention",
        summary.nearby_count,
        summary.total_protocols,
    )
    return DashboardResponse(
        total_protocols=summary.total_protocols,
        nearby_events=summary.nearby_count,
        notifications_enabled=summary.notifications_enabled,
        pregnant=pregnant,
        not_pregnant=not_pregnant,
        pregnancy_rate_by_protocol=[
            {"name": r.name, "pregnancyRate": r.pregnancy_rate} for r in rates
        ],
        skipped=list(summary.skipped),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("IATF_HOST", "127.0.0.1"),
        port=int(os.getenv("IATF_PORT", "8000")),
    )
