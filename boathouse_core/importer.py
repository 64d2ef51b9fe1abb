"""Map Strava activities to Sessions and backfill best-effort times.

The import collaborator fetches the JSON; this module decides what the engine
believes about it:
- only canoe/kayak activities are imported
- is_gps_verified: the activity carries a start_latlng
- is_in_region: start/end inside the region and, when a route is present,
  the sampled route as well
- new sessions start in status 'pending' until moderation verifies them
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable, Sequence

from .config import EngineConfig
from .geofence import validate_route, validate_session_location
from .models import EFFORT_FIELDS, Session
from .polyline import Coordinate
from .types import SUB_EFFORT_DISTANCES_M, RaceType, SessionType
from .validation import (
    PADDLING_ACTIVITY_TYPES,
    InputSanitizer,
    StravaActivityPayload,
    StravaSegmentEffortPayload,
)

logger = logging.getLogger(__name__)

_SESSION_TYPES: dict[str, SessionType] = {
    "Canoeing": "canoeing",
    "Kayaking": "kayaking",
    "Rowing": "rowing",
    "StandUpPaddling": "stand_up_paddling",
}

# Segment distances are surveyed, so allow a little slack around the nominal distance.
SEGMENT_DISTANCE_TOLERANCE = 0.01


def is_canoe_or_kayak(activity: StravaActivityPayload) -> bool:
    return activity.type in PADDLING_ACTIVITY_TYPES or activity.sport_type in PADDLING_ACTIVITY_TYPES


def session_type_for(activity: StravaActivityPayload) -> SessionType:
    for raw in (activity.sport_type, activity.type):
        if raw in _SESSION_TYPES:
            return _SESSION_TYPES[raw]
    return "canoeing"


def best_efforts_from_segments(
    efforts: Iterable[StravaSegmentEffortPayload],
) -> dict[RaceType, float]:
    """Fastest elapsed time per sub-distance among efforts of (almost) that length."""
    best: dict[RaceType, float] = {}
    for effort in efforts:
        for race_type, target in SUB_EFFORT_DISTANCES_M.items():
            if abs(effort.distance - target) > target * SEGMENT_DISTANCE_TOLERANCE:
                continue
            current = best.get(race_type)
            if current is None or effort.elapsed_time < current:
                best[race_type] = float(effort.elapsed_time)
    return best


def _coordinate(latlng: Sequence[float] | None) -> Coordinate | None:
    if latlng is None:
        return None
    return Coordinate(lat=latlng[0], lng=latlng[1])


def _effort_updates(session_distance: float, best: dict[RaceType, float]) -> dict[str, float]:
    updates: dict[str, float] = {}
    for race_type, seconds in best.items():
        if session_distance >= SUB_EFFORT_DISTANCES_M[race_type]:
            updates[EFFORT_FIELDS[race_type]] = seconds
    return updates


def session_from_activity(
    activity: StravaActivityPayload,
    user_id: str,
    *,
    session_id: str | None = None,
    imported_at: datetime | None = None,
    config: EngineConfig | None = None,
) -> Session:
    start = _coordinate(activity.start_latlng)
    end = _coordinate(activity.end_latlng)
    route = activity.summary_polyline
    moving_time = activity.moving_time
    if moving_time > activity.elapsed_time:
        logger.debug(
            f"Activity {activity.id} moving_time {moving_time}s exceeds elapsed "
            f"{activity.elapsed_time}s; clamping"
        )
        moving_time = activity.elapsed_time

    session = Session(
        id=session_id or str(uuid.uuid4()),
        user_id=user_id,
        session_type=session_type_for(activity),
        start_date=activity.start_date,
        elapsed_time=float(activity.elapsed_time),
        moving_time=float(moving_time),
        distance=activity.distance,
        max_speed=activity.max_speed,
        average_speed=activity.average_speed,
        start_location=start,
        end_location=end,
        polyline=route,
        is_gps_verified=start is not None,
        name=InputSanitizer.sanitize_activity_name(activity.name),
        strava_id=activity.id,
        imported_at=imported_at,
        status="pending",
        **_effort_updates(activity.distance, best_efforts_from_segments(activity.segment_efforts or [])),
    )
    in_region = validate_session_location(session, config)
    if in_region and route:
        in_region = validate_route(route, config)
    return session.model_copy(update={"is_in_region": in_region})


def import_activities(
    payloads: Iterable[dict],
    user_id: str,
    *,
    imported_at: datetime | None = None,
    config: EngineConfig | None = None,
) -> list[Session]:
    """Validate raw activity dicts and map the paddling ones to Sessions.

    Invalid payloads are logged and skipped so one bad activity does not block
    the rest of the page.
    """
    sessions: list[Session] = []
    for raw in payloads:
        try:
            activity = InputSanitizer.validate_activity_payload(raw)
        except ValueError:
            continue
        if not is_canoe_or_kayak(activity):
            continue
        sessions.append(
            session_from_activity(activity, user_id, imported_at=imported_at, config=config)
        )
    logger.info(f"Imported {len(sessions)} paddling sessions for user {user_id}")
    return sessions


def backfill_segment_times(
    session: Session,
    efforts: Iterable[StravaSegmentEffortPayload],
) -> Session:
    """
    Return a copy of `session` with best-effort times improved from `efforts`.

    Existing faster times are kept, sub-distances the session did not cover
    are never filled, and disqualified sessions are returned unchanged.
    """
    if session.is_disqualified:
        return session
    updates: dict[str, float] = {}
    for field_name, seconds in _effort_updates(session.distance, best_efforts_from_segments(efforts)).items():
        current = getattr(session, field_name)
        if current is None or seconds < current:
            updates[field_name] = seconds
    if not updates:
        return session
    return session.model_copy(update=updates)


__all__ = [
    "SEGMENT_DISTANCE_TOLERANCE",
    "backfill_segment_times",
    "best_efforts_from_segments",
    "import_activities",
    "is_canoe_or_kayak",
    "session_from_activity",
    "session_type_for",
]
