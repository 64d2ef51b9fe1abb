"""Session feed filtering by calendar window and distance type."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

from .models import Session
from .types import SUB_EFFORT_DISTANCES_M, RaceType, TimeFilter


def _in_window(day: date, now_day: date, time_filter: TimeFilter) -> bool:
    if time_filter == "daily":
        return day == now_day
    if time_filter == "weekly":
        # Weeks start on Monday.
        week_start = now_day - timedelta(days=now_day.weekday())
        return week_start <= day < week_start + timedelta(days=7)
    if time_filter == "monthly":
        return (day.year, day.month) == (now_day.year, now_day.month)
    if time_filter == "yearly":
        return day.year == now_day.year
    raise ValueError(f"unknown time filter: {time_filter}")


def filter_sessions(
    sessions: Iterable[Session],
    time_filter: TimeFilter,
    distance_filter: RaceType,
    now: datetime,
) -> list[Session]:
    """
    Sessions in the calendar period containing `now`, ordered for the feed.

    Calendar days are taken in `now`'s timezone. For fastest_* filters only
    sessions with a recorded effort for that distance are kept, fastest first
    with ties broken by session id; otherwise all sessions are kept, newest
    first.
    """
    tz = now.tzinfo
    now_day = now.date()
    in_period = [
        session
        for session in sessions
        if _in_window(session.start_date.astimezone(tz).date(), now_day, time_filter)
    ]

    if distance_filter in SUB_EFFORT_DISTANCES_M:
        timed = [s for s in in_period if s.recorded_effort(distance_filter) is not None]
        timed.sort(key=lambda s: (s.recorded_effort(distance_filter), s.id))
        return timed

    # Stable on id first so equal start dates keep a fixed order.
    in_period.sort(key=lambda s: s.id)
    in_period.sort(key=lambda s: s.start_date, reverse=True)
    return in_period


__all__ = ["filter_sessions"]
