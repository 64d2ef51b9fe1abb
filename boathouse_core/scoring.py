"""Race-type scores and their better-direction table."""
from __future__ import annotations

import math

from .config import EngineConfig, resolve_config
from .models import Session
from .types import SUB_EFFORT_DISTANCES_M, RaceType, ScoreDirection


# top_speed is km/h, furthest_distance is km, fastest_* are elapsed seconds.
SCORE_DIRECTION: dict[RaceType, ScoreDirection] = {
    "top_speed": "higher",
    "furthest_distance": "higher",
    "fastest_1km": "lower",
    "fastest_5km": "lower",
    "fastest_10km": "lower",
}

SCORE_UNITS: dict[RaceType, str] = {
    "top_speed": "km/h",
    "furthest_distance": "km",
    "fastest_1km": "s",
    "fastest_5km": "s",
    "fastest_10km": "s",
}


def higher_is_better(race_type: RaceType) -> bool:
    return SCORE_DIRECTION[race_type] == "higher"


def is_better_score(score: float, other: float, race_type: RaceType) -> bool:
    if higher_is_better(race_type):
        return score > other
    return score < other


def effort_time(session: Session, race_type: RaceType, config: EngineConfig | None = None) -> float | None:
    """
    Seconds for the race type's sub-distance.

    Uses the recorded best effort when present, otherwise scales the average
    moving pace to the target distance. Sessions shorter than the target never
    get a time: pace is not extrapolated past what was paddled.
    """
    target_m = SUB_EFFORT_DISTANCES_M[race_type]
    threshold_m = max(target_m, resolve_config(config).min_distance_m.get(race_type, 0.0))
    if session.distance < threshold_m:
        return None
    recorded = session.recorded_effort(race_type)
    if recorded is not None:
        return recorded
    pace = session.pace_per_km()
    if pace is None:
        return None
    return pace * (target_m / 1000.0)


def score(session: Session, race_type: RaceType, config: EngineConfig | None = None) -> float | None:
    """Comparable score for `race_type`, or None when the session cannot be scored."""
    if not session.is_eligible_for_races:
        return None
    if race_type == "top_speed":
        value = session.max_speed_kmh
    elif race_type == "furthest_distance":
        value = session.distance_km
    else:
        value = effort_time(session, race_type, config)
    if value is None or not math.isfinite(value):
        return None
    return value


__all__ = [
    "SCORE_DIRECTION",
    "SCORE_UNITS",
    "effort_time",
    "higher_is_better",
    "is_better_score",
    "score",
]
