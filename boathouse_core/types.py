"""Type definitions for race vocabularies."""
from __future__ import annotations

from typing import Literal, get_args


RaceType = Literal[
    "top_speed",
    "furthest_distance",
    "fastest_1km",
    "fastest_5km",
    "fastest_10km",
]
RaceDuration = Literal["daily", "weekly", "monthly"]
RaceStatus = Literal["upcoming", "active", "ended", "cancelled"]
RaceCategory = Literal[
    "junior_girls",
    "junior_boys",
    "women_u23",
    "men_u23",
    "senior_women",
    "senior_men",
    "masters_women",
    "masters_men",
]

SessionType = Literal["canoeing", "kayaking", "rowing", "stand_up_paddling"]
# pending -> verified | flagged -> under_review -> disqualified
SessionStatus = Literal["pending", "verified", "flagged", "under_review", "disqualified"]

EntryStatus = Literal["active", "completed", "disqualified", "refunded"]

Gender = Literal["male", "female", "other"]
ModerationDecision = Literal["approve", "disqualify", "require_more_info"]
FlagReason = Literal[
    "suspicious_speed",
    "motorized_assistance",
    "impossible_route",
    "fake_activity",
    "other",
]
FLAG_REASONS: tuple[FlagReason, ...] = get_args(FlagReason)
TimeFilter = Literal["daily", "weekly", "monthly", "yearly"]
ScoreDirection = Literal["higher", "lower"]


# Sub-effort distances in meters, keyed by the race type that scores them.
SUB_EFFORT_DISTANCES_M: dict[RaceType, float] = {
    "fastest_1km": 1000.0,
    "fastest_5km": 5000.0,
    "fastest_10km": 10000.0,
}

ELIGIBLE_SESSION_TYPES: frozenset[str] = frozenset({"canoeing", "kayaking"})

