"""Session-to-race and user-to-category eligibility.

classify() runs an ordered list of checks and stops at the first failure, so
the reported reason always names the earliest violated rule:

1. session start inside the race window (inclusive)
2. GPS verified
3. recorded inside the region
4. canoe or kayak
5. moderation status verified
6. minimum distance for the race type (raw meters)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import EngineConfig, resolve_config
from .models import Race, Session
from .types import ELIGIBLE_SESSION_TYPES, Gender, RaceCategory

logger = logging.getLogger(__name__)


REASON_OUTSIDE_WINDOW = "Session is outside race time window"
REASON_NOT_GPS_VERIFIED = "Session requires GPS verification"
REASON_OUTSIDE_REGION = "Session must be completed in the UK"
REASON_SESSION_TYPE = "Only canoe and kayak sessions are eligible"
REASON_NOT_VERIFIED = "Session must be verified"


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "Eligibility":
        return cls(eligible=True)

    @classmethod
    def ineligible(cls, reason: str) -> "Eligibility":
        return cls(eligible=False, reason=reason)

    def __bool__(self) -> bool:
        return self.eligible


def _min_distance_reason(meters: float) -> str:
    if meters % 1000 == 0:
        return f"Session must be at least {int(meters // 1000)}km"
    return f"Session must be at least {meters:g}m"


def classify(session: Session, race: Race, config: EngineConfig | None = None) -> Eligibility:
    cfg = resolve_config(config)

    if not (race.start_date <= session.start_date <= race.end_date):
        result = Eligibility.ineligible(REASON_OUTSIDE_WINDOW)
    elif not session.is_gps_verified:
        result = Eligibility.ineligible(REASON_NOT_GPS_VERIFIED)
    elif not session.is_in_region:
        result = Eligibility.ineligible(REASON_OUTSIDE_REGION)
    elif session.session_type not in ELIGIBLE_SESSION_TYPES:
        result = Eligibility.ineligible(REASON_SESSION_TYPE)
    elif session.status != "verified":
        result = Eligibility.ineligible(REASON_NOT_VERIFIED)
    else:
        min_meters = cfg.min_distance_m.get(race.race_type, 0.0)
        if session.distance < min_meters:
            result = Eligibility.ineligible(_min_distance_reason(min_meters))
        else:
            result = Eligibility.ok()

    if not result.eligible:
        logger.debug(f"Session {session.id} ineligible for race {race.id}: {result.reason}")
    return result


# Age bracket upper bounds (exclusive) paired with the categories opened up at
# that age, youngest first. Everyone can race their own bracket and any older one.
_FEMALE_LADDER: tuple[tuple[int | None, tuple[RaceCategory, ...]], ...] = (
    (18, ("junior_girls", "junior_boys")),
    (23, ("women_u23", "men_u23")),
    (35, ("senior_women", "senior_men")),
    (None, ("masters_women", "masters_men")),
)
_MALE_LADDER: tuple[tuple[int | None, tuple[RaceCategory, ...]], ...] = (
    (18, ("junior_boys",)),
    (23, ("men_u23",)),
    (35, ("senior_men",)),
    (None, ("masters_men",)),
)


def eligible_categories(age: int | None, gender: Gender | None) -> list[RaceCategory]:
    """
    Race categories a user may enter.

    Women may also enter the open (men's) brackets for their age and above.
    Unknown age or gender (or gender 'other') yields no categories.
    """
    if age is None or gender is None:
        return []
    if gender == "female":
        ladder = _FEMALE_LADDER
    elif gender == "male":
        ladder = _MALE_LADDER
    else:
        return []

    categories: list[RaceCategory] = []
    reached = False
    for upper, cats in ladder:
        if not reached and (upper is None or age < upper):
            reached = True
        if reached:
            categories.extend(cats)
    return categories


def is_user_eligible(age: int | None, gender: Gender | None, category: RaceCategory) -> bool:
    return category in eligible_categories(age, gender)


__all__ = [
    "Eligibility",
    "REASON_NOT_GPS_VERIFIED",
    "REASON_NOT_VERIFIED",
    "REASON_OUTSIDE_REGION",
    "REASON_OUTSIDE_WINDOW",
    "REASON_SESSION_TYPE",
    "classify",
    "eligible_categories",
    "is_user_eligible",
]
