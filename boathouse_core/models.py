"""
Validated domain values: Session, Race and Entry.

The models are frozen pydantic models. Invariants that would make an instance
meaningless (end before start, moving time above elapsed time, a 5km effort on
a 3km session, a prize on rank 7) are rejected at construction time with a
pydantic ValidationError, so the pure engine functions never see them.

Updates (moderation, backfill, settlement) go through model_copy(update=...)
and produce a new instance.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Self

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from .config import EngineConfig, resolve_config
from .polyline import Coordinate
from .types import (
    SUB_EFFORT_DISTANCES_M,
    EntryStatus,
    FlagReason,
    RaceCategory,
    RaceDuration,
    RaceStatus,
    RaceType,
    SessionStatus,
    SessionType,
)

PODIUM_PLACES = 3

EFFORT_FIELDS: dict[RaceType, str] = {
    "fastest_1km": "fastest_1km_time",
    "fastest_5km": "fastest_5km_time",
    "fastest_10km": "fastest_10km_time",
}


class SessionFlag(BaseModel):
    """One community report against a session."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1, max_length=64)
    reason: FlagReason = "other"


class Session(BaseModel):
    """A recorded paddling activity imported from the fitness-tracking source."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(..., min_length=1, max_length=64)
    user_id: str = Field(..., min_length=1, max_length=64)
    session_type: SessionType
    start_date: AwareDatetime
    elapsed_time: float = Field(..., ge=0, description="Seconds")
    moving_time: float = Field(..., ge=0, description="Seconds")
    distance: float = Field(..., ge=0, description="Meters")
    max_speed: Optional[float] = Field(None, ge=0, description="m/s")
    average_speed: Optional[float] = Field(None, ge=0, description="m/s")
    start_location: Optional[Coordinate] = None
    end_location: Optional[Coordinate] = None
    polyline: Optional[str] = None

    is_gps_verified: bool = False
    is_in_region: bool = False
    flag_count: int = Field(0, ge=0)
    # Flags with a known reporter; flag_count may include older anonymous ones
    flags: tuple[SessionFlag, ...] = ()
    status: SessionStatus = "pending"

    # Best known sub-effort times in seconds
    fastest_1km_time: Optional[float] = Field(None, gt=0)
    fastest_5km_time: Optional[float] = Field(None, gt=0)
    fastest_10km_time: Optional[float] = Field(None, gt=0)

    name: str = Field("", max_length=255)
    strava_id: Optional[int] = None
    imported_at: Optional[AwareDatetime] = None

    @model_validator(mode="after")
    def validate_invariants(self) -> Self:
        if self.moving_time > self.elapsed_time:
            raise ValueError("moving_time cannot exceed elapsed_time")
        if len(self.flags) > self.flag_count:
            raise ValueError("flag_count cannot be below the number of recorded flags")
        for race_type, field_name in EFFORT_FIELDS.items():
            if getattr(self, field_name) is not None and self.distance < SUB_EFFORT_DISTANCES_M[race_type]:
                raise ValueError(
                    f"{field_name} requires a distance of at least "
                    f"{SUB_EFFORT_DISTANCES_M[race_type]:.0f}m, got {self.distance}m"
                )
        return self

    @property
    def distance_km(self) -> float:
        return self.distance / 1000.0

    @property
    def max_speed_kmh(self) -> float | None:
        if self.max_speed is None:
            return None
        return self.max_speed * 3.6

    @property
    def average_speed_kmh(self) -> float | None:
        if self.average_speed is None:
            return None
        return self.average_speed * 3.6

    @property
    def is_flagged(self) -> bool:
        return self.flag_count > 0

    def was_flagged_by(self, user_id: str) -> bool:
        return any(flag.user_id == user_id for flag in self.flags)

    @property
    def is_disqualified(self) -> bool:
        return self.status == "disqualified"

    @property
    def is_eligible_for_races(self) -> bool:
        """Always-required subset of race eligibility (no window, type or distance checks)."""
        return self.is_gps_verified and self.is_in_region and self.status == "verified"

    def pace_per_km(self) -> float | None:
        """Seconds per kilometer over moving time, None for a zero-distance session."""
        if self.distance <= 0:
            return None
        return self.moving_time / self.distance_km

    def recorded_effort(self, race_type: RaceType) -> float | None:
        field_name = EFFORT_FIELDS.get(race_type)
        if field_name is None:
            return None
        return getattr(self, field_name)


class Race(BaseModel):
    """A competition window for one race type, duration class and category."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=64)
    race_type: RaceType
    duration: RaceDuration
    category: RaceCategory
    start_date: AwareDatetime
    end_date: AwareDatetime
    entry_count: int = Field(0, ge=0)
    prize_pool: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    status: RaceStatus = "upcoming"
    created_at: Optional[AwareDatetime] = None

    @model_validator(mode="after")
    def validate_window(self) -> Self:
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

    def entry_fee(self, config: EngineConfig | None = None) -> Decimal:
        return resolve_config(config).entry_fees[self.duration]

    def entry_deadline(self, config: EngineConfig | None = None) -> datetime:
        hours = resolve_config(config).entry_deadline_hours
        return self.end_date - timedelta(hours=hours)

    def can_enter(self, now: datetime, config: EngineConfig | None = None) -> bool:
        return self.status == "active" and now < self.entry_deadline(config)


class Entry(BaseModel):
    """A user's participation in one race."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(..., min_length=1, max_length=64)
    user_id: str = Field(..., min_length=1, max_length=64)
    race_id: str = Field(..., min_length=1, max_length=64)
    session_id: Optional[str] = None
    entered_at: AwareDatetime
    # Unit and better-direction come from the parent race type
    score: Optional[float] = None
    rank: Optional[int] = Field(None, ge=1)
    status: EntryStatus = "active"
    prize_won: Optional[Decimal] = Field(None, ge=0)
    transaction_id: Optional[str] = None

    @model_validator(mode="after")
    def validate_prize(self) -> Self:
        if self.prize_won is not None:
            if self.rank is None:
                raise ValueError("prize_won requires a rank")
            if self.rank > PODIUM_PLACES:
                raise ValueError(f"prize_won is only allowed for rank <= {PODIUM_PLACES}")
        return self

    @property
    def has_session(self) -> bool:
        return self.session_id is not None

    @property
    def is_winner(self) -> bool:
        return self.rank is not None and self.rank <= PODIUM_PLACES and self.prize_won is not None


__all__ = ["EFFORT_FIELDS", "Entry", "PODIUM_PLACES", "Race", "Session", "SessionFlag"]
