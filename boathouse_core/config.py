"""
Engine configuration using Pydantic v2.

Business-rule constants (region bounds, prize tiers, minimum distances, entry
deadline lead time, fees) are injected through EngineConfig rather than read
from module globals. Every public function accepts an optional `config` and
falls back to DEFAULT_CONFIG.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .types import RaceDuration, RaceType

logger = logging.getLogger(__name__)


class GeoBounds(BaseModel):
    """Inclusive latitude/longitude rectangle."""

    model_config = ConfigDict(frozen=True)

    min_latitude: float = Field(49.8, ge=-90.0, le=90.0, description="South edge")
    max_latitude: float = Field(60.9, ge=-90.0, le=90.0, description="North edge (Shetland)")
    min_longitude: float = Field(
        -8.2, ge=-180.0, le=180.0, description="West edge (Northern Ireland)"
    )
    max_longitude: float = Field(1.8, ge=-180.0, le=180.0, description="East edge")

    @model_validator(mode="after")
    def validate_ordering(self) -> Self:
        if self.min_latitude >= self.max_latitude:
            raise ValueError("min_latitude must be below max_latitude")
        if self.min_longitude >= self.max_longitude:
            raise ValueError("min_longitude must be below max_longitude")
        return self

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


class PrizeTiers(BaseModel):
    """Podium shares of the net pool plus the platform fee share of the gross pool."""

    model_config = ConfigDict(frozen=True)

    first: Decimal = Field(Decimal("0.75"), ge=0, le=1)
    second: Decimal = Field(Decimal("0.20"), ge=0, le=1)
    third: Decimal = Field(Decimal("0.05"), ge=0, le=1)
    platform_fee: Decimal = Field(Decimal("0.01"), ge=0, lt=1)

    @model_validator(mode="after")
    def validate_shares(self) -> Self:
        """Podium shares must split the whole net pool."""
        total = self.first + self.second + self.third
        if total != Decimal("1"):
            raise ValueError(f"prize tiers must sum to 1, got {total}")
        return self

    @property
    def net_share(self) -> Decimal:
        return Decimal("1") - self.platform_fee


def _default_min_distances() -> Dict[RaceType, float]:
    return {
        "top_speed": 0.0,
        "furthest_distance": 0.0,
        "fastest_1km": 1000.0,
        "fastest_5km": 5000.0,
        "fastest_10km": 10000.0,
    }


def _default_entry_fees() -> Dict[RaceDuration, Decimal]:
    return {
        "daily": Decimal("1.00"),
        "weekly": Decimal("4.99"),
        "monthly": Decimal("15.99"),
    }


class EngineConfig(BaseModel):
    """All policy knobs of the scoring and eligibility engine."""

    model_config = ConfigDict(frozen=True)

    region: GeoBounds = Field(default_factory=GeoBounds)
    prize_tiers: PrizeTiers = Field(default_factory=PrizeTiers)
    # Minimum recorded distance (meters) for a session to be eligible per race type
    min_distance_m: Dict[RaceType, float] = Field(default_factory=_default_min_distances)
    entry_deadline_hours: float = Field(3.0, ge=0, le=24 * 31)
    entry_fees: Dict[RaceDuration, Decimal] = Field(default_factory=_default_entry_fees)
    flag_review_threshold: int = Field(3, ge=1, le=1000)
    # Approximate number of interior points checked by validate_route
    route_sample_count: int = Field(10, ge=1, le=10000)
    # Policy for routes that decode to zero points
    empty_route_valid: bool = False

    @field_validator("min_distance_m")
    @classmethod
    def validate_min_distances(cls, v: Dict[RaceType, float]) -> Dict[RaceType, float]:
        """Fill in race types that were left out and reject negative distances."""
        merged = _default_min_distances()
        merged.update(v)
        for race_type, meters in merged.items():
            if meters < 0:
                raise ValueError(f"min_distance_m[{race_type}] cannot be negative")
        return merged

    @field_validator("entry_fees")
    @classmethod
    def validate_entry_fees(cls, v: Dict[RaceDuration, Decimal]) -> Dict[RaceDuration, Decimal]:
        merged = _default_entry_fees()
        merged.update(v)
        for duration, fee in merged.items():
            if fee < 0:
                raise ValueError(f"entry_fees[{duration}] cannot be negative")
        return merged

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any]) -> "EngineConfig":
        """
        Build a config from a plain mapping (e.g. parsed JSON/YAML settings).

        Raises:
            ValueError: If validation fails
        """
        try:
            return cls.model_validate(dict(overrides))
        except Exception as e:
            logger.warning(f"Engine config validation failed: {e}")
            raise ValueError(f"Invalid engine config: {str(e)}")


DEFAULT_CONFIG = EngineConfig()


def resolve_config(config: EngineConfig | None) -> EngineConfig:
    return DEFAULT_CONFIG if config is None else config


__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "GeoBounds",
    "PrizeTiers",
    "resolve_config",
]
