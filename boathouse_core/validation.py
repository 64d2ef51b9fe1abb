"""
Input validation schemas using Pydantic v2
Validates raw Strava activity payloads before they become Sessions
"""

import logging
import re
from typing import List, Optional, Self

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

PADDLING_ACTIVITY_TYPES = ("Canoeing", "Kayaking")

# ==================== SCHEMAS ====================


class StravaMapPayload(BaseModel):
    """The `map` object of a Strava activity"""

    id: str = Field("", max_length=64)
    polyline: Optional[str] = None
    summary_polyline: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class StravaSegmentEffortPayload(BaseModel):
    """A segment effort from the Strava activity detail endpoint"""

    id: int = Field(..., ge=0)
    name: str = Field("", max_length=255)
    elapsed_time: int = Field(..., gt=0, description="Seconds")
    moving_time: int = Field(..., ge=0, description="Seconds")
    distance: float = Field(..., gt=0, description="Meters")

    model_config = ConfigDict(extra="allow", allow_inf_nan=False)


class StravaActivityPayload(BaseModel):
    """Validated Strava activity summary/detail payload"""

    id: int = Field(..., ge=0, description="Strava activity id")
    name: str = Field("", max_length=255)
    type: str = Field(..., min_length=1, max_length=50, description="Legacy activity type")
    sport_type: Optional[str] = Field(None, max_length=50)
    start_date: AwareDatetime
    elapsed_time: int = Field(..., ge=0, description="Seconds")
    moving_time: int = Field(..., ge=0, description="Seconds")
    distance: float = Field(..., ge=0, description="Meters")
    max_speed: Optional[float] = Field(None, ge=0, description="m/s")
    average_speed: Optional[float] = Field(None, ge=0, description="m/s")
    start_latlng: Optional[List[float]] = None
    end_latlng: Optional[List[float]] = None
    map: Optional[StravaMapPayload] = None
    segment_efforts: Optional[List[StravaSegmentEffortPayload]] = None

    model_config = ConfigDict(extra="allow", allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return InputSanitizer.sanitize_activity_name(v)

    @field_validator("start_latlng", "end_latlng")
    @classmethod
    def validate_latlng(cls, v: Optional[List[float]]) -> Optional[List[float]]:
        """Strava sends [] for activities without GPS; treat that as missing"""
        if v is None or len(v) == 0:
            return None
        if len(v) != 2:
            raise ValueError("latlng must be [lat, lng]")
        lat, lng = v
        if not -90.0 <= lat <= 90.0:
            raise ValueError(f"latitude out of range: {lat}")
        if not -180.0 <= lng <= 180.0:
            raise ValueError(f"longitude out of range: {lng}")
        return [float(lat), float(lng)]

    @model_validator(mode="after")
    def validate_times(self) -> Self:
        if self.elapsed_time == 0 and self.distance > 0:
            raise ValueError("elapsed_time cannot be zero for a non-zero distance")
        return self

    @property
    def summary_polyline(self) -> Optional[str]:
        if self.map is None:
            return None
        return self.map.summary_polyline or self.map.polyline


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int = 255) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            return str(value)[:max_length]

        value = value.strip()
        value = value[:max_length]
        value = value.replace("\0", "")
        return value

    @staticmethod
    def sanitize_activity_name(name: str) -> str:
        """Strip control characters and markup from user-entered activity titles"""
        name = InputSanitizer.sanitize_string(name, 255)
        name = re.sub(r"[<>\x00-\x1f\x7f]", "", name)
        return name.strip()

    @staticmethod
    def validate_activity_payload(payload: dict) -> StravaActivityPayload:
        """
        Validate a raw Strava activity dictionary

        Returns:
            StravaActivityPayload: Validated payload

        Raises:
            ValueError: If validation fails
        """
        try:
            return StravaActivityPayload.model_validate(payload)
        except Exception as e:
            logger.warning(f"Strava activity validation failed: {e}")
            raise ValueError(f"Invalid activity: {str(e)}")


# ==================== EXPORT ====================

__all__ = [
    "InputSanitizer",
    "PADDLING_ACTIVITY_TYPES",
    "StravaActivityPayload",
    "StravaMapPayload",
    "StravaSegmentEffortPayload",
]
