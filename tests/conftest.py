"""
Shared fixtures for boathouse_core tests.

Factories return valid, race-eligible defaults; each test overrides only the
fields it cares about.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from boathouse_core import Coordinate, Entry, Race, Session

UTC = timezone.utc

RACE_START = datetime(2025, 6, 16, 0, 0, tzinfo=UTC)
RACE_END = datetime(2025, 6, 23, 0, 0, tzinfo=UTC)
IN_WINDOW = datetime(2025, 6, 18, 8, 0, tzinfo=UTC)

LONDON = Coordinate(lat=51.50735, lng=-0.12776)
PARIS = Coordinate(lat=48.85661, lng=2.35222)


@pytest.fixture
def make_session():
    def _make(**overrides) -> Session:
        fields = {
            "id": "s1",
            "user_id": "u1",
            "session_type": "kayaking",
            "start_date": IN_WINDOW,
            "elapsed_time": 3700.0,
            "moving_time": 3600.0,
            "distance": 12000.0,
            "max_speed": 5.0,
            "average_speed": 3.3,
            "start_location": LONDON,
            "end_location": LONDON,
            "is_gps_verified": True,
            "is_in_region": True,
            "status": "verified",
        }
        fields.update(overrides)
        return Session(**fields)

    return _make


@pytest.fixture
def make_race():
    def _make(**overrides) -> Race:
        fields = {
            "id": "r1",
            "race_type": "fastest_1km",
            "duration": "weekly",
            "category": "senior_men",
            "start_date": RACE_START,
            "end_date": RACE_END,
            "prize_pool": Decimal("100.00"),
            "status": "active",
        }
        fields.update(overrides)
        return Race(**fields)

    return _make


@pytest.fixture
def make_entry():
    def _make(entry_id: str, score: float | None = None, **overrides) -> Entry:
        fields = {
            "id": entry_id,
            "user_id": f"user-{entry_id}",
            "race_id": "r1",
            "entered_at": RACE_START,
            "score": score,
        }
        fields.update(overrides)
        return Entry(**fields)

    return _make
