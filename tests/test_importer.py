from datetime import datetime, timezone

import pytest

from boathouse_core import (
    Coordinate,
    StravaSegmentEffortPayload,
    backfill_segment_times,
    best_efforts_from_segments,
    generate_loop_route,
    import_activities,
    session_from_activity,
)
from boathouse_core.validation import InputSanitizer

IMPORTED_AT = datetime(2025, 6, 18, 20, 0, tzinfo=timezone.utc)


def _activity(**overrides) -> dict:
    payload = {
        "id": 9001,
        "name": "Thames evening paddle",
        "type": "Kayaking",
        "sport_type": "Kayaking",
        "start_date": "2025-06-18T18:00:00Z",
        "elapsed_time": 2100,
        "moving_time": 2000,
        "distance": 6000.0,
        "max_speed": 4.8,
        "average_speed": 3.0,
        "start_latlng": [51.4613, -0.3037],
        "end_latlng": [51.4700, -0.2000],
        "map": {"id": "a9001", "summary_polyline": generate_loop_route(Coordinate(lat=51.46, lng=-0.25))},
        "segment_efforts": [
            {"id": 1001, "name": "Thames 1km Sprint Section", "elapsed_time": 234, "moving_time": 228, "distance": 1000},
            {"id": 1003, "name": "Richmond 1km", "elapsed_time": 223, "moving_time": 218, "distance": 1004.5},
            {"id": 1002, "name": "Grand Union 5km", "elapsed_time": 1156, "moving_time": 1123, "distance": 5000},
        ],
    }
    payload.update(overrides)
    return payload


def _session(**overrides):
    activity = InputSanitizer.validate_activity_payload(_activity(**overrides))
    return session_from_activity(activity, "u1", session_id="s1", imported_at=IMPORTED_AT)


def test_kayak_activity_maps_to_pending_session():
    session = _session()
    assert session.id == "s1"
    assert session.user_id == "u1"
    assert session.strava_id == 9001
    assert session.session_type == "kayaking"
    assert session.start_date == datetime(2025, 6, 18, 18, 0, tzinfo=timezone.utc)
    assert session.status == "pending"
    assert session.is_gps_verified is True
    assert session.is_in_region is True
    assert session.start_location == Coordinate(lat=51.4613, lng=-0.3037)
    assert session.imported_at == IMPORTED_AT


def test_best_efforts_are_taken_from_segments():
    session = _session()
    assert session.fastest_1km_time == 223.0
    assert session.fastest_5km_time == 1156.0
    assert session.fastest_10km_time is None


def test_missing_gps_is_not_verified_and_not_in_region():
    session = _session(start_latlng=[], end_latlng=[], map=None)
    assert session.is_gps_verified is False
    assert session.is_in_region is False


def test_activity_outside_region_is_flagged_as_such():
    session = _session(start_latlng=[48.85661, 2.35222], end_latlng=[48.86, 2.36], map=None)
    assert session.is_gps_verified is True
    assert session.is_in_region is False


def test_route_leaving_region_fails_in_region_check():
    route = generate_loop_route(Coordinate(lat=48.86, lng=2.35))
    session = _session(map={"id": "x", "summary_polyline": route})
    assert session.is_in_region is False


def test_moving_time_is_clamped_to_elapsed():
    session = _session(moving_time=2200, elapsed_time=2100)
    assert session.moving_time == session.elapsed_time == 2100.0


def test_canoe_sport_type_wins_over_legacy_type():
    assert _session(type="Workout", sport_type="Canoeing").session_type == "canoeing"


def test_import_skips_non_paddling_and_invalid_payloads():
    payloads = [
        _activity(id=1),
        _activity(id=2, type="Rowing", sport_type="Rowing"),
        _activity(id=3, type="Run", sport_type="TrailRun"),
        {"id": 4, "name": "broken"},
        _activity(id=5, type="Canoeing", sport_type=None),
    ]
    sessions = import_activities(payloads, "u1", imported_at=IMPORTED_AT)
    assert [session.strava_id for session in sessions] == [1, 5]
    assert len({session.id for session in sessions}) == 2


def test_invalid_payload_raises_value_error():
    with pytest.raises(ValueError):
        InputSanitizer.validate_activity_payload(_activity(start_latlng=[51.5]))
    with pytest.raises(ValueError):
        InputSanitizer.validate_activity_payload(_activity(distance=-3))


def test_activity_name_is_sanitized():
    assert _session(name="  <b>Sprint</b>\x07 ").name == "bSprint/b"


def test_best_efforts_ignore_off_distance_segments():
    efforts = [
        StravaSegmentEffortPayload(id=1, elapsed_time=300, moving_time=300, distance=1200),
        StravaSegmentEffortPayload(id=2, elapsed_time=2500, moving_time=2450, distance=9950),
    ]
    assert best_efforts_from_segments(efforts) == {"fastest_10km": 2500.0}


def test_backfill_keeps_faster_times_and_respects_distance(make_session):
    session = make_session(distance=6000.0, moving_time=1800.0, elapsed_time=1900.0, fastest_1km_time=240.0)
    efforts = [
        StravaSegmentEffortPayload(id=1, elapsed_time=250, moving_time=245, distance=1000),
        StravaSegmentEffortPayload(id=2, elapsed_time=1200, moving_time=1190, distance=5000),
        StravaSegmentEffortPayload(id=3, elapsed_time=2500, moving_time=2450, distance=10000),
    ]
    updated = backfill_segment_times(session, efforts)
    assert updated.fastest_1km_time == 240.0
    assert updated.fastest_5km_time == 1200.0
    assert updated.fastest_10km_time is None
    assert session.fastest_5km_time is None


def test_backfill_leaves_disqualified_session_untouched(make_session):
    session = make_session(status="disqualified")
    efforts = [StravaSegmentEffortPayload(id=1, elapsed_time=200, moving_time=200, distance=1000)]
    assert backfill_segment_times(session, efforts) is session
