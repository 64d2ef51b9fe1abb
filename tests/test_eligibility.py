from datetime import datetime, timezone

from boathouse_core import classify, eligible_categories, is_user_eligible
from boathouse_core.eligibility import (
    REASON_NOT_GPS_VERIFIED,
    REASON_NOT_VERIFIED,
    REASON_OUTSIDE_REGION,
    REASON_OUTSIDE_WINDOW,
    REASON_SESSION_TYPE,
)

BEFORE_RACE = datetime(2025, 6, 10, 8, 0, tzinfo=timezone.utc)


def test_verified_kayak_session_in_window_is_eligible(make_session, make_race):
    result = classify(make_session(), make_race())
    assert result.eligible is True
    assert result.reason is None
    assert bool(result) is True


def test_window_violation_wins_over_gps_violation(make_session, make_race):
    session = make_session(start_date=BEFORE_RACE, is_gps_verified=False)
    result = classify(session, make_race())
    assert result.eligible is False
    assert result.reason == REASON_OUTSIDE_WINDOW


def test_window_is_inclusive_on_both_ends(make_session, make_race):
    race = make_race()
    assert classify(make_session(start_date=race.start_date), race).eligible is True
    assert classify(make_session(start_date=race.end_date), race).eligible is True


def test_checks_report_first_failing_rule(make_session, make_race):
    race = make_race()
    cases = [
        (dict(is_gps_verified=False, is_in_region=False), REASON_NOT_GPS_VERIFIED),
        (dict(is_in_region=False, session_type="rowing"), REASON_OUTSIDE_REGION),
        (dict(session_type="rowing", status="pending"), REASON_SESSION_TYPE),
        (dict(session_type="stand_up_paddling"), REASON_SESSION_TYPE),
        (dict(status="flagged", distance=10.0), REASON_NOT_VERIFIED),
    ]
    for overrides, reason in cases:
        result = classify(make_session(**overrides), race)
        assert result.eligible is False, overrides
        assert result.reason == reason, overrides


def test_canoe_is_eligible(make_session, make_race):
    assert classify(make_session(session_type="canoeing"), make_race()).eligible is True


def test_minimum_distance_boundary_for_1km(make_session, make_race):
    race = make_race(race_type="fastest_1km")
    short = classify(make_session(distance=999.9), race)
    assert short.eligible is False
    assert short.reason == "Session must be at least 1km"
    assert classify(make_session(distance=1000.0), race).eligible is True


def test_minimum_distance_for_5km_and_10km(make_session, make_race):
    assert classify(make_session(distance=4999.0), make_race(race_type="fastest_5km")).reason == (
        "Session must be at least 5km"
    )
    assert classify(make_session(distance=9999.0), make_race(race_type="fastest_10km")).reason == (
        "Session must be at least 10km"
    )
    assert classify(make_session(distance=10000.0), make_race(race_type="fastest_10km")).eligible


def test_speed_and_distance_races_have_no_minimum(make_session, make_race):
    tiny = make_session(distance=50.0)
    assert classify(tiny, make_race(race_type="top_speed")).eligible is True
    assert classify(tiny, make_race(race_type="furthest_distance")).eligible is True


def test_junior_female_can_enter_every_category():
    cats = eligible_categories(16, "female")
    assert len(cats) == 8
    assert "junior_girls" in cats
    assert "masters_men" in cats


def test_male_brackets_open_upwards():
    assert eligible_categories(16, "male") == ["junior_boys", "men_u23", "senior_men", "masters_men"]
    assert eligible_categories(22, "male") == ["men_u23", "senior_men", "masters_men"]
    assert eligible_categories(40, "male") == ["masters_men"]


def test_female_u23_excludes_junior_categories():
    assert eligible_categories(20, "female") == [
        "women_u23",
        "men_u23",
        "senior_women",
        "senior_men",
        "masters_women",
        "masters_men",
    ]


def test_unknown_age_or_gender_has_no_categories():
    assert eligible_categories(None, "male") == []
    assert eligible_categories(30, None) == []
    assert eligible_categories(30, "other") == []


def test_is_user_eligible():
    assert is_user_eligible(30, "female", "senior_men") is True
    assert is_user_eligible(30, "male", "junior_boys") is False
