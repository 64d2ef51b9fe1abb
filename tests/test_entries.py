from datetime import datetime, timedelta, timezone
from decimal import Decimal

from boathouse_core import EngineConfig, EntryOutcome, Rejection, create_entry

RACE_END = datetime(2025, 6, 23, 0, 0, tzinfo=timezone.utc)


def test_entry_is_accepted_and_fee_pooled(make_race):
    race = make_race(entry_count=4)
    now = RACE_END - timedelta(hours=4)
    outcome = create_entry(race, entry_id="e9", user_id="u9", now=now, session_id="s9")

    assert isinstance(outcome, EntryOutcome)
    assert outcome.race.entry_count == 5
    assert outcome.race.prize_pool == Decimal("104.99")
    assert outcome.entry.race_id == "r1"
    assert outcome.entry.session_id == "s9"
    assert outcome.entry.entered_at == now
    assert outcome.entry.status == "active"
    assert outcome.entry.has_session is True
    assert race.prize_pool == Decimal("100.00")


def test_daily_and_monthly_fees(make_race):
    now = RACE_END - timedelta(hours=6)
    daily = create_entry(make_race(duration="daily", prize_pool=Decimal("0")), entry_id="a", user_id="u", now=now)
    monthly = create_entry(make_race(duration="monthly", prize_pool=Decimal("0")), entry_id="b", user_id="u", now=now)
    assert daily.race.prize_pool == Decimal("1.00")
    assert monthly.race.prize_pool == Decimal("15.99")


def test_entry_at_deadline_is_rejected(make_race):
    race = make_race()
    outcome = create_entry(race, entry_id="e1", user_id="u1", now=RACE_END - timedelta(hours=3))
    assert isinstance(outcome, Rejection)
    assert outcome.kind == "entry_deadline_passed"


def test_entry_just_before_deadline_is_accepted(make_race):
    now = RACE_END - timedelta(hours=3, seconds=1)
    assert isinstance(create_entry(make_race(), entry_id="e1", user_id="u1", now=now), EntryOutcome)


def test_inactive_race_rejects_entries(make_race):
    now = datetime(2025, 6, 10, tzinfo=timezone.utc)
    for status in ("upcoming", "ended", "cancelled"):
        outcome = create_entry(make_race(status=status), entry_id="e1", user_id="u1", now=now)
        assert outcome.kind == "race_not_active"


def test_deadline_is_configurable(make_race):
    config = EngineConfig(entry_deadline_hours=1)
    now = RACE_END - timedelta(hours=2)
    assert isinstance(create_entry(make_race(), entry_id="e1", user_id="u1", now=now), Rejection)
    outcome = create_entry(make_race(), entry_id="e1", user_id="u1", now=now, config=config)
    assert isinstance(outcome, EntryOutcome)


def test_configured_fee_is_pooled(make_race):
    config = EngineConfig.from_mapping({"entry_fees": {"weekly": "2.50"}})
    now = RACE_END - timedelta(days=1)
    outcome = create_entry(make_race(), entry_id="e1", user_id="u1", now=now, config=config)
    assert outcome.race.prize_pool == Decimal("102.50")
