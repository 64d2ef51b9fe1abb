"""Race entry acceptance and entry-fee pooling."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from .config import EngineConfig
from .models import Entry, Race
from .outcomes import Rejection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryOutcome:
    """The race with its entry count and pool advanced, plus the new entry."""

    race: Race
    entry: Entry


def create_entry(
    race: Race,
    *,
    entry_id: str,
    user_id: str,
    now: datetime,
    session_id: str | None = None,
    config: EngineConfig | None = None,
) -> EntryOutcome | Rejection:
    """
    Accept a new entry if the race is active and its entry deadline has not passed.

    The race's entry fee is added to the prize pool. Charging the user's wallet
    and persisting both values are left to the caller.
    """
    if race.status != "active":
        return Rejection(kind="race_not_active", message=f"Race {race.id} is {race.status}")
    if not race.can_enter(now, config):
        deadline = race.entry_deadline(config)
        return Rejection(
            kind="entry_deadline_passed",
            message=f"Entries for race {race.id} closed at {deadline.isoformat()}",
        )

    fee = race.entry_fee(config)
    entry = Entry(
        id=entry_id,
        user_id=user_id,
        race_id=race.id,
        session_id=session_id,
        entered_at=now,
    )
    updated_race = race.model_copy(
        update={
            "entry_count": race.entry_count + 1,
            "prize_pool": race.prize_pool + fee,
        }
    )
    logger.debug(f"Entry {entry_id} accepted for race {race.id}; pool now {updated_race.prize_pool}")
    return EntryOutcome(race=updated_race, entry=entry)


__all__ = ["EntryOutcome", "create_entry"]
