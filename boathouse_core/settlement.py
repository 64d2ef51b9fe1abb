"""End-of-race settlement (pure, no persistence/ledger).

This module composes the engine into the end-of-race pipeline. All functions
are deterministic and side-effect free (no I/O, no database, no wallet calls).

Architecture:
- score_entries() attaches a score to each entry from its linked session
  (classify() for the race, then score() for the race type)
- settle() takes (race, entries) and returns a RaceResult
- Entries are frozen models; ranked/awarded copies are returned, inputs are
  never mutated
- The caller (persistence + wallet services) applies the RaceResult exactly
  once: updates entry rank/status/prize and credits each PrizeAward

Key concepts:
- Only entries with a score and status active/completed take part in ranking
- Podium (ranks 1..3) receives first/second/third from calculate_prizes()
- processed_at defaults to race.end_date so settling the same input twice
  yields an identical RaceResult
- "Settle exactly once" is the caller's transactional concern; this module
  does not track which races have been settled
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Sequence

from .config import EngineConfig
from .eligibility import classify
from .models import PODIUM_PLACES, Entry, Race, Session
from .prizes import PrizeDistribution, calculate_prizes
from .ranking import rank
from .scoring import score

logger = logging.getLogger(__name__)

SETTLEABLE_STATUSES = frozenset({"active", "completed"})


@dataclass(frozen=True)
class PrizeAward:
    entry_id: str
    user_id: str
    amount: Decimal
    rank: int


@dataclass(frozen=True)
class RaceResult:
    """Settlement output handed to the persistence/ledger collaborator."""

    race_id: str
    ranked_entries: tuple[Entry, ...]
    prize_awards: tuple[PrizeAward, ...]
    total_pool: Decimal
    platform_fee: Decimal
    prize_distribution: PrizeDistribution
    processed_at: datetime

    def award_for(self, entry_id: str) -> PrizeAward | None:
        for award in self.prize_awards:
            if award.entry_id == entry_id:
                return award
        return None


def score_entries(
    race: Race,
    entries: Sequence[Entry],
    sessions: Mapping[str, Session],
    config: EngineConfig | None = None,
) -> list[Entry]:
    """Return copies of `entries` with `score` computed from their linked session.

    Args:
        race: the race being scored; its window and type drive eligibility.
        entries: entries of this race.
        sessions: session id -> Session lookup.

    Returns:
        Entries in input order. Entries without a session, with an unknown
        session id, or whose session is ineligible get score None.
    """
    scored: list[Entry] = []
    for entry in entries:
        value: float | None = None
        session = sessions.get(entry.session_id) if entry.session_id else None
        if session is not None and classify(session, race, config).eligible:
            value = score(session, race.race_type, config)
        elif entry.session_id and session is None:
            logger.debug(f"Entry {entry.id} links unknown session {entry.session_id}")
        scored.append(entry.model_copy(update={"score": value}))
    return scored


def settle(
    race: Race,
    entries: Sequence[Entry],
    *,
    processed_at: datetime | None = None,
    config: EngineConfig | None = None,
) -> RaceResult:
    """
    Rank scored entries and compute podium prize awards for `race`.

    Empty or all-unscored input yields a RaceResult with no ranked entries and
    no awards; that is a valid outcome, not an error.
    """
    candidates = [
        entry
        for entry in entries
        if entry.score is not None and entry.status in SETTLEABLE_STATUSES
    ]
    ranked = rank(candidates, race.race_type)
    prizes = calculate_prizes(race.prize_pool, config)

    awards: list[PrizeAward] = []
    settled: list[Entry] = []
    for entry in ranked:
        position = entry.rank or 0
        update: dict = {"status": "completed"}
        if position <= PODIUM_PLACES:
            amount = prizes.prize_for_rank(position)
            update["prize_won"] = amount
            awards.append(
                PrizeAward(entry_id=entry.id, user_id=entry.user_id, amount=amount, rank=position)
            )
        settled.append(entry.model_copy(update=update))

    logger.info(
        f"Settled race {race.id}: {len(settled)} ranked of {len(entries)} entries, "
        f"{len(awards)} awards, pool {race.prize_pool}"
    )
    return RaceResult(
        race_id=race.id,
        ranked_entries=tuple(settled),
        prize_awards=tuple(awards),
        total_pool=race.prize_pool,
        platform_fee=prizes.platform_fee,
        prize_distribution=prizes,
        processed_at=processed_at or race.end_date,
    )


__all__ = ["PrizeAward", "RaceResult", "SETTLEABLE_STATUSES", "score_entries", "settle"]
