"""Race ranking engine (direction-aware comparator + deterministic tiebreak).

Single source of truth for entry ordering across leaderboard and settlement:
- Comparator: higher score first for top_speed/furthest_distance, lower
  score first for the fastest_* time races.
- Equal scores are ordered by entry id ascending, so repeated calls always
  produce the same order.
- Ranks are successive positions (1, 2, 3, ...); tied scores do not share a
  rank.
- Entries without a score are left out and never receive a rank.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Literal, Mapping, Sequence

from .models import PODIUM_PLACES, Entry
from .scoring import SCORE_UNITS, higher_is_better
from .types import RaceType

Medal = Literal["gold", "silver", "bronze"]

_MEDALS: dict[int, Medal] = {1: "gold", 2: "silver", 3: "bronze"}


@dataclass(frozen=True)
class LeaderboardRow:
    entry_id: str
    user_id: str
    user_name: str | None
    rank: int
    score: float
    unit: str
    session_id: str | None
    race_type: RaceType
    medal: Medal | None


@dataclass(frozen=True)
class Leaderboard:
    race_id: str
    race_type: RaceType
    rows: tuple[LeaderboardRow, ...]

    @property
    def top_three(self) -> tuple[LeaderboardRow, ...]:
        return self.rows[:PODIUM_PLACES]

    def row_for(self, user_id: str) -> LeaderboardRow | None:
        for row in self.rows:
            if row.user_id == user_id:
                return row
        return None

    def rank_for(self, user_id: str) -> int | None:
        row = self.row_for(user_id)
        return row.rank if row is not None else None


def _has_rankable_score(entry: Entry) -> bool:
    return entry.score is not None and math.isfinite(entry.score)


def _entry_sort_key(entry: Entry, race_type: RaceType) -> tuple[float, str]:
    score = float(entry.score)  # type: ignore[arg-type]
    if higher_is_better(race_type):
        return (-score, entry.id)
    return (score, entry.id)


def medal_for_rank(rank: int) -> Medal | None:
    return _MEDALS.get(rank)


def rank(entries: Iterable[Entry], race_type: RaceType) -> list[Entry]:
    """
    Order scored entries for `race_type` and stamp each with its 1-based rank.

    Args:
      entries: entries in any order; unscored ones are dropped.
      race_type: decides whether higher or lower scores win.

    Returns:
      New Entry instances in rank order with `rank` set.
    """
    scored = [entry for entry in entries if _has_rankable_score(entry)]
    scored.sort(key=lambda entry: _entry_sort_key(entry, race_type))
    return [
        entry.model_copy(update={"rank": position})
        for position, entry in enumerate(scored, start=1)
    ]


def build_leaderboard(
    ranked_entries: Sequence[Entry],
    race_type: RaceType,
    *,
    race_id: str,
    user_names: Mapping[str, str] | None = None,
) -> Leaderboard:
    """Project already-ranked entries into display rows (rank order preserved)."""
    names = user_names or {}
    rows: list[LeaderboardRow] = []
    for entry in ranked_entries:
        if entry.rank is None or entry.score is None:
            continue
        rows.append(
            LeaderboardRow(
                entry_id=entry.id,
                user_id=entry.user_id,
                user_name=names.get(entry.user_id),
                rank=entry.rank,
                score=entry.score,
                unit=SCORE_UNITS[race_type],
                session_id=entry.session_id,
                race_type=race_type,
                medal=medal_for_rank(entry.rank),
            )
        )
    rows.sort(key=lambda row: (row.rank, row.entry_id))
    return Leaderboard(race_id=race_id, race_type=race_type, rows=tuple(rows))


__all__ = [
    "Leaderboard",
    "LeaderboardRow",
    "build_leaderboard",
    "medal_for_rank",
    "rank",
]
