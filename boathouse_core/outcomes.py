"""Result types shared by the state-changing helpers (moderation, entries)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rejection:
    """Represents an expected refusal of a requested change (pure core, never raised)."""

    kind: str
    message: str | None = None


__all__ = ["Rejection"]
