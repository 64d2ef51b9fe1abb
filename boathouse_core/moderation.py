"""Community flagging and admin review of sessions.

Status lifecycle:
- pending -> verified (approve)
- verified/pending -> flagged (first community flag)
- flagged -> under_review (flag_count reaches flag_review_threshold, or an
  admin asks for more info)
- under_review -> verified (approve, flags cleared) | disqualified
- disqualified is terminal: any further change is rejected
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import EngineConfig, resolve_config
from .models import Session, SessionFlag
from .outcomes import Rejection
from .types import FLAG_REASONS, FlagReason, ModerationDecision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModerationOutcome:
    session: Session
    changed: bool


def requires_review(flag_count: int, config: EngineConfig | None = None) -> bool:
    return flag_count >= resolve_config(config).flag_review_threshold


def _reject_disqualified(session: Session) -> Rejection:
    logger.debug(f"Ignoring moderation change to disqualified session {session.id}")
    return Rejection(kind="session_disqualified", message=f"Session {session.id} is disqualified")


def flag_session(
    session: Session,
    flagged_by: str,
    reason: FlagReason = "other",
    config: EngineConfig | None = None,
) -> ModerationOutcome | Rejection:
    """
    Record one user's report against `session`.

    Each user may flag a session once.
    """
    if session.is_disqualified:
        return _reject_disqualified(session)
    if reason not in FLAG_REASONS:
        return Rejection(kind="unknown_flag_reason", message=f"Unknown flag reason: {reason}")
    if session.was_flagged_by(flagged_by):
        return Rejection(
            kind="already_flagged",
            message=f"User {flagged_by} already flagged session {session.id}",
        )

    flag_count = session.flag_count + 1
    if session.status == "under_review":
        status = "under_review"
    elif requires_review(flag_count, config):
        status = "under_review"
        logger.info(f"Session {session.id} reached {flag_count} flags; queued for review")
    else:
        status = "flagged"
    updated = session.model_copy(
        update={
            "flag_count": flag_count,
            "flags": session.flags + (SessionFlag(user_id=flagged_by, reason=reason),),
            "status": status,
        }
    )
    return ModerationOutcome(session=updated, changed=True)


def review_session(
    session: Session, decision: ModerationDecision
) -> ModerationOutcome | Rejection:
    if session.is_disqualified:
        return _reject_disqualified(session)

    if decision == "approve":
        update = {"status": "verified", "flag_count": 0, "flags": ()}
    elif decision == "disqualify":
        update = {"status": "disqualified"}
    elif decision == "require_more_info":
        update = {"status": "under_review"}
    else:
        return Rejection(kind="unknown_decision", message=f"Unknown decision: {decision}")

    updated = session.model_copy(update=update)
    changed = updated != session
    if changed:
        logger.info(f"Session {session.id} reviewed: {decision} -> {updated.status}")
    return ModerationOutcome(session=updated, changed=changed)


__all__ = ["ModerationOutcome", "flag_session", "requires_review", "review_session"]
