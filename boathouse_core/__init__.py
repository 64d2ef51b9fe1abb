from .config import DEFAULT_CONFIG, EngineConfig, GeoBounds, PrizeTiers
from .eligibility import Eligibility, classify, eligible_categories, is_user_eligible
from .entries import EntryOutcome, create_entry
from .feed import filter_sessions
from .geofence import is_in_region, validate_route, validate_session_location
from .importer import (
    backfill_segment_times,
    best_efforts_from_segments,
    import_activities,
    is_canoe_or_kayak,
    session_from_activity,
)
from .models import Entry, Race, Session, SessionFlag
from .moderation import ModerationOutcome, flag_session, requires_review, review_session
from .outcomes import Rejection
from .polyline import Coordinate, decode, encode, generate_loop_route, generate_route
from .prizes import PrizeDistribution, calculate_prizes
from .ranking import Leaderboard, LeaderboardRow, build_leaderboard, rank
from .scoring import SCORE_DIRECTION, is_better_score, score
from .settlement import PrizeAward, RaceResult, score_entries, settle
from .types import FlagReason, RaceType, SessionStatus, SessionType
from .validation import InputSanitizer, StravaActivityPayload, StravaSegmentEffortPayload

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "GeoBounds",
    "PrizeTiers",
    "Eligibility",
    "classify",
    "eligible_categories",
    "is_user_eligible",
    "EntryOutcome",
    "create_entry",
    "filter_sessions",
    "is_in_region",
    "validate_route",
    "validate_session_location",
    "backfill_segment_times",
    "best_efforts_from_segments",
    "import_activities",
    "is_canoe_or_kayak",
    "session_from_activity",
    "Entry",
    "Race",
    "Session",
    "SessionFlag",
    "ModerationOutcome",
    "flag_session",
    "requires_review",
    "review_session",
    "Rejection",
    "Coordinate",
    "decode",
    "encode",
    "generate_loop_route",
    "generate_route",
    "PrizeDistribution",
    "calculate_prizes",
    "Leaderboard",
    "LeaderboardRow",
    "build_leaderboard",
    "rank",
    "SCORE_DIRECTION",
    "is_better_score",
    "score",
    "PrizeAward",
    "RaceResult",
    "score_entries",
    "settle",
    "FlagReason",
    "RaceType",
    "SessionStatus",
    "SessionType",
    "InputSanitizer",
    "StravaActivityPayload",
    "StravaSegmentEffortPayload",
]
