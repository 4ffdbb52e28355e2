"""Analysis modules for roster validation, points and league workflows."""

from .calculator import (
    MULTIPLIER_VIP,
    PointsBreakdown,
    build_points_table,
    calculate_multiplier,
    calculate_player_points,
    calculate_roster_breakdown,
    calculate_roster_points,
    calculate_slot_points,
)
from .events import (
    EventContext,
    can_create_team,
    can_edit_team,
    can_request_replacement,
    can_view_all_teams,
    get_current_event,
    get_open_event,
    resolve_participant_event,
)
from .inbox import (
    count_unread,
    create_chat_message,
    get_conversation,
    get_participant_announcements,
)
from .ranking import LeaderboardEntry, build_leaderboard, get_rank
from .replacements import (
    ReplacementError,
    approve_replacement,
    create_replacement_request,
    get_pending_requests,
    get_request_history,
    get_resolved_requests,
    reject_replacement,
)
from .validator import (
    ConstraintCheck,
    RosterReport,
    ValidationResult,
    get_available_players_for_slot,
    get_replacement_candidates,
    get_slots_remaining,
    substitute_player,
    validate_replacement,
    validate_roster,
    validate_submission,
)

__all__ = [
    # Calculator
    "MULTIPLIER_VIP",
    "PointsBreakdown",
    "build_points_table",
    "calculate_multiplier",
    "calculate_player_points",
    "calculate_roster_breakdown",
    "calculate_roster_points",
    "calculate_slot_points",
    # Events
    "EventContext",
    "can_create_team",
    "can_edit_team",
    "can_request_replacement",
    "can_view_all_teams",
    "get_current_event",
    "get_open_event",
    "resolve_participant_event",
    # Inbox
    "count_unread",
    "create_chat_message",
    "get_conversation",
    "get_participant_announcements",
    # Ranking
    "LeaderboardEntry",
    "build_leaderboard",
    "get_rank",
    # Replacements
    "ReplacementError",
    "approve_replacement",
    "create_replacement_request",
    "get_pending_requests",
    "get_request_history",
    "get_resolved_requests",
    "reject_replacement",
    # Validator
    "ConstraintCheck",
    "RosterReport",
    "ValidationResult",
    "get_available_players_for_slot",
    "get_replacement_candidates",
    "get_slots_remaining",
    "substitute_player",
    "validate_replacement",
    "validate_roster",
    "validate_submission",
]
