"""Replacement request workflow: creation and administrator review."""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Mapping, Optional

from ..models.replacement import ReplacementRequest, RequestStatus
from ..models.roster import Roster
from .calculator import calculate_slot_points
from .validator import substitute_player


class ReplacementError(Exception):
    """Raised when a replacement request cannot be reviewed as asked."""

    pass


def create_replacement_request(
    roster: Roster,
    player_out_id: str,
    player_in_id: str,
    now: datetime,
    note: str = "",
) -> ReplacementRequest:
    """
    Build a pending request for administrator review.

    The request is not validated here; run validate_replacement first.

    Args:
        roster: The requesting roster.
        player_out_id: Player to replace.
        player_in_id: Incoming player.
        now: Request time.
        note: Optional message for the administrator.

    Returns:
        A pending ReplacementRequest without an ID.
    """
    return ReplacementRequest(
        id="",
        participant_team_id=roster.id,
        participant_name=roster.participant_name,
        current_player_id=player_out_id,
        new_player_id=player_in_id,
        note=note.strip(),
        status=RequestStatus.PENDING,
        timestamp=now,
    )


def _ensure_pending(request: ReplacementRequest) -> None:
    if not request.is_pending:
        raise ReplacementError(
            f"Request {request.id} has already been {request.status.value}"
        )


def approve_replacement(
    roster: Roster,
    request: ReplacementRequest,
    points_table: Mapping[str, float],
    reason: Optional[str] = None,
) -> tuple[Roster, ReplacementRequest]:
    """
    Apply an accepted replacement to a roster.

    Points the outgoing player earned for the roster are banked in the
    archived total. The incoming player takes the same slot (keeping its
    VIP flag) and is only credited with points earned from now on.

    Args:
        roster: The roster named by the request.
        request: A pending request.
        points_table: Player ID -> current total points.
        reason: Optional note from the administrator.

    Returns:
        Tuple of (updated roster, accepted request).

    Raises:
        ReplacementError: If the request cannot be applied to the roster.
    """
    _ensure_pending(request)

    if request.participant_team_id != roster.id:
        raise ReplacementError(
            f"Request {request.id} belongs to roster {request.participant_team_id}, "
            f"not {roster.id}"
        )
    if not roster.has_replacements_left:
        raise ReplacementError(f"Roster {roster.id} has no replacements left")

    outgoing = roster.get_slot(request.current_player_id)
    if outgoing is None:
        raise ReplacementError(
            f"Player {request.current_player_id} is not in roster {roster.id}"
        )
    if roster.has_player(request.new_player_id):
        raise ReplacementError(
            f"Player {request.new_player_id} is already in roster {roster.id}"
        )

    banked = calculate_slot_points(outgoing, points_table, roster.join_history)

    join_history = {
        player_id: points
        for player_id, points in roster.join_history.items()
        if player_id != request.current_player_id
    }
    join_history[request.new_player_id] = points_table.get(request.new_player_id, 0.0)

    updated_roster = replace(
        roster,
        slots=tuple(
            substitute_player(roster.slots, request.current_player_id, request.new_player_id)
        ),
        replacements_left=roster.replacements_left - 1,
        archived_points=roster.archived_points + banked.final_points,
        join_history=join_history,
    )
    accepted = replace(request, status=RequestStatus.ACCEPTED, reason=reason)

    return updated_roster, accepted


def reject_replacement(request: ReplacementRequest, reason: str) -> ReplacementRequest:
    """
    Mark a pending request as rejected.

    Raises:
        ReplacementError: If the request was already reviewed.
    """
    _ensure_pending(request)
    return replace(request, status=RequestStatus.REJECTED, reason=reason.strip() or None)


def get_pending_requests(requests: Iterable[ReplacementRequest]) -> list[ReplacementRequest]:
    """Requests awaiting review, oldest first."""
    return sorted((r for r in requests if r.is_pending), key=lambda r: r.timestamp)


def get_request_history(
    requests: Iterable[ReplacementRequest],
    roster_id: str,
) -> list[ReplacementRequest]:
    """All requests for a roster, newest first."""
    return sorted(
        (r for r in requests if r.participant_team_id == roster_id),
        key=lambda r: r.timestamp,
        reverse=True,
    )


def get_resolved_requests(
    requests: Iterable[ReplacementRequest],
    roster_id: str,
) -> list[ReplacementRequest]:
    """Reviewed requests for a roster, newest first."""
    return [r for r in get_request_history(requests, roster_id) if r.is_resolved]
