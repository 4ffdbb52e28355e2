"""Leaderboard ranking of participant rosters."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from ..models.roster import Roster
from .calculator import calculate_roster_points


# Sorts rosters without a creation time after every timestamped roster
_NO_TIMESTAMP = datetime.max.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class LeaderboardEntry:
    """
    One row of an event leaderboard.

    Attributes:
        rank: 1-based position.
        roster_id: The ranked roster.
        team_name: Roster's team name.
        participant_name: Roster owner's name.
        total_points: Roster total used for ranking.
    """

    rank: int
    roster_id: str
    team_name: str
    participant_name: str
    total_points: float


def _created_key(roster: Roster) -> datetime:
    """Creation time as an aware datetime for tie-breaking."""
    if roster.created_at is None:
        return _NO_TIMESTAMP
    if roster.created_at.tzinfo is None:
        return roster.created_at.replace(tzinfo=timezone.utc)
    return roster.created_at


def build_leaderboard(
    rosters: Iterable[Roster],
    points_table: Mapping[str, float],
    event_id: Optional[str] = None,
) -> list[LeaderboardEntry]:
    """
    Rank rosters by total points, highest first.

    Equal totals are ordered by creation time (earliest first, rosters
    without one last), then by roster ID.

    Args:
        rosters: Rosters to rank.
        points_table: Player ID -> total points.
        event_id: Only rank rosters of this event, if given.

    Returns:
        Leaderboard entries in rank order.
    """
    selected = [r for r in rosters if event_id is None or r.event_id == event_id]
    totals = {r.id: calculate_roster_points(r, points_table) for r in selected}

    ordered = sorted(
        selected,
        key=lambda r: (-totals[r.id], _created_key(r), r.id),
    )

    return [
        LeaderboardEntry(
            rank=position,
            roster_id=roster.id,
            team_name=roster.team_name,
            participant_name=roster.participant_name,
            total_points=totals[roster.id],
        )
        for position, roster in enumerate(ordered, start=1)
    ]


def get_rank(leaderboard: Iterable[LeaderboardEntry], roster_id: str) -> Optional[int]:
    """Rank of a roster on a leaderboard, or None if it is not listed."""
    entry = next((e for e in leaderboard if e.roster_id == roster_id), None)
    return entry.rank if entry is not None else None
