"""Tests for leaderboard ranking."""

from datetime import datetime, timezone
from typing import Optional

from src.analysis.ranking import build_leaderboard, get_rank
from src.models import Roster, RosterSlot


def make_roster(
    id: str,
    player_id: str,
    event_id: str = "e1",
    created_at: Optional[datetime] = None,
) -> Roster:
    """Helper creating a one-player roster."""
    return Roster(
        id=id,
        participant_id=f"u-{id}",
        participant_name=f"Owner {id}",
        team_name=f"Team {id}",
        event_id=event_id,
        slots=(RosterSlot(player_id),),
        created_at=created_at,
    )


class TestBuildLeaderboard:
    """Tests for build_leaderboard function."""

    def test_higher_total_ranks_first(self) -> None:
        """A 150-point roster ranks above a 100-point roster."""
        rosters = [make_roster("r1", "a"), make_roster("r2", "b")]
        leaderboard = build_leaderboard(rosters, {"a": 100.0, "b": 150.0})

        assert [e.roster_id for e in leaderboard] == ["r2", "r1"]
        assert [e.rank for e in leaderboard] == [1, 2]
        assert leaderboard[0].total_points == 150.0
        assert leaderboard[0].participant_name == "Owner r2"

    def test_filters_by_event(self) -> None:
        """Only rosters of the requested event are ranked."""
        rosters = [make_roster("r1", "a"), make_roster("r2", "b", event_id="e2")]
        leaderboard = build_leaderboard(rosters, {"a": 1.0, "b": 2.0}, event_id="e1")

        assert [e.roster_id for e in leaderboard] == ["r1"]

    def test_ties_broken_by_creation_time(self) -> None:
        """Equal totals keep the earlier roster ahead."""
        rosters = [
            make_roster("r1", "a", created_at=datetime(2026, 1, 2, tzinfo=timezone.utc)),
            make_roster("r2", "b", created_at=datetime(2026, 1, 1, tzinfo=timezone.utc)),
        ]
        leaderboard = build_leaderboard(rosters, {"a": 10.0, "b": 10.0})

        assert [e.roster_id for e in leaderboard] == ["r2", "r1"]

    def test_ties_without_timestamps(self) -> None:
        """Rosters without a creation time go last, then by ID."""
        rosters = [
            make_roster("r3", "c"),
            make_roster("r2", "b"),
            make_roster("r1", "a", created_at=datetime(2026, 1, 1)),
        ]
        leaderboard = build_leaderboard(rosters, {"a": 5.0, "b": 5.0, "c": 5.0})

        assert [e.roster_id for e in leaderboard] == ["r1", "r2", "r3"]

    def test_empty(self) -> None:
        """No rosters gives an empty leaderboard."""
        assert build_leaderboard([], {}) == []


class TestGetRank:
    """Tests for get_rank function."""

    def test_rank_found(self) -> None:
        """Returns the 1-based rank of a roster."""
        rosters = [make_roster("r1", "a"), make_roster("r2", "b")]
        leaderboard = build_leaderboard(rosters, {"a": 1.0, "b": 2.0})

        assert get_rank(leaderboard, "r1") == 2

    def test_rank_missing(self) -> None:
        """Unlisted rosters have no rank."""
        assert get_rank([], "r1") is None
