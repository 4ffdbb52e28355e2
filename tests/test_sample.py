"""Tests for the offline sample league."""

from datetime import datetime, timezone

from src.analysis import (
    build_leaderboard,
    build_points_table,
    resolve_participant_event,
    validate_replacement,
    validate_roster,
)
from src.models import EventStatus, RequestStatus
from src.store import SAMPLE_SQUADS, create_sample_snapshot


NOW = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)


class TestSampleSnapshot:
    """Tests for create_sample_snapshot."""

    def test_events(self) -> None:
        """One running and one upcoming event."""
        snapshot = create_sample_snapshot(NOW)
        statuses = {e.id: e.status_at(NOW) for e in snapshot.events}

        assert statuses == {"spl-2026": EventStatus.RUNNING, "icc-2026": EventStatus.UPCOMING}

    def test_every_team_has_a_full_squad(self) -> None:
        """Each event gets every sample squad."""
        snapshot = create_sample_snapshot(NOW)
        squad_size = sum(len(squad) for _, squad in SAMPLE_SQUADS.values())

        for event in snapshot.events:
            assert len(snapshot.teams_for_event(event.id)) == len(SAMPLE_SQUADS)
            assert len(snapshot.players_for_event(event.id)) == squad_size

    def test_sample_rosters_are_valid(self) -> None:
        """Every sample roster satisfies its event's rules."""
        snapshot = create_sample_snapshot(NOW)

        for roster in snapshot.rosters:
            event = snapshot.get_event(roster.event_id)
            report = validate_roster(roster.slots, snapshot.player_map, event)
            assert report.is_valid, [e.message for e in report.errors]

    def test_pending_request_is_valid(self) -> None:
        """The pending sample request would pass validation."""
        snapshot = create_sample_snapshot(NOW)
        request = next(r for r in snapshot.replacement_requests if r.status == RequestStatus.PENDING)
        roster = snapshot.get_roster(request.participant_team_id)
        event = snapshot.get_event(roster.event_id)

        result = validate_replacement(
            roster, request.current_player_id, request.new_player_id, snapshot.player_map, event
        )
        assert result.is_valid

    def test_leaderboard(self) -> None:
        """Both sample rosters are ranked in the running event."""
        snapshot = create_sample_snapshot(NOW)
        leaderboard = build_leaderboard(
            snapshot.rosters, build_points_table(snapshot.players), event_id="spl-2026"
        )

        assert {e.roster_id for e in leaderboard} == {"r-rahim", "r-nadia"}
        assert all(e.total_points > 0 for e in leaderboard)

    def test_participant_without_roster_sees_open_event(self) -> None:
        """A participant with no roster is offered the upcoming event."""
        snapshot = create_sample_snapshot(NOW)
        context = resolve_participant_event("u-sam", snapshot, NOW)

        assert context.status == EventStatus.UPCOMING
        assert context.event.id == "icc-2026"
