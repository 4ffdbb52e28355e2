"""Tests for the replacement request workflow."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from src.analysis.calculator import calculate_roster_points
from src.analysis.replacements import (
    ReplacementError,
    approve_replacement,
    create_replacement_request,
    get_pending_requests,
    get_request_history,
    get_resolved_requests,
    reject_replacement,
)
from src.models import ReplacementRequest, RequestStatus, Roster, RosterSlot


NOW = datetime(2026, 4, 10, 9, 30, tzinfo=timezone.utc)


def make_roster(replacements_left: int = 2) -> Roster:
    """Roster with a VIP slot (a) and a regular slot (b)."""
    return Roster(
        id="r1",
        participant_id="u1",
        participant_name="Rahim",
        team_name="Tigers",
        event_id="e1",
        slots=(RosterSlot("a", is_vip=True), RosterSlot("b")),
        replacements_left=replacements_left,
        archived_points=5.0,
        join_history={"a": 10.0},
    )


def make_request(
    id: str = "rq1",
    status: RequestStatus = RequestStatus.PENDING,
    timestamp: datetime = NOW,
    roster_id: str = "r1",
) -> ReplacementRequest:
    """Helper creating a request replacing a with c."""
    return ReplacementRequest(
        id=id,
        participant_team_id=roster_id,
        current_player_id="a",
        new_player_id="c",
        timestamp=timestamp,
        status=status,
    )


class TestCreateReplacementRequest:
    """Tests for create_replacement_request function."""

    def test_creates_pending_request(self) -> None:
        """New requests are pending and carry the roster owner."""
        request = create_replacement_request(make_roster(), "a", "c", NOW, note="  injured  ")

        assert request.status == RequestStatus.PENDING
        assert request.participant_team_id == "r1"
        assert request.participant_name == "Rahim"
        assert request.note == "injured"
        assert request.timestamp == NOW
        assert request.id == ""


class TestApproveReplacement:
    """Tests for approve_replacement function."""

    def test_swaps_player_and_banks_points(self) -> None:
        """Outgoing points are archived and the incoming player starts from now."""
        table = {"a": 40.0, "b": 7.0, "c": 25.0}
        roster, request = approve_replacement(make_roster(), make_request(), table, reason="ok")

        # (40 - 10) * 2 banked on top of the previous 5
        assert roster.archived_points == 65.0
        assert roster.slots == (RosterSlot("c", is_vip=True), RosterSlot("b"))
        assert roster.join_history == {"c": 25.0}
        assert roster.replacements_left == 1
        assert request.status == RequestStatus.ACCEPTED
        assert request.reason == "ok"

    def test_total_unchanged_at_approval(self) -> None:
        """Approval moves points but does not change the roster total."""
        table = {"a": 40.0, "b": 7.0, "c": 25.0}
        before = calculate_roster_points(make_roster(), table)
        roster, _ = approve_replacement(make_roster(), make_request(), table)

        assert calculate_roster_points(roster, table) == before

    def test_incoming_player_earns_new_points_only(self) -> None:
        """Later points of the incoming player are credited with the VIP multiplier."""
        table = {"a": 40.0, "b": 7.0, "c": 25.0}
        roster, _ = approve_replacement(make_roster(), make_request(), table)

        later = {**table, "c": 35.0}
        assert calculate_roster_points(roster, later) == 65.0 + 20.0 + 7.0

    def test_non_pending_raises(self) -> None:
        """Reviewed requests cannot be approved again."""
        with pytest.raises(ReplacementError, match="already been accepted"):
            approve_replacement(make_roster(), make_request(status=RequestStatus.ACCEPTED), {})

    def test_wrong_roster_raises(self) -> None:
        """A request must belong to the roster."""
        with pytest.raises(ReplacementError, match="belongs to roster"):
            approve_replacement(make_roster(), make_request(roster_id="r2"), {})

    def test_no_replacements_left_raises(self) -> None:
        """Approval needs a replacement left."""
        with pytest.raises(ReplacementError, match="no replacements left"):
            approve_replacement(make_roster(replacements_left=0), make_request(), {})

    def test_missing_outgoing_player_raises(self) -> None:
        """The outgoing player must still be in the roster."""
        request = replace(make_request(), current_player_id="zzz")
        with pytest.raises(ReplacementError, match="is not in roster"):
            approve_replacement(make_roster(), request, {})

    def test_incoming_player_already_present_raises(self) -> None:
        """The incoming player must not be in the roster."""
        request = replace(make_request(), new_player_id="b")
        with pytest.raises(ReplacementError, match="already in roster"):
            approve_replacement(make_roster(), request, {})


class TestRejectReplacement:
    """Tests for reject_replacement function."""

    def test_rejects_with_reason(self) -> None:
        """Rejected requests carry the admin's reason."""
        rejected = reject_replacement(make_request(), "  Player not injured ")

        assert rejected.status == RequestStatus.REJECTED
        assert rejected.reason == "Player not injured"

    def test_blank_reason_is_none(self) -> None:
        """A blank reason is stored as no reason."""
        assert reject_replacement(make_request(), " ").reason is None

    def test_non_pending_raises(self) -> None:
        """Reviewed requests cannot be rejected."""
        with pytest.raises(ReplacementError):
            reject_replacement(make_request(status=RequestStatus.REJECTED), "no")


class TestRequestQueries:
    """Tests for request listing helpers."""

    def make_requests(self) -> list[ReplacementRequest]:
        return [
            make_request("old", RequestStatus.ACCEPTED, NOW - timedelta(days=2)),
            make_request("new", RequestStatus.PENDING, NOW),
            make_request("mid", RequestStatus.PENDING, NOW - timedelta(days=1)),
            make_request("other", RequestStatus.REJECTED, NOW, roster_id="r2"),
        ]

    def test_pending_oldest_first(self) -> None:
        """Pending requests are reviewed oldest first."""
        assert [r.id for r in get_pending_requests(self.make_requests())] == ["mid", "new"]

    def test_history_newest_first(self) -> None:
        """History lists one roster's requests, newest first."""
        history = get_request_history(self.make_requests(), "r1")
        assert [r.id for r in history] == ["new", "mid", "old"]

    def test_resolved(self) -> None:
        """Resolved requests exclude pending ones."""
        assert [r.id for r in get_resolved_requests(self.make_requests(), "r1")] == ["old"]
