"""Tests for the PostgREST client, row codec and league store."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, call, patch

import pytest
import requests

from src.config import Settings
from src.models import (
    CricketTeam,
    Event,
    EventStatus,
    LeagueType,
    Player,
    PlayerCategory,
    PlayerType,
    ReplacementRequest,
    RequestStatus,
    Roster,
    RosterSlot,
    SeasonHistory,
    SiteSettings,
    User,
    UserRole,
)
from src.store import LeagueStore, NotFoundError, RemoteError, RestClient, StoreError
from src.store import codec
from src.store.base import SINGLE_OBJECT_MEDIA_TYPE


def make_response(json_data=None, status_code: int = 200, content: bytes = b"[]") -> MagicMock:
    """Helper creating a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.json.return_value = json_data
    response.text = ""
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


def make_client(response: MagicMock = None) -> tuple[RestClient, MagicMock]:
    """RestClient backed by a mock session."""
    session = MagicMock()
    session.headers = {}
    if response is not None:
        session.request.return_value = response
    client = RestClient("https://demo.supabase.co/rest/v1/", "anon-key", session=session, timeout=5.0)
    return client, session


class TestRestClient:
    """Tests for RestClient."""

    def test_auth_headers(self) -> None:
        """Session carries the API key and bearer token."""
        _, session = make_client()
        assert session.headers["apikey"] == "anon-key"
        assert session.headers["Authorization"] == "Bearer anon-key"

    def test_access_token_used_for_bearer(self) -> None:
        """A user token replaces the anon key in Authorization."""
        session = MagicMock()
        session.headers = {}
        RestClient("https://x/rest/v1", "anon-key", access_token="jwt", session=session)
        assert session.headers["Authorization"] == "Bearer jwt"

    def test_select_builds_query(self) -> None:
        """Filters, ordering and limit map to PostgREST parameters."""
        client, session = make_client(make_response([{"id": 1}]))

        rows = client.select("players", filters={"eventId": "e1", "active": True}, order="name", limit=5)

        assert rows == [{"id": 1}]
        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "GET"
        assert url == "https://demo.supabase.co/rest/v1/players"
        assert kwargs["params"] == {
            "select": "*",
            "eventId": "eq.e1",
            "active": "eq.true",
            "order": "name.asc",
            "limit": "5",
        }
        assert kwargs["timeout"] == 5.0

    def test_select_single_sets_accept_header(self) -> None:
        """Single-row reads ask for one object."""
        client, session = make_client(make_response({"id": 1}, content=b"{}"))

        row = client.select("site_settings", single=True)

        assert row == {"id": 1}
        assert session.request.call_args.kwargs["headers"] == {"Accept": SINGLE_OBJECT_MEDIA_TYPE}

    def test_not_found_code(self) -> None:
        """PGRST116 raises NotFoundError."""
        response = make_response({"code": "PGRST116", "message": "0 rows"}, status_code=406)
        client, _ = make_client(response)

        with pytest.raises(NotFoundError):
            client.select("site_settings", single=True)

    def test_other_http_error(self) -> None:
        """Other error responses raise RemoteError with the store's message."""
        response = make_response({"code": "42501", "message": "permission denied"}, status_code=401)
        client, _ = make_client(response)

        with pytest.raises(RemoteError, match="permission denied") as exc_info:
            client.insert("events", {"name": "x"})

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "42501"

    def test_timeout(self) -> None:
        """Timeouts raise RemoteError."""
        client, session = make_client()
        session.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(RemoteError, match="timed out"):
            client.select("events")

    def test_connection_error(self) -> None:
        """Network failures raise RemoteError."""
        client, session = make_client()
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(RemoteError, match="Request failed"):
            client.select("events")

    def test_empty_body(self) -> None:
        """Responses without a body decode to an empty result."""
        client, _ = make_client(make_response(None, content=b""))
        assert client.select("events") == []

    def test_update_and_delete_require_filters(self) -> None:
        """Unfiltered writes are refused."""
        client, session = make_client()

        with pytest.raises(ValueError):
            client.update("players", {"points": []}, filters={})
        with pytest.raises(ValueError):
            client.delete("players", filters={})
        session.request.assert_not_called()

    def test_upsert_merges_duplicates(self) -> None:
        """Upsert asks PostgREST to merge on the key column."""
        client, session = make_client(make_response([{"id": 1}]))

        client.upsert("site_settings", {"id": 1})

        kwargs = session.request.call_args.kwargs
        assert kwargs["params"] == {"on_conflict": "id"}
        assert "resolution=merge-duplicates" in kwargs["headers"]["Prefer"]


class TestCodec:
    """Tests for row conversion."""

    def test_parse_timestamp_with_z(self) -> None:
        """Trailing Z is read as UTC."""
        assert codec.parse_timestamp("2026-03-01T14:00:00Z") == datetime(
            2026, 3, 1, 14, 0, tzinfo=timezone.utc
        )
        assert codec.parse_timestamp(None) is None

    def test_parse_timestamp_without_offset_is_utc(self) -> None:
        """Timestamps stored without an offset are read as UTC."""
        parsed = codec.parse_timestamp("2026-03-01T14:00")

        assert parsed == datetime(2026, 3, 1, 14, 0, tzinfo=timezone.utc)
        assert parsed.tzinfo is not None

    def test_naive_event_row_compares_with_aware_time(self) -> None:
        """Events read from offset-less columns can be compared with the clock."""
        event = codec.event_from_row(
            {
                "id": 1,
                "name": "SPL",
                "registrationDeadline": "2026-01-01T00:00:00",
                "tournamentEndTime": "2026-02-01T00:00:00",
            }
        )

        assert event.status_at(datetime(2026, 1, 15, tzinfo=timezone.utc)) == EventStatus.RUNNING


    def test_request_uses_store_column_name(self) -> None:
        """The outgoing player is stored under the table's column name."""
        request = ReplacementRequest(
            id="",
            participant_team_id="r1",
            current_player_id="p1",
            new_player_id="p2",
            timestamp=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
        row = codec.request_to_row(request)

        assert row["currentPlayaerId"] == "p1"
        assert "id" not in row
        assert codec.request_from_row({**row, "id": 7}).current_player_id == "p1"

    def test_roster_row(self) -> None:
        """Roster slots and join history use the store's shapes."""
        row = {
            "id": 3,
            "participantId": "u1",
            "participantName": "Rahim",
            "teamName": "Tigers",
            "eventId": 1,
            "players": [{"playerId": 10, "isVip": True}, {"playerId": 11}],
            "replacementsLeft": 2,
            "archivedPoints": 12,
            "joinHistory": {"11": 4},
            "created_at": "2026-01-01T00:00:00+00:00",
        }
        roster = codec.roster_from_row(row)

        assert roster.id == "3"
        assert roster.slots == (RosterSlot("10", True), RosterSlot("11", False))
        assert roster.join_history == {"11": 4.0}
        assert roster.created_at.year == 2026
        assert codec.roster_to_row(roster)["players"] == [
            {"playerId": "10", "isVip": True},
            {"playerId": "11", "isVip": False},
        ]

    def test_event_row(self) -> None:
        """Event columns map to the model, foreign cap optional."""
        event = codec.event_from_row(
            {
                "id": 1,
                "name": "SPL",
                "registrationDeadline": "2026-01-01T00:00:00Z",
                "tournamentEndTime": "2026-02-01T00:00:00Z",
                "leagueType": "domestic",
                "maxVipPlayers": 2,
                "maxPlayersFromSingleTeam": 5,
                "maxForeignPlayers": None,
                "maxReplacements": 3,
            }
        )
        assert event.league_type == LeagueType.DOMESTIC
        assert event.max_foreign_players is None
        assert event.foreign_player_limit == 99

    def test_settings_row(self) -> None:
        """Settings live in row 1; a missing row means defaults."""
        assert codec.settings_to_row(SiteSettings(True)) == {"id": 1, "showParticipantTeams": True}
        assert codec.settings_from_row(None) == SiteSettings()


class TestLeagueStore:
    """Tests for LeagueStore."""

    def make_store(self) -> tuple[LeagueStore, MagicMock]:
        client = MagicMock(spec=RestClient)
        return LeagueStore(client), client

    def test_load_snapshot(self) -> None:
        """Every collection is read and settings default when missing."""
        store, client = self.make_store()
        client.select.side_effect = lambda table, **kwargs: (
            _raise(NotFoundError("none")) if table == "site_settings" else []
        )

        snapshot = store.load_snapshot()

        assert snapshot.events == ()
        assert snapshot.site_settings == SiteSettings()
        tables = [c.args[0] for c in client.select.call_args_list]
        assert "cnfl_history" in tables
        assert "participant_teams" in tables
        assert call("announcements", order="timestamp", ascending=False) in client.select.call_args_list

    def test_load_failure_names_table(self) -> None:
        """Read failures report the collection."""
        store, client = self.make_store()
        client.select.side_effect = RemoteError("boom")

        with pytest.raises(StoreError, match="Failed to fetch profiles"):
            store.load_snapshot()

    @pytest.mark.parametrize(
        "table,row",
        [
            (
                "players",
                {"id": 1, "name": "A", "eventId": "e1", "teamId": "t1", "category": "All Rounder"},
            ),
            (
                "participant_teams",
                {
                    "id": 1,
                    "participantId": "u1",
                    "eventId": "e1",
                    "players": [{"playerId": i} for i in range(12)],
                },
            ),
            (
                "events",
                {
                    "id": 1,
                    "name": "SPL",
                    "registrationDeadline": "2026-02-01T00:00:00Z",
                    "tournamentEndTime": "2026-01-01T00:00:00Z",
                },
            ),
            (
                "chat_messages",
                {"id": 1, "senderId": "u1", "receiverId": "boss", "message": "hi", "timestamp": None},
            ),
            ("teams", {"name": "No id"}),
        ],
        ids=["unknown-category", "twelve-players", "end-before-deadline", "null-timestamp", "no-id"],
    )
    def test_malformed_row_raises_store_error(self, table: str, row: dict) -> None:
        """Rows that do not fit the models are reported as store errors."""
        store, client = self.make_store()
        client.select.side_effect = lambda name, **kwargs: (
            _raise(NotFoundError("none")) if name == "site_settings"
            else [row] if name == table
            else []
        )

        with pytest.raises(StoreError, match=f"Invalid row in {table}"):
            store.load_snapshot()

    def test_malformed_insert_result_raises_store_error(self) -> None:
        """A row returned by an insert is checked like a loaded one."""
        store, client = self.make_store()
        client.insert.return_value = [{"id": 5, "eventId": "e1"}]

        with pytest.raises(StoreError, match="Invalid row in players"):
            store.add_player(
                Player(id="", name="A", event_id="e1", team_id="t1", category=PlayerCategory.BOWLER)
            )

    def test_delete_event_cascades(self) -> None:
        """Deleting an event removes its rosters, players and teams first."""
        store, client = self.make_store()

        store.delete_event("e1")

        assert client.delete.call_args_list == [
            call("participant_teams", {"eventId": "e1"}),
            call("players", {"eventId": "e1"}),
            call("teams", {"eventId": "e1"}),
            call("events", {"id": "e1"}),
        ]

    def test_add_players_start_without_points(self) -> None:
        """Bulk-added players are inserted with empty points."""
        store, client = self.make_store()
        client.insert.return_value = [
            {"id": 1, "name": "A", "eventId": "e1", "teamId": "t1", "category": "Batsman", "points": []}
        ]
        player = Player(
            id="", name="A", event_id="e1", team_id="t1",
            category=PlayerCategory.BATSMAN, points=(4,),
        )

        added = store.add_players([player])

        rows = client.insert.call_args.args[1]
        assert rows[0]["points"] == []
        assert added[0].id == "1"

    def test_update_roster_missing_row(self) -> None:
        """Updating a row that does not exist raises NotFoundError."""
        store, client = self.make_store()
        client.update.return_value = []
        roster = Roster(id="r9", participant_id="u1", team_name="T", event_id="e1")

        with pytest.raises(NotFoundError):
            store.update_roster(roster)

    def test_update_request_status(self) -> None:
        """Request updates are written to the request's row."""
        store, client = self.make_store()
        request = ReplacementRequest(
            id="7",
            participant_team_id="r1",
            current_player_id="p1",
            new_player_id="p2",
            timestamp=datetime(2026, 3, 1, tzinfo=timezone.utc),
            status=RequestStatus.REJECTED,
            reason="no",
        )
        client.update.return_value = [{**codec.request_to_row(request)}]

        stored = store.update_replacement_request(request)

        assert client.update.call_args.kwargs["filters"] == {"id": "7"}
        assert stored.status == RequestStatus.REJECTED

    def test_update_team(self) -> None:
        """Renaming a team writes its row by ID."""
        store, client = self.make_store()
        team = CricketTeam(id="t1", event_id="e1", name="Dhaka Dynamites")
        client.update.return_value = [{"id": "t1", "eventId": "e1", "name": "Dhaka Dynamites"}]

        stored = store.update_team(team)

        client.update.assert_called_once_with(
            "teams",
            {"id": "t1", "eventId": "e1", "name": "Dhaka Dynamites"},
            filters={"id": "t1"},
        )
        assert stored == team

    def test_delete_team(self) -> None:
        """Deleting a team removes its row only."""
        store, client = self.make_store()

        store.delete_team("t1")

        client.delete.assert_called_once_with("teams", {"id": "t1"})

    def test_update_player(self) -> None:
        """Player edits write every column to the player's row."""
        store, client = self.make_store()
        player = Player(
            id="p1", name="Mustafizur", event_id="e1", team_id="t2", team_name="Comilla",
            category=PlayerCategory.BOWLER, player_type=PlayerType.FOREIGN, points=(3, None),
        )
        row = {
            "id": "p1",
            "name": "Mustafizur",
            "eventId": "e1",
            "teamId": "t2",
            "teamName": "Comilla",
            "category": "Bowler",
            "playerType": "Foreign",
            "points": [3, None],
        }
        client.update.return_value = [row]

        stored = store.update_player(player)

        client.update.assert_called_once_with("players", row, filters={"id": "p1"})
        assert stored == player

    def test_update_player_points(self) -> None:
        """Only the points column is written for a scoring period."""
        store, client = self.make_store()

        store.update_player_points("p1", (10, None, 4.5))

        client.update.assert_called_once_with(
            "players", {"points": [10, None, 4.5]}, filters={"id": "p1"}
        )

    def test_delete_player(self) -> None:
        """Deleting a player removes its row."""
        store, client = self.make_store()

        store.delete_player("p1")

        client.delete.assert_called_once_with("players", {"id": "p1"})

    def test_add_history(self) -> None:
        """New seasons are inserted without an ID."""
        store, client = self.make_store()
        item = SeasonHistory(id="", season_number=3, champion_name="Rahim", team_name="Tigers")
        client.insert.return_value = [
            {"id": 9, "seasonNumber": 3, "championName": "Rahim", "teamName": "Tigers", "notes": ""}
        ]

        stored = store.add_history(item)

        client.insert.assert_called_once_with(
            "cnfl_history",
            {"seasonNumber": 3, "championName": "Rahim", "teamName": "Tigers", "notes": ""},
        )
        assert stored.id == "9"
        assert stored.season_number == 3

    def test_update_history(self) -> None:
        """Season edits are written to the season's row."""
        store, client = self.make_store()
        item = SeasonHistory(id="9", season_number=3, champion_name="Karim", notes="Final over win")
        row = {
            "id": "9",
            "seasonNumber": 3,
            "championName": "Karim",
            "teamName": "",
            "notes": "Final over win",
        }
        client.update.return_value = [row]

        stored = store.update_history(item)

        client.update.assert_called_once_with("cnfl_history", row, filters={"id": "9"})
        assert stored == item

    def test_delete_history(self) -> None:
        """Deleting a season removes its row."""
        store, client = self.make_store()

        store.delete_history("9")

        client.delete.assert_called_once_with("cnfl_history", {"id": "9"})

    def test_update_user(self) -> None:
        """Profile edits are written to the user's row."""
        store, client = self.make_store()
        user = User(id="u1", full_name="Rahim Uddin", email="r@example.com", role=UserRole.ADMIN)
        row = {
            "id": "u1",
            "fullName": "Rahim Uddin",
            "email": "r@example.com",
            "role": "admin",
            "fbLink": None,
        }
        client.update.return_value = [row]

        stored = store.update_user(user)

        client.update.assert_called_once_with("profiles", row, filters={"id": "u1"})
        assert stored.is_admin

    def test_update_user_missing_row(self) -> None:
        """Updating a profile that does not exist raises NotFoundError."""
        store, client = self.make_store()
        client.update.return_value = []

        with pytest.raises(NotFoundError, match="profiles"):
            store.update_user(User(id="ghost", full_name="Nobody"))

    def test_site_settings_upsert(self) -> None:
        """Site settings are upserted into row 1."""
        store, client = self.make_store()
        client.upsert.return_value = [{"id": 1, "showParticipantTeams": True}]

        settings = store.update_site_settings(SiteSettings(show_participant_teams=True))

        assert client.upsert.call_args.args == ("site_settings", {"id": 1, "showParticipantTeams": True})
        assert settings.show_participant_teams is True

    def test_from_settings(self) -> None:
        """Store is built from configuration."""
        settings = Settings(
            supabase_url="https://demo.supabase.co/",
            supabase_anon_key="key",
            request_timeout_seconds=12,
        )
        with patch("src.store.api.RestClient") as mock_client:
            LeagueStore.from_settings(settings)

        mock_client.assert_called_once_with(
            base_url="https://demo.supabase.co/rest/v1",
            api_key="key",
            access_token=None,
            timeout=12,
        )


def _raise(error: Exception):
    raise error
