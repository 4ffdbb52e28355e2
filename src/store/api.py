"""League data access on top of the PostgREST client."""

import logging
from typing import Callable, Optional, Sequence, TypeVar

from ..config import Settings
from ..models import (
    Announcement,
    ChatMessage,
    CricketTeam,
    Event,
    LeagueSnapshot,
    Player,
    ReplacementRequest,
    Roster,
    SeasonHistory,
    SiteSettings,
    User,
)
from . import codec
from .base import NotFoundError, RestClient, Row, StoreError


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Table names
PROFILES = "profiles"
EVENTS = "events"
TEAMS = "teams"
PLAYERS = "players"
PARTICIPANT_TEAMS = "participant_teams"
REPLACEMENT_REQUESTS = "replacement_requests"
ANNOUNCEMENTS = "announcements"
CHAT_MESSAGES = "chat_messages"
SITE_SETTINGS = "site_settings"
HISTORY = "cnfl_history"


def _parse_row(table: str, parse: Callable[[Row], T], row: Row) -> T:
    """
    Convert one stored row to a model.

    Raises:
        StoreError: If the row is missing columns or holds invalid values.
    """
    try:
        return parse(row)
    except (KeyError, ValueError, TypeError) as e:
        logger.error("Invalid row in %s: %r", table, e)
        raise StoreError(f"Invalid row in {table}: {e}") from e


class LeagueStore:
    """
    Reads and writes league data in the hosted store.

    Reads return model objects; a full snapshot is loaded in one call.
    Mutations return the stored object and raise StoreError on failure,
    leaving the caller to report the message.
    """

    def __init__(self, client: RestClient) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "LeagueStore":
        """Create a store from application settings."""
        client = RestClient(
            base_url=settings.rest_url,
            api_key=settings.supabase_anon_key,
            access_token=settings.supabase_access_token,
            timeout=settings.request_timeout_seconds,
        )
        return cls(client)

    # --- Reads ---

    def _load(
        self,
        table: str,
        parse: Callable[[Row], T],
        order: Optional[str] = None,
        ascending: bool = True,
    ) -> tuple[T, ...]:
        try:
            rows = self.client.select(table, order=order, ascending=ascending)
        except StoreError as e:
            raise StoreError(f"Failed to fetch {table}: {e}") from e
        return tuple(_parse_row(table, parse, row) for row in rows)

    def load_site_settings(self) -> SiteSettings:
        """Read site settings, falling back to defaults when unset."""
        try:
            row = self.client.select(SITE_SETTINGS, limit=1, single=True)
        except NotFoundError:
            return SiteSettings()
        except StoreError as e:
            raise StoreError(f"Failed to fetch {SITE_SETTINGS}: {e}") from e
        return _parse_row(SITE_SETTINGS, codec.settings_from_row, row)

    def load_snapshot(self) -> LeagueSnapshot:
        """
        Read every collection into an immutable snapshot.

        Returns:
            LeagueSnapshot of the current store contents.

        Raises:
            StoreError: If any collection cannot be read.
        """
        snapshot = LeagueSnapshot(
            users=self._load(PROFILES, codec.user_from_row),
            events=self._load(EVENTS, codec.event_from_row),
            teams=self._load(TEAMS, codec.team_from_row),
            players=self._load(PLAYERS, codec.player_from_row),
            rosters=self._load(PARTICIPANT_TEAMS, codec.roster_from_row),
            replacement_requests=self._load(REPLACEMENT_REQUESTS, codec.request_from_row),
            announcements=self._load(
                ANNOUNCEMENTS, codec.announcement_from_row, order="timestamp", ascending=False
            ),
            chat_messages=self._load(
                CHAT_MESSAGES, codec.chat_message_from_row, order="timestamp"
            ),
            history=self._load(HISTORY, codec.history_from_row, order="seasonNumber"),
            site_settings=self.load_site_settings(),
        )
        logger.info(
            "Loaded snapshot: %d events, %d players, %d rosters",
            len(snapshot.events),
            len(snapshot.players),
            len(snapshot.rosters),
        )
        return snapshot

    # --- Mutation helpers ---

    def _insert(self, table: str, row: Row, parse: Callable[[Row], T]) -> T:
        rows = self.client.insert(table, row)
        if not rows:
            raise StoreError(f"Insert into {table} returned no row")
        return _parse_row(table, parse, rows[0])

    def _update(self, table: str, row_id: str, row: Row, parse: Callable[[Row], T]) -> T:
        rows = self.client.update(table, row, filters={"id": row_id})
        if not rows:
            raise NotFoundError(f"No row {row_id} in {table}")
        return _parse_row(table, parse, rows[0])

    # --- Events ---

    def create_event(self, event: Event) -> Event:
        return self._insert(EVENTS, codec.event_to_row(event), codec.event_from_row)

    def update_event(self, event: Event) -> Event:
        return self._update(EVENTS, event.id, codec.event_to_row(event), codec.event_from_row)

    def delete_event(self, event_id: str) -> None:
        """Delete an event together with its rosters, players and teams."""
        logger.info("Deleting event %s and related data", event_id)
        self.client.delete(PARTICIPANT_TEAMS, {"eventId": event_id})
        self.client.delete(PLAYERS, {"eventId": event_id})
        self.client.delete(TEAMS, {"eventId": event_id})
        self.client.delete(EVENTS, {"id": event_id})

    # --- Real-world teams ---

    def add_team(self, team: CricketTeam) -> CricketTeam:
        return self._insert(TEAMS, codec.team_to_row(team), codec.team_from_row)

    def update_team(self, team: CricketTeam) -> CricketTeam:
        return self._update(TEAMS, team.id, codec.team_to_row(team), codec.team_from_row)

    def delete_team(self, team_id: str) -> None:
        self.client.delete(TEAMS, {"id": team_id})

    # --- Players ---

    def add_player(self, player: Player) -> Player:
        return self._insert(PLAYERS, codec.player_to_row(player), codec.player_from_row)

    def add_players(self, players: Sequence[Player]) -> list[Player]:
        """Insert many players at once, each starting with no points."""
        rows = [{**codec.player_to_row(p), "points": []} for p in players]
        return [
            _parse_row(PLAYERS, codec.player_from_row, row)
            for row in self.client.insert(PLAYERS, rows)
        ]

    def update_player(self, player: Player) -> Player:
        return self._update(PLAYERS, player.id, codec.player_to_row(player), codec.player_from_row)

    def update_player_points(self, player_id: str, points: Sequence[Optional[float]]) -> None:
        self.client.update(PLAYERS, {"points": list(points)}, filters={"id": player_id})

    def delete_player(self, player_id: str) -> None:
        self.client.delete(PLAYERS, {"id": player_id})

    # --- Rosters ---

    def add_roster(self, roster: Roster) -> Roster:
        return self._insert(PARTICIPANT_TEAMS, codec.roster_to_row(roster), codec.roster_from_row)

    def update_roster(self, roster: Roster) -> Roster:
        return self._update(
            PARTICIPANT_TEAMS, roster.id, codec.roster_to_row(roster), codec.roster_from_row
        )

    # --- Replacement requests ---

    def add_replacement_request(self, request: ReplacementRequest) -> ReplacementRequest:
        return self._insert(
            REPLACEMENT_REQUESTS, codec.request_to_row(request), codec.request_from_row
        )

    def update_replacement_request(self, request: ReplacementRequest) -> ReplacementRequest:
        return self._update(
            REPLACEMENT_REQUESTS, request.id, codec.request_to_row(request), codec.request_from_row
        )

    # --- Announcements & chat ---

    def add_announcement(self, announcement: Announcement) -> Announcement:
        return self._insert(
            ANNOUNCEMENTS, codec.announcement_to_row(announcement), codec.announcement_from_row
        )

    def delete_announcement(self, announcement_id: str) -> None:
        self.client.delete(ANNOUNCEMENTS, {"id": announcement_id})

    def add_chat_message(self, message: ChatMessage) -> ChatMessage:
        return self._insert(
            CHAT_MESSAGES, codec.chat_message_to_row(message), codec.chat_message_from_row
        )

    # --- Settings, history, users ---

    def update_site_settings(self, settings: SiteSettings) -> SiteSettings:
        rows = self.client.upsert(SITE_SETTINGS, codec.settings_to_row(settings))
        return codec.settings_from_row(rows[0] if rows else None)

    def add_history(self, item: SeasonHistory) -> SeasonHistory:
        return self._insert(HISTORY, codec.history_to_row(item), codec.history_from_row)

    def update_history(self, item: SeasonHistory) -> SeasonHistory:
        return self._update(HISTORY, item.id, codec.history_to_row(item), codec.history_from_row)

    def delete_history(self, item_id: str) -> None:
        self.client.delete(HISTORY, {"id": item_id})

    def update_user(self, user: User) -> User:
        return self._update(PROFILES, user.id, codec.user_to_row(user), codec.user_from_row)
