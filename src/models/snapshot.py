"""Immutable snapshot of every league collection."""

from dataclasses import dataclass, field
from typing import Optional

from .event import Event
from .league import CricketTeam, SeasonHistory, SiteSettings, User
from .message import Announcement, ChatMessage
from .player import Player
from .replacement import ReplacementRequest
from .roster import Roster


# Receiver used for chat messages when no admin profile exists
DEFAULT_ADMIN_ID = "admin"


@dataclass(frozen=True)
class LeagueSnapshot:
    """
    Point-in-time copy of the league data.

    Domain functions receive the snapshot (or parts of it) as arguments;
    a fresh snapshot replaces the old one whenever the store changes.
    """

    users: tuple[User, ...] = field(default_factory=tuple)
    events: tuple[Event, ...] = field(default_factory=tuple)
    teams: tuple[CricketTeam, ...] = field(default_factory=tuple)
    players: tuple[Player, ...] = field(default_factory=tuple)
    rosters: tuple[Roster, ...] = field(default_factory=tuple)
    replacement_requests: tuple[ReplacementRequest, ...] = field(default_factory=tuple)
    announcements: tuple[Announcement, ...] = field(default_factory=tuple)
    chat_messages: tuple[ChatMessage, ...] = field(default_factory=tuple)
    history: tuple[SeasonHistory, ...] = field(default_factory=tuple)
    site_settings: SiteSettings = field(default_factory=SiteSettings)

    def __post_init__(self) -> None:
        """Freeze collections passed as lists."""
        for name in (
            "users",
            "events",
            "teams",
            "players",
            "rosters",
            "replacement_requests",
            "announcements",
            "chat_messages",
            "history",
        ):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    def get_user(self, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        return next((u for u in self.users if u.id == user_id), None)

    def get_event(self, event_id: str) -> Optional[Event]:
        """Get an event by ID."""
        return next((e for e in self.events if e.id == event_id), None)

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get a player by ID."""
        return next((p for p in self.players if p.id == player_id), None)

    def get_roster(self, roster_id: str) -> Optional[Roster]:
        """Get a roster by ID."""
        return next((r for r in self.rosters if r.id == roster_id), None)

    @property
    def player_map(self) -> dict[str, Player]:
        """Players keyed by ID."""
        return {p.id: p for p in self.players}

    @property
    def participants(self) -> list[User]:
        """Users who are not administrators."""
        return [u for u in self.users if not u.is_admin]

    @property
    def admin_id(self) -> str:
        """ID of the first administrator, or a fixed fallback."""
        admin = next((u for u in self.users if u.is_admin), None)
        return admin.id if admin is not None else DEFAULT_ADMIN_ID

    def players_for_event(self, event_id: str) -> list[Player]:
        """Players available in an event."""
        return [p for p in self.players if p.event_id == event_id]

    def teams_for_event(self, event_id: str) -> list[CricketTeam]:
        """Real-world teams taking part in an event."""
        return [t for t in self.teams if t.event_id == event_id]

    def rosters_for_event(self, event_id: str) -> list[Roster]:
        """Participant rosters entered in an event."""
        return [r for r in self.rosters if r.event_id == event_id]

    def rosters_for_participant(self, participant_id: str) -> list[Roster]:
        """Rosters owned by a participant, across events."""
        return [r for r in self.rosters if r.participant_id == participant_id]

    def player_name(self, player_id: str) -> str:
        """Display name for a player ID."""
        player = self.get_player(player_id)
        return player.name if player is not None else "Unknown Player"
