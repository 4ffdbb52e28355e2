"""Event (tournament) data model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


# Foreign-player cap used when a domestic event does not set one
UNLIMITED_FOREIGN_PLAYERS = 99


class LeagueType(Enum):
    """Kind of tournament an event covers."""

    DOMESTIC = "domestic"
    OTHER = "other"


class EventStatus(Enum):
    """Lifecycle stage of an event relative to a point in time."""

    UPCOMING = "UPCOMING"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"
    NO_EVENT = "NO_EVENT"


@dataclass(frozen=True)
class Event:
    """
    Represents a tournament and the rules that govern its rosters.

    Attributes:
        id: Unique identifier for the event.
        name: Display name.
        registration_deadline: Rosters can be created and edited until then.
        tournament_end_time: The event is finished after this time.
        league_type: Domestic leagues enforce the foreign-player cap.
        max_vip_players: Exact number of VIP slots a roster must have.
        max_players_from_single_team: Cap on players from one real-world team.
        max_foreign_players: Cap on foreign players (domestic leagues only).
        max_replacements: Replacements each roster starts with.
        description: Free text shown to participants.
    """

    id: str
    name: str
    registration_deadline: datetime
    tournament_end_time: datetime
    league_type: LeagueType = LeagueType.OTHER
    max_vip_players: int = 1
    max_players_from_single_team: int = 7
    max_foreign_players: Optional[int] = None
    max_replacements: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        """Validate event configuration."""
        if self.max_vip_players < 0:
            raise ValueError("max_vip_players cannot be negative")
        if self.max_players_from_single_team < 0:
            raise ValueError("max_players_from_single_team cannot be negative")
        if self.max_foreign_players is not None and self.max_foreign_players < 0:
            raise ValueError("max_foreign_players cannot be negative")
        if self.max_replacements < 0:
            raise ValueError("max_replacements cannot be negative")
        if self.tournament_end_time < self.registration_deadline:
            raise ValueError("tournament_end_time cannot be before registration_deadline")

    @property
    def is_domestic(self) -> bool:
        """Check if the foreign-player cap applies."""
        return self.league_type == LeagueType.DOMESTIC

    @property
    def foreign_player_limit(self) -> int:
        """Effective foreign-player cap (unlimited when unset)."""
        if self.max_foreign_players is None:
            return UNLIMITED_FOREIGN_PLAYERS
        return self.max_foreign_players

    def is_registration_open(self, now: datetime) -> bool:
        """Check if rosters can still be created or edited."""
        return now < self.registration_deadline

    def has_ended(self, now: datetime) -> bool:
        """Check if the tournament is over."""
        return now >= self.tournament_end_time

    def status_at(self, now: datetime) -> EventStatus:
        """Return the lifecycle stage of the event at a given time."""
        if self.is_registration_open(now):
            return EventStatus.UPCOMING
        if not self.has_ended(now):
            return EventStatus.RUNNING
        return EventStatus.FINISHED
