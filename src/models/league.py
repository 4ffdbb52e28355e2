"""League-wide data models: users, real-world teams, settings and history."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(Enum):
    """Access level of a user profile."""

    ADMIN = "admin"
    PARTICIPANT = "participant"


@dataclass(frozen=True)
class User:
    """A registered user profile."""

    id: str
    full_name: str
    email: str = ""
    role: UserRole = UserRole.PARTICIPANT
    fb_link: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        """Check if the user administers the league."""
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class CricketTeam:
    """A real-world team taking part in an event."""

    id: str
    event_id: str
    name: str


@dataclass(frozen=True)
class SiteSettings:
    """Site-wide switches controlled by the administrator."""

    show_participant_teams: bool = False


@dataclass(frozen=True)
class SeasonHistory:
    """Result of a past league season."""

    id: str
    season_number: int
    champion_name: str = ""
    team_name: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        """Validate season data."""
        if self.season_number < 1:
            raise ValueError("season_number must be at least 1")
