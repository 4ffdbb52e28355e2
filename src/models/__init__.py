"""Data models for the CoverDrive cricket fantasy league."""

from .event import UNLIMITED_FOREIGN_PLAYERS, Event, EventStatus, LeagueType
from .league import CricketTeam, SeasonHistory, SiteSettings, User, UserRole
from .message import Announcement, AnnouncementScope, ChatMessage
from .player import Player, PlayerCategory, PlayerType
from .replacement import ReplacementRequest, RequestStatus
from .roster import (
    MIN_BOWL_CAPABLE,
    MIN_BOWLERS,
    MIN_WICKETKEEPERS,
    ROSTER_SIZE,
    Roster,
    RosterSlot,
    TeamValidationError,
)
from .snapshot import DEFAULT_ADMIN_ID, LeagueSnapshot

__all__ = [
    # Player
    "Player",
    "PlayerCategory",
    "PlayerType",
    # Event
    "UNLIMITED_FOREIGN_PLAYERS",
    "Event",
    "EventStatus",
    "LeagueType",
    # Roster
    "MIN_BOWL_CAPABLE",
    "MIN_BOWLERS",
    "MIN_WICKETKEEPERS",
    "ROSTER_SIZE",
    "Roster",
    "RosterSlot",
    "TeamValidationError",
    # Replacement
    "ReplacementRequest",
    "RequestStatus",
    # Messages
    "Announcement",
    "AnnouncementScope",
    "ChatMessage",
    # League
    "CricketTeam",
    "SeasonHistory",
    "SiteSettings",
    "User",
    "UserRole",
    # Snapshot
    "DEFAULT_ADMIN_ID",
    "LeagueSnapshot",
]
