"""Participant roster data model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


# Game constants
ROSTER_SIZE = 11
MIN_WICKETKEEPERS = 1
MIN_BOWLERS = 2
MIN_BOWL_CAPABLE = 5


@dataclass(frozen=True)
class TeamValidationError:
    """Represents a validation error for a fantasy roster."""

    code: str
    message: str


@dataclass(frozen=True)
class RosterSlot:
    """A selected player and whether the slot earns VIP (double) points."""

    player_id: str
    is_vip: bool = False


@dataclass(frozen=True)
class Roster:
    """
    Represents a participant's XI for one event.

    Attributes:
        id: Unique identifier for the roster.
        participant_id: Owner of the roster.
        participant_name: Owner's display name.
        team_name: Name the participant gave the XI.
        event_id: The event this roster competes in.
        slots: Ordered player selections (eleven once submitted).
        replacements_left: Replacement requests still allowed.
        archived_points: Points banked from players replaced out.
        join_history: Player ID -> player's total points when they joined.
        created_at: When the roster was first submitted.
    """

    id: str
    participant_id: str
    team_name: str
    event_id: str
    slots: tuple[RosterSlot, ...] = field(default_factory=tuple)
    participant_name: str = ""
    replacements_left: int = 0
    archived_points: float = 0.0
    join_history: dict[str, float] = field(default_factory=dict, hash=False)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate roster data after initialization."""
        if not isinstance(self.slots, tuple):
            object.__setattr__(self, "slots", tuple(self.slots))
        if len(self.slots) > ROSTER_SIZE:
            raise ValueError(f"A roster cannot hold more than {ROSTER_SIZE} players")
        if self.replacements_left < 0:
            raise ValueError("replacements_left cannot be negative")

    @property
    def player_ids(self) -> list[str]:
        """IDs of the selected players, in slot order."""
        return [slot.player_id for slot in self.slots]

    @property
    def has_replacements_left(self) -> bool:
        """Check if the participant may still request a replacement."""
        return self.replacements_left > 0

    def get_slot(self, player_id: str) -> Optional[RosterSlot]:
        """Get the slot holding a player."""
        return next((s for s in self.slots if s.player_id == player_id), None)

    def has_player(self, player_id: str) -> bool:
        """Check if a player is in the roster."""
        return self.get_slot(player_id) is not None
