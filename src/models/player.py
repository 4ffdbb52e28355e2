"""Player data model for the cricket fantasy league."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class PlayerCategory(Enum):
    """Playing role of a cricketer."""

    BATSMAN = "Batsman"
    WICKETKEEPER = "Wicketkeeper"
    BOWLER = "Bowler"
    ALL_ROUNDER = "All-rounder"


class PlayerType(Enum):
    """Nationality class of a player within a league."""

    DOMESTIC = "Domestic"
    FOREIGN = "Foreign"


@dataclass(frozen=True)
class Player:
    """
    Represents a real-world cricketer available in an event.

    Attributes:
        id: Unique identifier for the player.
        name: Player's full name.
        event_id: The event this player belongs to.
        team_id: The real-world team the player plays for.
        team_name: Display name of the real-world team.
        category: Playing role (batsman, wicketkeeper, bowler, all-rounder).
        player_type: Domestic or foreign.
        points: Per-period points, in order. Missing periods are None.
    """

    id: str
    name: str
    event_id: str
    team_id: str
    category: PlayerCategory
    team_name: str = ""
    player_type: PlayerType = PlayerType.DOMESTIC
    points: tuple[Optional[float], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Normalise the points sequence to a tuple."""
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    @property
    def total_points(self) -> float:
        """Sum of all per-period points, treating missing entries as zero."""
        return sum(p or 0 for p in self.points)

    @property
    def is_wicketkeeper(self) -> bool:
        """Check if player keeps wicket."""
        return self.category == PlayerCategory.WICKETKEEPER

    @property
    def is_bowler(self) -> bool:
        """Check if player is a specialist bowler."""
        return self.category == PlayerCategory.BOWLER

    @property
    def is_bowl_capable(self) -> bool:
        """Check if player can bowl (bowler or all-rounder)."""
        return self.category in (PlayerCategory.BOWLER, PlayerCategory.ALL_ROUNDER)

    @property
    def is_foreign(self) -> bool:
        """Check if player counts against the foreign-player cap."""
        return self.player_type == PlayerType.FOREIGN

    def with_period_points(self, value: Optional[float]) -> "Player":
        """Return a copy of the player with one more period of points."""
        return replace(self, points=self.points + (value,))
