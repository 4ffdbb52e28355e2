"""Fantasy points calculator for participant rosters."""

from dataclasses import dataclass
from typing import Iterable, Mapping

from ..models.player import Player
from ..models.roster import Roster, RosterSlot


MULTIPLIER_VIP = 2.0
MULTIPLIER_REGULAR = 1.0


@dataclass(frozen=True)
class PointsBreakdown:
    """
    Detailed breakdown of the points one slot earns for a roster.

    Attributes:
        player_id: The player in the slot.
        total_points: Player's points over the whole event.
        points_at_joining: Player's points when they joined the roster.
        base_points: Points earned since joining.
        multiplier: 2.0 for VIP slots, 1.0 otherwise.
        final_points: Points credited to the roster.
    """

    player_id: str
    total_points: float
    points_at_joining: float
    base_points: float
    multiplier: float
    final_points: float

    @property
    def is_vip(self) -> bool:
        """Check if the slot earns double points."""
        return self.multiplier == MULTIPLIER_VIP


def calculate_player_points(player: Player) -> float:
    """
    Total points of a player across all periods.

    Args:
        player: The player.

    Returns:
        Sum of per-period points, missing entries counting as zero.
    """
    return player.total_points


def build_points_table(players: Iterable[Player]) -> dict[str, float]:
    """Map each player ID to that player's total points."""
    return {p.id: calculate_player_points(p) for p in players}


def calculate_multiplier(is_vip: bool) -> float:
    """Point multiplier for a slot."""
    return MULTIPLIER_VIP if is_vip else MULTIPLIER_REGULAR


def calculate_slot_points(
    slot: RosterSlot,
    points_table: Mapping[str, float],
    join_history: Mapping[str, float],
) -> PointsBreakdown:
    """
    Calculate the points a slot credits to its roster.

    Only points earned after the player joined the roster count, so a
    replacement is not credited with earlier performances.

    Args:
        slot: The roster slot.
        points_table: Player ID -> total points.
        join_history: Player ID -> points at the time of joining.

    Returns:
        PointsBreakdown for the slot.
    """
    total = points_table.get(slot.player_id, 0.0)
    at_joining = join_history.get(slot.player_id, 0.0)
    base_points = total - at_joining
    multiplier = calculate_multiplier(slot.is_vip)

    return PointsBreakdown(
        player_id=slot.player_id,
        total_points=total,
        points_at_joining=at_joining,
        base_points=base_points,
        multiplier=multiplier,
        final_points=base_points * multiplier,
    )


def calculate_roster_breakdown(
    roster: Roster,
    points_table: Mapping[str, float],
) -> list[PointsBreakdown]:
    """Per-slot breakdown for a roster, in slot order."""
    return [
        calculate_slot_points(slot, points_table, roster.join_history)
        for slot in roster.slots
    ]


def calculate_roster_points(
    roster: Roster,
    points_table: Mapping[str, float],
) -> float:
    """
    Calculate a roster's total points.

    Args:
        roster: The participant roster.
        points_table: Player ID -> total points.

    Returns:
        Archived points plus the points credited by every current slot.
    """
    current = sum(b.final_points for b in calculate_roster_breakdown(roster, points_table))
    return roster.archived_points + current
