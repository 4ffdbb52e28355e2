"""Roster validation utilities for fantasy team building."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from ..models.event import Event
from ..models.player import Player, PlayerCategory
from ..models.roster import (
    MIN_BOWL_CAPABLE,
    MIN_BOWLERS,
    MIN_WICKETKEEPERS,
    ROSTER_SIZE,
    Roster,
    RosterSlot,
    TeamValidationError,
)


# Check codes, in the order their errors are reported
CHECK_PLAYERS = "PLAYERS"
CHECK_VIPS = "VIPS"
CHECK_SINGLE_TEAM = "SINGLE_TEAM"
CHECK_FOREIGN = "FOREIGN"
CHECK_WICKETKEEPERS = "WICKETKEEPERS"
CHECK_BOWLERS = "BOWLERS"
CHECK_BOWL_CAPABLE = "BOWL_CAPABLE"

ERROR_ORDER = (
    CHECK_PLAYERS,
    CHECK_VIPS,
    CHECK_SINGLE_TEAM,
    CHECK_FOREIGN,
    CHECK_WICKETKEEPERS,
    CHECK_BOWLERS,
    CHECK_BOWL_CAPABLE,
)

# Checks that still matter when one player is swapped for another
REPLACEMENT_CHECKS = (
    CHECK_SINGLE_TEAM,
    CHECK_FOREIGN,
    CHECK_WICKETKEEPERS,
    CHECK_BOWLERS,
    CHECK_BOWL_CAPABLE,
)


@dataclass(frozen=True)
class ConstraintCheck:
    """
    Outcome of one roster constraint.

    Attributes:
        code: Stable identifier of the constraint.
        label: Short human-readable name.
        count: Actual value observed in the selection.
        limit: Required (floors, exact) or maximum (caps) value.
        is_valid: Whether the constraint holds.
        message: Explanation shown when the constraint fails.
        is_applicable: False when the event does not enforce the constraint.
        is_maximum: True for caps, False for floors and exact counts.
    """

    code: str
    label: str
    count: int
    limit: int
    is_valid: bool
    message: str
    is_applicable: bool = True
    is_maximum: bool = False


@dataclass(frozen=True)
class RosterReport:
    """Every constraint evaluated against one candidate selection."""

    checks: tuple[ConstraintCheck, ...]

    def get(self, code: str) -> ConstraintCheck:
        """Get a check by code."""
        return next(c for c in self.checks if c.code == code)

    @property
    def players(self) -> ConstraintCheck:
        return self.get(CHECK_PLAYERS)

    @property
    def vips(self) -> ConstraintCheck:
        return self.get(CHECK_VIPS)

    @property
    def single_team(self) -> ConstraintCheck:
        return self.get(CHECK_SINGLE_TEAM)

    @property
    def wicketkeepers(self) -> ConstraintCheck:
        return self.get(CHECK_WICKETKEEPERS)

    @property
    def bowlers(self) -> ConstraintCheck:
        return self.get(CHECK_BOWLERS)

    @property
    def bowl_capable(self) -> ConstraintCheck:
        return self.get(CHECK_BOWL_CAPABLE)

    @property
    def foreign(self) -> ConstraintCheck:
        return self.get(CHECK_FOREIGN)

    @property
    def applicable_checks(self) -> list[ConstraintCheck]:
        """Checks the event enforces, in display order."""
        return [c for c in self.checks if c.is_applicable]

    def errors_for(self, codes: Sequence[str]) -> list[TeamValidationError]:
        """Errors for the failed checks among the given codes."""
        errors: list[TeamValidationError] = []
        for code in ERROR_ORDER:
            if code not in codes:
                continue
            check = self.get(code)
            if not check.is_valid:
                errors.append(TeamValidationError(code=check.code, message=check.message))
        return errors

    @property
    def errors(self) -> list[TeamValidationError]:
        """Errors for every failed check."""
        return self.errors_for(ERROR_ORDER)

    @property
    def is_valid(self) -> bool:
        """Check if the selection may be submitted."""
        return all(c.is_valid for c in self.checks)


@dataclass
class ValidationResult:
    """
    Result of a validation check.

    Attributes:
        is_valid: Whether the validation passed.
        errors: List of validation errors (empty if valid).
        warnings: Non-blocking issues (e.g., last replacement in use).
    """

    is_valid: bool
    errors: list[TeamValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _resolve_players(
    slots: Sequence[Optional[RosterSlot]],
    players: Mapping[str, Player],
) -> list[Player]:
    """Look up the Player behind each filled slot, skipping unknown IDs."""
    resolved: list[Player] = []
    for slot in slots:
        if slot is None:
            continue
        player = players.get(slot.player_id)
        if player is not None:
            resolved.append(player)
    return resolved


def validate_roster(
    slots: Sequence[Optional[RosterSlot]],
    players: Mapping[str, Player],
    event: Event,
) -> RosterReport:
    """
    Evaluate every roster constraint for a candidate selection.

    Empty slots (None) are allowed while a roster is being edited. Every
    check runs regardless of the others, so all violations can be shown
    at once.

    Args:
        slots: Up to eleven selections, None for empty slots.
        players: All known players keyed by ID.
        event: The event whose rules apply.

    Returns:
        RosterReport with one ConstraintCheck per rule.
    """
    filled = [s for s in slots if s is not None]
    details = _resolve_players(slots, players)

    vip_count = sum(1 for s in filled if s.is_vip)
    team_counts = Counter(p.team_id for p in details)
    max_from_team = max(team_counts.values(), default=0)
    wk_count = sum(1 for p in details if p.is_wicketkeeper)
    bowler_count = sum(1 for p in details if p.is_bowler)
    bowl_capable_count = sum(1 for p in details if p.is_bowl_capable)
    foreign_count = sum(1 for p in details if p.is_foreign)

    foreign_limit = event.foreign_player_limit

    checks = (
        ConstraintCheck(
            code=CHECK_PLAYERS,
            label="Players Selected",
            count=len(filled),
            limit=ROSTER_SIZE,
            is_valid=len(filled) == ROSTER_SIZE,
            message=f"You must select exactly {ROSTER_SIZE} players "
            f"({len(filled)} selected)",
        ),
        ConstraintCheck(
            code=CHECK_VIPS,
            label="VIP Players",
            count=vip_count,
            limit=event.max_vip_players,
            is_valid=vip_count == event.max_vip_players,
            message=f"You must select exactly {event.max_vip_players} VIP players "
            f"({vip_count} selected)",
        ),
        ConstraintCheck(
            code=CHECK_SINGLE_TEAM,
            label="Max from one team",
            count=max_from_team,
            limit=event.max_players_from_single_team,
            is_valid=max_from_team <= event.max_players_from_single_team,
            message=f"You can select a maximum of {event.max_players_from_single_team} "
            "players from a single real-life team",
            is_maximum=True,
        ),
        ConstraintCheck(
            code=CHECK_WICKETKEEPERS,
            label="Wicketkeepers",
            count=wk_count,
            limit=MIN_WICKETKEEPERS,
            is_valid=wk_count >= MIN_WICKETKEEPERS,
            message="You must have at least one Wicketkeeper",
        ),
        ConstraintCheck(
            code=CHECK_BOWLERS,
            label="Bowlers",
            count=bowler_count,
            limit=MIN_BOWLERS,
            is_valid=bowler_count >= MIN_BOWLERS,
            message=f"You must have at least {MIN_BOWLERS} dedicated Bowlers",
        ),
        ConstraintCheck(
            code=CHECK_BOWL_CAPABLE,
            label="Bowl Capable",
            count=bowl_capable_count,
            limit=MIN_BOWL_CAPABLE,
            is_valid=bowl_capable_count >= MIN_BOWL_CAPABLE,
            message=f"You must have at least {MIN_BOWL_CAPABLE} players who can bowl "
            "(Bowlers or All-rounders)",
        ),
        ConstraintCheck(
            code=CHECK_FOREIGN,
            label="Foreign Players",
            count=foreign_count,
            limit=foreign_limit,
            is_valid=not event.is_domestic or foreign_count <= foreign_limit,
            message=f"You can select a maximum of {foreign_limit} foreign players",
            is_applicable=event.is_domestic,
            is_maximum=True,
        ),
    )

    return RosterReport(checks=checks)


def _duplicate_errors(slots: Sequence[Optional[RosterSlot]]) -> list[TeamValidationError]:
    """Errors for players picked in more than one slot."""
    counts = Counter(s.player_id for s in slots if s is not None)
    return [
        TeamValidationError(
            code="DUPLICATE_PLAYER",
            message=f"Player {player_id} is selected more than once",
        )
        for player_id, count in counts.items()
        if count > 1
    ]


def validate_submission(
    team_name: str,
    slots: Sequence[Optional[RosterSlot]],
    players: Mapping[str, Player],
    event: Event,
) -> ValidationResult:
    """
    Check whether a roster may be created or updated.

    Args:
        team_name: Name the participant gave the XI.
        slots: The candidate selection.
        players: All known players keyed by ID.
        event: The event whose rules apply.

    Returns:
        ValidationResult listing every problem found.
    """
    errors: list[TeamValidationError] = []

    if not team_name.strip():
        errors.append(
            TeamValidationError(code="TEAM_NAME_REQUIRED", message="Team name is required")
        )

    errors.extend(_duplicate_errors(slots))
    errors.extend(validate_roster(slots, players, event).errors)

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def substitute_player(
    slots: Sequence[RosterSlot],
    player_out_id: str,
    player_in_id: str,
) -> list[RosterSlot]:
    """
    Swap one player for another, keeping slot order and the VIP flag.

    Args:
        slots: Current roster slots.
        player_out_id: Player leaving.
        player_in_id: Player joining.

    Returns:
        New list of slots (unchanged if player_out_id is not present).
    """
    return [
        RosterSlot(player_id=player_in_id, is_vip=s.is_vip)
        if s.player_id == player_out_id
        else s
        for s in slots
    ]


def validate_replacement(
    roster: Roster,
    player_out_id: str,
    player_in_id: str,
    players: Mapping[str, Player],
    event: Event,
) -> ValidationResult:
    """
    Check if a replacement request may be submitted for review.

    Roster size and VIP count cannot change in a like-for-like swap, so
    only the composition checks are re-run on the resulting roster.

    Args:
        roster: The participant's current roster.
        player_out_id: ID of the player to replace.
        player_in_id: ID of the incoming player.
        players: All known players keyed by ID.
        event: The event whose rules apply.

    Returns:
        ValidationResult indicating if the request is valid, with a warning
        when the request would use the last replacement.
    """
    if not player_out_id or not player_in_id:
        return ValidationResult(
            is_valid=False,
            errors=[
                TeamValidationError(
                    code="SELECTION_REQUIRED",
                    message="You must select a current and a new player",
                )
            ],
        )

    errors: list[TeamValidationError] = []

    if not roster.has_replacements_left:
        errors.append(
            TeamValidationError(
                code="NO_REPLACEMENTS_LEFT",
                message="You have no replacements left",
            )
        )

    if not roster.has_player(player_out_id):
        errors.append(
            TeamValidationError(
                code="PLAYER_NOT_FOUND",
                message=f"Player {player_out_id} is not in your team",
            )
        )

    player_in = players.get(player_in_id)
    if roster.has_player(player_in_id):
        errors.append(
            TeamValidationError(
                code="DUPLICATE_PLAYER",
                message=f"Player {player_in.name if player_in else player_in_id} "
                "is already in your team",
            )
        )
    elif player_in is None or player_in.event_id != event.id:
        errors.append(
            TeamValidationError(
                code="PLAYER_NOT_IN_EVENT",
                message=f"Player {player_in_id} is not available in {event.name}",
            )
        )

    if errors:
        return ValidationResult(is_valid=False, errors=errors)

    new_slots = substitute_player(roster.slots, player_out_id, player_in_id)
    report = validate_roster(new_slots, players, event)
    for error in report.errors_for(REPLACEMENT_CHECKS):
        errors.append(
            TeamValidationError(code=error.code, message=f"Invalid request: {error.message}")
        )

    warnings: list[str] = []
    if roster.replacements_left == 1:
        warnings.append("This is your last replacement for the event")

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def get_available_players_for_slot(
    players: Sequence[Player],
    slots: Sequence[Optional[RosterSlot]],
    index: int,
    categories: Sequence[PlayerCategory],
) -> list[Player]:
    """
    List players that can fill one slot of the editor.

    Args:
        players: Players of the event.
        slots: Current selection.
        index: Slot being filled.
        categories: Categories the slot accepts.

    Returns:
        Matching players not picked in another slot, sorted by name.
    """
    current = slots[index].player_id if slots[index] is not None else None
    taken = {s.player_id for s in slots if s is not None}
    return sorted(
        (
            p
            for p in players
            if p.category in categories and (p.id not in taken or p.id == current)
        ),
        key=lambda p: p.name,
    )


def get_replacement_candidates(roster: Roster, players: Sequence[Player]) -> list[Player]:
    """Players of the event who are not already in the roster."""
    return [p for p in players if not roster.has_player(p.id)]


def get_slots_remaining(slots: Sequence[Optional[RosterSlot]]) -> int:
    """Number of empty slots in an editing selection."""
    filled = sum(1 for s in slots if s is not None)
    return max(0, ROSTER_SIZE - filled)
