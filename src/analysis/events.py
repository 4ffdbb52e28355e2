"""Event status resolution and participant permissions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..models.event import Event, EventStatus
from ..models.league import SiteSettings
from ..models.roster import Roster
from ..models.snapshot import LeagueSnapshot


@dataclass(frozen=True)
class EventContext:
    """
    The event a participant's dashboard is about.

    Attributes:
        status: Lifecycle stage of the event (NO_EVENT if none).
        event: The event, if any.
        roster: The participant's roster for the event, if any.
    """

    status: EventStatus
    event: Optional[Event] = None
    roster: Optional[Roster] = None


def get_open_event(events: Iterable[Event], now: datetime) -> Optional[Event]:
    """First event still accepting registrations."""
    return next((e for e in events if e.is_registration_open(now)), None)


def get_current_event(events: Iterable[Event], now: datetime) -> Optional[Event]:
    """First event that has not finished yet."""
    return next((e for e in events if not e.has_ended(now)), None)


def resolve_participant_event(
    user_id: str,
    snapshot: LeagueSnapshot,
    now: datetime,
) -> EventContext:
    """
    Decide which event a participant should see.

    Priority:
    1. An event the participant has a roster for that has not ended.
    2. An event open for registration (no roster yet).
    3. The most recently finished event the participant played.

    Args:
        user_id: The participant.
        snapshot: Current league data.
        now: Reference time.

    Returns:
        EventContext with status NO_EVENT when nothing applies.
    """
    my_rosters = snapshot.rosters_for_participant(user_id)

    for roster in my_rosters:
        event = snapshot.get_event(roster.event_id)
        if event is not None and not event.has_ended(now):
            return EventContext(status=event.status_at(now), event=event, roster=roster)

    open_event = get_open_event(snapshot.events, now)
    if open_event is not None:
        return EventContext(status=EventStatus.UPCOMING, event=open_event)

    finished: list[tuple[Event, Roster]] = []
    for roster in my_rosters:
        event = snapshot.get_event(roster.event_id)
        if event is not None:
            finished.append((event, roster))

    if finished:
        event, roster = max(finished, key=lambda pair: pair[0].tournament_end_time)
        return EventContext(status=EventStatus.FINISHED, event=event, roster=roster)

    return EventContext(status=EventStatus.NO_EVENT)


def can_create_team(context: EventContext) -> bool:
    """Check if the participant may create a roster."""
    return context.roster is None and context.status == EventStatus.UPCOMING


def can_edit_team(context: EventContext) -> bool:
    """Check if the participant may edit an existing roster."""
    return context.roster is not None and context.status == EventStatus.UPCOMING


def can_request_replacement(context: EventContext) -> bool:
    """Check if the participant may request a replacement."""
    return (
        context.roster is not None
        and context.status == EventStatus.RUNNING
        and context.roster.has_replacements_left
    )


def can_view_all_teams(
    context: EventContext,
    settings: SiteSettings,
) -> bool:
    """
    Check if other participants' rosters are visible.

    Rosters are hidden while registration is open unless the
    administrator enabled the participant-teams switch.
    """
    if context.status in (EventStatus.FINISHED, EventStatus.NO_EVENT):
        return False
    if context.status == EventStatus.UPCOMING:
        return settings.show_participant_teams
    return True
