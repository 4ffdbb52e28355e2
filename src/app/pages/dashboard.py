"""Participant dashboard page."""

import streamlit as st

from ...analysis import EventContext, resolve_participant_event
from ...models import EventStatus
from ..session import get_current_user, get_snapshot, init_session_state, now


def describe_context(context: EventContext) -> tuple[str, str]:
    """
    Headline and body text for a participant's event context.

    Args:
        context: Result of resolve_participant_event.

    Returns:
        Tuple of (title, message).
    """
    event = context.event
    if context.status == EventStatus.NO_EVENT or event is None:
        return "No Active Event", "Please wait for the admin to create a new event."
    if context.roster is not None and context.status != EventStatus.FINISHED:
        return "Welcome Back!", f"You have a team for the event: {event.name}."
    if context.status == EventStatus.UPCOMING:
        return event.name, event.description or "Registration is open. Create your team now!"
    if context.status == EventStatus.RUNNING:
        return (
            "Registration Closed",
            f"The registration period for {event.name} has ended. You can still view other teams.",
        )
    return "Event Concluded", f'The event "{event.name}" has finished. Check back later for new events!'


def render() -> None:
    """Render the dashboard page."""
    init_session_state()
    user = get_current_user()

    st.title("Dashboard")
    if user is None:
        st.info("Select a participant in the sidebar.")
        return

    context = resolve_participant_event(user.id, get_snapshot(), now())
    title, message = describe_context(context)

    st.header(title)
    st.write(message)

    if context.event is not None:
        event = context.event
        col1, col2, col3 = st.columns(3)
        col1.metric("Status", context.status.value.title())
        col2.metric("Registration deadline", event.registration_deadline.strftime("%d %b %Y %H:%M"))
        col3.metric("Tournament ends", event.tournament_end_time.strftime("%d %b %Y %H:%M"))

    history = get_snapshot().history
    if history:
        st.subheader("Hall of Fame")
        st.dataframe(
            [
                {
                    "Season": item.season_number,
                    "Champion": item.champion_name,
                    "Team": item.team_name,
                    "Notes": item.notes,
                }
                for item in history
            ],
            hide_index=True,
            use_container_width=True,
        )
