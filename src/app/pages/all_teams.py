"""All Teams page: event leaderboard with every participant's XI."""

import streamlit as st

from ...analysis import (
    build_leaderboard,
    build_points_table,
    can_view_all_teams,
    resolve_participant_event,
)
from ..components import render_roster_table
from ..session import get_current_user, get_snapshot, init_session_state, now


def render() -> None:
    """Render the All Teams page."""
    init_session_state()
    snapshot = get_snapshot()
    user = get_current_user()

    st.title("All Participant Teams")
    if user is None:
        st.info("Select a participant in the sidebar.")
        return

    context = resolve_participant_event(user.id, snapshot, now())
    if context.event is None:
        st.info("This page is only available during an active event.")
        return

    if not can_view_all_teams(context, snapshot.site_settings):
        st.warning(
            "Viewing other participants' teams is disabled by the admin "
            "until the registration deadline passes."
        )
        return

    event = context.event
    points_table = build_points_table(snapshot.players)
    leaderboard = build_leaderboard(snapshot.rosters, points_table, event_id=event.id)

    if not leaderboard:
        st.info(f"No teams have been entered for {event.name} yet.")
        return

    for entry in leaderboard:
        roster = snapshot.get_roster(entry.roster_id)
        is_mine = roster is not None and roster.participant_id == user.id
        title = (
            f"#{entry.rank} {entry.participant_name} - {entry.team_name} "
            f"({entry.total_points:g} pts){' ⭐' if is_mine else ''}"
        )
        with st.expander(title, expanded=False):
            if roster is not None:
                render_roster_table(roster, snapshot, points_table)
