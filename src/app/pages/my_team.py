"""My XI page showing the participant's roster, points and rank."""

import streamlit as st

from ...analysis import (
    build_leaderboard,
    build_points_table,
    calculate_roster_points,
    get_rank,
    resolve_participant_event,
)
from ...models import EventStatus
from ..components import render_roster_table
from ..session import get_current_user, get_snapshot, init_session_state, now


def render() -> None:
    """Render the My XI page."""
    init_session_state()
    snapshot = get_snapshot()
    user = get_current_user()

    st.title("My XI")
    if user is None:
        st.info("Select a participant in the sidebar.")
        return

    context = resolve_participant_event(user.id, snapshot, now())
    roster = context.roster
    if roster is None:
        st.info("You have not created a team yet. Go to the Team Builder to get started.")
        return

    suffix = {
        EventStatus.FINISHED: " (Event Finished)",
        EventStatus.UPCOMING: " (Event Upcoming)",
    }.get(context.status, "")
    st.header(f"{roster.team_name}{suffix}")

    points_table = build_points_table(snapshot.players)
    leaderboard = build_leaderboard(snapshot.rosters, points_table, event_id=roster.event_id)
    rank = get_rank(leaderboard, roster.id)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Your Rank", f"#{rank}" if rank is not None else "N/A")
    col2.metric("Total Points", f"{calculate_roster_points(roster, points_table):g}")
    col3.metric("Replacements Left", roster.replacements_left)
    col4.metric("Archived Points", f"{roster.archived_points:g}")

    render_roster_table(roster, snapshot, points_table)
