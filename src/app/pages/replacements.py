"""Replacement page: request a player swap and follow its review."""

from typing import Optional

import streamlit as st

from ...analysis import (
    can_request_replacement,
    create_replacement_request,
    get_replacement_candidates,
    get_request_history,
    resolve_participant_event,
    validate_replacement,
)
from ...models import LeagueSnapshot, ReplacementRequest, RequestStatus
from ..components import render_validation
from ..session import get_current_user, get_snapshot, init_session_state, now, run_mutation


STATUS_ICONS = {
    RequestStatus.PENDING: "🟡",
    RequestStatus.ACCEPTED: "🟢",
    RequestStatus.REJECTED: "🔴",
}


def describe_request(request: ReplacementRequest, snapshot: LeagueSnapshot) -> str:
    """One-line summary of a request."""
    player_out = snapshot.player_name(request.current_player_id)
    player_in = snapshot.player_name(request.new_player_id)
    return (
        f"{STATUS_ICONS[request.status]} **Out:** {player_out} · **In:** {player_in} "
        f"· {request.status.value.upper()}"
    )


def render() -> None:
    """Render the replacement page."""
    init_session_state()
    snapshot = get_snapshot()
    user = get_current_user()

    st.title("Replace Player")
    if user is None:
        st.info("Select a participant in the sidebar.")
        return

    context = resolve_participant_event(user.id, snapshot, now())
    roster = context.roster
    if roster is None:
        st.info("You have not created a team yet.")
        return

    if can_request_replacement(context):
        _render_request_form(snapshot)
    else:
        st.info("Replacements are only available while the event is running and you have some left.")

    st.divider()
    st.subheader("Replacement History")
    history = get_request_history(snapshot.replacement_requests, roster.id)
    if not history:
        st.caption("You haven't made any replacement requests yet.")
    for request in history:
        st.markdown(describe_request(request, snapshot))
        st.caption(request.timestamp.strftime("%d %b %Y %H:%M"))
        if request.reason:
            st.caption(f"Reason: {request.reason}")


def _render_request_form(snapshot: LeagueSnapshot) -> None:
    """Render the request form for the current participant."""
    context = resolve_participant_event(get_current_user().id, snapshot, now())
    roster = context.roster
    event = context.event

    event_players = snapshot.players_for_event(event.id)
    candidates = get_replacement_candidates(roster, event_players)

    st.caption(f"Replacements left: {roster.replacements_left}")

    player_out: Optional[str] = st.selectbox(
        "Player to Replace",
        [None] + roster.player_ids,
        format_func=lambda pid: "Select from your XI" if pid is None else snapshot.player_name(pid),
    )
    player_in: Optional[str] = st.selectbox(
        "New Player",
        [None] + [p.id for p in candidates],
        format_func=lambda pid: "Select from available players"
        if pid is None
        else _candidate_label(snapshot, pid),
    )
    note = st.text_area("Note for Admin (Optional)")

    if st.button("Submit Request", type="primary"):
        result = validate_replacement(
            roster,
            player_out or "",
            player_in or "",
            snapshot.player_map,
            event,
        )
        render_validation(result)
        if not result.is_valid:
            return

        request = create_replacement_request(roster, player_out, player_in, now(), note=note)
        run_mutation(
            lambda store: store.add_replacement_request(request),
            "Replacement request submitted!",
        )


def _candidate_label(snapshot: LeagueSnapshot, player_id: str) -> str:
    player = snapshot.get_player(player_id)
    if player is None:
        return player_id
    return f"{player.name} ({player.category.value} / {player.team_name})"
