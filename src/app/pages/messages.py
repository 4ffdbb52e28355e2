"""Messages page: chat with the admin, announcements and request updates."""

import streamlit as st

from ...analysis import (
    create_chat_message,
    get_conversation,
    get_participant_announcements,
    get_resolved_requests,
    resolve_participant_event,
)
from ..session import get_current_user, get_snapshot, init_session_state, now, run_mutation


def render() -> None:
    """Render the messages page."""
    init_session_state()
    snapshot = get_snapshot()
    user = get_current_user()

    st.title("Messages")
    if user is None:
        st.info("Select a participant in the sidebar.")
        return

    chat_tab, notifications_tab = st.tabs(["Chat with Admin", "Notifications"])

    with chat_tab:
        admin_id = snapshot.admin_id
        for message in get_conversation(snapshot.chat_messages, user.id, admin_id):
            role = "user" if message.sender_id == user.id else "assistant"
            with st.chat_message(role):
                st.write(message.message)
                st.caption(message.timestamp.strftime("%H:%M"))

        text = st.chat_input("Type a message...")
        if text:
            try:
                message = create_chat_message(user, admin_id, text, now())
            except ValueError as e:
                st.error(str(e))
            else:
                run_mutation(lambda store: store.add_chat_message(message), "Message sent")

    with notifications_tab:
        st.subheader("Admin Announcements")
        announcements = get_participant_announcements(snapshot.announcements)
        if not announcements:
            st.caption("No announcements yet.")
        for announcement in announcements:
            st.info(announcement.message)
            st.caption(announcement.timestamp.strftime("%d %b %Y %H:%M"))

        st.subheader("Replacement Request Status")
        roster = resolve_participant_event(user.id, snapshot, now()).roster
        resolved = get_resolved_requests(snapshot.replacement_requests, roster.id) if roster else []
        if not resolved:
            st.caption("No updates on replacement requests.")
        for request in resolved:
            st.markdown(
                f"Your request to replace **{snapshot.player_name(request.current_player_id)}** "
                f"with **{snapshot.player_name(request.new_player_id)}** was "
                f"**{request.status.value}**."
            )
            if request.reason:
                st.caption(f"Admin's reason: {request.reason}")
