"""Main Streamlit application entry point."""

import logging
import sys
from pathlib import Path

# Add project root to path for direct execution
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from src.analysis import count_unread
from src.app.pages import admin, all_teams, dashboard, messages, my_team, replacements, team_builder
from src.app.session import get_snapshot, init_session_state, refresh_snapshot
from src.config import get_settings

# Navigation
PAGES = {
    "Dashboard": dashboard,
    "Team Builder": team_builder,
    "My XI": my_team,
    "All Teams": all_teams,
    "Replacements": replacements,
    "Messages": messages,
    "Admin": admin,
}

PARTICIPANT_PAGES = [name for name in PAGES if name != "Admin"]


def _render_sidebar() -> str:
    """Render the sidebar and return the selected page name."""
    st.sidebar.title("CoverDrive")
    st.sidebar.markdown("*Cricket Fantasy League*")

    if st.session_state.get("data_source") == "store":
        st.sidebar.success("Connected to league database")
    else:
        st.sidebar.warning("Using sample data (read-only)")
        if "load_error" in st.session_state:
            st.sidebar.caption(st.session_state.load_error)

    snapshot = get_snapshot()
    users = list(snapshot.users)
    if users:
        ids = [u.id for u in users]
        current = st.session_state.get("user_id")
        st.session_state.user_id = st.sidebar.selectbox(
            "Signed in as",
            ids,
            index=ids.index(current) if current in ids else 0,
            format_func=lambda uid: snapshot.get_user(uid).full_name,
        )

    if st.sidebar.button("Refresh data"):
        refresh_snapshot()
        snapshot = get_snapshot()

    st.sidebar.divider()

    user = snapshot.get_user(st.session_state.get("user_id") or "")
    if user is not None:
        unread = count_unread(snapshot.chat_messages, user.id)
        if unread:
            st.sidebar.info(f"{unread} unread message(s)")

    names = list(PAGES.keys()) if user is not None and user.is_admin else PARTICIPANT_PAGES
    return st.sidebar.radio("Navigation", names, label_visibility="collapsed")


def main() -> None:
    """Run the main application."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    st.set_page_config(
        page_title="CoverDrive - Cricket Fantasy League",
        page_icon="🏏",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    init_session_state()
    page_name = _render_sidebar()

    # Run selected page
    page = PAGES[page_name]
    page.render()


if __name__ == "__main__":
    main()
