"""Session state shared by the application pages."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

import streamlit as st

from ..config import get_settings
from ..models import LeagueSnapshot, User
from ..store import LeagueStore, StoreError, create_sample_snapshot


logger = logging.getLogger(__name__)

T = TypeVar("T")


def now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def init_session_state() -> None:
    """Initialize session state variables."""
    if "store" not in st.session_state:
        settings = get_settings()
        st.session_state.store = (
            LeagueStore.from_settings(settings) if settings.is_configured else None
        )
    if "snapshot" not in st.session_state:
        st.session_state.snapshot = _load_snapshot()
    if "user_id" not in st.session_state:
        participants = st.session_state.snapshot.participants
        st.session_state.user_id = participants[0].id if participants else None


def _load_snapshot() -> LeagueSnapshot:
    """
    Load league data from the store with fallback to sample data.

    Returns:
        LeagueSnapshot from the store, or the sample league.
    """
    store: Optional[LeagueStore] = st.session_state.get("store")
    if store is None:
        st.session_state.data_source = "sample"
        return create_sample_snapshot()

    try:
        snapshot = store.load_snapshot()
    except StoreError as e:
        logger.error("Falling back to sample data: %s", e)
        st.session_state.data_source = "sample"
        st.session_state.load_error = str(e)
        return create_sample_snapshot()

    st.session_state.data_source = "store"
    st.session_state.pop("load_error", None)
    return snapshot


def refresh_snapshot() -> None:
    """Re-fetch every collection after a change."""
    st.session_state.snapshot = _load_snapshot()


def get_snapshot() -> LeagueSnapshot:
    return st.session_state.snapshot


def get_current_user() -> Optional[User]:
    """The user the session acts as."""
    user_id = st.session_state.get("user_id")
    if user_id is None:
        return None
    return get_snapshot().get_user(user_id)


def is_read_only() -> bool:
    """Check if changes cannot be saved (sample data)."""
    return st.session_state.get("store") is None or st.session_state.get("data_source") != "store"


def run_mutation(action: Callable[[LeagueStore], T], success: str) -> Optional[T]:
    """
    Run a store mutation and refresh the snapshot.

    Args:
        action: Callable receiving the store.
        success: Message shown when the mutation succeeds.

    Returns:
        The action's result, or None if it could not be saved.
    """
    if is_read_only():
        st.warning("Using sample data: changes are not saved.")
        return None

    try:
        result = action(st.session_state.store)
    except StoreError as e:
        logger.error("Store mutation failed: %s", e)
        st.error(f"An error occurred: {e}")
        return None

    refresh_snapshot()
    st.success(success)
    return result
