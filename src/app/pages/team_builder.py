"""Team builder page for creating and editing a participant's XI."""

from typing import Optional

import streamlit as st

from ...analysis import (
    can_create_team,
    can_edit_team,
    get_available_players_for_slot,
    get_slots_remaining,
    resolve_participant_event,
    validate_roster,
    validate_submission,
)
from ...models import ROSTER_SIZE, Event, Player, PlayerCategory, Roster, RosterSlot, User
from ..components import render_roster_report, render_validation
from ..session import get_current_user, get_snapshot, init_session_state, now, run_mutation


ANY_CATEGORY = tuple(PlayerCategory)

# Slot label and the categories it accepts, in editor order
SLOT_TEMPLATES: list[tuple[str, tuple[PlayerCategory, ...]]] = [
    ("Batsman", (PlayerCategory.BATSMAN,)),
    ("Batsman", (PlayerCategory.BATSMAN,)),
    ("Wicketkeeper", (PlayerCategory.WICKETKEEPER,)),
    ("Any Player", ANY_CATEGORY),
    ("All-rounder", (PlayerCategory.ALL_ROUNDER,)),
    ("Any Player", ANY_CATEGORY),
    ("Any Player", ANY_CATEGORY),
    ("All-rounder/Bowler", (PlayerCategory.ALL_ROUNDER, PlayerCategory.BOWLER)),
    ("All-rounder/Bowler", (PlayerCategory.ALL_ROUNDER, PlayerCategory.BOWLER)),
    ("Bowler", (PlayerCategory.BOWLER,)),
    ("Bowler", (PlayerCategory.BOWLER,)),
]


def _selection_from_roster(roster: Optional[Roster]) -> list[Optional[RosterSlot]]:
    """Editing selection for a roster (eleven empty slots for a new one)."""
    selection: list[Optional[RosterSlot]] = [None] * ROSTER_SIZE
    if roster is not None:
        for index, slot in enumerate(roster.slots[:ROSTER_SIZE]):
            selection[index] = slot
    return selection


def _select_player(
    selection: list[Optional[RosterSlot]],
    index: int,
    player_id: Optional[str],
) -> list[Optional[RosterSlot]]:
    """Put a player in a slot, keeping the slot's VIP flag."""
    updated = list(selection)
    if player_id is None:
        updated[index] = None
    else:
        current = selection[index]
        updated[index] = RosterSlot(player_id=player_id, is_vip=current.is_vip if current else False)
    return updated


def _toggle_vip(
    selection: list[Optional[RosterSlot]],
    index: int,
) -> list[Optional[RosterSlot]]:
    """Flip the VIP flag of a filled slot."""
    updated = list(selection)
    slot = selection[index]
    if slot is not None:
        updated[index] = RosterSlot(player_id=slot.player_id, is_vip=not slot.is_vip)
    return updated


def _build_roster(
    user: User,
    event: Event,
    team_name: str,
    selection: list[Optional[RosterSlot]],
    existing: Optional[Roster],
) -> Roster:
    """Roster to store for a submitted selection."""
    slots = tuple(s for s in selection if s is not None)
    if existing is not None:
        return Roster(
            id=existing.id,
            participant_id=existing.participant_id,
            participant_name=existing.participant_name,
            team_name=team_name.strip(),
            event_id=existing.event_id,
            slots=slots,
            replacements_left=existing.replacements_left,
            archived_points=existing.archived_points,
            join_history=dict(existing.join_history),
            created_at=existing.created_at,
        )
    return Roster(
        id="",
        participant_id=user.id,
        participant_name=user.full_name,
        team_name=team_name.strip(),
        event_id=event.id,
        slots=slots,
        replacements_left=event.max_replacements,
        archived_points=0.0,
        join_history={},
    )


def _selection_key(user_id: str, event_id: str) -> str:
    return f"selection_{user_id}_{event_id}"


def render() -> None:
    """Render the team builder page."""
    init_session_state()
    snapshot = get_snapshot()
    user = get_current_user()

    st.title("Team Builder")

    if user is None:
        st.info("Select a participant in the sidebar.")
        return

    context = resolve_participant_event(user.id, snapshot, now())
    if not (can_create_team(context) or can_edit_team(context)):
        st.info("Team building is closed: no event is open for registration.")
        return

    event = context.event
    existing = context.roster
    key = _selection_key(user.id, event.id)
    if key not in st.session_state:
        st.session_state[key] = _selection_from_roster(existing)

    selection: list[Optional[RosterSlot]] = st.session_state[key]
    event_players = snapshot.players_for_event(event.id)
    players_by_id = snapshot.player_map

    editor_col, summary_col = st.columns([2, 1])

    with editor_col:
        st.header(f"{'Edit' if existing else 'Create'} Your Team for {event.name}")
        team_name = st.text_input(
            "Team name",
            value=existing.team_name if existing else "",
            placeholder="Your Team Name",
        )

        for index, (label, categories) in enumerate(SLOT_TEMPLATES):
            _render_slot(index, label, categories, selection, event_players, key)

        st.checkbox("I agree that this is for fun and no money or betting is involved.", key="terms")

        if st.button(f"{'Update' if existing else 'Submit'} Team", type="primary"):
            _submit(user, event, team_name, selection, existing, players_by_id)

    with summary_col:
        st.subheader("Team Summary")
        render_roster_report(validate_roster(selection, players_by_id, event))

        remaining = get_slots_remaining(selection)
        if remaining:
            st.caption(f"{remaining} slot(s) left to fill")

        st.subheader("Your XI")
        for index, slot in enumerate(selection, start=1):
            if slot is None:
                st.caption(f"{index}. Slot empty")
                continue
            player = players_by_id.get(slot.player_id)
            name = player.name if player else slot.player_id
            st.markdown(f"{index}. {name}{' (VIP)' if slot.is_vip else ''}")


def _render_slot(
    index: int,
    label: str,
    categories: tuple[PlayerCategory, ...],
    selection: list[Optional[RosterSlot]],
    event_players: list[Player],
    key: str,
) -> None:
    """Render one slot of the editor."""
    options = get_available_players_for_slot(event_players, selection, index, categories)
    option_ids: list[Optional[str]] = [None] + [p.id for p in options]
    names = {p.id: f"{p.name} ({p.team_name})" for p in options}

    current = selection[index]
    current_id = current.player_id if current else None

    cols = st.columns([1, 3, 1])
    with cols[0]:
        st.caption(f"{index + 1}. {label}")
    with cols[1]:
        chosen = st.selectbox(
            label,
            option_ids,
            index=option_ids.index(current_id) if current_id in option_ids else 0,
            format_func=lambda pid: "Select Player" if pid is None else names[pid],
            key=f"{key}_slot_{index}",
            label_visibility="collapsed",
        )
        if chosen != current_id:
            st.session_state[key] = _select_player(selection, index, chosen)
            st.rerun()
    with cols[2]:
        if st.button(
            "⭐ VIP" if current and current.is_vip else "VIP",
            key=f"{key}_vip_{index}",
            disabled=current is None,
        ):
            st.session_state[key] = _toggle_vip(selection, index)
            st.rerun()


def _submit(
    user: User,
    event: Event,
    team_name: str,
    selection: list[Optional[RosterSlot]],
    existing: Optional[Roster],
    players_by_id: dict[str, Player],
) -> None:
    """Validate and store the roster."""
    if not st.session_state.get("terms"):
        st.error("Please accept the terms before submitting.")
        return

    result = validate_submission(team_name, selection, players_by_id, event)
    if not result.is_valid:
        render_validation(result)
        return

    roster = _build_roster(user, event, team_name, selection, existing)
    if existing is not None:
        run_mutation(lambda store: store.update_roster(roster), "Team updated successfully!")
    else:
        run_mutation(lambda store: store.add_roster(roster), "Team created successfully!")
