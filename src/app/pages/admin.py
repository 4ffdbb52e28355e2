"""Admin page: replacement review, scoring, announcements, event setup, history and users."""

from dataclasses import replace
from datetime import datetime, time, timedelta
from typing import Mapping, Optional, Sequence

import streamlit as st

from ...analysis import (
    ReplacementError,
    approve_replacement,
    build_points_table,
    get_current_event,
    get_pending_requests,
    reject_replacement,
)
from ...models import (
    Announcement,
    AnnouncementScope,
    CricketTeam,
    Event,
    LeagueSnapshot,
    LeagueType,
    Player,
    PlayerCategory,
    PlayerType,
    ReplacementRequest,
    SeasonHistory,
    SiteSettings,
    UserRole,
)
from ..session import get_snapshot, init_session_state, now, run_mutation


def parse_player_lines(text: str, event_id: str, team: CricketTeam) -> list[Player]:
    """
    Parse bulk player input, one player per line.

    Each line is ``name, category[, type]`` where category is one of the
    PlayerCategory values (case-insensitive) and type is Domestic or Foreign
    (default Domestic).

    Args:
        text: Raw multi-line input.
        event_id: Event the players belong to.
        team: Real-world team the players play for.

    Returns:
        Players without IDs, in input order.

    Raises:
        ValueError: If a line is malformed or names an unknown category/type.
    """
    categories = {c.value.lower(): c for c in PlayerCategory}
    types = {t.value.lower(): t for t in PlayerType}

    players = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(",")]
        if len(parts) not in (2, 3) or not parts[0]:
            raise ValueError(f"Line {line_number}: expected 'name, category[, type]'")

        category = categories.get(parts[1].lower())
        if category is None:
            raise ValueError(f"Line {line_number}: unknown category '{parts[1]}'")

        player_type = PlayerType.DOMESTIC
        if len(parts) == 3:
            player_type = types.get(parts[2].lower())
            if player_type is None:
                raise ValueError(f"Line {line_number}: unknown player type '{parts[2]}'")

        players.append(
            Player(
                id="",
                name=parts[0],
                event_id=event_id,
                team_id=team.id,
                team_name=team.name,
                category=category,
                player_type=player_type,
            )
        )
    return players


def apply_period_points(
    players: list[Player],
    entries: Mapping[str, Optional[float]],
) -> list[Player]:
    """
    Append one scoring period to every player.

    Players without an entry get a missing (None) period so every
    sequence stays aligned.
    """
    return [p.with_period_points(entries.get(p.id)) for p in players]


def default_event_index(events: Sequence[Event], current_time: datetime) -> int:
    """Index of the first event that has not finished, or 0 if all have."""
    current = get_current_event(events, current_time)
    return list(events).index(current) if current is not None else 0


def next_season_number(history: Sequence[SeasonHistory]) -> int:
    """Season number that follows the latest recorded season."""
    return max((item.season_number for item in history), default=0) + 1


def render() -> None:
    """Render the admin page."""
    init_session_state()
    snapshot = get_snapshot()

    st.title("Admin")

    requests_tab, points_tab, announce_tab, setup_tab, history_tab, users_tab = st.tabs(
        ["Replacement Requests", "Period Points", "Announcements", "Event Setup", "History", "Users"]
    )

    with requests_tab:
        _render_requests(snapshot)
    with points_tab:
        _render_points(snapshot)
    with announce_tab:
        _render_announcements(snapshot)
    with setup_tab:
        _render_setup(snapshot)
    with history_tab:
        _render_history(snapshot)
    with users_tab:
        _render_users(snapshot)


def _render_requests(snapshot: LeagueSnapshot) -> None:
    pending = get_pending_requests(snapshot.replacement_requests)
    if not pending:
        st.info("No pending replacement requests.")
        return

    points_table = build_points_table(snapshot.players)
    for request in pending:
        roster = snapshot.get_roster(request.participant_team_id)
        team_name = roster.team_name if roster else request.participant_team_id

        with st.container(border=True):
            st.markdown(
                f"**{request.participant_name or team_name}** ({team_name}): "
                f"{snapshot.player_name(request.current_player_id)} → "
                f"{snapshot.player_name(request.new_player_id)}"
            )
            if request.note:
                st.caption(f"Note: {request.note}")

            reason = st.text_input("Reason (optional)", key=f"reason_{request.id}")
            col1, col2 = st.columns(2)
            if col1.button("Accept", key=f"accept_{request.id}", type="primary"):
                _accept(roster, request, points_table, reason)
            if col2.button("Reject", key=f"reject_{request.id}"):
                _reject(request, reason)


def _accept(roster, request: ReplacementRequest, points_table, reason: str) -> None:
    if roster is None:
        st.error("The participant team for this request no longer exists.")
        return
    try:
        updated_roster, accepted = approve_replacement(
            roster, request, points_table, reason=reason.strip() or None
        )
    except ReplacementError as e:
        st.error(str(e))
        return

    def action(store):
        store.update_roster(updated_roster)
        return store.update_replacement_request(accepted)

    run_mutation(action, "Replacement accepted")


def _reject(request: ReplacementRequest, reason: str) -> None:
    try:
        rejected = reject_replacement(request, reason)
    except ReplacementError as e:
        st.error(str(e))
        return
    run_mutation(lambda store: store.update_replacement_request(rejected), "Replacement rejected")


def _render_points(snapshot: LeagueSnapshot) -> None:
    if not snapshot.events:
        st.info("Create an event first.")
        return

    event = st.selectbox(
        "Event",
        snapshot.events,
        index=default_event_index(snapshot.events, now()),
        format_func=lambda e: e.name,
        key="points_event",
    )
    players = snapshot.players_for_event(event.id)
    if not players:
        st.info("No players in this event.")
        return

    st.caption("Points for the new scoring period. Leave blank to record no score.")
    entries: dict[str, Optional[float]] = {}
    for team in snapshot.teams_for_event(event.id):
        team_players = [p for p in players if p.team_id == team.id]
        if not team_players:
            continue
        with st.expander(team.name):
            for player in team_players:
                entries[player.id] = st.number_input(
                    f"{player.name} ({player.total_points:g} so far)",
                    value=None,
                    step=1.0,
                    key=f"period_{player.id}",
                )

    if st.button("Save Period", type="primary"):
        updated = apply_period_points(players, entries)

        def action(store):
            for player in updated:
                store.update_player_points(player.id, player.points)

        run_mutation(action, f"Saved a new period for {len(updated)} players")


def _render_announcements(snapshot: LeagueSnapshot) -> None:
    text = st.text_area("New announcement")
    if st.button("Post Announcement", type="primary"):
        if not text.strip():
            st.error("Announcement cannot be empty")
        else:
            announcement = Announcement(
                id="",
                message=text.strip(),
                timestamp=now(),
                scope=AnnouncementScope.PARTICIPANT,
            )
            run_mutation(lambda store: store.add_announcement(announcement), "Announcement posted")

    for announcement in snapshot.announcements:
        col1, col2 = st.columns([5, 1])
        col1.write(announcement.message)
        col1.caption(announcement.timestamp.strftime("%d %b %Y %H:%M"))
        if col2.button("Delete", key=f"delete_announcement_{announcement.id}"):
            run_mutation(
                lambda store, a=announcement: store.delete_announcement(a.id),
                "Announcement deleted",
            )


def _render_setup(snapshot: LeagueSnapshot) -> None:
    show_teams = st.toggle(
        "Show participant teams before the deadline",
        value=snapshot.site_settings.show_participant_teams,
    )
    if show_teams != snapshot.site_settings.show_participant_teams:
        run_mutation(
            lambda store: store.update_site_settings(SiteSettings(show_participant_teams=show_teams)),
            "Settings updated",
        )

    st.subheader("Create Event")
    with st.form("create_event"):
        name = st.text_input("Name")
        description = st.text_area("Description")
        league_type = st.selectbox("League type", list(LeagueType), format_func=lambda t: t.value)
        deadline_date = st.date_input("Registration deadline", value=now().date() + timedelta(days=7))
        end_date = st.date_input("Tournament end", value=now().date() + timedelta(days=30))
        max_vips = st.number_input("VIP players", min_value=0, value=1)
        max_single = st.number_input("Max players from one team", min_value=1, value=7)
        max_foreign = st.number_input("Max foreign players (domestic only)", min_value=0, value=4)
        max_replacements = st.number_input("Replacements", min_value=0, value=2)
        submitted = st.form_submit_button("Create Event")

    if submitted and not name.strip():
        st.error("Event name is required")
    elif submitted:
        tz = now().tzinfo
        try:
            event = Event(
                id="",
                name=name.strip(),
                description=description.strip(),
                registration_deadline=datetime.combine(deadline_date, time(23, 59), tz),
                tournament_end_time=datetime.combine(end_date, time(23, 59), tz),
                league_type=league_type,
                max_vip_players=int(max_vips),
                max_players_from_single_team=int(max_single),
                max_foreign_players=int(max_foreign) if league_type == LeagueType.DOMESTIC else None,
                max_replacements=int(max_replacements),
            )
        except ValueError as e:
            st.error(str(e))
        else:
            run_mutation(lambda store: store.create_event(event), f"Event {event.name} created")

    if not snapshot.events:
        return

    st.subheader("Teams & Players")
    event = st.selectbox("Event", snapshot.events, format_func=lambda e: e.name, key="setup_event")

    team_name = st.text_input("New team name")
    if st.button("Add Team") and team_name.strip():
        team = CricketTeam(id="", event_id=event.id, name=team_name.strip())
        run_mutation(lambda store: store.add_team(team), f"Team {team.name} added")

    teams = snapshot.teams_for_event(event.id)
    if not teams:
        st.caption("Add a team before adding players.")
    else:
        team = st.selectbox("Team", teams, format_func=lambda t: t.name)
        _render_team_actions(team)

        lines = st.text_area("Players (one per line: name, category[, type])")
        if st.button("Add Players"):
            try:
                new_players = parse_player_lines(lines, event.id, team)
            except ValueError as e:
                st.error(str(e))
            else:
                run_mutation(
                    lambda store: store.add_players(new_players),
                    f"Added {len(new_players)} players",
                )

        _render_player_editor(snapshot, team, teams)

    if st.button("Delete Event", key=f"delete_event_{event.id}"):
        run_mutation(lambda store: store.delete_event(event.id), f"Event {event.name} deleted")


def _render_team_actions(team: CricketTeam) -> None:
    col1, col2 = st.columns([3, 1])
    new_name = col1.text_input("Team name", value=team.name, key=f"team_name_{team.id}")
    if col1.button("Rename Team", key=f"rename_team_{team.id}"):
        if not new_name.strip():
            st.error("Team name cannot be empty")
        else:
            renamed = replace(team, name=new_name.strip())
            run_mutation(lambda store: store.update_team(renamed), f"Team renamed to {renamed.name}")
    if col2.button("Delete Team", key=f"delete_team_{team.id}"):
        run_mutation(lambda store: store.delete_team(team.id), f"Team {team.name} deleted")


def _render_player_editor(
    snapshot: LeagueSnapshot,
    team: CricketTeam,
    teams: Sequence[CricketTeam],
) -> None:
    players = [p for p in snapshot.players_for_event(team.event_id) if p.team_id == team.id]
    if not players:
        return

    st.markdown("**Edit Player**")
    player = st.selectbox("Player", players, format_func=lambda p: p.name, key=f"edit_player_{team.id}")
    with st.form(f"player_form_{player.id}"):
        name = st.text_input("Name", value=player.name)
        category = st.selectbox(
            "Category",
            list(PlayerCategory),
            index=list(PlayerCategory).index(player.category),
            format_func=lambda c: c.value,
        )
        player_type = st.selectbox(
            "Type",
            list(PlayerType),
            index=list(PlayerType).index(player.player_type),
            format_func=lambda t: t.value,
        )
        new_team = st.selectbox(
            "Team",
            list(teams),
            index=list(teams).index(team),
            format_func=lambda t: t.name,
        )
        saved = st.form_submit_button("Save Player")

    if saved:
        if not name.strip():
            st.error("Player name cannot be empty")
        else:
            updated = replace(
                player,
                name=name.strip(),
                category=category,
                player_type=player_type,
                team_id=new_team.id,
                team_name=new_team.name,
            )
            run_mutation(lambda store: store.update_player(updated), f"Player {updated.name} saved")

    if st.button("Delete Player", key=f"delete_player_{player.id}"):
        run_mutation(lambda store: store.delete_player(player.id), f"Player {player.name} deleted")


def _render_history(snapshot: LeagueSnapshot) -> None:
    st.subheader("Add Season")
    with st.form("add_history"):
        season = st.number_input("Season", min_value=1, value=next_season_number(snapshot.history))
        champion = st.text_input("Champion")
        team_name = st.text_input("Team")
        notes = st.text_area("Notes")
        submitted = st.form_submit_button("Add Season")

    if submitted:
        item = SeasonHistory(
            id="",
            season_number=int(season),
            champion_name=champion.strip(),
            team_name=team_name.strip(),
            notes=notes.strip(),
        )
        run_mutation(lambda store: store.add_history(item), f"Season {item.season_number} added")

    for item in snapshot.history:
        with st.expander(f"Season {item.season_number}: {item.champion_name or 'TBD'}"):
            with st.form(f"history_{item.id}"):
                champion = st.text_input("Champion", value=item.champion_name)
                team_name = st.text_input("Team", value=item.team_name)
                notes = st.text_area("Notes", value=item.notes)
                saved = st.form_submit_button("Save")
            if saved:
                updated = replace(
                    item,
                    champion_name=champion.strip(),
                    team_name=team_name.strip(),
                    notes=notes.strip(),
                )
                run_mutation(
                    lambda store, h=updated: store.update_history(h),
                    f"Season {updated.season_number} saved",
                )
            if st.button("Delete Season", key=f"delete_history_{item.id}"):
                run_mutation(
                    lambda store, h=item: store.delete_history(h.id),
                    f"Season {item.season_number} deleted",
                )


def _render_users(snapshot: LeagueSnapshot) -> None:
    if not snapshot.users:
        st.info("No user profiles yet.")
        return

    user = st.selectbox(
        "User",
        snapshot.users,
        format_func=lambda u: f"{u.full_name} ({u.role.value})",
        key="admin_user",
    )
    with st.form(f"user_{user.id}"):
        full_name = st.text_input("Full name", value=user.full_name)
        role = st.selectbox(
            "Role",
            list(UserRole),
            index=list(UserRole).index(user.role),
            format_func=lambda r: r.value.title(),
        )
        fb_link = st.text_input("Facebook link", value=user.fb_link or "")
        saved = st.form_submit_button("Save User")

    if saved:
        if not full_name.strip():
            st.error("Full name cannot be empty")
        else:
            updated = replace(
                user,
                full_name=full_name.strip(),
                role=role,
                fb_link=fb_link.strip() or None,
            )
            run_mutation(lambda store: store.update_user(updated), f"User {updated.full_name} saved")
