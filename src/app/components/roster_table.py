"""Roster table component showing each player's credited points."""

from typing import Mapping

import streamlit as st

from ...analysis import PointsBreakdown, calculate_roster_breakdown
from ...models import LeagueSnapshot, Roster


def format_points(breakdown: PointsBreakdown) -> str:
    """Format credited points, showing the VIP doubling."""
    if breakdown.is_vip:
        return f"{breakdown.base_points:g} x 2 = {breakdown.final_points:g}"
    return f"{breakdown.final_points:g}"


def build_roster_rows(
    roster: Roster,
    snapshot: LeagueSnapshot,
    points_table: Mapping[str, float],
) -> list[dict[str, str]]:
    """
    Build display rows for a roster.

    Args:
        roster: The roster to show.
        snapshot: League data for player lookups.
        points_table: Player ID -> total points.

    Returns:
        One row per slot with a known player.
    """
    rows: list[dict[str, str]] = []
    for breakdown in calculate_roster_breakdown(roster, points_table):
        player = snapshot.get_player(breakdown.player_id)
        if player is None:
            continue
        rows.append(
            {
                "Player": player.name,
                "Category": player.category.value,
                "Team": player.team_name,
                "Points": format_points(breakdown),
                "Status": "VIP" if breakdown.is_vip else "",
            }
        )
    return rows


def render_roster_table(
    roster: Roster,
    snapshot: LeagueSnapshot,
    points_table: Mapping[str, float],
) -> None:
    """Render a roster as a table."""
    rows = build_roster_rows(roster, snapshot, points_table)
    if not rows:
        st.info("No players in this team.")
        return
    st.dataframe(rows, hide_index=True, use_container_width=True)
