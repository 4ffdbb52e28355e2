"""Validation display components for rosters and requests."""

import streamlit as st

from ...analysis import ConstraintCheck, RosterReport, ValidationResult


def render_validation(result: ValidationResult) -> None:
    """
    Render validation results with errors and warnings.

    Args:
        result: Validation result to display.
    """
    if result.is_valid and not result.warnings:
        return

    for error in result.errors:
        st.error(f"❌ {error.message}")

    for warning in result.warnings:
        st.warning(f"⚠️ {warning}")


def format_check(check: ConstraintCheck) -> str:
    """Format a constraint as 'count/limit'."""
    return f"{check.count}/{check.limit}"


def render_roster_report(report: RosterReport) -> None:
    """
    Render the live constraint summary of a roster being edited.

    Args:
        report: Report for the current selection.
    """
    for check in report.applicable_checks:
        col1, col2 = st.columns([3, 1])
        with col1:
            icon = "✅" if check.is_valid else "❌"
            st.markdown(f"{icon} {check.label}")
        with col2:
            st.markdown(f"`{format_check(check)}`")

    if report.is_valid:
        st.success("Team is valid!")
