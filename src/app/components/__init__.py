"""Reusable UI components for the CoverDrive application."""

from .roster_table import render_roster_table
from .validation_display import render_roster_report, render_validation

__all__ = ["render_roster_report", "render_roster_table", "render_validation"]
