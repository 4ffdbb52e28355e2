"""Data store access for the cricket fantasy league."""

from .api import LeagueStore
from .base import (
    NotFoundError,
    RemoteError,
    RestClient,
    StoreError,
)
from .sample import SAMPLE_SQUADS, create_sample_snapshot

__all__ = [
    # Client
    "NotFoundError",
    "RemoteError",
    "RestClient",
    "StoreError",
    # League store
    "LeagueStore",
    # Sample data
    "SAMPLE_SQUADS",
    "create_sample_snapshot",
]
