"""Replacement request data model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class RequestStatus(Enum):
    """Review state of a replacement request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ReplacementRequest:
    """
    A participant's proposal to swap one rostered player for another.

    Attributes:
        id: Unique identifier (empty until stored).
        participant_team_id: The roster the swap applies to.
        participant_name: Display name of the requesting participant.
        current_player_id: Player leaving the roster.
        new_player_id: Player joining the roster.
        note: Optional message for the administrator.
        status: Review state.
        timestamp: When the request was made.
        reason: Administrator's explanation, if any.
    """

    id: str
    participant_team_id: str
    current_player_id: str
    new_player_id: str
    timestamp: datetime
    participant_name: str = ""
    note: str = ""
    status: RequestStatus = RequestStatus.PENDING
    reason: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        """Check if the request still awaits review."""
        return self.status == RequestStatus.PENDING

    @property
    def is_resolved(self) -> bool:
        """Check if the administrator has accepted or rejected the request."""
        return not self.is_pending
