"""Chat message and announcement data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AnnouncementScope(Enum):
    """Audience of an announcement."""

    PARTICIPANT = "participant"
    ADMIN = "admin"


@dataclass(frozen=True)
class Announcement:
    """A broadcast message from the administrator."""

    id: str
    message: str
    timestamp: datetime
    scope: AnnouncementScope = AnnouncementScope.PARTICIPANT


@dataclass(frozen=True)
class ChatMessage:
    """
    A direct message between a participant and the administrator.

    Attributes:
        id: Unique identifier (empty until stored).
        sender_id: User who sent the message.
        sender_name: Display name of the sender.
        receiver_id: User the message is addressed to.
        message: Message text.
        timestamp: When the message was sent.
        is_read: Whether the receiver has seen it.
    """

    id: str
    sender_id: str
    receiver_id: str
    message: str
    timestamp: datetime
    sender_name: str = ""
    is_read: bool = False
