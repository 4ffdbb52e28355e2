"""Chat and announcement filtering for the participant inbox."""

from datetime import datetime
from typing import Iterable

from ..models.league import User
from ..models.message import Announcement, AnnouncementScope, ChatMessage


def get_conversation(
    messages: Iterable[ChatMessage],
    user_id: str,
    admin_id: str,
) -> list[ChatMessage]:
    """
    Messages exchanged between a participant and the administrator.

    Args:
        messages: All chat messages.
        user_id: The participant.
        admin_id: The administrator.

    Returns:
        Messages in either direction, oldest first.
    """
    conversation = [
        m
        for m in messages
        if (m.sender_id == user_id and m.receiver_id == admin_id)
        or (m.sender_id == admin_id and m.receiver_id == user_id)
    ]
    return sorted(conversation, key=lambda m: m.timestamp)


def create_chat_message(
    sender: User,
    receiver_id: str,
    text: str,
    now: datetime,
) -> ChatMessage:
    """
    Build an unsent chat message.

    Raises:
        ValueError: If the message is blank.
    """
    text = text.strip()
    if not text:
        raise ValueError("Message cannot be empty")

    return ChatMessage(
        id="",
        sender_id=sender.id,
        sender_name=sender.full_name,
        receiver_id=receiver_id,
        message=text,
        timestamp=now,
        is_read=False,
    )


def count_unread(messages: Iterable[ChatMessage], user_id: str) -> int:
    """Number of unread messages addressed to a user."""
    return sum(1 for m in messages if m.receiver_id == user_id and not m.is_read)


def get_participant_announcements(
    announcements: Iterable[Announcement],
) -> list[Announcement]:
    """Announcements meant for participants, newest first."""
    return sorted(
        (a for a in announcements if a.scope == AnnouncementScope.PARTICIPANT),
        key=lambda a: a.timestamp,
        reverse=True,
    )
