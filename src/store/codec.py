"""Conversion between store rows and league data models."""

from datetime import datetime, timezone
from typing import Any, Optional

from ..models import (
    Announcement,
    AnnouncementScope,
    ChatMessage,
    CricketTeam,
    Event,
    LeagueType,
    Player,
    PlayerCategory,
    PlayerType,
    ReplacementRequest,
    RequestStatus,
    Roster,
    RosterSlot,
    SeasonHistory,
    SiteSettings,
    User,
    UserRole,
)
from .base import Row


# Column name as it exists in the replacement_requests table
CURRENT_PLAYER_COLUMN = "currentPlayaerId"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp from the store.

    Args:
        value: Timestamp string such as "2025-03-01T14:00:00Z", or None.

    Returns:
        datetime object, or None when value is empty.
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    # Timestamps without an offset are stored in UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _required_timestamp(row: Row, column: str) -> datetime:
    """Parse a timestamp column that must be set."""
    parsed = parse_timestamp(row.get(column))
    if parsed is None:
        raise ValueError(f"Missing {column}")
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime for the store."""
    return value.isoformat() if value is not None else None


def _without_empty_id(row: Row) -> Row:
    """Drop an empty id so the store generates one."""
    if not row.get("id"):
        row = {k: v for k, v in row.items() if k != "id"}
    return row


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


# --- Events ---


def event_from_row(row: Row) -> Event:
    return Event(
        id=str(row["id"]),
        name=row.get("name", ""),
        description=row.get("description") or "",
        registration_deadline=_required_timestamp(row, "registrationDeadline"),
        tournament_end_time=_required_timestamp(row, "tournamentEndTime"),
        league_type=LeagueType(row.get("leagueType") or LeagueType.OTHER.value),
        max_vip_players=int(row.get("maxVipPlayers") or 0),
        max_players_from_single_team=int(row.get("maxPlayersFromSingleTeam") or 0),
        max_foreign_players=_optional_int(row.get("maxForeignPlayers")),
        max_replacements=int(row.get("maxReplacements") or 0),
    )


def event_to_row(event: Event) -> Row:
    return _without_empty_id(
        {
            "id": event.id,
            "name": event.name,
            "description": event.description,
            "registrationDeadline": format_timestamp(event.registration_deadline),
            "tournamentEndTime": format_timestamp(event.tournament_end_time),
            "leagueType": event.league_type.value,
            "maxVipPlayers": event.max_vip_players,
            "maxPlayersFromSingleTeam": event.max_players_from_single_team,
            "maxForeignPlayers": event.max_foreign_players,
            "maxReplacements": event.max_replacements,
        }
    )


# --- Real-world teams ---


def team_from_row(row: Row) -> CricketTeam:
    return CricketTeam(id=str(row["id"]), event_id=str(row["eventId"]), name=row.get("name", ""))


def team_to_row(team: CricketTeam) -> Row:
    return _without_empty_id({"id": team.id, "eventId": team.event_id, "name": team.name})


# --- Players ---


def player_from_row(row: Row) -> Player:
    return Player(
        id=str(row["id"]),
        name=row.get("name", ""),
        event_id=str(row["eventId"]),
        team_id=str(row["teamId"]),
        team_name=row.get("teamName") or "",
        category=PlayerCategory(row["category"]),
        player_type=PlayerType(row.get("playerType") or PlayerType.DOMESTIC.value),
        points=tuple(row.get("points") or ()),
    )


def player_to_row(player: Player) -> Row:
    return _without_empty_id(
        {
            "id": player.id,
            "name": player.name,
            "eventId": player.event_id,
            "teamId": player.team_id,
            "teamName": player.team_name,
            "category": player.category.value,
            "playerType": player.player_type.value,
            "points": list(player.points),
        }
    )


# --- Participant rosters ---


def roster_from_row(row: Row) -> Roster:
    slots = tuple(
        RosterSlot(player_id=str(p["playerId"]), is_vip=bool(p.get("isVip", False)))
        for p in row.get("players") or []
    )
    join_history = {
        str(player_id): float(points or 0)
        for player_id, points in (row.get("joinHistory") or {}).items()
    }
    return Roster(
        id=str(row["id"]),
        participant_id=str(row["participantId"]),
        participant_name=row.get("participantName") or "",
        team_name=row.get("teamName") or "",
        event_id=str(row["eventId"]),
        slots=slots,
        replacements_left=int(row.get("replacementsLeft") or 0),
        archived_points=float(row.get("archivedPoints") or 0),
        join_history=join_history,
        created_at=parse_timestamp(row.get("created_at")),
    )


def roster_to_row(roster: Roster) -> Row:
    return _without_empty_id(
        {
            "id": roster.id,
            "participantId": roster.participant_id,
            "participantName": roster.participant_name,
            "teamName": roster.team_name,
            "eventId": roster.event_id,
            "players": [{"playerId": s.player_id, "isVip": s.is_vip} for s in roster.slots],
            "replacementsLeft": roster.replacements_left,
            "archivedPoints": roster.archived_points,
            "joinHistory": dict(roster.join_history),
        }
    )


# --- Replacement requests ---


def request_from_row(row: Row) -> ReplacementRequest:
    return ReplacementRequest(
        id=str(row["id"]),
        participant_team_id=str(row["participantTeamId"]),
        participant_name=row.get("participantName") or "",
        current_player_id=str(row[CURRENT_PLAYER_COLUMN]),
        new_player_id=str(row["newPlayerId"]),
        note=row.get("note") or "",
        status=RequestStatus(row.get("status") or RequestStatus.PENDING.value),
        timestamp=_required_timestamp(row, "timestamp"),
        reason=row.get("reason"),
    )


def request_to_row(request: ReplacementRequest) -> Row:
    return _without_empty_id(
        {
            "id": request.id,
            "participantTeamId": request.participant_team_id,
            "participantName": request.participant_name,
            CURRENT_PLAYER_COLUMN: request.current_player_id,
            "newPlayerId": request.new_player_id,
            "note": request.note,
            "status": request.status.value,
            "timestamp": format_timestamp(request.timestamp),
            "reason": request.reason,
        }
    )


# --- Messages ---


def announcement_from_row(row: Row) -> Announcement:
    return Announcement(
        id=str(row["id"]),
        message=row.get("message", ""),
        timestamp=_required_timestamp(row, "timestamp"),
        scope=AnnouncementScope(row.get("scope") or AnnouncementScope.PARTICIPANT.value),
    )


def announcement_to_row(announcement: Announcement) -> Row:
    return _without_empty_id(
        {
            "id": announcement.id,
            "message": announcement.message,
            "timestamp": format_timestamp(announcement.timestamp),
            "scope": announcement.scope.value,
        }
    )


def chat_message_from_row(row: Row) -> ChatMessage:
    return ChatMessage(
        id=str(row["id"]),
        sender_id=str(row["senderId"]),
        sender_name=row.get("senderName") or "",
        receiver_id=str(row["receiverId"]),
        message=row.get("message", ""),
        timestamp=_required_timestamp(row, "timestamp"),
        is_read=bool(row.get("isRead", False)),
    )


def chat_message_to_row(message: ChatMessage) -> Row:
    return _without_empty_id(
        {
            "id": message.id,
            "senderId": message.sender_id,
            "senderName": message.sender_name,
            "receiverId": message.receiver_id,
            "message": message.message,
            "timestamp": format_timestamp(message.timestamp),
            "isRead": message.is_read,
        }
    )


# --- Users, settings, history ---


def user_from_row(row: Row) -> User:
    return User(
        id=str(row["id"]),
        full_name=row.get("fullName") or "",
        email=row.get("email") or "",
        role=UserRole(row.get("role") or UserRole.PARTICIPANT.value),
        fb_link=row.get("fbLink"),
    )


def user_to_row(user: User) -> Row:
    return {
        "id": user.id,
        "fullName": user.full_name,
        "email": user.email,
        "role": user.role.value,
        "fbLink": user.fb_link,
    }


def settings_from_row(row: Optional[Row]) -> SiteSettings:
    if not row:
        return SiteSettings()
    return SiteSettings(show_participant_teams=bool(row.get("showParticipantTeams", False)))


def settings_to_row(settings: SiteSettings) -> Row:
    # Settings live in a single row
    return {"id": 1, "showParticipantTeams": settings.show_participant_teams}


def history_from_row(row: Row) -> SeasonHistory:
    return SeasonHistory(
        id=str(row["id"]),
        season_number=int(row["seasonNumber"]),
        champion_name=row.get("championName") or "",
        team_name=row.get("teamName") or "",
        notes=row.get("notes") or "",
    )


def history_to_row(item: SeasonHistory) -> Row:
    return _without_empty_id(
        {
            "id": item.id,
            "seasonNumber": item.season_number,
            "championName": item.champion_name,
            "teamName": item.team_name,
            "notes": item.notes,
        }
    )
