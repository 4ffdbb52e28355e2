"""Offline sample league used when the hosted store is unavailable."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from ..models import (
    Announcement,
    ChatMessage,
    CricketTeam,
    Event,
    LeagueSnapshot,
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


BAT = PlayerCategory.BATSMAN
WK = PlayerCategory.WICKETKEEPER
BOWL = PlayerCategory.BOWLER
AR = PlayerCategory.ALL_ROUNDER

# team key -> (team name, [(player name, category, is foreign)])
SAMPLE_SQUADS: dict[str, tuple[str, list[tuple[str, PlayerCategory, bool]]]] = {
    "hawks": (
        "Northern Hawks",
        [
            ("Arif Rahman", BAT, False),
            ("Dale Whitmore", BAT, True),
            ("Nayeem Hasan", WK, False),
            ("Sohel Karim", AR, False),
            ("Imran Chowdhury", AR, False),
            ("Rakib Uddin", BOWL, False),
            ("Colin Mbeki", BOWL, True),
        ],
    ),
    "sharks": (
        "Southern Sharks",
        [
            ("Tanvir Ahmed", BAT, False),
            ("Marcus Greer", BAT, True),
            ("Jahid Alam", WK, False),
            ("Fahim Sarkar", AR, False),
            ("Rony Talukder", AR, False),
            ("Shafiq Islam", BOWL, False),
            ("Lewis Hartley", BOWL, True),
        ],
    ),
    "eagles": (
        "Eastern Eagles",
        [
            ("Mehedi Parvez", BAT, False),
            ("Andre Coleman", BAT, True),
            ("Zakir Hossain", WK, False),
            ("Nasir Uddin", AR, False),
            ("Kamrul Hasan", AR, False),
            ("Mominul Haque", BOWL, False),
            ("Pieter Naude", BOWL, True),
        ],
    ),
    "wolves": (
        "Western Wolves",
        [
            ("Sabbir Khan", BAT, False),
            ("Owen Fairley", BAT, True),
            ("Liton Barua", WK, False),
            ("Rubel Mia", AR, False),
            ("Taskin Mahmud", AR, False),
            ("Ebadot Ali", BOWL, False),
            ("Ravi Pillai", BOWL, True),
        ],
    ),
}


def _player_id(event_id: str, team_key: str, index: int) -> str:
    return f"{event_id}-{team_key}-{index}"


def _create_squads(
    event_id: str,
    points_by_index: Optional[list[list[int]]] = None,
) -> tuple[list[CricketTeam], list[Player]]:
    """Create the sample teams and players for one event."""
    teams: list[CricketTeam] = []
    players: list[Player] = []

    for team_key, (team_name, squad) in SAMPLE_SQUADS.items():
        team_id = f"{event_id}-{team_key}"
        teams.append(CricketTeam(id=team_id, event_id=event_id, name=team_name))

        for index, (name, category, is_foreign) in enumerate(squad):
            points: tuple[int, ...] = ()
            if points_by_index is not None:
                points = tuple(points_by_index[index])
            players.append(
                Player(
                    id=_player_id(event_id, team_key, index),
                    name=name,
                    event_id=event_id,
                    team_id=team_id,
                    team_name=team_name,
                    category=category,
                    player_type=PlayerType.FOREIGN if is_foreign else PlayerType.DOMESTIC,
                    points=points,
                )
            )

    return teams, players


# Per-period points by squad position for the running event
SAMPLE_POINTS = [
    [34, 12, 51],
    [8, 40, 22],
    [27, 19, 30],
    [45, 33, 18],
    [21, 26, 39],
    [50, 14, 28],
    [17, 44, 9],
]


# A valid XI: one wicketkeeper, three bowlers, three all-rounders, no foreigners
SAMPLE_PICKS = [
    ("hawks", 0),
    ("hawks", 2),
    ("hawks", 3),
    ("hawks", 5),
    ("sharks", 0),
    ("sharks", 3),
    ("sharks", 5),
    ("eagles", 0),
    ("eagles", 4),
    ("wolves", 0),
    ("wolves", 5),
]


def _sample_roster_slots(
    event_id: str,
    picks: list[tuple[str, int]],
    vips: tuple[tuple[str, int], ...],
) -> tuple[RosterSlot, ...]:
    return tuple(
        RosterSlot(
            player_id=_player_id(event_id, team_key, index),
            is_vip=(team_key, index) in vips,
        )
        for team_key, index in picks
    )


def create_sample_snapshot(now: Optional[datetime] = None) -> LeagueSnapshot:
    """
    Build a small league for demos and offline use.

    Contains one running event with points and two rosters, and one
    upcoming event open for registration.

    Args:
        now: Reference time (defaults to the current UTC time).

    Returns:
        LeagueSnapshot with sample data.
    """
    now = now or datetime.now(timezone.utc)

    running = Event(
        id="spl-2026",
        name="Super T20 League 2026",
        description="Domestic T20 league. Pick your XI and two VIPs.",
        registration_deadline=now - timedelta(days=5),
        tournament_end_time=now + timedelta(days=20),
        league_type=LeagueType.DOMESTIC,
        max_vip_players=2,
        max_players_from_single_team=5,
        max_foreign_players=4,
        max_replacements=3,
    )
    upcoming = Event(
        id="icc-2026",
        name="Champions Cup 2026",
        description="International tournament. Registration is open.",
        registration_deadline=now + timedelta(days=10),
        tournament_end_time=now + timedelta(days=40),
        league_type=LeagueType.OTHER,
        max_vip_players=1,
        max_players_from_single_team=4,
        max_replacements=2,
    )

    running_teams, running_players = _create_squads(running.id, SAMPLE_POINTS)
    upcoming_teams, upcoming_players = _create_squads(upcoming.id)

    # Nadia swapped one all-rounder for another after two rounds
    nadia_in = _player_id(running.id, "hawks", 4)
    nadia_picks = [("hawks", 4) if pick == ("hawks", 3) else pick for pick in SAMPLE_PICKS]
    nadia_joined_at = float(sum(SAMPLE_POINTS[4][:2]))

    users = (
        User(id="admin", full_name="League Admin", email="admin@example.com", role=UserRole.ADMIN),
        User(id="u-rahim", full_name="Rahim Uddin", email="rahim@example.com"),
        User(id="u-nadia", full_name="Nadia Islam", email="nadia@example.com"),
        User(id="u-sam", full_name="Sam Carter", email="sam@example.com"),
    )

    rosters = (
        Roster(
            id="r-rahim",
            participant_id="u-rahim",
            participant_name="Rahim Uddin",
            team_name="Rahim's Royals",
            event_id=running.id,
            slots=_sample_roster_slots(running.id, SAMPLE_PICKS, (("hawks", 0), ("sharks", 5))),
            replacements_left=running.max_replacements,
            created_at=now - timedelta(days=9),
        ),
        Roster(
            id="r-nadia",
            participant_id="u-nadia",
            participant_name="Nadia Islam",
            team_name="Nadia's Ninjas",
            event_id=running.id,
            slots=_sample_roster_slots(running.id, nadia_picks, (("eagles", 0), ("wolves", 5))),
            replacements_left=running.max_replacements - 1,
            archived_points=42.0,
            join_history={nadia_in: nadia_joined_at},
            created_at=now - timedelta(days=7),
        ),
    )

    requests = (
        ReplacementRequest(
            id="rq-1",
            participant_team_id="r-nadia",
            participant_name="Nadia Islam",
            current_player_id=_player_id(running.id, "hawks", 3),
            new_player_id=nadia_in,
            note="Injury cover",
            status=RequestStatus.ACCEPTED,
            timestamp=now - timedelta(days=3),
            reason="Approved",
        ),
        ReplacementRequest(
            id="rq-2",
            participant_team_id="r-rahim",
            participant_name="Rahim Uddin",
            current_player_id=_player_id(running.id, "eagles", 0),
            new_player_id=_player_id(running.id, "eagles", 3),
            status=RequestStatus.PENDING,
            timestamp=now - timedelta(hours=6),
        ),
    )

    announcements = (
        Announcement(
            id="a-1",
            message="Welcome to the Super T20 League! Replacements open after the deadline.",
            timestamp=now - timedelta(days=6),
        ),
        Announcement(
            id="a-2",
            message="Points for round 3 have been added.",
            timestamp=now - timedelta(days=1),
        ),
    )

    chat_messages = (
        ChatMessage(
            id="m-1",
            sender_id="u-rahim",
            sender_name="Rahim Uddin",
            receiver_id="admin",
            message="When are round 3 points coming?",
            timestamp=now - timedelta(days=2),
            is_read=True,
        ),
        ChatMessage(
            id="m-2",
            sender_id="admin",
            sender_name="League Admin",
            receiver_id="u-rahim",
            message="Tomorrow morning.",
            timestamp=now - timedelta(days=2, hours=-1),
        ),
    )

    history = (
        SeasonHistory(id="h-1", season_number=1, champion_name="Nadia Islam", team_name="Nadia's Ninjas"),
    )

    return LeagueSnapshot(
        users=users,
        events=(running, upcoming),
        teams=tuple(running_teams + upcoming_teams),
        players=tuple(running_players + upcoming_players),
        rosters=rosters,
        replacement_requests=requests,
        announcements=announcements,
        chat_messages=chat_messages,
        history=history,
        site_settings=SiteSettings(show_participant_teams=False),
    )
