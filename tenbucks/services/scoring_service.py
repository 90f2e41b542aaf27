"""Read-only score aggregation for sessions and seasons.

Only completed matches count. For one match the delta is Red's total minus
Black's total: a Black participant adds it, anyone else (Red or unassigned)
subtracts it. Red 21 / Black 15 is +6 for Black and -6 for Red.
"""

from collections import defaultdict
from sqlalchemy.orm import Session
from tenbucks.database import read_snapshot
from tenbucks.models.club_session import ClubSession
from tenbucks.models.doubles_match import DoublesMatch
from tenbucks.models.enums import Team, TeamAssignment
from tenbucks.models.player import Player
from tenbucks.models.season import Season
from tenbucks.models.session_participant import SessionParticipant


def _completed_matches(db: Session, session_ids):
    if not session_ids:
        return []
    return (
        db.query(DoublesMatch)
        .filter(
            DoublesMatch.session_id.in_(session_ids),
            DoublesMatch.is_complete.is_(True),
        )
        .all()
    )


def match_net(match: DoublesMatch, team) -> int:
    delta = match.red_total - match.black_total
    return delta if team == Team.BLACK else -delta


def team_totals(db: Session, session: ClubSession):
    with read_snapshot(db, reason="scoring.team_totals"):
        red = black = 0
        for match in _completed_matches(db, [session.id]):
            red += match.red_total
            black += match.black_total
    return {"red": red, "black": black}


def net_score(db: Session, session: ClubSession, participant: SessionParticipant) -> int:
    with read_snapshot(db, reason="scoring.net_score"):
        return sum(
            match_net(m, participant.team)
            for m in _completed_matches(db, [session.id])
            if participant.player_id in m.player_ids
        )


def session_net_scores(db: Session, session: ClubSession):
    """Net score for every participant, best first."""
    with read_snapshot(db, reason="scoring.session_net_scores"):
        matches = _completed_matches(db, [session.id])
        participants = (
            db.query(SessionParticipant)
            .filter(SessionParticipant.session_id == session.id)
            .all()
        )

        rows = []
        for p in participants:
            played = [m for m in matches if p.player_id in m.player_ids]
            rows.append({
                "participant_id": p.id,
                "player_id": p.player_id,
                "name": p.player.name,
                "team": TeamAssignment.from_team(p.team),
                "matches": len(played),
                "net_score": sum(match_net(m, p.team) for m in played),
            })

    rows.sort(key=lambda r: (-r["net_score"], r["name"]))
    return rows


def season_aggregate(db: Session, season: Season):
    """Per-player totals across a season, sorted by player name."""
    with read_snapshot(db, reason="scoring.season_aggregate"):
        sessions = db.query(ClubSession).filter(ClubSession.season_id == season.id).all()
        session_numbers = {s.id: s.number for s in sessions}

        participants = (
            db.query(SessionParticipant)
            .filter(SessionParticipant.session_id.in_(list(session_numbers)))
            .all()
        ) if session_numbers else []

        # team per (session, player)
        teams = {(p.session_id, p.player_id): p.team for p in participants}

        stats = defaultdict(lambda: {"sessions": set(), "matches": 0, "net_total": 0})
        for p in participants:
            stats[p.player_id]["sessions"].add(session_numbers[p.session_id])

        for match in _completed_matches(db, list(session_numbers)):
            for pid in set(match.player_ids):
                if pid not in stats:
                    continue
                s = stats[pid]
                s["matches"] += 1
                s["net_total"] += match_net(match, teams.get((match.session_id, pid)))

        names = {
            p.id: p.name
            for p in db.query(Player).filter(Player.id.in_(list(stats))).all()
        } if stats else {}

    result = []
    for pid, s in stats.items():
        games = s["matches"]
        result.append({
            "player_id": pid,
            "name": names[pid],
            "sessions_attended": len(s["sessions"]),
            "matches": games,
            "net_total": s["net_total"],
            "average_net_score": (s["net_total"] / games) if games else 0.0,
        })

    result.sort(key=lambda r: r["name"])
    return result
