import logging
from typing import Iterable, Optional
from sqlalchemy.orm import Session, joinedload
from tenbucks.database import read_snapshot, write_transaction
from tenbucks.exceptions import DuplicateParticipantError, ParticipantNotFoundError
from tenbucks.models.club_session import ClubSession
from tenbucks.models.enums import PlayerStatus, Team, TeamAssignment
from tenbucks.models.player import Player
from tenbucks.models.session_participant import SessionParticipant

logger = logging.getLogger(__name__)


def current_session(sessions: Iterable[ClubSession]) -> Optional[ClubSession]:
    """The session with the highest (season number, session number), or None."""
    return max(sessions, key=lambda s: (s.season.number, s.number), default=None)


def find_current_session(db: Session) -> Optional[ClubSession]:
    sessions = db.query(ClubSession).options(joinedload(ClubSession.season)).all()
    return current_session(sessions)


def get_participant(db: Session, session: ClubSession, player: Player) -> Optional[SessionParticipant]:
    return (
        db.query(SessionParticipant)
        .filter(
            SessionParticipant.session_id == session.id,
            SessionParticipant.player_id == player.id,
        )
        .first()
    )


def require_participant(db: Session, session: ClubSession, player: Player) -> SessionParticipant:
    participant = get_participant(db, session, player)
    if participant is None:
        raise ParticipantNotFoundError(
            f"{player.name} is not a participant of session {session.number}"
        )
    return participant


def list_participants(db: Session, session: ClubSession, team: Optional[TeamAssignment] = None):
    """Participants of a session ordered by player name, optionally filtered by team."""
    with read_snapshot(db, reason="list_participants"):
        query = (
            db.query(SessionParticipant)
            .join(Player, SessionParticipant.player_id == Player.id)
            .filter(SessionParticipant.session_id == session.id)
        )
        if team is TeamAssignment.UNASSIGNED:
            query = query.filter(SessionParticipant.team.is_(None))
        elif team is not None:
            query = query.filter(SessionParticipant.team == team.to_team())
        return query.order_by(Player.name).all()


def has_assigned_team(db: Session, session: ClubSession, player: Player) -> bool:
    participant = get_participant(db, session, player)
    return participant is not None and participant.team is not None


# Primitives. No commit; callers hold a write_transaction.

def add_participant(db: Session, session: ClubSession, player: Player,
                    team: Optional[Team] = None) -> SessionParticipant:
    if get_participant(db, session, player) is not None:
        raise DuplicateParticipantError(
            f"{player.name} is already a participant of session {session.number}"
        )
    participant = SessionParticipant(session_id=session.id, player_id=player.id, team=team)
    db.add(participant)
    db.flush()
    return participant


def set_team(db: Session, participant: SessionParticipant, team: Optional[Team]) -> SessionParticipant:
    participant.team = team
    db.flush()
    return participant


def remove_participant(db: Session, session: ClubSession, player: Player) -> None:
    participant = require_participant(db, session, player)
    db.delete(participant)
    db.flush()


# Committed actions for the session screens

def _is_current(db: Session, session: ClubSession) -> bool:
    current = find_current_session(db)
    return current is not None and current.id == session.id


def enroll(db: Session, session: ClubSession, player: Player,
           team: Optional[Team] = None) -> SessionParticipant:
    """Add a player to a session roster.

    For the current session this is the Playing transition, so the player's
    status and waitlist position follow. Older sessions only get the record.
    """
    from tenbucks.services import player_service

    with write_transaction(db, reason="participants.enroll"):
        if _is_current(db, session) and player.status != PlayerStatus.PLAYING:
            player_service.apply_status_change(db, player, PlayerStatus.PLAYING, session)
            participant = require_participant(db, session, player)
        else:
            participant = add_participant(db, session, player)
        if team is not None:
            set_team(db, participant, team)
    logger.info(f"Enrolled {player.name} in session {session.number} (team={team})")
    return participant


def assign_team(db: Session, participant: SessionParticipant, team: Optional[Team]) -> SessionParticipant:
    with write_transaction(db, reason="participants.set_team"):
        set_team(db, participant, team)
    logger.info(f"Participant {participant.id} team set to {team.value if team else 'unassigned'}")
    return participant


def withdraw(db: Session, session: ClubSession, player: Player) -> None:
    """Remove a player from a session roster.

    For a Playing player in the current session this is the Playing ->
    NotInSession transition, including the team gate.
    """
    from tenbucks.services import player_service

    with write_transaction(db, reason="participants.withdraw"):
        if _is_current(db, session) and player.status == PlayerStatus.PLAYING:
            require_participant(db, session, player)
            player_service.change_status(db, player, PlayerStatus.NOT_IN_SESSION)
        else:
            remove_participant(db, session, player)
    logger.info(f"Removed {player.name} from session {session.number}")
