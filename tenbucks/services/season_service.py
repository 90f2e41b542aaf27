import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from tenbucks.database import read_snapshot, write_transaction
from tenbucks.exceptions import (
    SeasonCompletedError,
    SeasonNotCompletedError,
    SeasonNotFoundError,
    SessionNotFoundError,
)
from tenbucks.models.club_session import ClubSession
from tenbucks.models.enums import PlayerStatus
from tenbucks.models.player import Player
from tenbucks.models.season import Season
from tenbucks.models.session_participant import SessionParticipant
from tenbucks.services import participation_service

logger = logging.getLogger(__name__)


def get_all_seasons(db: Session):
    """Seasons, newest first."""
    with read_snapshot(db, reason="seasons.get_all"):
        return db.query(Season).order_by(Season.number.desc()).all()

def get_season(db: Session, season_id: int) -> Season:
    season = db.query(Season).filter(Season.id == season_id).first()
    if not season:
        raise SeasonNotFoundError()
    return season


def add_season(db: Session) -> Season:
    """Open the next season. Only allowed once every existing season is completed."""
    with write_transaction(db, reason="seasons.add"):
        open_seasons = db.query(Season).filter(Season.is_completed.is_(False)).count()
        if open_seasons > 0:
            raise SeasonNotCompletedError()
        current_max = db.query(func.max(Season.number)).scalar() or 0
        season = Season(number=current_max + 1, is_completed=False)
        db.add(season)

    logger.info(f"Created season {season.number}")
    return season


def mark_completed(db: Session, season: Season) -> Season:
    with write_transaction(db, reason="seasons.complete"):
        season.is_completed = True
    logger.info(f"Season {season.number} marked completed")
    return season


def get_sessions(db: Session, season: Season):
    with read_snapshot(db, reason="sessions.get_by_season"):
        return (
            db.query(ClubSession)
            .filter(ClubSession.season_id == season.id)
            .order_by(ClubSession.number)
            .all()
        )

def get_session(db: Session, session_id: str) -> ClubSession:
    session = db.query(ClubSession).filter(ClubSession.id == session_id).first()
    if not session:
        raise SessionNotFoundError()
    return session


def add_session(db: Session, season: Season) -> ClubSession:
    with write_transaction(db, reason="sessions.add"):
        if season.is_completed:
            raise SeasonCompletedError(f"Season {season.number} is completed; no new sessions.")
        current_max = (
            db.query(func.max(ClubSession.number))
            .filter(ClubSession.season_id == season.id)
            .scalar()
        ) or 0
        session = ClubSession(season_id=season.id, number=current_max + 1)
        db.add(session)

    logger.info(f"Created session {session.number} in season {season.number}")
    return session


def delete_session(db: Session, session: ClubSession) -> None:
    """Delete a session with its participants and matches.

    If it was the current session, its Playing participants go back to
    NotInSession, since the session they were playing in no longer exists.
    """
    label = f"season {session.season.number} session {session.number}"
    with write_transaction(db, reason="sessions.delete"):
        current = participation_service.find_current_session(db)
        if current is not None and current.id == session.id:
            playing = (
                db.query(Player)
                .join(SessionParticipant, SessionParticipant.player_id == Player.id)
                .filter(
                    SessionParticipant.session_id == session.id,
                    Player.status == PlayerStatus.PLAYING,
                )
                .all()
            )
            for player in playing:
                player.status = PlayerStatus.NOT_IN_SESSION
        db.delete(session)

    logger.info(f"Deleted {label}")
