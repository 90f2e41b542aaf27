import logging
from collections import defaultdict
from typing import Sequence
from sqlalchemy.orm import Session
from tenbucks.database import read_snapshot, write_transaction
from tenbucks.exceptions import InvalidMatchError, MatchNotFoundError
from tenbucks.models.club_session import ClubSession
from tenbucks.models.doubles_match import DoublesMatch
from tenbucks.models.player import Player
from tenbucks.models.session_participant import SessionParticipant

logger = logging.getLogger(__name__)


def get_by_session(db: Session, session: ClubSession):
    with read_snapshot(db, reason="matches.get_by_session"):
        return (
            db.query(DoublesMatch)
            .filter(DoublesMatch.session_id == session.id)
            .order_by(DoublesMatch.wave_number, DoublesMatch.created_at)
            .all()
        )

def get_by_id(db: Session, match_id: str) -> DoublesMatch:
    match = db.query(DoublesMatch).filter(DoublesMatch.id == match_id).first()
    if not match:
        raise MatchNotFoundError()
    return match


def get_waves(db: Session, session: ClubSession):
    """Matches grouped by wave number, waves in ascending order."""
    waves = defaultdict(list)
    for match in get_by_session(db, session):
        waves[match.wave_number].append(match)
    return dict(sorted(waves.items()))


def _check_scores(*scores: int):
    for score in scores:
        if score is None or score < 0:
            raise InvalidMatchError("Scores must be non-negative integers")


def create_match(
    db: Session,
    session: ClubSession,
    wave_number: int,
    players: Sequence[Player],
    red_first_set: int = 0,
    black_first_set: int = 0,
    red_second_set: int = 0,
    black_second_set: int = 0,
    is_complete: bool = False,
) -> DoublesMatch:
    if wave_number < 1:
        raise InvalidMatchError("Wave number must be 1 or higher")
    if len(players) != 4 or len({p.id for p in players}) != 4:
        raise InvalidMatchError("A doubles match needs four different players")
    _check_scores(red_first_set, black_first_set, red_second_set, black_second_set)

    with write_transaction(db, reason="matches.create"):
        enrolled = {
            pid for (pid,) in db.query(SessionParticipant.player_id)
            .filter(SessionParticipant.session_id == session.id)
        }
        missing = [p.name for p in players if p.id not in enrolled]
        if missing:
            raise InvalidMatchError(
                f"Not participants of session {session.number}: {', '.join(missing)}"
            )

        p1, p2, p3, p4 = players
        match = DoublesMatch(
            session_id=session.id,
            wave_number=wave_number,
            player1_id=p1.id,
            player2_id=p2.id,
            player3_id=p3.id,
            player4_id=p4.id,
            red_first_set=red_first_set,
            black_first_set=black_first_set,
            red_second_set=red_second_set,
            black_second_set=black_second_set,
            is_complete=is_complete,
        )
        db.add(match)

    logger.info(f"Created wave {wave_number} match in session {session.number}")
    return match


def update_scores(
    db: Session,
    match: DoublesMatch,
    red_first_set: int,
    black_first_set: int,
    red_second_set: int,
    black_second_set: int,
) -> DoublesMatch:
    _check_scores(red_first_set, black_first_set, red_second_set, black_second_set)

    with write_transaction(db, reason="matches.update_scores"):
        match.red_first_set = red_first_set
        match.black_first_set = black_first_set
        match.red_second_set = red_second_set
        match.black_second_set = black_second_set

    logger.info(
        f"Match {match.id} scores: red {red_first_set}/{red_second_set}, "
        f"black {black_first_set}/{black_second_set}"
    )
    return match


def set_completion(db: Session, match: DoublesMatch, is_complete: bool) -> DoublesMatch:
    with write_transaction(db, reason="matches.set_completion"):
        match.is_complete = is_complete
    logger.info(f"Match {match.id} complete={is_complete}")
    return match


def delete_match(db: Session, match: DoublesMatch) -> None:
    match_id = match.id
    with write_transaction(db, reason="matches.delete"):
        db.delete(match)
    logger.info(f"Deleted match {match_id}")
