"""Roster store: players, name uniqueness and the status state machine.

Transitions (all through ``change_status``):

    NotInSession -> OnWaitlist    append to waitlist
    OnWaitlist   -> NotInSession  remove from waitlist, close the gap
    NotInSession -> Playing       join current session, team unassigned
    OnWaitlist   -> Playing       leave waitlist, then join current session
    Playing      -> NotInSession  team must be unassigned; leave session
    Playing      -> OnWaitlist    team must be unassigned; leave session, append
    X            -> X             nothing

Every precondition is checked before the first mutation, and the whole
change is committed in one write_transaction.
"""

import logging
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from tenbucks.database import read_snapshot, write_transaction
from tenbucks.exceptions import (
    DuplicateNameError,
    InvalidPlayerNameError,
    NoActiveSessionError,
    PlayerHasMatchesError,
    PlayerNotFoundError,
    TeamAssignedError,
)
from tenbucks.models.club_session import ClubSession
from tenbucks.models.doubles_match import DoublesMatch
from tenbucks.models.enums import PlayerStatus
from tenbucks.models.player import Player
from tenbucks.services import participation_service, waitlist_service

logger = logging.getLogger(__name__)


def get_all(db: Session):
    with read_snapshot(db, reason="players.get_all"):
        return db.query(Player).order_by(Player.name).all()

def get_by_id(db: Session, player_id: str):
    return db.query(Player).filter(Player.id == player_id).first()

def get_by_name(db: Session, name: str):
    return db.query(Player).filter(Player.name == name).first()

def require(db: Session, player_id: str) -> Player:
    player = get_by_id(db, player_id)
    if not player:
        raise PlayerNotFoundError()
    return player


def _clean_name(name: str) -> str:
    name_clean = (name or "").strip()
    if not name_clean:
        raise InvalidPlayerNameError()
    return name_clean


def _check_name_free(db: Session, name: str, exclude_id: Optional[str] = None):
    query = db.query(Player).filter(Player.name == name)
    if exclude_id is not None:
        query = query.filter(Player.id != exclude_id)
    if query.first():
        raise DuplicateNameError(name)


def apply_status_change(db: Session, player: Player, new_status: PlayerStatus,
                        session: Optional[ClubSession]) -> None:
    """Move a player to new_status against the given current session.

    No commit. Raises before mutating anything if a precondition fails.
    """
    old_status = player.status
    if old_status == new_status:
        return

    # preconditions
    if new_status == PlayerStatus.PLAYING and session is None:
        raise NoActiveSessionError()
    if old_status == PlayerStatus.PLAYING and session is not None:
        if participation_service.has_assigned_team(db, session, player):
            raise TeamAssignedError(
                f"{player.name} is on a team in session {session.number}. Clear the team first."
            )

    # leave the old state
    if old_status == PlayerStatus.ON_WAITLIST:
        waitlist_service.remove(db, player)
    elif old_status == PlayerStatus.PLAYING:
        if session is not None:
            participant = participation_service.get_participant(db, session, player)
            if participant is not None:
                db.delete(participant)
                db.flush()
    elif old_status != PlayerStatus.NOT_IN_SESSION:
        raise ValueError(f"Unknown player status: {old_status!r}")

    # enter the new state
    player.status = new_status
    if new_status == PlayerStatus.ON_WAITLIST:
        waitlist_service.append(db, player)
    elif new_status == PlayerStatus.PLAYING:
        if participation_service.get_participant(db, session, player) is None:
            participation_service.add_participant(db, session, player)
    elif new_status != PlayerStatus.NOT_IN_SESSION:
        raise ValueError(f"Unknown player status: {new_status!r}")
    db.flush()


def add_player(db: Session, name: str, initial_status: PlayerStatus = PlayerStatus.NOT_IN_SESSION) -> Player:
    name_clean = _clean_name(name)

    with write_transaction(db, reason="players.add"):
        _check_name_free(db, name_clean)
        session = participation_service.find_current_session(db)
        if initial_status == PlayerStatus.PLAYING and session is None:
            raise NoActiveSessionError()

        player = Player(name=name_clean, status=PlayerStatus.NOT_IN_SESSION)
        db.add(player)
        db.flush()
        apply_status_change(db, player, initial_status, session)

    db.refresh(player)
    logger.info(f"Added player {player.name} ({player.status.label})")
    return player


def rename_player(db: Session, player: Player, new_name: str) -> Player:
    name_clean = _clean_name(new_name)
    if name_clean == player.name:
        return player

    with write_transaction(db, reason="players.rename"):
        _check_name_free(db, name_clean, exclude_id=player.id)
        old_name = player.name
        player.name = name_clean

    logger.info(f"Renamed player {old_name} -> {player.name}")
    return player


def change_status(db: Session, player: Player, new_status: PlayerStatus) -> Player:
    """Single entry point for status transitions. All-or-nothing."""
    with write_transaction(db, reason="players.change_status"):
        old_status = player.status
        if old_status == new_status:
            return player
        session = participation_service.find_current_session(db)
        apply_status_change(db, player, new_status, session)

    logger.info(
        f"{player.name}: {old_status.label} -> {new_status.label}"
        + (f" (waitlist #{player.waitlist_position})" if player.waitlist_position else "")
    )
    return player


def match_count(db: Session, player: Player) -> int:
    return db.query(DoublesMatch).filter(
        or_(
            DoublesMatch.player1_id == player.id,
            DoublesMatch.player2_id == player.id,
            DoublesMatch.player3_id == player.id,
            DoublesMatch.player4_id == player.id,
        )
    ).count()


def delete_player(db: Session, player: Player) -> None:
    name = player.name
    with write_transaction(db, reason="players.delete"):
        if match_count(db, player) > 0:
            raise PlayerHasMatchesError(f"{player.name} has recorded matches and cannot be removed.")
        if player.waitlist_position is not None:
            waitlist_service.remove(db, player)
        for participant in list(player.participations):
            db.delete(participant)
        db.delete(player)

    logger.info(f"Deleted player {name}")
