"""Waitlist sequencing.

Positions are 1-based and dense: with N waitlisted players they are exactly
1..N. Every position change goes through append / remove / move_to_bottom.
These functions only touch positions and flush; they do not commit and must
be called inside ``write_transaction``. Player status is owned by
player_service.
"""

import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from tenbucks.database import read_snapshot, write_transaction
from tenbucks.exceptions import NotOnWaitlistError
from tenbucks.models.enums import PlayerStatus
from tenbucks.models.player import Player

logger = logging.getLogger(__name__)


def _waitlisted(db: Session):
    return db.query(Player).filter(Player.waitlist_position.isnot(None))


def get_waitlist(db: Session):
    with read_snapshot(db, reason="get_waitlist"):
        return _waitlisted(db).order_by(Player.waitlist_position).all()


def next_position(db: Session) -> int:
    current_max = db.query(func.max(Player.waitlist_position)).scalar()
    return (current_max or 0) + 1


def append(db: Session, player: Player) -> int:
    player.waitlist_position = next_position(db)
    db.flush()
    return player.waitlist_position


def remove(db: Session, player: Player) -> int:
    """Clear the player's position and close the gap. Returns the old position."""
    removed = player.waitlist_position
    if removed is None:
        raise NotOnWaitlistError(f"{player.name} is not on the waitlist")

    player.waitlist_position = None
    below = _waitlisted(db).filter(
        Player.waitlist_position > removed, Player.id != player.id
    ).all()
    for other in below:
        other.waitlist_position -= 1
    db.flush()
    return removed


def move_to_bottom(db: Session, player: Player) -> int:
    current = player.waitlist_position
    if current is None:
        raise NotOnWaitlistError(f"{player.name} is not on the waitlist")

    count = _waitlisted(db).count()
    below = _waitlisted(db).filter(Player.waitlist_position > current).all()
    for other in below:
        other.waitlist_position -= 1
    player.waitlist_position = count
    db.flush()
    return count


def check_density(db: Session) -> bool:
    """True when waitlisted statuses and positions 1..N line up exactly."""
    players = db.query(Player).all()
    positions = []
    for p in players:
        if (p.status == PlayerStatus.ON_WAITLIST) != (p.waitlist_position is not None):
            return False
        if p.waitlist_position is not None:
            positions.append(p.waitlist_position)
    return sorted(positions) == list(range(1, len(positions) + 1))


# Committed actions used by the waitlist screen

def send_to_bottom(db: Session, player: Player) -> Player:
    with write_transaction(db, reason="waitlist.move_to_bottom"):
        if player.status != PlayerStatus.ON_WAITLIST:
            raise NotOnWaitlistError(f"{player.name} is not on the waitlist")
        old = player.waitlist_position
        new = move_to_bottom(db, player)
    logger.info(f"Moved {player.name} to bottom of waitlist ({old} -> {new})")
    return player


def leave_waitlist(db: Session, player: Player) -> Player:
    from tenbucks.services import player_service

    with write_transaction(db, reason="waitlist.leave"):
        if player.status != PlayerStatus.ON_WAITLIST:
            raise NotOnWaitlistError(f"{player.name} is not on the waitlist")
        return player_service.change_status(db, player, PlayerStatus.NOT_IN_SESSION)
