import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tenbucks.database import get_db
from tenbucks.schemas import PlayerResponse
from tenbucks.services import player_service, waitlist_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/waitlist", tags=["waitlist"])


def _ordered(db: Session):
    players = waitlist_service.get_waitlist(db)
    if not waitlist_service.check_density(db):
        logger.error(f"Waitlist positions are not contiguous: {[(p.name, p.waitlist_position) for p in players]}")
    return players


@router.get("/", response_model=list[PlayerResponse])
def list_waitlist(db: Session = Depends(get_db)):
    return _ordered(db)


@router.post("/{player_id}/remove", response_model=list[PlayerResponse])
def remove_from_waitlist(player_id: str, db: Session = Depends(get_db)):
    player = player_service.require(db, player_id)
    waitlist_service.leave_waitlist(db, player)
    return _ordered(db)


@router.post("/{player_id}/move-to-bottom", response_model=list[PlayerResponse])
def move_to_bottom(player_id: str, db: Session = Depends(get_db)):
    player = player_service.require(db, player_id)
    waitlist_service.send_to_bottom(db, player)
    return _ordered(db)
