from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from tenbucks.database import get_db
from tenbucks.schemas import PlayerCreate, PlayerRename, PlayerResponse, StatusChange
from tenbucks.services import player_service

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/", response_model=list[PlayerResponse])
def list_players(db: Session = Depends(get_db)):
    return player_service.get_all(db)


@router.post("/", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
def create_player(body: PlayerCreate, db: Session = Depends(get_db)):
    return player_service.add_player(db, body.name, body.status)


@router.get("/{player_id}", response_model=PlayerResponse)
def get_player(player_id: str, db: Session = Depends(get_db)):
    return player_service.require(db, player_id)


@router.put("/{player_id}/name", response_model=PlayerResponse)
def rename_player(player_id: str, body: PlayerRename, db: Session = Depends(get_db)):
    player = player_service.require(db, player_id)
    return player_service.rename_player(db, player, body.name)


@router.put("/{player_id}/status", response_model=PlayerResponse)
def change_status(player_id: str, body: StatusChange, db: Session = Depends(get_db)):
    player = player_service.require(db, player_id)
    return player_service.change_status(db, player, body.status)


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_player(player_id: str, db: Session = Depends(get_db)):
    player = player_service.require(db, player_id)
    player_service.delete_player(db, player)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
