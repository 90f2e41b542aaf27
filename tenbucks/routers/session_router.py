from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from tenbucks.database import get_db
from tenbucks.exceptions import SessionNotFoundError
from tenbucks.models.enums import TeamAssignment
from tenbucks.schemas import (
    ParticipantCreate,
    ParticipantResponse,
    SessionResponse,
    TeamUpdate,
)
from tenbucks.services import participation_service, player_service, season_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


def session_response(session, current=None) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        number=session.number,
        season_id=session.season_id,
        season_number=session.season.number,
        is_current=current is not None and current.id == session.id,
    )


def participant_response(participant) -> ParticipantResponse:
    return ParticipantResponse(
        id=participant.id,
        session_id=participant.session_id,
        player_id=participant.player_id,
        player_name=participant.player.name,
        team=TeamAssignment.from_team(participant.team),
    )


@router.get("/current", response_model=SessionResponse)
def get_current_session(db: Session = Depends(get_db)):
    current = participation_service.find_current_session(db)
    if current is None:
        raise SessionNotFoundError("No session exists yet")
    return session_response(current, current)


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    return session_response(session, participation_service.find_current_session(db))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    season_service.delete_session(db, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{session_id}/participants", response_model=list[ParticipantResponse])
def list_participants(
    session_id: str,
    team: Optional[TeamAssignment] = Query(None),
    db: Session = Depends(get_db),
):
    session = season_service.get_session(db, session_id)
    participants = participation_service.list_participants(db, session, team)
    return [participant_response(p) for p in participants]


@router.post(
    "/{session_id}/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_participant(session_id: str, body: ParticipantCreate, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    player = player_service.require(db, body.player_id)
    participant = participation_service.enroll(db, session, player, body.team.to_team())
    return participant_response(participant)


@router.put("/{session_id}/participants/{player_id}/team", response_model=ParticipantResponse)
def set_team(session_id: str, player_id: str, body: TeamUpdate, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    player = player_service.require(db, player_id)
    participant = participation_service.require_participant(db, session, player)
    participation_service.assign_team(db, participant, body.team.to_team())
    return participant_response(participant)


@router.delete("/{session_id}/participants/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_participant(session_id: str, player_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    player = player_service.require(db, player_id)
    participation_service.withdraw(db, session, player)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
