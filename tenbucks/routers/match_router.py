from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from tenbucks.database import get_db
from tenbucks.schemas import (
    CompletionUpdate,
    MatchCreate,
    MatchResponse,
    ScoreUpdate,
    WavesResponse,
)
from tenbucks.services import match_service, player_service, season_service

router = APIRouter(tags=["matches"])


@router.get("/sessions/{session_id}/matches", response_model=list[MatchResponse])
def list_matches(session_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    return match_service.get_by_session(db, session)


@router.get("/sessions/{session_id}/waves", response_model=WavesResponse)
def list_waves(session_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    waves = match_service.get_waves(db, session)
    return WavesResponse(waves={
        wave: [MatchResponse.model_validate(m) for m in matches]
        for wave, matches in waves.items()
    })


@router.post(
    "/sessions/{session_id}/matches",
    response_model=MatchResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_match(session_id: str, body: MatchCreate, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    players = [player_service.require(db, pid) for pid in body.player_ids]
    return match_service.create_match(
        db,
        session,
        body.wave_number,
        players,
        red_first_set=body.red_first_set,
        black_first_set=body.black_first_set,
        red_second_set=body.red_second_set,
        black_second_set=body.black_second_set,
        is_complete=body.is_complete,
    )


@router.put("/matches/{match_id}/scores", response_model=MatchResponse)
def update_scores(match_id: str, body: ScoreUpdate, db: Session = Depends(get_db)):
    match = match_service.get_by_id(db, match_id)
    return match_service.update_scores(
        db,
        match,
        body.red_first_set,
        body.black_first_set,
        body.red_second_set,
        body.black_second_set,
    )


@router.put("/matches/{match_id}/completion", response_model=MatchResponse)
def set_completion(match_id: str, body: CompletionUpdate, db: Session = Depends(get_db)):
    match = match_service.get_by_id(db, match_id)
    return match_service.set_completion(db, match, body.is_complete)


@router.delete("/matches/{match_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_match(match_id: str, db: Session = Depends(get_db)):
    match = match_service.get_by_id(db, match_id)
    match_service.delete_match(db, match)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
