from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from tenbucks.database import get_db
from tenbucks.routers.session_router import session_response
from tenbucks.schemas import SeasonAggregateRow, SeasonResponse, SessionResponse
from tenbucks.services import participation_service, scoring_service, season_service

router = APIRouter(prefix="/seasons", tags=["seasons"])


def season_response(season) -> SeasonResponse:
    return SeasonResponse(
        id=season.id,
        number=season.number,
        is_completed=season.is_completed,
        session_count=len(season.sessions),
    )


@router.get("/", response_model=list[SeasonResponse])
def list_seasons(db: Session = Depends(get_db)):
    return [season_response(s) for s in season_service.get_all_seasons(db)]


@router.post("/", response_model=SeasonResponse, status_code=status.HTTP_201_CREATED)
def add_season(db: Session = Depends(get_db)):
    return season_response(season_service.add_season(db))


@router.post("/{season_id}/complete", response_model=SeasonResponse)
def complete_season(season_id: int, db: Session = Depends(get_db)):
    season = season_service.get_season(db, season_id)
    return season_response(season_service.mark_completed(db, season))


@router.get("/{season_id}/sessions", response_model=list[SessionResponse])
def list_sessions(season_id: int, db: Session = Depends(get_db)):
    season = season_service.get_season(db, season_id)
    current = participation_service.find_current_session(db)
    return [session_response(s, current) for s in season_service.get_sessions(db, season)]


@router.post(
    "/{season_id}/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_session(season_id: int, db: Session = Depends(get_db)):
    season = season_service.get_season(db, season_id)
    session = season_service.add_session(db, season)
    return session_response(session, participation_service.find_current_session(db))


@router.get("/{season_id}/results", response_model=list[SeasonAggregateRow])
def season_results(season_id: int, db: Session = Depends(get_db)):
    season = season_service.get_season(db, season_id)
    return scoring_service.season_aggregate(db, season)
