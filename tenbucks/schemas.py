"""Pydantic request/response models for the JSON API."""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from tenbucks.models.enums import PlayerStatus, TeamAssignment


class PlayerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    status: PlayerStatus = PlayerStatus.NOT_IN_SESSION


class PlayerRename(BaseModel):
    name: str = Field(..., min_length=1)


class StatusChange(BaseModel):
    status: PlayerStatus


class PlayerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    status: PlayerStatus
    waitlist_position: Optional[int] = None


class SeasonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: int
    is_completed: bool
    session_count: int = 0


class SessionResponse(BaseModel):
    id: str
    number: int
    season_id: int
    season_number: int
    is_current: bool = False


class ParticipantCreate(BaseModel):
    player_id: str
    team: TeamAssignment = TeamAssignment.UNASSIGNED


class TeamUpdate(BaseModel):
    team: TeamAssignment


class ParticipantResponse(BaseModel):
    id: int
    session_id: str
    player_id: str
    player_name: str
    team: TeamAssignment


class MatchCreate(BaseModel):
    wave_number: int = Field(..., ge=1)
    player_ids: List[str] = Field(..., min_length=4, max_length=4)
    red_first_set: int = Field(0, ge=0)
    black_first_set: int = Field(0, ge=0)
    red_second_set: int = Field(0, ge=0)
    black_second_set: int = Field(0, ge=0)
    is_complete: bool = False


class ScoreUpdate(BaseModel):
    red_first_set: int = Field(..., ge=0)
    black_first_set: int = Field(..., ge=0)
    red_second_set: int = Field(..., ge=0)
    black_second_set: int = Field(..., ge=0)


class CompletionUpdate(BaseModel):
    is_complete: bool


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    session_id: str
    wave_number: int
    player1_id: str
    player2_id: str
    player3_id: str
    player4_id: str
    red_first_set: int
    black_first_set: int
    red_second_set: int
    black_second_set: int
    is_complete: bool


class TeamTotals(BaseModel):
    red: int
    black: int


class NetScoreRow(BaseModel):
    participant_id: int
    player_id: str
    name: str
    team: TeamAssignment
    matches: int
    net_score: int


class SessionResults(BaseModel):
    totals: TeamTotals
    players: List[NetScoreRow]


class SeasonAggregateRow(BaseModel):
    player_id: str
    name: str
    sessions_attended: int
    matches: int
    net_total: int
    average_net_score: float


class WavesResponse(BaseModel):
    waves: Dict[int, List[MatchResponse]]
