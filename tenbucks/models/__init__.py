from .enums import PlayerStatus, Team, TeamAssignment
from .player import Player
from .season import Season
from .club_session import ClubSession
from .session_participant import SessionParticipant
from .doubles_match import DoublesMatch
