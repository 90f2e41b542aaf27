"""
Tests for seasons and sessions: completion gating, numbering and deletion.
"""
import pytest

from tenbucks.exceptions import SeasonCompletedError, SeasonNotCompletedError
from tenbucks.models.doubles_match import DoublesMatch
from tenbucks.models.enums import PlayerStatus
from tenbucks.models.season import Season
from tenbucks.models.session_participant import SessionParticipant
from tenbucks.services import match_service, participation_service, season_service


def test_first_season_is_number_one(db):
    season = season_service.add_season(db)
    assert season.number == 1
    assert season.is_completed is False


def test_new_season_requires_completed_seasons(db):
    season1 = season_service.add_season(db)

    with pytest.raises(SeasonNotCompletedError):
        season_service.add_season(db)
    assert db.query(Season).count() == 1

    season_service.mark_completed(db, season1)
    season2 = season_service.add_season(db)

    assert season2.number == 2
    assert [s.number for s in season_service.get_all_seasons(db)] == [2, 1]


def test_mark_completed_is_idempotent(db, season):
    season_service.mark_completed(db, season)
    season_service.mark_completed(db, season)
    assert season.is_completed is True


def test_session_numbers_are_per_season(db, season):
    s1 = season_service.add_session(db, season)
    s2 = season_service.add_session(db, season)
    season_service.mark_completed(db, season)
    season2 = season_service.add_season(db)
    s3 = season_service.add_session(db, season2)

    assert (s1.number, s2.number, s3.number) == (1, 2, 1)
    assert [s.number for s in season_service.get_sessions(db, season)] == [1, 2]


def test_completed_season_takes_no_sessions(db, season):
    season_service.mark_completed(db, season)
    with pytest.raises(SeasonCompletedError):
        season_service.add_session(db, season)


def test_delete_current_session_releases_players(db, make_player, club_session):
    players = [make_player(n, PlayerStatus.PLAYING) for n in "ABCD"]
    match_service.create_match(db, club_session, 1, players)

    season_service.delete_session(db, club_session)

    assert participation_service.find_current_session(db) is None
    assert db.query(SessionParticipant).count() == 0
    assert db.query(DoublesMatch).count() == 0
    assert all(p.status == PlayerStatus.NOT_IN_SESSION for p in players)


def test_delete_past_session_keeps_current_players(db, make_player, season, club_session):
    a = make_player("A", PlayerStatus.PLAYING)
    current = season_service.add_session(db, season)
    participation_service.enroll(db, current, a)

    season_service.delete_session(db, club_session)

    assert a.status == PlayerStatus.PLAYING
    assert participation_service.get_participant(db, current, a) is not None
