"""
Tests for team totals, per-participant net scores and season aggregates.
"""
import pytest

from tenbucks.models.enums import PlayerStatus, Team, TeamAssignment
from tenbucks.services import (
    match_service,
    participation_service,
    scoring_service,
    season_service,
)


@pytest.fixture
def foursome(db, make_player, club_session):
    """Two Red and two Black players in the current session, plus a Red bench player."""
    teams = {"Rita": Team.RED, "Rob": Team.RED, "Bea": Team.BLACK, "Ben": Team.BLACK, "Ray": Team.RED}
    players = {}
    for name, team in teams.items():
        player = make_player(name, PlayerStatus.PLAYING)
        participant = participation_service.get_participant(db, club_session, player)
        participation_service.assign_team(db, participant, team)
        players[name] = player
    return players


def participant(db, session, player):
    return participation_service.get_participant(db, session, player)


def play(db, session, players, names, red, black, wave=1, complete=True):
    return match_service.create_match(
        db,
        session,
        wave,
        [players[n] for n in names],
        red_first_set=red[0],
        red_second_set=red[1],
        black_first_set=black[0],
        black_second_set=black[1],
        is_complete=complete,
    )


def test_net_score_sign(db, club_session, foursome):
    # Red 21 vs Black 15 over two sets
    play(db, club_session, foursome, ["Rita", "Rob", "Bea", "Ben"], red=(11, 10), black=(8, 7))

    assert scoring_service.net_score(db, club_session, participant(db, club_session, foursome["Bea"])) == 6
    assert scoring_service.net_score(db, club_session, participant(db, club_session, foursome["Rita"])) == -6
    assert scoring_service.net_score(db, club_session, participant(db, club_session, foursome["Ray"])) == 0


def test_team_totals_ignore_incomplete_matches(db, club_session, foursome):
    play(db, club_session, foursome, ["Rita", "Rob", "Bea", "Ben"], red=(21, 18), black=(15, 21))
    play(db, club_session, foursome, ["Rita", "Ray", "Bea", "Ben"], red=(5, 0), black=(3, 0), wave=2, complete=False)

    assert scoring_service.team_totals(db, club_session) == {"red": 39, "black": 36}


def test_team_totals_of_empty_session(db, club_session):
    assert scoring_service.team_totals(db, club_session) == {"red": 0, "black": 0}


def test_completing_a_match_brings_it_into_totals(db, club_session, foursome):
    match = play(db, club_session, foursome, ["Rita", "Rob", "Bea", "Ben"], red=(0, 0), black=(0, 0), complete=False)
    match_service.update_scores(db, match, 21, 19, 21, 17)
    assert scoring_service.team_totals(db, club_session) == {"red": 0, "black": 0}

    match_service.set_completion(db, match, True)

    assert scoring_service.team_totals(db, club_session) == {"red": 42, "black": 36}


def test_session_net_scores(db, club_session, foursome):
    play(db, club_session, foursome, ["Rita", "Rob", "Bea", "Ben"], red=(21, 21), black=(10, 12))
    play(db, club_session, foursome, ["Ray", "Rob", "Bea", "Ben"], red=(15, 15), black=(21, 21), wave=2)

    rows = scoring_service.session_net_scores(db, club_session)
    by_name = {r["name"]: r for r in rows}

    # wave 1: Red 42 / Black 22, wave 2: Red 30 / Black 42
    assert by_name["Rita"]["net_score"] == -20
    assert by_name["Rob"]["net_score"] == -20 + 12
    assert by_name["Ray"]["net_score"] == 12
    assert by_name["Bea"]["net_score"] == 20 - 12
    assert by_name["Rob"]["matches"] == 2
    assert by_name["Rita"]["team"] == TeamAssignment.RED
    assert [r["name"] for r in rows] == ["Ray", "Bea", "Ben", "Rob", "Rita"]


def test_unassigned_participant_is_scored_from_red_side(db, make_player, club_session):
    players = {n: make_player(n, PlayerStatus.PLAYING) for n in ["A", "B", "C", "D"]}
    play(db, club_session, players, ["A", "B", "C", "D"], red=(10, 10), black=(21, 21))

    assert scoring_service.net_score(db, club_session, participant(db, club_session, players["A"])) == 22


def test_season_aggregate(db, season, club_session, foursome):
    play(db, club_session, foursome, ["Rita", "Rob", "Bea", "Ben"], red=(21, 21), black=(15, 15))

    session2 = season_service.add_session(db, season)
    for name, team in [("Rita", Team.BLACK), ("Bea", Team.RED), ("Rob", Team.RED), ("Ben", Team.BLACK)]:
        p = participation_service.enroll(db, session2, foursome[name])
        participation_service.assign_team(db, p, team)
    play(db, session2, foursome, ["Bea", "Rob", "Rita", "Ben"], red=(21, 21), black=(19, 19))
    play(db, session2, foursome, ["Bea", "Rob", "Rita", "Ben"], red=(0, 0), black=(0, 0), wave=2, complete=False)

    rows = scoring_service.season_aggregate(db, season)
    by_name = {r["name"]: r for r in rows}

    assert [r["name"] for r in rows] == ["Bea", "Ben", "Ray", "Rita", "Rob"]
    # Rita: -12 on Red in session 1, +4 on Black in session 2
    assert by_name["Rita"]["sessions_attended"] == 2
    assert by_name["Rita"]["matches"] == 2
    assert by_name["Rita"]["average_net_score"] == pytest.approx(-4.0)
    # Ray was on the roster but never played
    assert by_name["Ray"]["sessions_attended"] == 1
    assert by_name["Ray"]["matches"] == 0
    assert by_name["Ray"]["average_net_score"] == 0
    # Bea: +12 on Black, -4 on Red
    assert by_name["Bea"]["average_net_score"] == pytest.approx(4.0)


def test_season_aggregate_of_empty_season(db, season):
    assert scoring_service.season_aggregate(db, season) == []
