"""
Tests for waitlist sequencing: dense 1..N positions under append, remove and
move-to-bottom.
"""
import pytest

from tenbucks.database import write_transaction
from tenbucks.exceptions import NotOnWaitlistError
from tenbucks.models.enums import PlayerStatus
from tenbucks.models.player import Player
from tenbucks.services import player_service, waitlist_service


def positions(db):
    return [
        (p.name, p.waitlist_position)
        for p in waitlist_service.get_waitlist(db)
    ]


def test_append_remove_keeps_positions_dense(db, make_player):
    p1 = make_player("P1")
    p2 = make_player("P2")

    with write_transaction(db):
        p1.status = PlayerStatus.ON_WAITLIST
        assert waitlist_service.append(db, p1) == 1
        p2.status = PlayerStatus.ON_WAITLIST
        assert waitlist_service.append(db, p2) == 2

    with write_transaction(db):
        p1.status = PlayerStatus.NOT_IN_SESSION
        assert waitlist_service.remove(db, p1) == 1

    assert p1.waitlist_position is None
    assert p2.waitlist_position == 1
    assert waitlist_service.check_density(db)


def test_move_to_bottom(db, make_player):
    p1 = make_player("P1", PlayerStatus.ON_WAITLIST)
    make_player("P2", PlayerStatus.ON_WAITLIST)
    make_player("P3", PlayerStatus.ON_WAITLIST)

    waitlist_service.send_to_bottom(db, p1)

    assert positions(db) == [("P2", 1), ("P3", 2), ("P1", 3)]
    assert waitlist_service.check_density(db)


def test_move_to_bottom_of_last_player_is_stable(db, make_player):
    make_player("P1", PlayerStatus.ON_WAITLIST)
    p2 = make_player("P2", PlayerStatus.ON_WAITLIST)

    waitlist_service.send_to_bottom(db, p2)

    assert positions(db) == [("P1", 1), ("P2", 2)]


def test_removing_last_position_needs_no_compaction(db, make_player):
    make_player("A", PlayerStatus.ON_WAITLIST)
    make_player("B", PlayerStatus.ON_WAITLIST)
    c = make_player("C", PlayerStatus.ON_WAITLIST)

    waitlist_service.leave_waitlist(db, c)

    assert positions(db) == [("A", 1), ("B", 2)]
    assert c.status == PlayerStatus.NOT_IN_SESSION
    assert c.waitlist_position is None


def test_remove_from_middle_compacts(db, make_player):
    make_player("A", PlayerStatus.ON_WAITLIST)
    b = make_player("B", PlayerStatus.ON_WAITLIST)
    make_player("C", PlayerStatus.ON_WAITLIST)
    make_player("D", PlayerStatus.ON_WAITLIST)

    waitlist_service.leave_waitlist(db, b)

    assert positions(db) == [("A", 1), ("C", 2), ("D", 3)]
    assert waitlist_service.check_density(db)


def test_append_after_removal_uses_next_free_position(db, make_player):
    a = make_player("A", PlayerStatus.ON_WAITLIST)
    make_player("B", PlayerStatus.ON_WAITLIST)
    waitlist_service.leave_waitlist(db, a)

    c = make_player("C", PlayerStatus.ON_WAITLIST)

    assert c.waitlist_position == 2
    assert positions(db) == [("B", 1), ("C", 2)]


def test_remove_requires_position(db, make_player):
    p = make_player("Solo")
    with pytest.raises(NotOnWaitlistError):
        with write_transaction(db):
            waitlist_service.remove(db, p)


def test_waitlist_actions_reject_players_not_waitlisted(db, make_player):
    p = make_player("Solo")
    with pytest.raises(NotOnWaitlistError):
        waitlist_service.send_to_bottom(db, p)
    with pytest.raises(NotOnWaitlistError):
        waitlist_service.leave_waitlist(db, p)
    assert p.status == PlayerStatus.NOT_IN_SESSION


def test_density_holds_through_mixed_operations(db, make_player):
    players = [make_player(f"P{i}", PlayerStatus.ON_WAITLIST) for i in range(1, 7)]

    waitlist_service.send_to_bottom(db, players[0])
    waitlist_service.leave_waitlist(db, players[3])
    player_service.change_status(db, players[3], PlayerStatus.ON_WAITLIST)
    waitlist_service.send_to_bottom(db, players[2])
    waitlist_service.leave_waitlist(db, players[5])

    assert waitlist_service.check_density(db)
    assert positions(db) == [("P2", 1), ("P5", 2), ("P1", 3), ("P4", 4), ("P3", 5)]


def test_check_density_detects_gap(db, make_player):
    make_player("A", PlayerStatus.ON_WAITLIST)
    b = make_player("B", PlayerStatus.ON_WAITLIST)
    b.waitlist_position = 3
    db.commit()

    assert not waitlist_service.check_density(db)


def test_check_density_detects_status_mismatch(db, make_player):
    a = make_player("A")
    a.waitlist_position = 1
    db.commit()

    assert db.query(Player).count() == 1
    assert not waitlist_service.check_density(db)
