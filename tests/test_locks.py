import threading

import pytest

from tenbucks.locks import club_write_lock


def test_lock_is_reentrant():
    with club_write_lock(reason="outer"):
        with club_write_lock(reason="inner", timeout_s=0.1):
            pass


def test_lock_times_out_while_another_thread_holds_it():
    held = threading.Event()
    release = threading.Event()

    def holder():
        with club_write_lock(reason="holder"):
            held.set()
            release.wait(5)

    t = threading.Thread(target=holder)
    t.start()
    try:
        assert held.wait(5)
        with pytest.raises(TimeoutError, match="waitlist"):
            with club_write_lock(reason="waitlist", timeout_s=0.05):
                pass
    finally:
        release.set()
        t.join()

    with club_write_lock(timeout_s=1):
        pass
