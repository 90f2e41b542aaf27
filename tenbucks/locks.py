"""Process-local serialization for roster mutations.

Waitlist positions are read-modify-write across many rows, so every change to
the roster, the waitlist or session participation runs under one coarse lock.
Reads take the same lock so they never see a half-applied change.

This is a threading.RLock: it does not coordinate multiple worker processes.
"""

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_CLUB_LOCK = RLock()


@contextmanager
def club_write_lock(*, reason: str = "", timeout_s: Optional[float] = None) -> Iterator[None]:
    """Serialize a critical section over the roster/waitlist/participation graph.

    Args:
        reason: label used in the timeout message.
        timeout_s: seconds to wait for the lock. None waits forever.

    Raises:
        TimeoutError: the lock was not acquired within timeout_s.
    """
    if timeout_s is None:
        acquired = _CLUB_LOCK.acquire()
    else:
        acquired = _CLUB_LOCK.acquire(timeout=max(float(timeout_s), 0.0))

    if not acquired:
        msg = f"club_write_lock timeout (timeout_s={timeout_s})"
        if reason:
            msg += f": {reason}"
        logger.error(msg)
        raise TimeoutError(msg)

    try:
        yield
    finally:
        _CLUB_LOCK.release()


__all__ = [
    "club_write_lock",
]
