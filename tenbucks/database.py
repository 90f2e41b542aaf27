import logging
import os
from contextlib import contextmanager

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from tenbucks.exceptions import ClubError, PersistenceCommitError
from tenbucks.locks import club_write_lock

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./tenbucks.db")

# seconds a request waits for the club lock before giving up
LOCK_TIMEOUT_S = float(os.environ.get("CLUB_LOCK_TIMEOUT", "10"))

connect_args = {}

if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=os.environ.get("SQL_ECHO", "false").lower() == "true",
    pool_pre_ping=True
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()


def init_database(bind=None):
    """Create all tables that do not exist yet."""
    # models must be imported so Base.metadata knows every table
    from tenbucks import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def write_transaction(db: Session, reason: str = ""):
    """Run one logical mutation: serialized, committed as a whole or not at all.

    Objects loaded before the lock may be stale, so the identity map is
    expired once the lock is held. Domain errors roll back and propagate
    unchanged. Any database failure, including one raised by the final
    commit, rolls back and surfaces as PersistenceCommitError.
    """
    with club_write_lock(reason=reason, timeout_s=LOCK_TIMEOUT_S):
        # unflushed edits belong to an enclosing caller; keep them
        if not (db.new or db.dirty or db.deleted):
            db.expire_all()
        try:
            yield db
            db.commit()
        except ClubError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Commit failed ({reason or 'mutation'}): {e}", exc_info=True)
            raise PersistenceCommitError(
                f"Failed to save changes ({reason or 'mutation'}); nothing was applied."
            ) from e
        except Exception:
            db.rollback()
            raise


@contextmanager
def read_snapshot(db: Session, reason: str = ""):
    """Read under the club lock so no half-applied mutation is visible."""
    with club_write_lock(reason=reason, timeout_s=LOCK_TIMEOUT_S):
        yield db
