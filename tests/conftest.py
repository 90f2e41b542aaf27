"""
Shared pytest configuration.

Each test gets a fresh in-memory SQLite database (StaticPool keeps the single
connection alive across threads, so the TestClient can share it).
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tenbucks.database import Base, get_db
from tenbucks import models  # noqa: F401
from tenbucks.models.enums import PlayerStatus
from tenbucks.services import player_service, season_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    from tenbucks.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_player(db):
    def _make(name, status=PlayerStatus.NOT_IN_SESSION):
        return player_service.add_player(db, name, status)
    return _make


@pytest.fixture
def season(db):
    return season_service.add_season(db)


@pytest.fixture
def club_session(db, season):
    """Season 1, session 1: the current session."""
    return season_service.add_session(db, season)

