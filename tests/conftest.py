"""
- Spins up temp test DB
- Create tables before tests run
- Provide a session_factory fixture the DB history store opens sessions from
- Provide a client fixture (TestClient(app)) whose game saves into the test DB
"""
import os
import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Use SQLite in-memory for tests (fast, isolated)
TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

# Ensure the app does NOT run dev-only startup hooks (e.g., auto-create tables against real DB)
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

from unlocodle.db import Base
from unlocodle.main import app
from unlocodle.repository import DBHistoryStore
from unlocodle.store import GameController
from unlocodle import models  # noqa: F401

@pytest.fixture(scope="session")
def engine():
    # StaticPool + check_same_thread=False lets Starlette's TestClient and SQLAlchemy
    # share ONE in-memory SQLite database across threads. Otherwise each thread would
    # see a different empty DB.
    engine = create_engine(
        TEST_DATABASE_URL,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # <-- share one connection across threads
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

@pytest.fixture(autouse=True)
def _clean_db(engine):
    """
    Keep tests independent:
    The history store commits on every save, so data would leak between tests.
    We delete rows before each test to ensure a clean slate.
    """
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM game_history"))
    yield

@pytest.fixture
def history(session_factory) -> DBHistoryStore:
    return DBHistoryStore(session_factory, key="test")

@pytest.fixture
def client(history) -> Generator:
    # The app builds its game lazily on app.state; put ours there first so every
    # request plays against the SQLite test DB with a known solution.
    app.state.controller = GameController("USCLE", history)
    yield TestClient(app)
    del app.state.controller
