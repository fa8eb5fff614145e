"""
Database connection for the saved guess history.
DATABASE_URL picks the backend: MySQL via PyMySQL in prod, SQLite in tests.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError(
        "DATABASE_URL is not set. Add it to your environment or a local .env (not committed)."
    )

# pool_pre_ping: the game process is long-lived, so stale connections get replaced
engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True)

# The game outlives any single request; DBHistoryStore opens one short session per call
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

class Base(DeclarativeBase):
    pass
