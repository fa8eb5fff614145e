"""
SQLAlchemy ORM models.

Tables:
- game_history: one row per saved game, the committed guesses stored as JSON

Why JSON?
- A board is at most 6 rows of 5 {value, color} cells; JSON is simple & clear.
- MySQL (5.7+/8.0+) and SQLite both handle the JSON type.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base

class GameHistory(Base):
    __tablename__ = "game_history"

    # Which saved game this is (one per configured game key)
    game_key: Mapped[str] = mapped_column(String(64), primary_key=True)

    # [[{"value": "S", "color": "exists"}, ...], ...]
    guesses: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
