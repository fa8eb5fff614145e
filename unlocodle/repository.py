"""
DB-backed history store that mirrors the in-memory MemoryHistoryStore API.

Public methods:
- load() -> list of committed guesses (empty if missing or malformed)
- save(committed) -> None
- clear() -> None

Why: lets the game switch from memory to MySQL without changing the controller.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import GameHistory
from .schemas import SavedHistory
from .types import ScoredGuess, ScoredLetter

logger = logging.getLogger(__name__)

# --- Small converters between ScoredLetter rows and JSON ---

def _to_json(committed: List[ScoredGuess]) -> list:
    return [[{"value": cell.value, "color": cell.color} for cell in row] for row in committed]

def _from_json(data) -> List[ScoredGuess]:
    history = SavedHistory.model_validate({"rows": data})
    return [
        [ScoredLetter(value=cell.value.upper(), color=cell.color) for cell in row]
        for row in history.rows
    ]

class DBHistoryStore:
    """Drop-in replacement for MemoryHistoryStore, but using MySQL."""

    def __init__(self, session_factory: Callable[[], Session], key: str = "default"):
        self.session_factory = session_factory
        self.key = key

    def load(self) -> List[ScoredGuess]:
        try:
            with self.session_factory() as db:
                row = db.get(GameHistory, self.key)
                if row is None:
                    return []
                return _from_json(row.guesses)
        except ValidationError as exc:
            # Bad saved data should not block play; start from an empty board
            logger.warning("Discarding malformed history for %r: %s", self.key, exc)
            return []
        except (SQLAlchemyError, ValueError):
            # ValueError covers JSON that no longer decodes
            logger.exception("Could not read history for %r", self.key)
            return []

    def save(self, committed: List[ScoredGuess]) -> None:
        with self.session_factory() as db:
            try:
                row = db.get(GameHistory, self.key)
                if row is None:
                    row = GameHistory(game_key=self.key)
                    db.add(row)
                row.guesses = _to_json(committed)
                row.updated_at = datetime.utcnow()
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Could not save history for %r", self.key)

    def clear(self) -> None:
        with self.session_factory() as db:
            try:
                row = db.get(GameHistory, self.key)
                if row is not None:
                    db.delete(row)
                    db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Could not clear history for %r", self.key)
