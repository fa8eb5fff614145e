"""
Explicit validation & Pydantic models
- Validate what the client sends (letters, key events, lock toggles)
- Describe what the API returns (board state + notifications)
- Validate saved history before it is replayed into a game
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from .types import WORD_LENGTH

# 1. One scored cell of a committed guess
class ScoredLetterOut(BaseModel):
    value: str = Field(..., min_length=1, max_length=1, description="Uppercase letter or digit")
    color: Literal["no_match", "exists", "match"] = Field(..., description="Feedback for this cell")

# 2. A whole committed row; exactly 5 cells
ScoredRow = List[ScoredLetterOut]

class SavedHistory(BaseModel):
    rows: List[ScoredRow]

    @field_validator("rows")
    @classmethod
    def validate_row_lengths(cls, rows: List[ScoredRow]) -> List[ScoredRow]:
        index = 0
        while index < len(rows):
            if len(rows[index]) != WORD_LENGTH:
                raise ValueError(f"Each saved guess must have exactly {WORD_LENGTH} letters.")
            index += 1
        return rows

# 3. Type one letter
class LetterRequest(BaseModel):
    letter: str = Field(..., description="A single letter A-Z or digit 0-9")

    @field_validator("letter")
    @classmethod
    def validate_letter(cls, letter: str) -> str:
        if len(letter) != 1 or not letter.isascii() or not letter.isalnum():
            raise ValueError("Letter must be a single character A-Z or 0-9.")
        return letter.upper()

    model_config = {
        "json_schema_extra": {
            "examples": [
                { "letter": "U" },
                { "letter": "7" },
            ]
        }
    }

# 4. A raw key event, as the browser reports it
class KeyRequest(BaseModel):
    key: str = Field(..., description="Key name, e.g. 'a', 'Enter', 'Backspace'")
    repeat: bool = Field(False, description="True when the key is held down")
    meta_key: bool = Field(False, description="Meta/Command modifier held")
    ctrl_key: bool = Field(False, description="Control modifier held")

# 5. Reveal animation start/finish
class LockRequest(BaseModel):
    locked: bool = Field(..., description="True while the reveal animation is playing")

# 6. Everything the board needs to render
class GameStateOut(BaseModel):
    current_guess: str = Field(..., description="Letters typed so far in the open row")
    committed_guesses: List[ScoredRow] = Field(..., description="Scored rows, oldest first")
    result: Literal["unfinished", "win", "loss"] = Field(..., description="Current state of the game")
    guesses_left: int = Field(..., description="How many rows remain")
    input_locked: bool = Field(..., description="Input is ignored while this is true")
    notifications: List[Literal["too_short", "invalid_guess", "win", "loss"]] = Field(
        default_factory=list, description="What happened during this request (toasts to show)"
    )
    solution: Optional[str] = Field(None, description="The solution (only revealed if game is over)")
