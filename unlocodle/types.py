"""
Labels for clarity.
"""

from dataclasses import dataclass
from typing import List, Literal

WORD_LENGTH = 5
TOTAL_GUESSES = 6

LetterColor = Literal["no_match", "exists", "match"]
GameResult = Literal["unfinished", "win", "loss"]
NotificationKind = Literal["too_short", "invalid_guess", "win", "loss"]

@dataclass(frozen=True)
class ScoredLetter:
    value: str  # one uppercase letter or digit
    color: LetterColor = "no_match"

ScoredGuess = List[ScoredLetter]  # 5 scored letters, one committed row
