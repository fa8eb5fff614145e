"""
In-memory game state and the controller that owns it.
- GameSession holds the board (committed rows, the row being typed, the result)
- GameController is the only writer: it gates input, scores on enter,
  derives win/loss and saves history after every commit
- MemoryHistoryStore is the simplest history backend (tests, local play)
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Callable, List, Optional, Protocol

from .engine import derive_result, guess_word, score_guess
from .types import (
    GameResult, NotificationKind, ScoredGuess, TOTAL_GUESSES, WORD_LENGTH,
)

logger = logging.getLogger(__name__)

# Typing this lets the UI show an "invalid guess" response without a dictionary
INVALID_GUESS = "XXXXX"

Listener = Callable[[NotificationKind], None]


class HistoryStore(Protocol):
    def load(self) -> List[ScoredGuess]: ...

    def save(self, committed: List[ScoredGuess]) -> None: ...

    def clear(self) -> None: ...


class MemoryHistoryStore:
    """Keeps committed guesses in a list. Survives controller rebuilds, not restarts."""

    def __init__(self, committed: Optional[List[ScoredGuess]] = None) -> None:
        self._committed: List[ScoredGuess] = [list(row) for row in committed or []]
        self.save_count = 0

    def load(self) -> List[ScoredGuess]:
        return [list(row) for row in self._committed]

    def save(self, committed: List[ScoredGuess]) -> None:
        self._committed = [list(row) for row in committed]
        self.save_count += 1

    def clear(self) -> None:
        self._committed = []


@dataclass
class GameSession:
    solution: str
    total_guesses: int = TOTAL_GUESSES
    committed_guesses: List[ScoredGuess] = field(default_factory=list)
    current_guess: str = ""
    result: GameResult = "unfinished"


def is_valid_letter(letter: str) -> bool:
    """One character from the input alphabet: A-Z or 0-9."""
    return len(letter) == 1 and letter.isascii() and letter.isalnum()


class GameController:
    def __init__(
        self,
        solution: str,
        history: HistoryStore,
        total_guesses: int = TOTAL_GUESSES,
    ) -> None:
        if len(solution) != WORD_LENGTH:
            raise ValueError(f"Solution must have exactly {WORD_LENGTH} characters.")

        self._lock = RLock()
        self.history = history
        self._listeners: List[Listener] = []
        self._input_locked = False
        self.session = GameSession(solution=solution.upper(), total_guesses=total_guesses)

        # Replay saved rows through the same append step a live commit uses
        for row in history.load():
            if self.session.result != "unfinished" or self._board_full():
                logger.warning("Ignoring saved guesses past the end of the game")
                break
            self._append(list(row))

        if self.session.committed_guesses:
            logger.info("Restored %d guess(es), result=%s",
                        len(self.session.committed_guesses), self.session.result)

    # --- Read access for the presentation layer ---

    @property
    def current_guess(self) -> str:
        return self.session.current_guess

    @property
    def committed_guesses(self) -> List[ScoredGuess]:
        return [list(row) for row in self.session.committed_guesses]

    @property
    def result(self) -> GameResult:
        return self.session.result

    @property
    def guesses_left(self) -> int:
        return self.session.total_guesses - len(self.session.committed_guesses)

    @property
    def input_locked(self) -> bool:
        return self._input_locked

    # --- Input lock (held while the reveal animation plays) ---

    def lock_input(self) -> None:
        with self._lock:
            self._input_locked = True

    def unlock_input(self) -> None:
        with self._lock:
            self._input_locked = False

    # --- Notifications ---

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, kind: NotificationKind) -> None:
        for listener in list(self._listeners):
            listener(kind)

    def collect(self, action: Callable[[], None]) -> List[NotificationKind]:
        """Run one command and return only the notifications it raised."""
        notifications: List[NotificationKind] = []
        with self._lock:
            self._listeners.append(notifications.append)
            try:
                action()
            finally:
                self._listeners.remove(notifications.append)
        return notifications

    def restart(self) -> None:
        """Forget the saved history and start a new board with the same solution."""
        with self._lock:
            self.history.clear()
            self.session = GameSession(
                solution=self.session.solution,
                total_guesses=self.session.total_guesses,
            )
            logger.info("Game reset")

    # --- Commands ---

    def input_letter(self, letter: str) -> None:
        with self._lock:
            if self._input_locked or not is_valid_letter(letter):
                logger.debug("Ignoring letter %r", letter)
                return
            if (
                len(self.session.current_guess) < WORD_LENGTH
                and not self._board_full()
                and self.session.result == "unfinished"
            ):
                self.session.current_guess += letter.upper()

    def delete_letter(self) -> None:
        # Deleting is allowed even after the game ended; only the lock stops it
        with self._lock:
            if self._input_locked:
                return
            self.session.current_guess = self.session.current_guess[:-1]

    def enter_guess(self) -> None:
        with self._lock:
            if self._input_locked:
                return
            if self.session.result != "unfinished" or self._board_full():
                logger.debug("Enter ignored, game is over")
                return

            guess = self.session.current_guess
            if len(guess) < WORD_LENGTH:
                self._notify("too_short")
                return
            if guess == INVALID_GUESS:
                self._notify("invalid_guess")
                return

            scored = score_guess(guess, self.session.solution)
            self._append(scored)
            self.session.current_guess = ""
            logger.info("Committed guess %d/%d: %s",
                        len(self.session.committed_guesses),
                        self.session.total_guesses,
                        guess_word(scored))

            self.history.save(self.committed_guesses)

            if self.session.result != "unfinished":
                logger.info("Game over: %s", self.session.result)
                self._notify(self.session.result)

    # --- Helpers ---

    def _board_full(self) -> bool:
        return len(self.session.committed_guesses) >= self.session.total_guesses

    def _append(self, scored: ScoredGuess) -> None:
        self.session.committed_guesses.append(scored)
        self.session.result = derive_result(
            self.session.solution,
            self.session.committed_guesses,
            self.session.total_guesses,
        )
        if self.session.result != "unfinished" or self._board_full():
            self.session.current_guess = ""
