"""
Pure game logic (no HTTP, no storage).
We color every letter of a guess:
- match: right letter, right place
- exists: letter is in the solution, but somewhere else
- no_match: letter is not in the solution (or all its copies are already claimed)

Duplicates are handled in two passes so a repeated letter is never over-credited.
"""

from typing import List

from .types import GameResult, ScoredGuess, ScoredLetter, TOTAL_GUESSES

CONSUMED = ""  # marks a solution slot that was already claimed

def score_guess(guess: str, solution: str) -> ScoredGuess:
    """
    Example:
      solution = "USCLE"
      guess    = "SPEED"
      S -> exists   (S is at index 1 of the solution)
      P -> no_match
      E -> exists   (claims the only E)
      E -> no_match (no E left to claim)
      D -> no_match
    """

    guess = guess.upper()
    solution = solution.upper()

    # 0. Validate lengths match
    n = len(solution)
    if n == 0 or len(guess) != n:
        raise ValueError("Solution and guess must be the same non-zero length.")

    colors = ["no_match"] * n
    remaining = list(solution)

    # 1. Exact matches first, so they reserve their solution slot
    i = 0
    while i < n:
        if guess[i] == solution[i]:
            colors[i] = "match"
            remaining[i] = CONSUMED
        i += 1

    # 2. Presence matches against what is left, lowest index claimed first
    i = 0
    while i < n:
        if colors[i] != "match":
            j = 0
            while j < n:
                if remaining[j] != CONSUMED and remaining[j] == guess[i]:
                    colors[i] = "exists"
                    remaining[j] = CONSUMED
                    break
                j += 1
        i += 1

    return [ScoredLetter(value=guess[k], color=colors[k]) for k in range(n)]

def guess_word(scored: ScoredGuess) -> str:
    """Letters of a committed guess, joined back into a word."""
    return "".join(letter.value for letter in scored)

def is_win(solution: str, scored: ScoredGuess) -> bool:
    return guess_word(scored) == solution.upper()

def derive_result(
    solution: str,
    committed: List[ScoredGuess],
    total_guesses: int = TOTAL_GUESSES,
) -> GameResult:
    """
    Win = the most recent guess spells the solution.
    Loss = every guess was used and the last one did not win.
    Anything else is still unfinished.
    """
    if not committed:
        return "unfinished"
    if is_win(solution, committed[-1]):
        return "win"
    if len(committed) >= total_guesses:
        return "loss"
    return "unfinished"
