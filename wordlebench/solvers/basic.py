"""
Basic strategy (hardmode).

Walks the guess list in alphabetical order and guesses the first word that
is still consistent with every grade seen so far, then repeats with the new
feedback. Optionally opens with a fixed first word.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from wordlebench.engine import (
    Attempts, AttemptsKey, Grade, Puzzle, Word, guess_list, is_consistent,
)
from .base import Strategy, register


@register
class Basic(Strategy):
    id = "basic"
    name = "Basic"

    def __init__(self, first_word: Optional[Word | str] = None):
        if isinstance(first_word, str):
            first_word = Word.from_text(first_word)
        self.first_word = first_word

    def _next_guess(self, history: List[Tuple[Word, Tuple[Grade, ...]]]) -> Word:
        for i in range(len(guess_list())):
            w = Word(i)
            if is_consistent(w, history):
                return w
        # the answer itself is always consistent
        raise RuntimeError("no consistent word left in the guess list")

    def solve(self, puzzle: Puzzle, key: AttemptsKey) -> Attempts:
        attempts = key.unlock()
        history: List[Tuple[Word, Tuple[Grade, ...]]] = []

        while not attempts.finished():
            if self.first_word is not None and not history:
                guess = self.first_word
            else:
                guess = self._next_guess(history)

            grades, got_it = puzzle.check(guess, attempts)
            if got_it:
                break
            history.append((guess, grades))

        return attempts

    def version(self) -> str:
        return "0.1.1"

    def hardmode(self) -> bool:
        return True

    def __str__(self) -> str:
        if self.first_word is not None:
            return f"{self.name} (start: {self.first_word})"
        return self.name
