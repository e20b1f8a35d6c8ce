"""
Stupid strategy: always guesses the first six words of the guess list.

Exists to show the smallest possible `Strategy`; it solves almost nothing.
"""

from __future__ import annotations

from wordlebench.config import MAX_GUESSES
from wordlebench.engine import Attempts, AttemptsKey, Puzzle, Word
from .base import Strategy, register


@register
class Stupid(Strategy):
    id = "stupid"
    name = "Stupid"

    def solve(self, puzzle: Puzzle, key: AttemptsKey) -> Attempts:
        attempts = key.unlock()
        for i in range(MAX_GUESSES):
            _, correct = puzzle.check(Word.from_index(i), attempts)
            if correct:
                break
        return attempts

    def version(self) -> str:
        return "0.10"
