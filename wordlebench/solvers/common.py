"""
Common-letters strategy (hardmode, distinct-letter coverage).

Idea:
  - Rank the whole guess list once by the sum of its DISTINCT letters'
    frequencies over the guess list (prefer 'arose' over 'esses').
  - Each turn, guess the best-ranked word still consistent with all feedback.

It is Basic with a smarter search order: early guesses cover common letters,
which shrinks the candidate space faster than alphabetical order does.
"""

from __future__ import annotations

from collections import Counter
from functools import lru_cache
from typing import List, Tuple

from wordlebench.engine import (
    Attempts, AttemptsKey, Grade, Puzzle, Word, guess_list, is_consistent,
)
from .base import Strategy, register


def _distinct_score(w: str, counts: Counter) -> int:
    """Sum letter frequencies, counting each letter at most once per word."""
    return sum(counts[ch] for ch in set(w))


@lru_cache(maxsize=None)
def _ranked(guesses: Tuple[str, ...]) -> Tuple[int, ...]:
    counts = Counter("".join(guesses))
    # stable sort keeps alphabetical order among ties
    return tuple(sorted(range(len(guesses)), key=lambda i: -_distinct_score(guesses[i], counts)))


@register
class Common(Strategy):
    id = "common"
    name = "Common Letters"

    def solve(self, puzzle: Puzzle, key: AttemptsKey) -> Attempts:
        attempts = key.unlock()
        order = _ranked(guess_list())
        history: List[Tuple[Word, Tuple[Grade, ...]]] = []

        while not attempts.finished():
            guess = next(Word(i) for i in order if is_consistent(Word(i), history))
            grades, got_it = puzzle.check(guess, attempts)
            if got_it:
                break
            history.append((guess, grades))

        return attempts

    def version(self) -> str:
        return "0.1.1"

    def hardmode(self) -> bool:
        return True
