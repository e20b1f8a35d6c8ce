"""
Random Consistent strategy (easymode).

Strategy:
  - Choose uniformly at random from the answers still consistent with all
    feedback so far.
  - If (unexpectedly) that set is empty, fall back to any answer.

Notes:
  - Seeded; a run is reproducible in the harness's sequential debug mode.
    Parallel runs share the RNG across threads, so draws interleave.
  - This is a baseline to verify the pipeline; it does not try to maximize
    information gain.
"""

from __future__ import annotations

import random
from typing import List, Optional

from wordlebench.engine import Attempts, AttemptsKey, Puzzle, Word, answers, filter_candidates
from .base import Strategy, register


@register
class RandomConsistent(Strategy):
    id = "random_consistent"
    name = "Random Consistent"

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def solve(self, puzzle: Puzzle, key: AttemptsKey) -> Attempts:
        attempts = key.unlock()
        candidates: List[Word] = answers()
        pool_all = candidates

        while not attempts.finished():
            pool = candidates or pool_all
            guess = pool[self.rng.randrange(len(pool))]
            grades, got_it = puzzle.check(guess, attempts)
            if got_it:
                break
            # narrow using the new feedback before the next turn
            candidates = filter_candidates(candidates, [(guess, grades)])

        return attempts

    def version(self) -> str:
        return "1.0.0"
