"""
Hardmode rule: a new guess must use everything an earlier guess revealed.

For one earlier guess and its grades:
  - a CORRECT letter at position i must appear at position i again;
  - each ALMOST letter must appear somewhere in the new guess, and if the
    same letter was graded ALMOST k times, it must appear at least k times;
  - an INCORRECT grade adds nothing.

Positions are visited Correct-first, then Almost, then Incorrect, so the
per-letter Almost counts are well defined when a letter repeats with mixed
grades. Constraints are derived from the grades alone; there is no separate
"excluded letters" set, since a letter graded Incorrect in one place may still
be required by an Almost grade elsewhere.

`Puzzle.check` calls this once per earlier guess in the ledger, re-grading
each one against the true answer, so constraints accumulate over the whole
history.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from wordlebench.errors import InvalidHardmodeGuess
from .scoring import Grade
from .words import Word


def validate_hardmode(previous: Word, previous_grades: Sequence[Grade], guess: Word) -> None:
    """Raise InvalidHardmodeGuess if `guess` ignores what `previous` revealed."""
    prev_text = previous.text
    new_text = guess.text
    new_counts = Counter(new_text)
    almost_seen: Counter = Counter()

    order = sorted(range(len(prev_text)), key=lambda i: (previous_grades[i].severity, i))
    for i in order:
        letter = prev_text[i]
        g = previous_grades[i]
        if g is Grade.CORRECT:
            if new_text[i] != letter:
                raise InvalidHardmodeGuess(new_text, prev_text)
        elif g is Grade.ALMOST:
            almost_seen[letter] += 1
            if new_counts[letter] < almost_seen[letter]:
                raise InvalidHardmodeGuess(new_text, prev_text)
