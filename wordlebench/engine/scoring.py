"""
Wordle grading for a single (guess, answer) pair.

Conventions (each Grade's value is its pattern character):
  - Grade.CORRECT   'G' : correct letter in the correct position
  - Grade.ALMOST    'Y' : letter is in the answer, but elsewhere
  - Grade.INCORRECT '-' : letter not present (or present fewer times than guessed)

Algorithm (two-pass, canonical for Wordle):
  1) First pass marks all Correct positions and counts the remaining
     (unmatched) letters of the answer.
  2) Second pass hands out Almost only while the letter still has
     remaining count.
Correct is therefore always settled before Almost, whatever the positions,
and a letter is never credited more times than it occurs in the answer.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Iterable, Tuple

from .words import Word


class Grade(Enum):
    CORRECT = "G"
    ALMOST = "Y"
    INCORRECT = "-"

    @property
    def severity(self) -> int:
        """Sort key: Correct < Almost < Incorrect."""
        return _SEVERITY[self]


_SEVERITY = {Grade.CORRECT: 0, Grade.ALMOST: 1, Grade.INCORRECT: 2}

Grades = Tuple[Grade, ...]


def grade(guess: Word, answer: Word) -> Tuple[Grades, bool]:
    """
    Grade `guess` against `answer`.

    Returns:
      (grades, solved) where `grades` holds one Grade per letter of the guess
      and `solved` is True iff every grade is CORRECT.

    Examples:
      grade(spool, sober) -> ((G, -, Y, -, -), False)
      grade(odors, spoon) -> ((Y, -, G, -, Y), False)
    """
    g_text = guess.text
    a_text = answer.text

    result = [Grade.INCORRECT] * len(g_text)

    # Pass 1: greens, and leftover counts from the answer
    remaining: Counter = Counter()
    for i, (g, a) in enumerate(zip(g_text, a_text)):
        if g == a:
            result[i] = Grade.CORRECT
        else:
            remaining[a] += 1

    # Pass 2: yellows, capped by what the greens left over
    for i, g in enumerate(g_text):
        if result[i] is Grade.CORRECT:
            continue
        if remaining[g] > 0:
            result[i] = Grade.ALMOST
            remaining[g] -= 1

    grades = tuple(result)
    return grades, all(x is Grade.CORRECT for x in grades)


def pattern(grades: Iterable[Grade]) -> str:
    """(CORRECT, INCORRECT, ALMOST, ...) -> 'G-Y..'"""
    return "".join(g.value for g in grades)


def parse_pattern(patt: str) -> Grades:
    """Inverse of `pattern`; raises ValueError on unknown characters."""
    return tuple(Grade(ch) for ch in patt)
