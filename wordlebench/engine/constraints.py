"""
Candidate filtering given game history.

Given:
  - a pool of words (e.g., the answers list)
  - a history of (guess, grades) pairs returned by Puzzle.check

Return:
  - words that are consistent with ALL feedback seen so far, i.e. words that,
    were they the answer, would have produced exactly the recorded grades.

Every consistent word is also a legal hardmode guess, so strategies that only
guess candidates never trip the hardmode validator.
"""

from typing import Iterable, List, Sequence, Tuple

from .scoring import Grade, grade
from .words import Word

History = Iterable[Tuple[Word, Sequence[Grade]]]


def is_consistent(word: Word, history: History) -> bool:
    for g, grades in history:
        if grade(g, word)[0] != tuple(grades):
            return False
    return True


def filter_candidates(words: Iterable[Word], history: History) -> List[Word]:
    """
    Keep only words that reproduce every recorded (guess, grades) pair.
    Order is preserved as in `words`.
    """
    history = list(history)
    return [w for w in words if is_consistent(w, history)]
