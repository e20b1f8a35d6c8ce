from .words import Word, answers, guess_list
from .scoring import Grade, grade, pattern, parse_pattern
from .hardmode import validate_hardmode
from .puzzle import Attempts, AttemptsKey, Puzzle
from .constraints import filter_candidates, is_consistent

__all__ = [
    "Word", "answers", "guess_list",
    "Grade", "grade", "pattern", "parse_pattern",
    "validate_hardmode",
    "Attempts", "AttemptsKey", "Puzzle",
    "filter_candidates", "is_consistent",
]
