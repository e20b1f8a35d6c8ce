"""
Loader for the two word lists every `Word` indexes into.

`guesses` is the full sorted list of legal guesses; `answers` holds the
indices (into `guesses`) of the words that can be puzzle answers. The lists
are read once per directory and cached; both must pass `validate_wordlists`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from wordlebench import config
from .io import read_words
from .validator import validate_wordlists


@dataclass(frozen=True)
class Wordlists:
    guesses: Tuple[str, ...]
    answers: Tuple[int, ...]


@lru_cache(maxsize=None)
def _load(directory: Path) -> Wordlists:
    answers_path = directory / config.ANSWERS_FILE
    allowed_path = directory / config.ALLOWED_FILE

    rep = validate_wordlists(answers_path, allowed_path)
    if not rep["passed"]:
        raise ValueError(f"word lists in {directory} failed validation: {rep['issues']}")

    guesses = tuple(read_words(allowed_path))
    position = {w: i for i, w in enumerate(guesses)}
    answers = tuple(position[w] for w in read_words(answers_path))
    return Wordlists(guesses=guesses, answers=answers)


def load_wordlists(directory: Path | str | None = None) -> Wordlists:
    """Return the (cached) word lists from `directory` or the configured data dir."""
    d = Path(directory) if directory is not None else config.data_dir()
    return _load(d.resolve())
