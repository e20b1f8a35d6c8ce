"""
Shared constants and environment-derived defaults.

Environment:
  - WORDLEBENCH_DATA_DIR     : directory holding answers_5.txt / allowed_5.txt
                               (defaults to the lists shipped in datasets/data)
  - WORDLEBENCH_BASELINE_DIR : where saved baseline summaries live
                               (defaults to ./wordle_baselines)
"""

from __future__ import annotations

import os
from pathlib import Path

# Single source of truth for the game shape.
WORD_LENGTH = 5
MAX_GUESSES = 6

# Harness defaults
DEFAULT_SAMPLE = 100
DEFAULT_ALPHA = 0.05

DATA_DIR_ENV = "WORDLEBENCH_DATA_DIR"
BASELINE_DIR_ENV = "WORDLEBENCH_BASELINE_DIR"

ANSWERS_FILE = f"answers_{WORD_LENGTH}.txt"
ALLOWED_FILE = f"allowed_{WORD_LENGTH}.txt"

_PACKAGED_DATA = Path(__file__).resolve().parent / "datasets" / "data"


def data_dir() -> Path:
    """Directory the word lists are read from."""
    env = os.environ.get(DATA_DIR_ENV)
    return Path(env) if env else _PACKAGED_DATA


def baseline_dir() -> Path:
    """Directory saved baselines are read from and written to."""
    env = os.environ.get(BASELINE_DIR_ENV)
    return Path(env) if env else Path.cwd() / "wordle_baselines"
