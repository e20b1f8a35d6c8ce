"""
I/O utilities for harness runs.

Responsibilities:
- save_summary / load_summary: persist a Summary as `<dir>/<name>.json` so it
  can be used as a baseline by later runs.
- write_csv:      flatten per-trial outcomes into a tidy CSV (one row per trial).
- write_manifest: dump a JSON manifest with config and word list metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Patterns are prefixed with an apostrophe to keep Excel from interpreting
  strings like "-GYY-" as formulas (which would display as #NAME?).
"""

from __future__ import annotations

import csv
import datetime as dt
import json
import logging
import subprocess
from pathlib import Path
from typing import Dict, Iterable

from wordlebench import config
from wordlebench.config import MAX_GUESSES
from wordlebench.engine import grade, pattern
from wordlebench.errors import BaselineNotFound, BaselineRead, SummaryWrite
from .perf import Perf, Summary

logger = logging.getLogger(__name__)


def _resolve_dir(directory: Path | str | None) -> Path:
    return Path(directory) if directory is not None else config.baseline_dir()


def save_summary(summary: Summary, name: str, directory: Path | str | None = None,
                 force: bool = False) -> Path:
    """
    Write `summary` to `<directory>/<name>.json` and return the path.

    Without `force`, an existing file is left alone and SummaryWrite is raised.
    """
    d = _resolve_dir(directory)
    path = d / f"{name}.json"
    try:
        d.mkdir(parents=True, exist_ok=True)
        with path.open("w" if force else "x", encoding="utf-8") as f:
            json.dump(summary.to_dict(), f, indent=2)
    except OSError as e:
        raise SummaryWrite(f"could not write summary {name!r} to {path}: {e}") from e
    logger.info("saved summary of %s as %s", summary.strategy_name, path)
    return path


def load_summary(name: str, directory: Path | str | None = None) -> Summary:
    """
    Read `<directory>/<name>.json`.

    Raises BaselineNotFound if there is no such file, BaselineRead if it
    cannot be read or does not hold a valid summary.
    """
    d = _resolve_dir(directory)
    path = d / f"{name}.json"
    if not path.is_file():
        raise BaselineNotFound(name, str(d))
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return Summary.from_dict(data)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        raise BaselineRead(f"could not read baseline {name!r} from {path}: {e}") from e


def _excel_safe_pattern(patt: str) -> str:
    """
    Prefix with an apostrophe so spreadsheet apps treat it as text.
    Example: "-GYY-" -> "'-GYY-"
    """
    return "'" + patt if patt else patt


def write_csv(perfs: Iterable[Perf], path: str | Path) -> str:
    """
    Serialize every trial of every Perf to CSV.

    Schema (columns):
      strategy, answer, solved, guesses,
      guess_1, patt_1, ..., guess_6, patt_6

    Patterns are recomputed from the recorded guesses and the trial's answer.
    Returns the path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["strategy", "answer", "solved", "guesses"]
    for i in range(1, MAX_GUESSES + 1):
        fields += [f"guess_{i}", f"patt_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for perf in perfs:
            for word, attempts in perf.tries:
                row = {
                    "strategy": perf.strategy_name,
                    "answer": word.text,
                    "solved": attempts.solved(word),
                    "guesses": len(attempts),
                }
                guesses = attempts.inner
                for i in range(1, MAX_GUESSES + 1):
                    if i <= len(guesses):
                        g = guesses[i - 1]
                        row[f"guess_{i}"] = g.text
                        row[f"patt_{i}"] = _excel_safe_pattern(pattern(grade(g, word)[0]))
                    else:
                        row[f"guess_{i}"] = ""
                        row[f"patt_{i}"] = ""
                w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str | Path) -> str:
    """
    Write a JSON manifest with run configuration and word list validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args
      - wordlists: output of datasets.validate_wordlists(...)
      - summaries: Summary.to_dict() per strategy
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, default=str)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
