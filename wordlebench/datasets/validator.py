"""
Word list validator.

What this module does:
- Validate the pair of word lists backing `Word`: answers_5.txt (the puzzle
  pool) and allowed_5.txt (every legal guess).
- Enforce formatting rules (lowercase, a–z only, exact length 5, one per line).
- Detect duplicates and invalid lines; compute SHA-256 of the raw files.
- Check that answers ⊆ allowed and that allowed is sorted, since `Word`
  identity is an index into it and lookups binary-search it.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from wordlebench.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists("wordlebench/datasets/data/answers_5.txt",
                             "wordlebench/datasets/data/allowed_5.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from wordlebench.config import WORD_LENGTH


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str
    exists: bool
    count: int           # number of VALID words after cleaning
    sha256: str          # empty string if missing
    unique_count: int
    invalid_lines: int
    sorted: bool


@dataclass
class ValidationReport:
    """Top-level validation result for the (answers, allowed) pair."""
    N: int
    answers: FileReport
    allowed: FileReport
    answers_subset_allowed: bool
    passed: bool
    issues: List[str]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path) -> Tuple[List[str], int]:
    """
    Load words from a text file and validate them.

    Rules:
      - one token per line
      - must be lowercase a–z
      - must have exact length WORD_LENGTH
      - empty/whitespace-only lines are INVALID

    Returns:
      (valid_words, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if w and w.isascii() and w.isalpha() and w.islower() and len(w) == WORD_LENGTH:
                valid.append(w)
            else:
                invalid += 1

    return valid, invalid


def _file_report(path: Path, words: List[str], invalid: int) -> FileReport:
    return FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        sha256=_sha256_file(path),
        unique_count=len(set(words)),
        invalid_lines=invalid,
        sorted=all(a < b for a, b in zip(words, words[1:])),
    )


def validate_wordlists(answers_path: str | Path, allowed_path: str | Path) -> Dict:
    """
    Validate the answers/allowed word lists.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see ValidationReport schema) with:
          - counts, SHA-256, duplicate/invalid/sorted flags
          - answers ⊆ allowed check
          - `passed` boolean (strict: non-empty, no invalids, no duplicates,
            allowed strictly sorted, subset OK)
          - `issues` (list of strings) to surface any problems
    """
    issues: List[str] = []

    ans_p = Path(answers_path)
    all_p = Path(allowed_path)

    if not ans_p.exists() or not all_p.exists():
        if not ans_p.exists():
            issues.append(f"answers file not found: {ans_p}")
        if not all_p.exists():
            issues.append(f"allowed file not found: {all_p}")
        rep = ValidationReport(
            N=WORD_LENGTH,
            answers=FileReport(str(ans_p), ans_p.exists(), 0, "", 0, 0, False),
            allowed=FileReport(str(all_p), all_p.exists(), 0, "", 0, 0, False),
            answers_subset_allowed=False,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    answers, ans_invalid = _load_and_check(ans_p)
    allowed, all_invalid = _load_and_check(all_p)

    ans_report = _file_report(ans_p, answers, ans_invalid)
    all_report = _file_report(all_p, allowed, all_invalid)

    subset_ok = set(answers).issubset(allowed)
    if not subset_ok:
        # a few examples are enough to debug quickly
        missing = sorted(set(answers) - set(allowed))[:5]
        issues.append(f"answers not subset of allowed (e.g., {missing})")

    if ans_report.count == 0:
        issues.append("answers file contains 0 valid words")
    if all_report.count == 0:
        issues.append("allowed file contains 0 valid words")

    if ans_invalid:
        issues.append(f"answers has {ans_invalid} invalid line(s)")
    if all_invalid:
        issues.append(f"allowed has {all_invalid} invalid line(s)")

    if ans_report.count != ans_report.unique_count:
        issues.append("answers contains duplicate lines")
    if all_report.count != all_report.unique_count:
        issues.append("allowed contains duplicate lines")
    elif not all_report.sorted:
        issues.append("allowed is not sorted")

    passed = not issues

    rep = ValidationReport(
        N=WORD_LENGTH,
        answers=ans_report,
        allowed=all_report,
        answers_subset_allowed=subset_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        N=5 | answers=2309 (uniq=2309, sha=abc123...) | allowed=2363 (uniq=2363, sha=def456...) | answers⊆allowed=True | OK
    """
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    a_sha = (a.get("sha256") or "")[:12]
    b_sha = (b.get("sha256") or "")[:12]
    return (
        f"N={report['N']} | answers={a['count']} (uniq={a['unique_count']}, sha={a_sha}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b_sha}) "
        f"| answers⊆allowed={report['answers_subset_allowed']} | {status}"
    )
