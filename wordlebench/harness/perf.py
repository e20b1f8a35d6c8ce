"""
Evaluating and comparing strategies.

- Perf:       raw (word, attempts) outcomes of one strategy over a run.
- Summary:    the pre-computed, order-independent reduction of a Perf; this
              is what gets saved to disk as a baseline.
- Histogram:  six bins of "solved in k guesses" counts.
- Comparison: a Summary measured against a baseline Summary, with Fisher's
              exact test on solved/missed and Welch's t-test on guess counts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from wordlebench.config import DEFAULT_ALPHA, MAX_GUESSES
from wordlebench.engine import Attempts, Word
from wordlebench.errors import SelfComparison
from . import stats


def _ratio(num: float, den: float) -> float:
    return num / den if den else math.nan


@dataclass
class Perf:
    """
    A record of one strategy's guesses after a harness run.

    Statistics can be read straight off it, but `to_summary()` caches them
    and is what comparisons and persistence use.
    """
    strategy_name: str
    tries: List[Tuple[Word, Attempts]] = field(default_factory=list)

    @classmethod
    def for_strategy(cls, strategy) -> "Perf":
        return cls(strategy_name=f"{strategy} v{strategy.version()}")

    def num_tried(self) -> int:
        return len(self.tries)

    def num_solved(self) -> int:
        return sum(1 for word, attempts in self.tries if attempts.solved(word))

    def frac_solved(self) -> float:
        return _ratio(self.num_solved(), self.num_tried())

    def num_missed(self) -> int:
        return self.num_tried() - self.num_solved()

    def frac_missed(self) -> float:
        return _ratio(self.num_missed(), self.num_tried())

    def cumulative_guesses(self) -> int:
        """Guesses across all puzzle attempts, solved or not."""
        return sum(len(attempts) for _, attempts in self.tries)

    def cumulative_guesses_solved(self) -> int:
        return sum(len(attempts) for word, attempts in self.tries if attempts.solved(word))

    def guesses_per_solution(self) -> float:
        """Average guesses on solved puzzles only."""
        return _ratio(self.cumulative_guesses_solved(), self.num_solved())

    def to_summary(self) -> "Summary":
        bins = [0] * MAX_GUESSES
        for word, attempts in self.tries:
            if attempts.solved(word):
                bins[len(attempts) - 1] += 1

        num_solved = self.num_solved()
        assert sum(bins) == num_solved

        return Summary(
            strategy_name=self.strategy_name,
            num_tried=self.num_tried(),
            num_solved=num_solved,
            cumulative_guesses=self.cumulative_guesses(),
            histogram=Histogram(tuple(bins)),
        )


@dataclass(frozen=True)
class Histogram:
    """Counts of puzzles solved in 1..6 guesses."""
    bins: Tuple[int, ...] = (0,) * MAX_GUESSES

    def __post_init__(self):
        if len(self.bins) != MAX_GUESSES:
            raise ValueError(f"histogram needs {MAX_GUESSES} bins, got {len(self.bins)}")
        if any(b < 0 for b in self.bins):
            raise ValueError("histogram bins must be non-negative")

    @classmethod
    def from_counts(cls, counts: Sequence[int]) -> "Histogram":
        return cls(tuple(int(c) for c in counts))

    def __iter__(self) -> Iterator[int]:
        return iter(self.bins)

    def __len__(self) -> int:
        return len(self.bins)

    def __getitem__(self, i: int) -> int:
        return self.bins[i]

    def total(self) -> int:
        return sum(self.bins)

    def render(self, width: int = 80) -> str:
        """
        One bar per bin, e.g. "3 |■■■■■■■■ (412)". No line exceeds `width`.
        """
        top = max(self.bins)
        digits = len(str(top))
        # "k |" + bar + " (" + count + ")"
        room = max(width - digits - 6, 1)
        per_mark = max(top / room, 1.0)
        lines = []
        for i, b in enumerate(self.bins):
            marks = int(b / per_mark)
            lines.append(f"{i + 1} |{'■' * marks} ({b})")
        return "\n".join(lines)


@dataclass(frozen=True)
class Summary:
    """
    A strategy's performance, reduced to the numbers worth keeping.

    Two summaries are equal when every field is equal; comparing such a pair
    is refused (SelfComparison).
    """
    strategy_name: str
    num_tried: int
    num_solved: int
    cumulative_guesses: int
    histogram: Histogram

    def frac_solved(self) -> float:
        return _ratio(self.num_solved, self.num_tried)

    def num_missed(self) -> int:
        return self.num_tried - self.num_solved

    def frac_missed(self) -> float:
        return _ratio(self.num_missed(), self.num_tried)

    def cumulative_guesses_solved(self) -> int:
        return sum((i + 1) * n for i, n in enumerate(self.histogram))

    def mean_guesses(self) -> float:
        """Average guesses needed, counting solved puzzles only."""
        return _ratio(self.cumulative_guesses_solved(), self.num_solved)

    def compare(self, baseline: "Summary", alpha: float = DEFAULT_ALPHA) -> "Comparison":
        if self == baseline:
            raise SelfComparison()
        return Comparison.compare(self, baseline, alpha)

    # ---- persistence (see harness.io) ----

    def to_dict(self) -> Dict:
        return {
            "strategy_name": self.strategy_name,
            "num_tried": self.num_tried,
            "num_solved": self.num_solved,
            "cumulative_guesses": self.cumulative_guesses,
            "histogram": list(self.histogram.bins),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Summary":
        """
        Rebuild a Summary, checking the invariants a Perf reduction guarantees.
        Raises ValueError on malformed input.
        """
        try:
            summary = cls(
                strategy_name=str(data["strategy_name"]),
                num_tried=int(data["num_tried"]),
                num_solved=int(data["num_solved"]),
                cumulative_guesses=int(data["cumulative_guesses"]),
                histogram=Histogram.from_counts(data["histogram"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed summary: {e}") from e

        if not 0 <= summary.num_solved <= summary.num_tried:
            raise ValueError("num_solved must be between 0 and num_tried")
        if summary.histogram.total() != summary.num_solved:
            raise ValueError("histogram does not add up to num_solved")
        return summary

    def save(self, name: str, directory: Path | str | None = None, force: bool = False) -> Path:
        from .io import save_summary
        return save_summary(self, name, directory, force=force)

    @classmethod
    def from_saved(cls, name: str, directory: Path | str | None = None) -> "Summary":
        from .io import load_summary
        return load_summary(name, directory)


@dataclass(frozen=True)
class Comparison:
    """`this` measured against `baseline`. Differences are this - baseline."""
    this: Summary
    baseline: Summary
    solved_pvalue: float
    guesses_pvalue: float
    alpha: float = DEFAULT_ALPHA

    @classmethod
    def compare(cls, this: Summary, baseline: Summary, alpha: float = DEFAULT_ALPHA) -> "Comparison":
        solved_p = stats.fisher_exact_pvalue(
            this.num_solved, baseline.num_solved, this.num_missed(), baseline.num_missed(),
        )
        guesses_p = stats.welch_t_pvalue(
            stats.histogram_sample(this.histogram.bins),
            stats.histogram_sample(baseline.histogram.bins),
        )
        return cls(this, baseline, solved_p, guesses_p, alpha)

    def tries_eq(self) -> bool:
        return self.this.num_tried == self.baseline.num_tried

    def num_solved_diff(self) -> Optional[int]:
        if self.tries_eq():
            return self.this.num_solved - self.baseline.num_solved
        return None

    def num_missed_diff(self) -> Optional[int]:
        if self.tries_eq():
            return self.this.num_missed() - self.baseline.num_missed()
        return None

    def frac_solved_diff(self) -> float:
        return self.this.frac_solved() - self.baseline.frac_solved()

    def frac_missed_diff(self) -> float:
        return self.this.frac_missed() - self.baseline.frac_missed()

    def mean_guesses_diff(self) -> float:
        return self.this.mean_guesses() - self.baseline.mean_guesses()

    def solved_significant(self) -> bool:
        return stats.is_significant(self.solved_pvalue, self.alpha)

    def guesses_significant(self) -> bool:
        return stats.is_significant(self.guesses_pvalue, self.alpha)
