"""
Harness: run many strategies over many puzzles and collect their performance.

- Harness:  chainable configuration, then run() (parallel) or debug_run()
            (sequential, fault-tolerant per trial).
- Record:   per-strategy Perfs plus the baseline they should be compared to.

A trial is one (answer word, strategy) pair. Every trial gets its own Puzzle
and its own single-use AttemptsKey bound to that puzzle. If a strategy
poisons its puzzle or returns any ledger but the one its key unlocked, the
whole run stops with StrategyCheated; nothing it produced is returned.

Typical use:
    record = (
        Harness()
        .add_strategy(Common(), save_as="common")
        .add_baseline(Basic())
        .test_num(200)
        .run()
    )
    record.print_report(histogram=True)
"""

from __future__ import annotations

import logging
import random
import sys
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from tqdm import tqdm

from wordlebench.config import DEFAULT_SAMPLE
from wordlebench.engine import Attempts, AttemptsKey, Puzzle, Word, answers
from wordlebench.errors import (
    BaselineAlreadySet, NoStrategiesAdded, NoWordsSelected, SelfComparison, StrategyCheated,
)
from wordlebench.solvers import Strategy
from .io import load_summary, save_summary
from .perf import Comparison, Perf, Summary
from .report import format_summary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunBaseline:
    """One of the harness's own strategies serves as the baseline."""
    index: int
    save_as: Optional[str] = None

    def note(self) -> str:
        if self.save_as:
            return f"Used as baseline and saved as {self.save_as}"
        return "Used as baseline and not saved"


@dataclass(frozen=True)
class SavedBaseline:
    """A summary loaded from disk serves as the baseline."""
    summary: Summary
    name: str

    def note(self) -> str:
        return f"Loaded baseline {self.name} from disk"


Baseline = Union[RunBaseline, SavedBaseline]


@dataclass
class Record:
    """The outcome of a harness run: one Perf per strategy, in the order added."""
    perfs: List[Perf]
    baseline: Optional[Baseline] = None
    _summaries: Optional[List[Summary]] = field(default=None, repr=False, compare=False)

    def summaries(self) -> List[Summary]:
        if self._summaries is None:
            self._summaries = [p.to_summary() for p in self.perfs]
        return list(self._summaries)

    def baseline_summary(self) -> Optional[Summary]:
        if isinstance(self.baseline, RunBaseline):
            return self.summaries()[self.baseline.index]
        if isinstance(self.baseline, SavedBaseline):
            return self.baseline.summary
        return None

    def comparisons(self) -> List[Optional[Comparison]]:
        """
        Each strategy's comparison against the baseline, or None where there
        is no baseline, or the strategy is the baseline, or its summary is
        identical to the baseline's.
        """
        base = self.baseline_summary()
        out: List[Optional[Comparison]] = []
        for i, s in enumerate(self.summaries()):
            if base is None or self._is_baseline(i) or s == base:
                out.append(None)
            else:
                out.append(s.compare(base))
        return out

    def _is_baseline(self, i: int) -> bool:
        return isinstance(self.baseline, RunBaseline) and self.baseline.index == i

    def report(self, histogram: bool = False) -> str:
        base = self.baseline_summary()
        blocks = []

        if isinstance(self.baseline, SavedBaseline):
            blocks.append(format_summary(base, baseline_note=self.baseline.note(), histogram=histogram))

        for i, s in enumerate(self.summaries()):
            if self._is_baseline(i):
                blocks.append(format_summary(s, baseline_note=self.baseline.note(), histogram=histogram))
                continue
            try:
                blocks.append(format_summary(s, compare=base, histogram=histogram))
            except SelfComparison:
                logger.warning("%s matches the baseline exactly; not comparing", s.strategy_name)
                blocks.append(format_summary(s, histogram=histogram))

        return "\n\n".join(blocks)

    def print_report(self, histogram: bool = False, file=None) -> None:
        print(self.report(histogram=histogram), file=file or sys.stdout)


class Harness:
    """
    A test harness that can run many strategies on many puzzles.

    Configuration methods update the harness and return it, so they chain.
    Defaults: no strategies, quiet, 100 random answers, one worker per CPU
    (ThreadPoolExecutor default), unseeded sampling, no baseline.
    """

    def __init__(self):
        self._strategies: List[Tuple[Strategy, Optional[str]]] = []
        self._verbose = False
        self._num_words: Optional[int] = DEFAULT_SAMPLE
        self._baseline: Optional[Baseline] = None
        self._workers: Optional[int] = None
        self._seed: Optional[int] = None
        self._baseline_dir: Optional[Path] = None
        self._overwrite = False

    # ---- configuration ----

    def verbose(self) -> "Harness":
        """Show a progress bar while running."""
        self._verbose = True
        return self

    def quiet(self) -> "Harness":
        self._verbose = False
        return self

    def add_strategy(self, strategy: Strategy, save_as: Optional[str] = None) -> "Harness":
        """Add a strategy; with `save_as`, its summary is saved under that name after a run."""
        self._strategies.append((strategy, save_as))
        return self

    def add_strategies(self, strategies: Iterable[Strategy]) -> "Harness":
        for s in strategies:
            self.add_strategy(s)
        return self

    def add_baseline(self, strategy: Strategy, save_as: Optional[str] = None) -> "Harness":
        """Add a strategy whose results the others are compared against."""
        if self._baseline is not None:
            raise BaselineAlreadySet()
        self._baseline = RunBaseline(len(self._strategies), save_as)
        return self.add_strategy(strategy, save_as)

    def add_saved_baseline(self, name: str, directory: Path | str | None = None) -> "Harness":
        """
        Use a previously saved summary as the baseline.

        Loads it immediately: BaselineNotFound / BaselineRead surface here,
        before any run.
        """
        if self._baseline is not None:
            raise BaselineAlreadySet()
        summary = load_summary(name, directory if directory is not None else self._baseline_dir)
        self._baseline = SavedBaseline(summary, name)
        return self

    def test_all(self) -> "Harness":
        """Run every strategy on every possible answer."""
        self._num_words = None
        return self

    def test_num(self, n: int) -> "Harness":
        """Run every strategy on `n` answers sampled without replacement."""
        self._num_words = min(max(int(n), 0), len(answers()))
        return self

    def workers(self, n: Optional[int]) -> "Harness":
        """Thread count for run(); None lets the executor decide."""
        self._workers = n
        return self

    def seed(self, seed: Optional[int]) -> "Harness":
        """Seed for sampling the trial words."""
        self._seed = seed
        return self

    def baseline_dir(self, directory: Path | str | None) -> "Harness":
        """Where summaries are saved and saved baselines are looked up."""
        self._baseline_dir = Path(directory) if directory is not None else None
        return self

    def overwrite(self, flag: bool = True) -> "Harness":
        """Allow saving over existing summaries."""
        self._overwrite = bool(flag)
        return self

    @property
    def strategies(self) -> List[Strategy]:
        return [s for s, _ in self._strategies]

    # ---- running ----

    def _select_words(self) -> List[Word]:
        pool = answers()
        if self._num_words is None:
            return pool
        return random.Random(self._seed).sample(pool, self._num_words)

    def _prepare(self) -> List[Word]:
        if not self._strategies:
            raise NoStrategiesAdded()
        words = self._select_words()
        if not words:
            raise NoWordsSelected()
        logger.info(
            "running %d strategies on %d words (workers=%s): %s",
            len(self._strategies), len(words), self._workers or "auto",
            ", ".join(str(s) for s, _ in self._strategies),
        )
        return words

    @staticmethod
    def _solve_one(strategy: Strategy, word: Word) -> Attempts:
        puzzle = Puzzle(word)
        key = AttemptsKey._issue(puzzle, strategy.hardmode())
        attempts = strategy.solve(puzzle, key)
        if not isinstance(attempts, Attempts):
            raise TypeError(f"{strategy} returned {type(attempts).__name__}, not Attempts")
        # the returned ledger must be the one this trial's key unlocked
        if puzzle.poisoned or attempts.is_cheat or attempts is not key._ledger:
            raise StrategyCheated(str(strategy))
        return attempts

    def _run_trial(self, word: Word, perfs: List[Perf], lock: threading.Lock) -> None:
        for i, (strategy, _) in enumerate(self._strategies):
            attempts = self._solve_one(strategy, word)
            with lock:
                perfs[i].tries.append((word, attempts))

    def _new_perfs(self) -> List[Perf]:
        return [Perf.for_strategy(s) for s, _ in self._strategies]

    def run(self) -> Record:
        """
        Run every strategy on every selected word, in parallel.

        Result order within each Perf is not deterministic. Any exception
        from a trial, StrategyCheated included, stops the run: queued trials
        are cancelled, trials already running finish, and nothing is returned.
        """
        words = self._prepare()
        perfs = self._new_perfs()
        lock = threading.Lock()

        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            futures = [executor.submit(self._run_trial, w, perfs, lock) for w in words]
            done = as_completed(futures)
            if self._verbose:
                done = tqdm(done, total=len(futures), ncols=80, desc="Running", unit="word")
            try:
                for fut in done:
                    fut.result()
            except Exception as e:
                executor.shutdown(wait=False, cancel_futures=True)
                if isinstance(e, StrategyCheated):
                    logger.error("aborting run: %s", e)
                raise

        return self._finish(perfs)

    def debug_run(self) -> Record:
        """
        Sequential run for diagnosing strategies.

        Trials run in word order, strategies in the order added. An exception
        raised by one strategy on one word is logged with that word and the
        trial is left out of the Perf; the run carries on. Cheating still
        aborts the run.
        """
        words = self._prepare()
        perfs = self._new_perfs()

        iterator = tqdm(words, ncols=80, desc="Debugging", unit="word") if self._verbose else words
        for word in iterator:
            for i, (strategy, _) in enumerate(self._strategies):
                try:
                    attempts = self._solve_one(strategy, word)
                except StrategyCheated as e:
                    logger.error("aborting run: %s (word: %s)", e, word)
                    raise
                except Exception:
                    logger.exception("%s failed on %r; skipping this trial", strategy, word.text)
                    continue
                perfs[i].tries.append((word, attempts))

        return self._finish(perfs)

    def _finish(self, perfs: List[Perf]) -> Record:
        for perf, (_, save_as) in zip(perfs, self._strategies):
            if save_as:
                save_summary(perf.to_summary(), save_as, self._baseline_dir, force=self._overwrite)
        return Record(perfs, self._baseline)
