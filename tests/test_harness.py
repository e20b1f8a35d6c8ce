import logging
from pathlib import Path

import pytest
from wordlebench.engine import Attempts, AttemptsKey, Word, answers
from wordlebench.errors import (
    BaselineAlreadySet, BaselineNotFound, NoStrategiesAdded, NoWordsSelected,
    StrategyCheated, SummaryWrite,
)
from wordlebench.harness import Harness, RunBaseline, SavedBaseline, Summary
from wordlebench.solvers import Basic, Strategy, Stupid


class Mock(Strategy):
    name = "Mock"
    guesses = ["nerds", "tithe", "doubt", "point", "parka", "sword"]

    def solve(self, puzzle, key):
        attempts = key.unlock()
        for g in self.guesses:
            _, correct = puzzle.check(Word.from_text(g), attempts)
            if correct:
                break
        return attempts

    def version(self):
        return "1"


class Cheater(Strategy):
    """Grades guesses with a ledger it made itself."""
    name = "Cheater"

    def solve(self, puzzle, key):
        attempts = key.unlock()
        puzzle.check(Word.from_text("crane"), Attempts.cheat())
        return attempts


class Forger(Strategy):
    """Never touches the key and hands back a ledger of its own."""
    name = "Forger"

    def solve(self, puzzle, key):
        return Attempts.cheat()


class SideChannel(Strategy):
    """Finds the answer with ledgers from keys of its own, then plays it for real."""
    name = "SideChannel"

    def solve(self, puzzle, key):
        attempts = key.unlock()
        for word in answers():
            _, correct = puzzle.check(word, AttemptsKey(False).unlock())
            if correct:
                puzzle.check(word, attempts)
                break
        return attempts


class PlainLedger(Strategy):
    """Builds a ledger directly instead of unlocking its key."""
    name = "PlainLedger"

    def solve(self, puzzle, key):
        attempts = Attempts(False)
        puzzle.check(Word.from_text("crane"), attempts)
        return attempts


class Crasher(Strategy):
    name = "Crasher"

    def solve(self, puzzle, key):
        attempts = key.unlock()
        _, correct = puzzle.check(Word.from_text("crane"), attempts)
        if not correct:
            raise RuntimeError("gave up")
        return attempts


def small(h: Harness, n=4, seed=7) -> Harness:
    return h.test_num(n).seed(seed).workers(2)


def trial_words(perf):
    return sorted(w.text for w, _ in perf.tries)


def test_run_collects_every_trial():
    record = small(Harness().add_baseline(Basic()).add_strategy(Stupid())).run()
    assert len(record.perfs) == 2
    basic, stupid = record.perfs
    assert basic.strategy_name == "Basic v0.1.1"
    assert stupid.strategy_name == "Stupid v0.10"
    assert basic.num_tried() == stupid.num_tried() == 4
    assert trial_words(basic) == trial_words(stupid)
    for word, attempts in basic.tries:
        assert 1 <= len(attempts) <= 6
        assert attempts.hard and not attempts.is_cheat

    assert record.baseline == RunBaseline(0)
    assert record.baseline_summary() == basic.to_summary()
    comps = record.comparisons()
    assert comps[0] is None
    assert comps[1] is not None and comps[1].baseline == basic.to_summary()

    text = record.report(histogram=True)
    assert "Used as baseline and not saved" in text
    assert "Stupid v0.10" in text
    assert "6 |" in text


def test_sampling_is_seeded():
    a = small(Harness().add_strategy(Mock()), seed=3).run()
    b = small(Harness().add_strategy(Mock()), seed=3).run()
    assert trial_words(a.perfs[0]) == trial_words(b.perfs[0])
    assert a.summaries() == b.summaries()


def test_configuration_errors():
    with pytest.raises(NoStrategiesAdded):
        Harness().run()
    with pytest.raises(NoWordsSelected):
        Harness().add_strategy(Mock()).test_num(0).run()
    with pytest.raises(NoWordsSelected):
        Harness().add_strategy(Mock()).test_num(-5).debug_run()
    with pytest.raises(BaselineAlreadySet):
        Harness().add_baseline(Mock()).add_baseline(Stupid())


def test_strategies_property_keeps_order():
    m, s = Mock(), Stupid()
    h = Harness().add_strategies([m, s])
    assert h.strategies == [m, s]


@pytest.mark.parametrize("cheat_cls", [Cheater, Forger, SideChannel, PlainLedger])
def test_cheating_aborts_the_run(cheat_cls):
    h = small(Harness().add_strategy(Mock()).add_strategy(cheat_cls()))
    with pytest.raises(StrategyCheated) as e:
        h.run()
    assert e.value.strategy_name == cheat_cls.name


def test_cheating_aborts_debug_run_too():
    with pytest.raises(StrategyCheated):
        small(Harness().add_strategy(Cheater())).debug_run()


def test_strategy_error_stops_parallel_run():
    with pytest.raises(RuntimeError):
        small(Harness().add_strategy(Crasher()), seed=1).run()


def test_debug_run_skips_failing_trials(caplog):
    caplog.set_level(logging.ERROR, logger="wordlebench.harness.core")
    record = small(Harness().add_strategy(Mock()).add_strategy(Crasher()), seed=1).debug_run()
    mock, crasher = record.perfs
    assert mock.num_tried() == 4
    # only trials whose answer is 'crane' survive, and 'crane' occurs at most once
    cranes = [w for w, _ in mock.tries if w.text == "crane"]
    assert crasher.num_tried() == len(cranes) <= 1
    assert all(w.text == "crane" for w, _ in crasher.tries)

    failures = [r for r in caplog.records if "Crasher failed on" in r.getMessage()]
    assert len(failures) == 4 - len(cranes) >= 3
    assert all(r.exc_info is not None for r in failures)
    skipped = {w.text for w, _ in mock.tries} - {"crane"}
    assert all(any(repr(t) in r.getMessage() for r in failures) for t in skipped)


def test_save_and_reuse_baseline(tmp_path: Path, caplog):
    small(Harness().baseline_dir(tmp_path).add_strategy(Mock(), save_as="mock")).run()
    saved = Summary.from_saved("mock", tmp_path)
    assert saved.strategy_name == "Mock v1"
    assert saved.num_tried == 4

    # same words, same strategy: identical summary
    h = small(Harness().baseline_dir(tmp_path).add_saved_baseline("mock").add_strategy(Mock()))
    record = h.run()
    assert isinstance(record.baseline, SavedBaseline)
    assert record.comparisons() == [None]

    caplog.set_level(logging.WARNING, logger="wordlebench.harness.core")
    text = record.report()
    assert "Loaded baseline mock from disk" in text
    assert "matches the baseline exactly" in caplog.text


def test_saving_twice_needs_overwrite(tmp_path: Path):
    def build():
        return small(Harness().baseline_dir(tmp_path).add_baseline(Mock(), save_as="m"))

    build().run()
    with pytest.raises(SummaryWrite):
        build().run()
    record = build().overwrite().run()
    assert "Used as baseline and saved as m" in record.report()


def test_missing_saved_baseline_fails_early(tmp_path: Path):
    with pytest.raises(BaselineNotFound):
        Harness().add_saved_baseline("ghost", tmp_path)
    with pytest.raises(BaselineAlreadySet):
        Harness().add_baseline(Mock()).add_saved_baseline("ghost", tmp_path)


def test_print_report_writes_to_file(capsys):
    record = small(Harness().add_strategy(Mock()), n=2).run()
    record.print_report()
    out = capsys.readouterr().out
    assert "Mock v1" in out and "Ran 2 words" in out
