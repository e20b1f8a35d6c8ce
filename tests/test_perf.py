import math

import numpy as np
import pytest
from wordlebench.engine import AttemptsKey, Puzzle, Word
from wordlebench.errors import SelfComparison
from wordlebench.harness import Comparison, Histogram, Perf, Summary
from wordlebench.harness import stats
from wordlebench.solvers import Basic


def summary(name="A", tried=8, hist=(0, 2, 3, 1, 0, 0), cumulative=None):
    solved = sum(hist)
    if cumulative is None:
        cumulative = sum((i + 1) * n for i, n in enumerate(hist)) + 6 * (tried - solved)
    return Summary(name, tried, solved, cumulative, Histogram(tuple(hist)))


def played(answer, guesses):
    puzzle = Puzzle(Word.from_text(answer))
    attempts = AttemptsKey._issue(puzzle, False).unlock()
    for g in guesses:
        puzzle.check(Word.from_text(g), attempts)
    return Word.from_text(answer), attempts


def test_perf_counts_and_summary():
    perf = Perf.for_strategy(Basic())
    assert perf.strategy_name == "Basic v0.1.1"
    perf.tries += [
        played("crimp", ["bolts", "prick", "crimp"]),
        played("sober", ["spool", "soaks", "sober"]),
        played("spoon", ["spoon"]),
        played("right", ["allay", "tough", "might", "night", "fight", "sight"]),
    ]
    assert perf.num_tried() == 4
    assert perf.num_solved() == 3 and perf.num_missed() == 1
    assert perf.frac_solved() == pytest.approx(0.75)
    assert perf.cumulative_guesses() == 13
    assert perf.cumulative_guesses_solved() == 7
    assert perf.guesses_per_solution() == pytest.approx(7 / 3)

    s = perf.to_summary()
    assert s.histogram.bins == (1, 0, 2, 0, 0, 0)
    assert s.histogram.total() == s.num_solved == 3
    assert s.cumulative_guesses == 13
    assert s.mean_guesses() == pytest.approx(perf.guesses_per_solution())


def test_empty_perf_fractions_are_nan():
    perf = Perf("Nobody v0")
    assert math.isnan(perf.frac_solved())
    assert math.isnan(perf.to_summary().mean_guesses())


def test_summary_derived_values():
    s = summary()
    assert s.num_missed() == 2
    assert s.frac_solved() == pytest.approx(0.75)
    assert s.frac_missed() == pytest.approx(0.25)
    assert s.cumulative_guesses_solved() == 17
    assert s.mean_guesses() == pytest.approx(17 / 6)


def test_self_comparison_is_refused():
    with pytest.raises(SelfComparison):
        summary().compare(summary())


def test_comparison_differences():
    a = summary("A", tried=8, hist=(0, 2, 3, 1, 0, 0))
    b = summary("B", tried=8, hist=(0, 1, 2, 1, 0, 0))
    c = a.compare(b)
    assert isinstance(c, Comparison)
    assert c.tries_eq()
    assert c.num_solved_diff() == 2
    assert c.num_missed_diff() == -2
    assert c.frac_solved_diff() == pytest.approx(0.25)
    assert c.mean_guesses_diff() == pytest.approx(17 / 6 - 12 / 4)
    assert 0.0 <= c.solved_pvalue <= 1.0

    uneven = a.compare(summary("C", tried=10, hist=(0, 2, 3, 1, 0, 0)))
    assert uneven.num_solved_diff() is None
    assert uneven.num_missed_diff() is None


def test_big_difference_is_significant():
    good = summary("good", tried=500, hist=(0, 50, 300, 150, 0, 0))
    bad = summary("bad", tried=500, hist=(0, 0, 10, 40, 100, 100))
    c = good.compare(bad)
    assert c.solved_significant()
    assert c.guesses_significant()
    assert c.guesses_pvalue < 0.05


def test_histogram_sample():
    sample = stats.histogram_sample([2, 0, 1, 0, 0, 0])
    assert np.array_equal(sample, np.array([1.0, 1.0, 3.0]))


def test_stats_not_enough_data():
    assert math.isnan(stats.welch_t_pvalue([1.0], [2.0, 3.0]))
    assert math.isnan(stats.welch_t_pvalue([3.0, 3.0], [3.0, 3.0]))
    assert math.isnan(stats.fisher_exact_pvalue(0, 0, 0, 0))
    assert not stats.is_significant(math.nan, 0.05)


def test_fisher_identical_tables():
    assert stats.fisher_exact_pvalue(40, 40, 10, 10) == pytest.approx(1.0)


def test_histogram_validation():
    with pytest.raises(ValueError):
        Histogram((1, 2, 3))
    with pytest.raises(ValueError):
        Histogram((1, -1, 0, 0, 0, 0))
    h = Histogram.from_counts([0, 1, 2, 3, 4, 5])
    assert len(h) == 6 and h[5] == 5 and list(h) == [0, 1, 2, 3, 4, 5]


@pytest.mark.parametrize("width", [20, 40, 80])
def test_histogram_render_fits_width(width):
    h = Histogram((3, 1000, 250, 7, 0, 1))
    lines = h.render(width).splitlines()
    assert len(lines) == 6
    assert lines[0].startswith("1 |") and lines[0].endswith("(3)")
    assert lines[4] == "5 | (0)"
    assert all(len(line) <= width for line in lines)
    # the largest bin gets the longest bar
    assert max(lines, key=lambda s: s.count("■")).startswith("2 |")


def test_summary_dict_validation():
    s = summary()
    assert Summary.from_dict(s.to_dict()) == s

    bad = s.to_dict()
    bad["histogram"] = [0, 0, 0, 0, 0, 1]
    with pytest.raises(ValueError):
        Summary.from_dict(bad)

    missing = s.to_dict()
    del missing["num_solved"]
    with pytest.raises(ValueError):
        Summary.from_dict(missing)
