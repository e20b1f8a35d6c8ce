"""
Plain-text performance reports.

format_summary() renders one strategy's block; with a baseline it also shows
the differences and whether they are significant:

    -----------------------------Common Letters v0.1.1-----------------------------
    Ran 100 words against Basic v0.1.1 on 100 words
    Guessed 97 correctly, or 97.0% (+3.0%), and 3 incorrectly, not a sig. diff.
    Correct guesses took 4.12 (-0.31) attempts on average, a sig. diff.
    P-value: 0.0123
"""

from __future__ import annotations

from typing import Optional

from .perf import Summary

WIDTH = 80


def _sig(flag: bool) -> str:
    return "a sig. diff." if flag else "not a sig. diff."


def format_summary(summary: Summary, *, compare: Optional[Summary] = None,
                   baseline_note: Optional[str] = None, histogram: bool = False) -> str:
    lines = []

    if compare is not None:
        c = summary.compare(compare)
        lines.append(f"{summary.strategy_name:-^{WIDTH}}")
        lines.append(
            f"Ran {summary.num_tried} words against {compare.strategy_name} "
            f"on {compare.num_tried} words"
        )
        lines.append(
            f"Guessed {summary.num_solved} correctly, or {summary.frac_solved() * 100:.1f}% "
            f"({c.frac_solved_diff() * 100:+.1f}%), and {summary.num_missed()} incorrectly, "
            f"{_sig(c.solved_significant())}"
        )
        lines.append(
            f"Correct guesses took {summary.mean_guesses():.2f} ({c.mean_guesses_diff():+.2f}) "
            f"attempts on average, {_sig(c.guesses_significant())}"
        )
        lines.append(f"P-value: {c.guesses_pvalue:.4g}")
    else:
        if baseline_note:
            lines.append(f"Baseline{summary.strategy_name:-^{WIDTH - 8}}")
            lines.append(baseline_note)
        else:
            lines.append(f"{summary.strategy_name:-^{WIDTH}}")
        lines.append(f"Ran {summary.num_tried} words")
        lines.append(
            f"Guessed {summary.num_solved} correctly, or {summary.frac_solved() * 100:.1f}%, "
            f"and {summary.num_missed()} incorrectly"
        )
        lines.append(f"Correct guesses took {summary.mean_guesses():.2f} attempts on average")

    if histogram:
        lines.append(summary.histogram.render(WIDTH))

    return "\n".join(lines)
