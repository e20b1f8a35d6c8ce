"""
Significance tests used by `Comparison`.

Both are thin wrappers over scipy.stats:
  - welch_t_pvalue:     two-sample, two-tailed Welch's t-test (unequal variances)
                        on guess-count samples.
  - fisher_exact_pvalue: two-tailed Fisher's exact test on the 2x2
                        solved/missed contingency table.

A p-value of nan means "not enough data to test" and is never significant.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy import stats


def histogram_sample(histogram: Sequence[int]) -> np.ndarray:
    """
    Expand a guesses-to-solve histogram into one observation per solve.

    [2, 0, 1, 0, 0, 0] -> array([1., 1., 3.])
    """
    counts = np.asarray(histogram, dtype=int)
    return np.repeat(np.arange(1, len(counts) + 1, dtype=float), counts)


def welch_t_pvalue(a: Sequence[float], b: Sequence[float]) -> float:
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.size < 2 or b.size < 2:
        return math.nan
    # zero variance on both sides makes the statistic undefined
    if np.var(a, ddof=1) == 0.0 and np.var(b, ddof=1) == 0.0:
        return math.nan
    res = stats.ttest_ind(a, b, equal_var=False)
    return float(res.pvalue)


def fisher_exact_pvalue(solved_a: int, solved_b: int, missed_a: int, missed_b: int) -> float:
    table = [[solved_a, solved_b], [missed_a, missed_b]]
    if sum(map(sum, table)) == 0:
        return math.nan
    _, p = stats.fisher_exact(table, alternative="two-sided")
    return float(p)


def is_significant(p: float, alpha: float) -> bool:
    return not math.isnan(p) and p < alpha
