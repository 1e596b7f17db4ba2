"""Statistical checks for skip algorithms.

These helpers depend only on ``numpy`` and ``scipy`` and are used by the test
suite to confirm that every algorithm draws uniformly over all subsets.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from scipy.stats import chi2_contingency, chisquare

from seqsample.algorithms import SkipAlgorithm
from seqsample.errors import InvalidArgumentError
from seqsample.rng import RandomLike
from seqsample.session import SamplingSession


def inclusion_counts(
    algorithm: str | SkipAlgorithm,
    sample_size: int,
    population_size: int,
    trials: int,
    rng: RandomLike = None,
) -> np.ndarray:
    """Count how often each index is selected over ``trials`` independent runs.

    Returns:
        Integer array of shape ``(population_size,)``; it sums to
        ``trials * sample_size``.
    """
    counts = np.zeros(population_size, dtype=np.int64)
    session = SamplingSession(algorithm, rng=rng)
    for _ in range(trials):
        session.init(sample_size, population_size)
        for index in session.indices():
            counts[index] += 1
    return counts


def first_skip_counts(
    algorithm: str | SkipAlgorithm,
    sample_size: int,
    population_size: int,
    trials: int,
    rng: RandomLike = None,
) -> np.ndarray:
    """Histogram of the first skip length over ``trials`` fresh runs."""
    counts = np.zeros(population_size - sample_size + 1, dtype=np.int64)
    session = SamplingSession(algorithm, rng=rng)
    for _ in range(trials):
        session.init(sample_size, population_size)
        counts[session.skip()] += 1
    return counts


def first_skip_distribution(sample_size: int, population_size: int) -> np.ndarray:
    """Exact probability that the first skip equals ``s``, for ``s = 0..N-n``.

    ``P(S = s) = C(N - s - 1, n - 1) / C(N, n)``.
    """
    if not 0 < sample_size <= population_size:
        raise InvalidArgumentError("requires 0 < sample_size <= population_size")
    total = math.comb(population_size, sample_size)
    return np.asarray(
        [
            math.comb(population_size - s - 1, sample_size - 1) / total
            for s in range(population_size - sample_size + 1)
        ],
        dtype=np.float64,
    )


def _pool_bins(
    observed: np.ndarray, expected: np.ndarray, min_expected: float
) -> tuple[np.ndarray, np.ndarray]:
    """Merge adjacent bins until each has at least ``min_expected`` expected counts."""
    pooled_obs: list[float] = []
    pooled_exp: list[float] = []
    acc_obs = 0.0
    acc_exp = 0.0
    for obs, exp in zip(observed, expected):
        acc_obs += obs
        acc_exp += exp
        if acc_exp >= min_expected:
            pooled_obs.append(acc_obs)
            pooled_exp.append(acc_exp)
            acc_obs = 0.0
            acc_exp = 0.0
    if acc_exp > 0.0 or acc_obs > 0.0:
        if pooled_exp:
            pooled_obs[-1] += acc_obs
            pooled_exp[-1] += acc_exp
        else:
            pooled_obs.append(acc_obs)
            pooled_exp.append(acc_exp)
    return np.asarray(pooled_obs), np.asarray(pooled_exp)


def goodness_of_fit(
    observed: np.ndarray, probabilities: np.ndarray, min_expected: float = 5.0
) -> Any:
    """Chi-square goodness-of-fit of a histogram against exact probabilities."""
    observed = np.asarray(observed, dtype=np.float64)
    expected = np.asarray(probabilities, dtype=np.float64) * observed.sum()
    pooled_obs, pooled_exp = _pool_bins(observed, expected, min_expected)
    # Renormalize against float drift so scipy's sum check passes.
    pooled_exp *= pooled_obs.sum() / pooled_exp.sum()
    return chisquare(pooled_obs, pooled_exp)


def uniformity_test(counts: np.ndarray, sample_size: int, trials: int) -> Any:
    """Chi-square test of inclusion counts against ``trials * n / N`` per index.

    Per-index counts within a run are negatively correlated, so the test is
    conservative.
    """
    counts = np.asarray(counts, dtype=np.float64)
    expected = np.full(counts.shape, trials * sample_size / counts.size)
    return chisquare(counts, expected)


def compare_algorithms(counts_a: np.ndarray, counts_b: np.ndarray) -> Any:
    """Chi-square test of homogeneity between two inclusion-count tallies."""
    table = np.vstack([np.asarray(counts_a), np.asarray(counts_b)])
    return chi2_contingency(table)
