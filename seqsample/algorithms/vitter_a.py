"""Vitter's Algorithm A.

Vitter JS (1984) 'Faster methods for random sampling'.
Commun. ACM 27(7): 703--718.

Runs in O(N) time over a full pass but draws only one variate per skip.
Also used by Algorithm D once the remaining sample is a large fraction of the
remaining records.
"""

from __future__ import annotations

from typing import Any

from seqsample.algorithms.base import Counter, SkipAlgorithm
from seqsample.rng import RandomSource


def vitter_a_skip(sample: Counter, records: Counter, rng: RandomSource) -> int:
    """Draw one skip length with Algorithm A."""
    if sample.remaining == 1:
        return rng.uniform_int(records.remaining)

    # V must be strictly positive: when top reaches 0, quot is 0 and the
    # current record has to be accepted.
    n_records = records.remaining
    top = float(n_records - sample.remaining)
    quot = top / n_records
    v = rng.uniform_pos()

    skip = 0
    while quot > v:
        skip += 1
        top -= 1.0
        n_records -= 1
        quot *= top / n_records
    return skip


class VitterA(SkipAlgorithm):
    """Stateless Algorithm A."""

    name = "vitter_a"

    def skip(
        self,
        state: Any,
        sample: Counter,
        records: Counter,
        rng: RandomSource,
    ) -> int:
        return vitter_a_skip(sample, records, rng)
