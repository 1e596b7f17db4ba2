"""Vitter's Algorithm D.

Vitter JS (1987) 'An efficient algorithm for sequential random sampling.'
ACM T. Math. Softw. 13(1): 58--67.

Generates roughly ``n`` random variates over a full run instead of ``O(N)``.
Whenever the remaining sample exceeds ``1 / alpha_inverse`` of the remaining
records, the run is handed over to Algorithm A for good, which is faster in
that regime.

Fractional powers are computed as ``exp(log(u) / k)`` throughout.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from seqsample.algorithms.base import Counter, SkipAlgorithm
from seqsample.algorithms.vitter_a import vitter_a_skip
from seqsample.errors import InvalidArgumentError
from seqsample.rng import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_ALPHA_INVERSE = 13.0


@dataclass
class VitterDState:
    """Per-session memory for Algorithm D.

    Attributes:
        vprime: Cached variate ``U ** (1 / n)`` carried to the next skip.
        use_algorithm_a: Set once the run has been handed to Algorithm A.
    """

    vprime: float = 0.0
    use_algorithm_a: bool = False

    def reset(self) -> None:
        self.vprime = 0.0
        self.use_algorithm_a = False


def _root_draw(rng: RandomSource, inverse_exponent: float) -> float:
    """Return ``U ** inverse_exponent`` for a fresh ``U`` in (0, 1)."""
    return math.exp(math.log(rng.uniform_pos()) * inverse_exponent)


class VitterD(SkipAlgorithm):
    """Algorithm D with a configurable hand-over threshold."""

    name = "vitter_d"

    def __init__(self, alpha_inverse: float = DEFAULT_ALPHA_INVERSE) -> None:
        """Initialize the algorithm descriptor.

        Args:
            alpha_inverse: Algorithm A takes over once
                ``alpha_inverse * remaining_sample > remaining_records``.
        """
        if alpha_inverse <= 0:
            raise InvalidArgumentError(f"alpha_inverse must be positive, got {alpha_inverse}")
        self._alpha_inverse = float(alpha_inverse)

    @property
    def alpha_inverse(self) -> float:
        return self._alpha_inverse

    def _prefers_algorithm_a(self, sample: Counter, records: Counter) -> bool:
        return self._alpha_inverse * sample.remaining > records.remaining

    def new_state(self) -> VitterDState:
        return VitterDState()

    def init(
        self,
        state: VitterDState,
        sample: Counter,
        records: Counter,
        rng: RandomSource,
    ) -> None:
        state.reset()
        if sample.remaining == 0:
            return
        if self._prefers_algorithm_a(sample, records):
            state.use_algorithm_a = True
        else:
            state.vprime = _root_draw(rng, 1.0 / sample.remaining)

    def skip(
        self,
        state: VitterDState,
        sample: Counter,
        records: Counter,
        rng: RandomSource,
    ) -> int:
        if not state.use_algorithm_a and self._prefers_algorithm_a(sample, records):
            logger.debug(
                "Switching to Algorithm A with %d of %d records and %d of %d selections left",
                records.remaining,
                records.total,
                sample.remaining,
                sample.total,
            )
            state.use_algorithm_a = True
        if state.use_algorithm_a:
            return vitter_a_skip(sample, records, rng)

        n = sample.remaining
        big_n = records.remaining
        if n == 1:
            # vprime can round up to exactly 1.0
            return min(int(big_n * state.vprime), big_n - 1)

        n_real = float(n)
        big_n_real = float(big_n)
        ninv = 1.0 / n_real
        nmin1inv = 1.0 / (n_real - 1.0)
        qu1 = big_n - n + 1
        qu1_real = float(qu1)
        vprime = state.vprime

        while True:
            # D2: candidate S from the cached variate
            while True:
                x = big_n_real * (1.0 - vprime)
                s = int(x)
                if s < qu1:
                    break
                vprime = _root_draw(rng, ninv)

            y1 = math.exp(math.log(rng.uniform_pos() * big_n_real / qu1_real) * nmin1inv)
            vprime = y1 * (1.0 - x / big_n_real) * (qu1_real / (qu1_real - s))
            if vprime <= 1.0:
                break

            # D4: exact acceptance test
            y2 = 1.0
            top = big_n_real - 1.0
            if n - 1 > s:
                bottom = big_n_real - n_real
                limit = big_n - s
            else:
                bottom = big_n_real - s - 1.0
                limit = qu1
            for _ in range(limit, big_n):
                y2 = (y2 * top) / bottom
                top -= 1.0
                bottom -= 1.0

            if big_n_real / (big_n_real - x) >= y1 * math.exp(math.log(y2) * nmin1inv):
                break
            vprime = _root_draw(rng, ninv)

        state.vprime = _root_draw(rng, nmin1inv)
        return s
