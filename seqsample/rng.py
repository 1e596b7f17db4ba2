"""Uniform random sources consumed by the sampling algorithms.

The algorithms only ever call :meth:`RandomSource.uniform_pos` and
:meth:`RandomSource.uniform_int`.  A draw of exactly ``0.0`` would break the
rejection loops, so :meth:`RandomSource.uniform` is provided for completeness
but is never used internally.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

import numpy as np

from seqsample.errors import InvalidArgumentError


class RandomSource(ABC):
    """Base interface for uniform random sources."""

    @abstractmethod
    def uniform(self) -> float:
        """Return a float in ``[0, 1)``."""

    @abstractmethod
    def uniform_pos(self) -> float:
        """Return a float strictly inside ``(0, 1)``."""

    @abstractmethod
    def uniform_int(self, bound: int) -> int:
        """Return an integer in ``[0, bound)``."""


class NumpyRandomSource(RandomSource):
    """Random source backed by :class:`numpy.random.Generator`."""

    def __init__(self, seed: int | np.random.Generator | None = None) -> None:
        """Initialize the source.

        Args:
            seed: Random seed for reproducibility, or an existing generator
                to draw from directly.
        """
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        else:
            self._rng = np.random.default_rng(seed)

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def uniform(self) -> float:
        return float(self._rng.random())

    def uniform_pos(self) -> float:
        # Generator.random() is in [0, 1); redraw on an exact zero.
        while True:
            value = float(self._rng.random())
            if value > 0.0:
                return value

    def uniform_int(self, bound: int) -> int:
        if bound <= 0:
            raise InvalidArgumentError(f"bound must be positive, got {bound}")
        return int(self._rng.integers(0, bound))

    def spawn(self, n: int) -> list[NumpyRandomSource]:
        """Return ``n`` independent child sources, e.g. one per worker thread."""
        return [NumpyRandomSource(child) for child in self._rng.spawn(n)]


RandomLike = Union[RandomSource, np.random.Generator, int, None]


def as_random_source(rng: RandomLike = None) -> RandomSource:
    """Coerce a seed, generator or source into a :class:`RandomSource`."""
    if isinstance(rng, RandomSource):
        return rng
    if rng is None or isinstance(rng, (int, np.integer, np.random.Generator)):
        return NumpyRandomSource(rng if not isinstance(rng, np.integer) else int(rng))
    raise InvalidArgumentError(f"cannot build a random source from {type(rng).__name__}")
