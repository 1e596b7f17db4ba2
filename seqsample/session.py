"""Sampling sessions: one algorithm, two counters, one run at a time.

A :class:`SamplingSession` is built once per algorithm choice and can be
re-initialized for any number of independent runs::

    session = SamplingSession("vitter_d", rng=42)
    session.init(3, 10)
    cursor = 0
    for _ in range(3):
        index = session.select(cursor)
        cursor = index + 1

The cursor belongs to the caller; the session only tracks how many records
and selections are left.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace
from itertools import islice
from typing import TYPE_CHECKING, Any, TypeVar

from seqsample.algorithms import (
    DEFAULT_ALPHA_INVERSE,
    Counter,
    SkipAlgorithm,
    VitterD,
    get_algorithm,
)
from seqsample.errors import AllocationFailureError, ExhaustedError, InvalidArgumentError
from seqsample.rng import RandomLike, RandomSource, as_random_source

if TYPE_CHECKING:
    from seqsample.config import SamplerConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class SamplingSession:
    """Drive a skip algorithm through complete sampling runs.

    Attributes:
        algorithm: The skip algorithm descriptor, fixed at construction.
    """

    def __init__(
        self,
        algorithm: str | SkipAlgorithm = "vitter_d",
        rng: RandomLike = None,
    ) -> None:
        """Initialize a session.

        Args:
            algorithm: Registered algorithm name or a descriptor instance.
            rng: Default random source (seed, ``numpy`` generator or
                :class:`RandomSource`) used when a call does not pass one.
        """
        self.algorithm: SkipAlgorithm = get_algorithm(algorithm)
        try:
            self._state: Any = self.algorithm.new_state()
        except MemoryError as exc:
            raise AllocationFailureError(
                f"Could not allocate state for algorithm {self.algorithm.name!r}"
            ) from exc
        self._records = Counter()
        self._sample = Counter()
        self._rng: RandomSource = as_random_source(rng)

    @classmethod
    def from_config(cls, config: SamplerConfig) -> SamplingSession:
        """Build a session from a validated :class:`SamplerConfig`."""
        config.validate()
        algorithm: str | SkipAlgorithm = config.algorithm
        if config.algorithm == VitterD.name and config.alpha_inverse != DEFAULT_ALPHA_INVERSE:
            algorithm = VitterD(alpha_inverse=config.alpha_inverse)
        return cls(algorithm, rng=config.seed)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.algorithm.name

    @property
    def records(self) -> Counter:
        """Copy of the population counter."""
        return replace(self._records)

    @property
    def sample(self) -> Counter:
        """Copy of the sample counter."""
        return replace(self._sample)

    @property
    def exhausted(self) -> bool:
        return self._sample.exhausted or self._records.exhausted

    def _resolve_rng(self, rng: RandomLike) -> RandomSource:
        return self._rng if rng is None else as_random_source(rng)

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def init(self, sample_size: int, population_size: int, rng: RandomLike = None) -> None:
        """Start a new run selecting ``sample_size`` of ``population_size`` records.

        Raises:
            InvalidArgumentError: If either size is negative or the sample is
                larger than the population.  The session is left unchanged.
        """
        if sample_size < 0 or population_size < 0:
            raise InvalidArgumentError(
                f"sizes must be non-negative, got sample_size={sample_size}, "
                f"population_size={population_size}"
            )
        if sample_size > population_size:
            raise InvalidArgumentError(
                f"sample_size ({sample_size}) cannot exceed population_size ({population_size})"
            )
        source = self._resolve_rng(rng)
        self._records.reset(population_size)
        self._sample.reset(sample_size)
        logger.debug(
            "Initialized %s session: selecting %d of %d records",
            self.algorithm.name,
            sample_size,
            population_size,
        )
        self.algorithm.init(self._state, self._sample, self._records, source)

    def skip(self, rng: RandomLike = None) -> int:
        """Return how many records to pass over before the next selection.

        Raises:
            ExhaustedError: If the run has no selections or records left.
        """
        if self._sample.remaining == 0:
            raise ExhaustedError("No selections remaining; call init() to start a new run")
        if self._records.remaining == 0:
            raise ExhaustedError("No records remaining; call init() to start a new run")

        source = self._resolve_rng(rng)
        skipped = self.algorithm.skip(self._state, self._sample, self._records, source)
        self._records.remaining -= skipped + 1
        self._sample.remaining -= 1
        return skipped

    def select(self, current_record: int = 0, rng: RandomLike = None) -> int:
        """Return the index of the next selected record.

        Args:
            current_record: Caller-owned cursor, the index of the first record
                not yet passed over.
            rng: Optional random source overriding the session default.

        Returns:
            The selected index.  The caller's cursor for the next call is the
            returned index plus one.
        """
        return current_record + self.skip(rng)

    def indices(self, start: int = 0, rng: RandomLike = None) -> Iterator[int]:
        """Yield every remaining selection of the current run."""
        cursor = start
        while not self.exhausted:
            index = self.select(cursor, rng)
            cursor = index + 1
            yield index

    def __repr__(self) -> str:
        return (
            f"SamplingSession(algorithm={self.algorithm.name!r}, "
            f"sample={self._sample.remaining}/{self._sample.total}, "
            f"records={self._records.remaining}/{self._records.total})"
        )


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------


def sample_indices(
    sample_size: int,
    population_size: int,
    rng: RandomLike = None,
    algorithm: str | SkipAlgorithm = "vitter_d",
) -> list[int]:
    """Return ``sample_size`` sorted distinct indices drawn from ``range(population_size)``."""
    session = SamplingSession(algorithm, rng=rng)
    session.init(sample_size, population_size)
    return list(session.indices())


def select_stream(
    records: Iterable[T],
    sample_size: int,
    population_size: int,
    rng: RandomLike = None,
    algorithm: str | SkipAlgorithm = "vitter_d",
) -> Iterator[T]:
    """Return an iterator over a uniform sample drawn from a stream of known length.

    The stream is consumed once, in order, and never buffered.  Items after
    the last selection are not read.

    Raises:
        InvalidArgumentError: Immediately for invalid sizes; while iterating
            if the stream is shorter than ``population_size``.
    """
    session = SamplingSession(algorithm, rng=rng)
    session.init(sample_size, population_size)
    return _stream_selected(session, iter(records), population_size)


def _stream_selected(
    session: SamplingSession, iterator: Iterator[T], population_size: int
) -> Iterator[T]:
    cursor = 0
    for index in session.indices():
        item = next(islice(iterator, index - cursor, None), _MISSING)
        if item is _MISSING:
            raise InvalidArgumentError(
                f"record stream ended before index {index} "
                f"(expected {population_size} records)"
            )
        cursor = index + 1
        yield item
