"""Skip-algorithm interface and the counters it operates on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from seqsample.rng import RandomSource


@dataclass
class Counter:
    """A ``total``/``remaining`` pair for either the population or the sample.

    Attributes:
        total: Size fixed at ``init`` time.
        remaining: Items not yet consumed; ``0`` means exhausted.
    """

    total: int = 0
    remaining: int = 0

    def reset(self, size: int) -> None:
        self.total = size
        self.remaining = size

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0


class SkipAlgorithm(ABC):
    """Base interface for sequential-sampling skip generators.

    Instances are immutable descriptors.  Anything an algorithm needs to
    remember between calls lives in the state object returned by
    :meth:`new_state`, which the owning session allocates once and passes
    back on every call.

    Implementations must treat ``sample`` and ``records`` as read-only: the
    session does all counter bookkeeping after :meth:`skip` returns.
    """

    name: str = ""

    def new_state(self) -> Any:
        """Allocate per-session state (``None`` when the algorithm is stateless)."""
        return None

    def init(
        self,
        state: Any,
        sample: Counter,
        records: Counter,
        rng: RandomSource,
    ) -> None:
        """Prepare ``state`` for a new run (no-op by default)."""

    @abstractmethod
    def skip(
        self,
        state: Any,
        sample: Counter,
        records: Counter,
        rng: RandomSource,
    ) -> int:
        """Return the number of records to pass over before the next selection."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
