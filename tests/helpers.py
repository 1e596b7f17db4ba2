"""Deterministic random source for unit tests."""

from __future__ import annotations

from collections.abc import Iterable

from seqsample.rng import RandomSource


class ScriptedSource(RandomSource):
    """Random source that replays pre-recorded draws and counts calls."""

    def __init__(self, positives: Iterable[float] = (), integers: Iterable[int] = ()) -> None:
        self._positives = list(positives)
        self._integers = list(integers)
        self.pos_calls = 0
        self.int_calls = 0
        self.int_bounds: list[int] = []

    def uniform(self) -> float:
        raise AssertionError("the sampling engine must never call uniform()")

    def uniform_pos(self) -> float:
        if not self._positives:
            raise AssertionError("ScriptedSource ran out of uniform_pos() draws")
        self.pos_calls += 1
        return self._positives.pop(0)

    def uniform_int(self, bound: int) -> int:
        if not self._integers:
            raise AssertionError("ScriptedSource ran out of uniform_int() draws")
        self.int_calls += 1
        self.int_bounds.append(bound)
        return self._integers.pop(0)
