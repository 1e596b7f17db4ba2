"""Skip algorithms and the name registry.

The registered descriptors are created once at import and never mutated, so
they can be shared freely between sessions and threads.
"""

from __future__ import annotations

from types import MappingProxyType

from seqsample.algorithms.base import Counter, SkipAlgorithm
from seqsample.algorithms.vitter_a import VitterA, vitter_a_skip
from seqsample.algorithms.vitter_d import DEFAULT_ALPHA_INVERSE, VitterD, VitterDState
from seqsample.errors import InvalidArgumentError

vitter_a = VitterA()
vitter_d = VitterD()

# "nair_e" (Nair 1990, Algorithm E) is a known extension that is not provided.
ALGORITHMS = MappingProxyType({algo.name: algo for algo in (vitter_a, vitter_d)})


def available_algorithms() -> list[str]:
    """Return the registered algorithm names."""
    return sorted(ALGORITHMS)


def get_algorithm(algorithm: str | SkipAlgorithm) -> SkipAlgorithm:
    """Resolve an algorithm name (or pass through a descriptor)."""
    if isinstance(algorithm, SkipAlgorithm):
        return algorithm
    try:
        return ALGORITHMS[algorithm]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown algorithm {algorithm!r}; available: {', '.join(available_algorithms())}"
        ) from None


__all__ = [
    "ALGORITHMS",
    "Counter",
    "DEFAULT_ALPHA_INVERSE",
    "SkipAlgorithm",
    "VitterA",
    "VitterD",
    "VitterDState",
    "available_algorithms",
    "get_algorithm",
    "vitter_a",
    "vitter_a_skip",
    "vitter_d",
]
