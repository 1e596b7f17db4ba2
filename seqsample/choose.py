"""Choose ``k`` of ``n`` elements, preserving their source order.

:func:`choose` works on any Python sequence; :func:`choose_bytes` copies
fixed-size elements between untyped buffers (``bytearray``, ``memoryview``,
contiguous ``numpy`` arrays) for interop with packed record formats.

Both compute every selected index before touching ``dest``, so a failure
leaves the destination unmodified.
"""

from __future__ import annotations

import logging
from collections.abc import MutableSequence, Sequence
from typing import Any, TypeVar

import numpy as np

from seqsample.algorithms import SkipAlgorithm
from seqsample.errors import InvalidArgumentError
from seqsample.rng import RandomLike
from seqsample.session import sample_indices

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_sizes(k: int, n: int) -> None:
    if k < 0 or n < 0:
        raise InvalidArgumentError(f"k and n must be non-negative, got k={k}, n={n}")
    if k > n:
        raise InvalidArgumentError(
            f"k ({k}) is greater than n ({n}); cannot sample more than n items"
        )


def choose(
    dest: MutableSequence[T],
    k: int,
    src: Sequence[T],
    rng: RandomLike = None,
    algorithm: str | SkipAlgorithm = "vitter_d",
) -> None:
    """Fill ``dest[0:k]`` with ``k`` elements of ``src`` chosen uniformly.

    Every ``k``-subset of ``src`` is equally likely, and the chosen elements
    keep their relative order from ``src``.

    Args:
        dest: Mutable sequence with at least ``k`` slots.
        k: Number of elements to choose.
        src: Source sequence; ``n`` is ``len(src)``.
        rng: Seed, ``numpy`` generator or :class:`~seqsample.rng.RandomSource`.
        algorithm: Skip algorithm name or descriptor.

    Raises:
        InvalidArgumentError: If ``k > len(src)`` or ``dest`` is too short.
    """
    n = len(src)
    _check_sizes(k, n)
    if len(dest) < k:
        raise InvalidArgumentError(f"dest has {len(dest)} slots, need {k}")

    logger.debug("Choosing %d of %d elements", k, n)
    selected = sample_indices(k, n, rng=rng, algorithm=algorithm)
    for i, index in enumerate(selected):
        dest[i] = src[index]


def _byte_view(buffer: Any) -> memoryview:
    """Return a flat unsigned-byte view over a C-contiguous buffer."""
    if isinstance(buffer, np.ndarray):
        # Structured dtypes have no single-character buffer format to cast from.
        if not buffer.flags.c_contiguous:
            raise InvalidArgumentError("numpy buffers must be C-contiguous")
        buffer = buffer.reshape(-1).view(np.uint8)
    view = memoryview(buffer)
    if view.format == "B" and view.ndim == 1:
        return view
    try:
        return view.cast("B")
    except TypeError as exc:
        raise InvalidArgumentError(f"cannot view buffer as bytes: {exc}") from exc


def choose_bytes(
    dest: Any,
    k: int,
    src: Any,
    n: int,
    element_size: int,
    rng: RandomLike = None,
    algorithm: str | SkipAlgorithm = "vitter_d",
) -> None:
    """Copy ``k`` of ``n`` fixed-size elements from ``src`` into ``dest`` byte-for-byte.

    Args:
        dest: Writable C-contiguous buffer of at least ``k * element_size`` bytes.
        k: Number of elements to choose.
        src: C-contiguous buffer holding ``n`` elements.
        n: Number of elements in ``src``.
        element_size: Size of one element in bytes.
        rng: Seed, ``numpy`` generator or :class:`~seqsample.rng.RandomSource`.
        algorithm: Skip algorithm name or descriptor.

    Raises:
        InvalidArgumentError: If ``k > n``, ``element_size`` is not positive,
            ``dest`` is read-only, or either buffer is too small.
    """
    _check_sizes(k, n)
    if element_size <= 0:
        raise InvalidArgumentError(f"element_size must be positive, got {element_size}")

    with _byte_view(src) as src_view, _byte_view(dest) as dest_view:
        if dest_view.readonly:
            raise InvalidArgumentError("dest buffer is read-only")
        if src_view.nbytes < n * element_size:
            raise InvalidArgumentError(
                f"src holds {src_view.nbytes} bytes, need {n * element_size}"
            )
        if dest_view.nbytes < k * element_size:
            raise InvalidArgumentError(
                f"dest holds {dest_view.nbytes} bytes, need {k * element_size}"
            )

        logger.debug("Choosing %d of %d elements of %d bytes", k, n, element_size)
        selected = sample_indices(k, n, rng=rng, algorithm=algorithm)
        for i, index in enumerate(selected):
            start = index * element_size
            offset = i * element_size
            dest_view[offset : offset + element_size] = src_view[start : start + element_size]
