"""Exception hierarchy for seqsample."""

from __future__ import annotations


class SamplingError(Exception):
    """Base class for all errors raised by seqsample."""


class InvalidArgumentError(SamplingError, ValueError):
    """Raised when sizes or arguments violate a precondition.

    The most common case is asking for a sample larger than the population.
    """


class ExhaustedError(SamplingError, RuntimeError):
    """Raised when a session is asked for a selection after its run is complete."""


class AllocationFailureError(SamplingError, MemoryError):
    """Raised when per-session algorithm state cannot be allocated."""
