"""seqsample — sequential random sampling without replacement.

Selects ``n`` of ``N`` records in increasing index order, one skip at a time,
without materializing the population (Vitter's Algorithms A and D).

Public API
----------
The entire usable surface is importable directly from ``seqsample``::

    from seqsample import SamplingSession, sample_indices, select_stream
    from seqsample import choose, choose_bytes
    from seqsample import NumpyRandomSource, SamplerConfig, load_config
"""

from __future__ import annotations

# Algorithms and registry
from seqsample.algorithms import (
    ALGORITHMS,
    Counter,
    SkipAlgorithm,
    VitterA,
    VitterD,
    available_algorithms,
    get_algorithm,
    vitter_a,
    vitter_d,
)

# Batch selection
from seqsample.choose import choose, choose_bytes

# Configuration
from seqsample.config import SamplerConfig, load_config

# Errors
from seqsample.errors import (
    AllocationFailureError,
    ExhaustedError,
    InvalidArgumentError,
    SamplingError,
)

# Random sources
from seqsample.rng import NumpyRandomSource, RandomSource, as_random_source

# Session driver and functional API
from seqsample.session import SamplingSession, sample_indices, select_stream

__version__ = "0.1.0"

__all__ = [
    # Primary abstractions
    "SamplingSession",
    "SkipAlgorithm",
    "RandomSource",
    "Counter",
    # Algorithms
    "VitterA",
    "VitterD",
    "vitter_a",
    "vitter_d",
    "ALGORITHMS",
    "available_algorithms",
    "get_algorithm",
    # Functional API
    "sample_indices",
    "select_stream",
    "choose",
    "choose_bytes",
    # Random sources
    "NumpyRandomSource",
    "as_random_source",
    # Configuration
    "SamplerConfig",
    "load_config",
    # Errors
    "SamplingError",
    "InvalidArgumentError",
    "ExhaustedError",
    "AllocationFailureError",
    "__version__",
]
