"""Sampler configuration objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import ConfigKeyError, ValidationError

from seqsample.algorithms import ALGORITHMS, DEFAULT_ALPHA_INVERSE, available_algorithms
from seqsample.errors import InvalidArgumentError


@dataclass
class SamplerConfig:
    """Configuration for building a :class:`~seqsample.session.SamplingSession`.

    Attributes:
        algorithm: Registered skip algorithm name (``vitter_a`` or ``vitter_d``).
        seed: Random seed; ``None`` draws fresh OS entropy.
        alpha_inverse: Algorithm D hands over to Algorithm A once
            ``alpha_inverse * remaining_sample > remaining_records``.
    """

    algorithm: str = "vitter_d"
    seed: Optional[int] = None
    alpha_inverse: float = DEFAULT_ALPHA_INVERSE

    def validate(self) -> SamplerConfig:
        if self.algorithm not in ALGORITHMS:
            raise InvalidArgumentError(
                f"Unknown algorithm {self.algorithm!r}; "
                f"available: {', '.join(available_algorithms())}"
            )
        if self.alpha_inverse <= 0:
            raise InvalidArgumentError(
                f"alpha_inverse must be positive, got {self.alpha_inverse}"
            )
        return self


def load_config(
    source: Union[Mapping[str, Any], DictConfig, str, Path, None] = None,
) -> SamplerConfig:
    """Merge ``source`` over the default configuration and validate it.

    Args:
        source: A mapping, an OmegaConf ``DictConfig``, or a path to a YAML
            file.  Keys not present keep their defaults.

    Returns:
        A validated :class:`SamplerConfig`.
    """
    schema = OmegaConf.structured(SamplerConfig)
    if source is None:
        overrides = OmegaConf.create({})
    elif isinstance(source, (str, Path)):
        overrides = OmegaConf.load(source)
    elif isinstance(source, DictConfig):
        overrides = source
    else:
        overrides = OmegaConf.create(dict(source))
    try:
        merged = OmegaConf.merge(schema, overrides)
    except (ConfigKeyError, ValidationError) as exc:
        raise InvalidArgumentError(f"Invalid sampler configuration: {exc}") from exc
    config = OmegaConf.to_object(merged)
    return config.validate()
