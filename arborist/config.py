"""Configuration for the rooting and metrics routines."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RootingConfig:
    """Tunable constants shared by the rerooting engine and the strategies."""

    # Weight used for missing or non-finite branch lengths in distance sums.
    default_branch_length: float = 1.0
    # Number of intervals along each edge; samples are i / n for i in 0..n.
    least_squares_samples: int = 20
    synthetic_root_prefix: str = "root"
    ultrametric_tolerance: float = 1e-6


DEFAULT_CONFIG = RootingConfig()


def resolve_config(config: Optional[RootingConfig]) -> RootingConfig:
    return config if config is not None else DEFAULT_CONFIG
