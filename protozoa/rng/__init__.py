"""Seeded random streams, keyed randomness and distributions."""

from protozoa.rng.distributions import (
    Distribution,
    DistributionService,
    DistributionType,
    WeightedDistribution,
)
from protozoa.rng.keyed import HashedKeyRandom, KeyedRandom
from protozoa.rng.mulberry import Mulberry32
from protozoa.rng.streams import STREAM_NAMES, RNGStream, RNGSystem, stream_seed

__all__ = [
    "Distribution",
    "DistributionService",
    "DistributionType",
    "HashedKeyRandom",
    "KeyedRandom",
    "Mulberry32",
    "RNGStream",
    "RNGSystem",
    "STREAM_NAMES",
    "WeightedDistribution",
    "stream_seed",
]
