"""Probability distributions sampled through one RNG stream.

Distributions are frozen value objects.  They hold no random state of
their own; every draw advances the stream they were built over, so the
order of ``sample()`` calls is part of the reproducibility contract.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar

import numpy as np

from protozoa.rng.streams import RNGStream

T = TypeVar("T")


class DistributionType(str, Enum):
    UNIFORM = "UNIFORM"
    NORMAL = "NORMAL"
    EXPONENTIAL = "EXPONENTIAL"
    POISSON = "POISSON"
    BINOMIAL = "BINOMIAL"
    WEIGHTED = "WEIGHTED"


# ---------------------------------------------------------------------------
# Distribution value objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Distribution:
    """Numeric distribution: a type tag, its parameters, and a bound sampler."""

    type: DistributionType
    params: dict[str, float]
    _sampler: Callable[[], float] = field(repr=False, compare=False)

    def sample(self) -> float:
        return self._sampler()

    def sample_n(self, n: int) -> np.ndarray:
        """``n`` sequential samples (same order as ``n`` calls to ``sample``)."""
        return np.fromiter((self._sampler() for _ in range(n)), dtype=np.float64, count=n)


@dataclass(frozen=True)
class WeightedDistribution(Generic[T]):
    """Discrete distribution over arbitrary items."""

    items: tuple[T, ...]
    weights: tuple[float, ...]
    cumulative: np.ndarray = field(repr=False, compare=False)
    _stream: RNGStream = field(repr=False, compare=False)

    type: DistributionType = DistributionType.WEIGHTED

    @property
    def total_weight(self) -> float:
        return float(self.cumulative[-1])

    def sample(self) -> T:
        r = self.total_weight * self._stream.next()
        # first index whose cumulative weight >= r
        idx = int(np.searchsorted(self.cumulative, r, side="left"))
        if idx >= len(self.items):
            return self.items[-1]
        return self.items[idx]

    def sample_n(self, n: int) -> list[T]:
        return [self.sample() for _ in range(n)]


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

class DistributionService:
    """Builds distributions bound to *stream*."""

    def __init__(self, stream: RNGStream) -> None:
        self._stream = stream

    @property
    def stream(self) -> RNGStream:
        return self._stream

    def uniform(self, min_value: float, max_value: float) -> Distribution:
        stream = self._stream

        def sample() -> float:
            return min_value + stream.next() * (max_value - min_value)

        return Distribution(
            DistributionType.UNIFORM, {"min": min_value, "max": max_value}, sample
        )

    def normal(self, mean: float, standard_deviation: float) -> Distribution:
        """Box–Muller transform, one output per pair of draws."""
        stream = self._stream

        def sample() -> float:
            u1 = stream.next()
            u2 = stream.next()
            # ln(0) is undefined; u1 == 0.0 maps to an infinite radius
            radius = math.sqrt(-2.0 * math.log(u1)) if u1 > 0.0 else math.inf
            z0 = radius * math.cos(2.0 * math.pi * u2)
            return mean + standard_deviation * z0

        return Distribution(
            DistributionType.NORMAL,
            {"mean": mean, "standard_deviation": standard_deviation},
            sample,
        )

    def exponential(self, lam: float) -> Distribution:
        if lam <= 0:
            raise ValueError(f"Exponential rate must be positive (got {lam}).")
        stream = self._stream

        def sample() -> float:
            u = stream.next()
            return -math.log(u) / lam if u > 0.0 else math.inf

        return Distribution(DistributionType.EXPONENTIAL, {"lambda": lam}, sample)

    def poisson(self, lam: float) -> Distribution:
        """Knuth: multiply uniforms until the product drops to ``e**-lam``."""
        if lam < 0:
            raise ValueError(f"Poisson mean must be non-negative (got {lam}).")
        stream = self._stream
        limit = math.exp(-lam)

        def sample() -> float:
            k = 0
            p = 1.0
            while True:
                k += 1
                p *= stream.next()
                if p <= limit:
                    break
            return float(k - 1)

        return Distribution(DistributionType.POISSON, {"lambda": lam}, sample)

    def binomial(self, n: int, p: float) -> Distribution:
        if n < 0:
            raise ValueError(f"Binomial trial count must be non-negative (got {n}).")
        stream = self._stream

        def sample() -> float:
            return float(sum(1 for _ in range(n) if stream.next_bool(p)))

        return Distribution(DistributionType.BINOMIAL, {"n": n, "p": p}, sample)

    def weighted(self, items: Sequence[T], weights: Sequence[float]) -> WeightedDistribution[T]:
        """Weighted-discrete choice; cumulative weights are precomputed."""
        if len(items) != len(weights):
            raise ValueError("Items and weights must have the same length")
        if not items:
            raise ValueError("Weighted distribution needs at least one item")
        if any(w < 0 for w in weights):
            raise ValueError("Weights must be non-negative")
        # np.cumsum adds left to right, matching a sequential running sum
        cumulative = np.cumsum(np.asarray(weights, dtype=np.float64))
        if cumulative[-1] <= 0:
            raise ValueError("Total weight must be positive")
        return WeightedDistribution(
            items=tuple(items),
            weights=tuple(float(w) for w in weights),
            cumulative=cumulative,
            _stream=self._stream,
        )

    def describe(self, dist: Distribution | WeightedDistribution[Any]) -> dict[str, Any]:
        """JSON-friendly summary of a distribution."""
        if isinstance(dist, WeightedDistribution):
            return {"type": dist.type.value, "items": list(dist.items), "weights": list(dist.weights)}
        return {"type": dist.type.value, **dist.params}
