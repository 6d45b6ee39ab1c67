"""Key-addressed random source used by the group services.

Group services ask for "the random number for key ``<seed>-<suffix>``"
rather than pulling from a shared stream, so each decision is independent
of how many draws happened before it.
"""

from __future__ import annotations

from typing import Protocol

from protozoa.core.seeding import seed_from_string
from protozoa.rng.streams import STREAM_NAMES, RNGStream


class KeyedRandom(Protocol):
    """Anything that maps a string key to a float in ``[0, 1)``."""

    def random_number(self, key: str) -> float: ...


class HashedKeyRandom:
    """First draw of a fresh stream seeded from the hashed key.

    Stateless: the same key always yields the same value.
    """

    def __init__(self, stream_name: str = "general") -> None:
        if stream_name not in STREAM_NAMES:
            raise KeyError(f"Unknown RNG stream: {stream_name!r}")
        self.stream_name = stream_name

    def random_number(self, key: str) -> float:
        return RNGStream(seed_from_string(key), self.stream_name).next()

    def stream_for(self, key: str) -> RNGStream:
        """A fresh stream for *key*, for callers that need several draws."""
        return RNGStream(seed_from_string(key), self.stream_name)
