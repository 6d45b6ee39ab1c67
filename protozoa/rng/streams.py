"""Named RNG streams and the per-creature RNG system.

An :class:`RNGSystem` is a context object: one per creature/session, passed
explicitly to whatever needs randomness.  There is no module-level
instance.  Streams are owned by exactly one system and never shared.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence, TypeVar

from protozoa.core.errors import EmptySequenceError
from protozoa.core.seeding import derive_seed, to_uint32, utf16_units
from protozoa.core.types import BlockData
from protozoa.rng.mulberry import Mulberry32

logger = logging.getLogger(__name__)

T = TypeVar("T")

STREAM_NAMES: tuple[str, ...] = (
    "traits",
    "physics",
    "formation",
    "visual",
    "subclass",
    "ability",
    "mutation",
    "particle",
    "behavior",
    "general",
)


def stream_seed(seed: int, stream_name: str) -> int:
    """``seed XOR sum(charCode)`` — an additive fold, not a positional hash."""
    return to_uint32(seed ^ sum(utf16_units(stream_name)))


class RNGStream:
    """An independent, stateful random sequence keyed by ``(seed, name)``."""

    def __init__(self, seed: int, stream_name: str) -> None:
        self._name = stream_name
        self._generator = Mulberry32(stream_seed(seed, stream_name))

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> int:
        return self._generator.state

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def next(self) -> float:
        """Next float in ``[0, 1)``."""
        return self._generator.next_float()

    def next_int(self, min_value: int, max_value: int) -> int:
        """Integer in ``[min_value, max_value]`` (both inclusive)."""
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.next() < probability

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def next_item(self, items: Sequence[T]) -> T:
        if not items:
            raise EmptySequenceError("Cannot get a random item from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def next_items(self, items: Sequence[T], count: int) -> list[T]:
        """Shuffle a copy, then take the first *count* items."""
        if not items:
            raise EmptySequenceError("Cannot get random items from an empty sequence")
        if count < 0:
            raise ValueError("Count must be a non-negative number")
        return self.shuffle(items)[:count]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher–Yates from the last index down to 1.  Returns a new list."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result


class RNGSystem:
    """Owns the active seed and the fixed catalogue of named streams."""

    def __init__(self, seed: int, block: BlockData | None = None) -> None:
        self._seed = to_uint32(seed)
        self._block = block
        self._streams: dict[str, RNGStream] = {}
        for name in STREAM_NAMES:
            self.create_stream(name)

    @classmethod
    def from_block(cls, block: BlockData) -> RNGSystem:
        """Seed from block data (raises on malformed hash/nonce)."""
        return cls(derive_seed(block), block=block)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def block(self) -> BlockData | None:
        return self._block

    def get_stream(self, name: str) -> RNGStream:
        """Return the named stream.

        Raises ``KeyError`` listing the available streams for unknown names.
        """
        try:
            return self._streams[name]
        except KeyError:
            available = ", ".join(self._streams)
            raise KeyError(
                f"RNG stream {name!r} not found. Available streams: {available}"
            ) from None

    def create_stream(self, name: str) -> RNGStream:
        """Create (or recreate from scratch) the named stream."""
        stream = RNGStream(self._seed, name)
        self._streams[name] = stream
        return stream

    def set_seed(self, seed: int) -> None:
        """Re-seed: every existing stream is discarded and recreated."""
        self._seed = to_uint32(seed)
        names = list(self._streams)
        self._streams.clear()
        for name in names:
            self.create_stream(name)
        logger.debug("RNG system re-seeded with %08x", self._seed)

    def stream_names(self) -> list[str]:
        return list(self._streams)
