"""Mulberry32 — the canonical 32-bit generator.

Every implementation of the engine must produce the same sequence for the
same seed, so the arithmetic below is spelled out step by step with
explicit 32-bit masking.  Multiplications keep only the low 32 bits of the
full product.
"""

from __future__ import annotations

from protozoa.core.seeding import UINT32_MASK, to_uint32

INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0


class Mulberry32:
    """Stateful Mulberry32 generator.  ``state`` is the only persisted value."""

    __slots__ = ("state",)

    def __init__(self, seed: int) -> None:
        self.state = to_uint32(seed)

    def next_uint32(self) -> int:
        """Advance the state and return the next raw 32-bit output."""
        self.state = (self.state + INCREMENT) & UINT32_MASK
        t = self.state
        t = ((t ^ (t >> 15)) * (t | 1)) & UINT32_MASK
        t = (t ^ ((t + (((t ^ (t >> 7)) * (t | 61)) & UINT32_MASK)) & UINT32_MASK)) & UINT32_MASK
        return (t ^ (t >> 14)) & UINT32_MASK

    def next_float(self) -> float:
        """Next value in ``[0, 1)``."""
        return self.next_uint32() / TWO_POW_32
