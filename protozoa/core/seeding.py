"""Deterministic seeding utilities.

All randomness in the engine flows from one 32-bit seed per creature so
that generation and evolution are reproducible from the block alone, in
any implementation.  Every value is reduced modulo 2**32 with explicit
masking; Python's unbounded ints are never allowed to leak into a seed.
"""

from __future__ import annotations

import string

from protozoa.core.errors import InvalidBlockDataError
from protozoa.core.types import BlockData

UINT32_MASK = 0xFFFFFFFF
HASH_PREFIX_LENGTH = 8

_HEX_DIGITS = frozenset(string.hexdigits)


def to_uint32(value: int) -> int:
    """Reduce an integer modulo 2**32."""
    return value & UINT32_MASK


def to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of *value* as a signed integer."""
    value &= UINT32_MASK
    return value - 0x1_0000_0000 if value >= 0x8000_0000 else value


def seed_key(seed: int) -> str:
    """Decimal key for keyed draws; high-bit seeds render negative."""
    return str(to_int32(seed))


def utf16_units(text: str) -> list[int]:
    """Return the UTF-16 code units of *text* (what ``charCodeAt`` sees)."""
    raw = text.encode("utf-16-le")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


def _parse_hex(text: str, field: str) -> int:
    digits = text[2:] if text[:2].lower() == "0x" else text
    if not digits or any(ch not in _HEX_DIGITS for ch in digits):
        raise InvalidBlockDataError(f"Block {field} is not valid hex: {text!r}")
    return int(digits, 16)


def parse_nonce(nonce: int | str) -> int:
    """Return the nonce as an unsigned 32-bit value.

    Integers are used directly; strings are parsed as base-16.
    """
    if isinstance(nonce, bool):
        raise InvalidBlockDataError("Block nonce must be an integer or hex string.")
    if isinstance(nonce, int):
        if nonce < 0:
            raise InvalidBlockDataError(f"Block nonce must be non-negative (got {nonce}).")
        return to_uint32(nonce)
    if isinstance(nonce, str):
        return to_uint32(_parse_hex(nonce.strip(), "nonce"))
    raise InvalidBlockDataError(
        f"Block nonce must be an integer or hex string (got {type(nonce).__name__})."
    )


def hash_prefix(block_hash: str) -> int:
    """Integer value of the first 8 hex characters of *block_hash*."""
    if not isinstance(block_hash, str) or len(block_hash) < HASH_PREFIX_LENGTH:
        raise InvalidBlockDataError(
            f"Block hash must have at least {HASH_PREFIX_LENGTH} hex characters."
        )
    return _parse_hex(block_hash[:HASH_PREFIX_LENGTH], "hash")


def derive_seed(block: BlockData) -> int:
    """Derive the creature seed: ``nonce XOR hash[0:8] XOR timestamp``.

    Raises :class:`InvalidBlockDataError` on malformed input; a wrong seed
    would silently produce a different but valid-looking creature.
    """
    timestamp = block.timestamp
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise InvalidBlockDataError("Block timestamp must be an integer.")
    if timestamp < 0:
        raise InvalidBlockDataError(f"Block timestamp must be non-negative (got {timestamp}).")
    return (
        parse_nonce(block.nonce)
        ^ hash_prefix(block.hash)
        ^ to_uint32(timestamp)
    )


def hash_string(text: str) -> int:
    """Classic ``h * 31 + c`` string fold, wrapped to int32, absolute value."""
    h = 0
    for unit in utf16_units(text):
        h = to_uint32((h << 5) - h + unit)
    return abs(to_int32(h))


def seed_from_string(text: str) -> int:
    """Seed for an arbitrary string key."""
    return to_uint32(hash_string(text))


def seed_from_values(*values: int | str) -> int:
    """XOR-combine several values into one seed.

    Strings go through :func:`hash_string`; integers are reduced to 32 bits.
    """
    seed = 0
    for value in values:
        if isinstance(value, str):
            seed ^= hash_string(value)
        else:
            seed ^= to_uint32(int(value))
    return to_uint32(seed)
