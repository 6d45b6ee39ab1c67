"""Tests for protozoa.rng — Mulberry32 streams, RNGSystem and keyed random."""

from __future__ import annotations

import pytest

from protozoa.core.errors import EmptySequenceError
from protozoa.core.seeding import derive_seed, seed_from_string
from protozoa.core.types import BlockData
from protozoa.rng import STREAM_NAMES, HashedKeyRandom, Mulberry32, RNGStream, RNGSystem, stream_seed


# ── helpers ──────────────────────────────────────────────────────────


def _draws(stream: RNGStream, n: int = 20) -> list[float]:
    return [stream.next() for _ in range(n)]


# ── Mulberry32 ───────────────────────────────────────────────────────


class TestMulberry32:
    def test_outputs_in_unit_interval(self):
        gen = Mulberry32(42)
        for _ in range(1000):
            value = gen.next_float()
            assert 0.0 <= value < 1.0

    def test_state_stays_32_bit(self):
        gen = Mulberry32(0xFFFFFFFF)
        for _ in range(100):
            gen.next_uint32()
            assert 0 <= gen.state <= 0xFFFFFFFF

    def test_seed_is_reduced(self):
        assert Mulberry32(2**32 + 9).state == 9


# ── RNGStream ────────────────────────────────────────────────────────


class TestRNGStream:
    def test_stream_seed_is_additive_char_fold(self):
        assert stream_seed(0, "ab") == 97 + 98
        assert stream_seed(195, "ab") == 0

    def test_stream_wraps_generator_seeded_from_name(self):
        stream = RNGStream(1234, "traits")
        gen = Mulberry32(stream_seed(1234, "traits"))
        assert _draws(stream, 5) == [gen.next_float() for _ in range(5)]

    def test_known_outputs(self):
        assert _draws(RNGStream(0, "traits"), 3) == [
            0.49158262088894844,
            0.5214218578767031,
            0.6535746788140386,
        ]
        assert RNGStream(12345, "traits").next() == 0.880357407964766

    def test_same_seed_and_name_reproduce(self):
        assert _draws(RNGStream(99, "physics")) == _draws(RNGStream(99, "physics"))

    def test_different_names_diverge(self):
        assert _draws(RNGStream(99, "physics")) != _draws(RNGStream(99, "visual"))

    def test_next_int_is_inclusive(self):
        stream = RNGStream(7, "general")
        values = {stream.next_int(1, 3) for _ in range(500)}
        assert values == {1, 2, 3}

    def test_next_bool_extremes(self):
        stream = RNGStream(7, "general")
        assert not any(stream.next_bool(0.0) for _ in range(50))
        assert all(stream.next_bool(1.0) for _ in range(50))

    def test_shuffle_is_permutation_and_copies(self):
        stream = RNGStream(11, "general")
        items = list(range(20))
        shuffled = stream.shuffle(items)
        assert sorted(shuffled) == items
        assert items == list(range(20))

    def test_shuffle_empty(self):
        assert RNGStream(11, "general").shuffle([]) == []

    def test_next_item_from_sequence(self):
        stream = RNGStream(3, "general")
        assert stream.next_item(["a", "b", "c"]) in {"a", "b", "c"}

    def test_next_items_takes_distinct_prefix(self):
        stream = RNGStream(3, "general")
        picked = stream.next_items([1, 2, 3, 4, 5], 3)
        assert len(picked) == 3
        assert len(set(picked)) == 3

    def test_empty_sequence_raises(self):
        stream = RNGStream(3, "general")
        with pytest.raises(EmptySequenceError):
            stream.next_item([])
        with pytest.raises(EmptySequenceError):
            stream.next_items([], 1)

    def test_negative_count_raises(self):
        with pytest.raises(ValueError):
            RNGStream(3, "general").next_items([1, 2], -1)


# ── RNGSystem ────────────────────────────────────────────────────────


class TestRNGSystem:
    def test_builds_every_catalogue_stream(self):
        system = RNGSystem(5)
        assert system.stream_names() == list(STREAM_NAMES)

    def test_unknown_stream_lists_available(self):
        with pytest.raises(KeyError, match="traits"):
            RNGSystem(5).get_stream("nope")

    def test_streams_are_independent(self):
        system = RNGSystem(5)
        reference = _draws(RNGStream(5, "visual"), 5)
        _draws(system.get_stream("physics"), 50)
        assert _draws(system.get_stream("visual"), 5) == reference

    def test_set_seed_recreates_streams(self):
        system = RNGSystem(5)
        _draws(system.get_stream("traits"), 10)
        system.set_seed(77)
        assert system.seed == 77
        assert _draws(system.get_stream("traits"), 5) == _draws(RNGStream(77, "traits"), 5)

    def test_create_stream_restarts_sequence(self):
        system = RNGSystem(5)
        first = _draws(system.get_stream("ability"), 5)
        system.create_stream("ability")
        assert _draws(system.get_stream("ability"), 5) == first

    def test_from_block_uses_derived_seed(self):
        block = BlockData(height=1, hash="deadbeef" * 8, nonce=12, timestamp=1_700_000_000)
        system = RNGSystem.from_block(block)
        assert system.seed == derive_seed(block)
        assert system.block is block


# ── keyed random ─────────────────────────────────────────────────────


class TestHashedKeyRandom:
    def test_same_key_same_value(self):
        keyed = HashedKeyRandom("particle")
        assert keyed.random_number("123-0") == keyed.random_number("123-0")

    def test_first_draw_of_fresh_stream(self):
        keyed = HashedKeyRandom("particle")
        expected = RNGStream(seed_from_string("123-0"), "particle").next()
        assert keyed.random_number("123-0") == expected

    def test_stream_name_changes_values(self):
        assert HashedKeyRandom("particle").random_number("k") != HashedKeyRandom("traits").random_number("k")

    def test_unknown_stream_rejected(self):
        with pytest.raises(KeyError):
            HashedKeyRandom("nope")
