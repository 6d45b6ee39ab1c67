"""Tests for protozoa.evolution.rules."""

from __future__ import annotations

import pytest

from protozoa.core.types import Rarity
from protozoa.evolution.constants import EvolutionStage
from protozoa.evolution.models import EvolutionEntry
from protozoa.evolution.rules import (
    available_mutation_rarities,
    evolution_stage,
    highest_milestone,
    mutation_probability,
    should_receive_guaranteed_mutation,
    stage_value,
)


def _entry(confirmations: int, milestone: int | None) -> EvolutionEntry:
    return EvolutionEntry(
        creature_id="c", block_number=1, confirmations=confirmations,
        mutations=(), timestamp=0, milestone=milestone, is_guaranteed=milestone is not None,
    )


class TestProbabilityAndStage:
    @pytest.mark.parametrize(
        "confirmations, probability",
        [
            (0, 0.01), (9_999, 0.01), (10_000, 0.10), (25_000, 0.25), (50_000, 0.30),
            (100_000, 0.35), (250_000, 0.40), (500_000, 0.50), (1_000_000, 0.60),
            (5_000_000, 0.60),
        ],
    )
    def test_mutation_probability(self, confirmations: int, probability: float):
        assert mutation_probability(confirmations) == probability

    @pytest.mark.parametrize(
        "confirmations, stage",
        [
            (0, EvolutionStage.NASCENT),
            (10_000, EvolutionStage.EMERGING),
            (24_999, EvolutionStage.EMERGING),
            (25_000, EvolutionStage.DEVELOPING),
            (50_000, EvolutionStage.MATURE),
            (100_000, EvolutionStage.EVOLVED),
            (250_000, EvolutionStage.ASCENDANT),
            (500_000, EvolutionStage.AWAKENED),
            (1_000_000, EvolutionStage.TRANSCENDENT),
        ],
    )
    def test_evolution_stage(self, confirmations: int, stage: EvolutionStage):
        assert evolution_stage(confirmations) is stage

    def test_stage_values(self):
        assert [stage_value(s) for s in EvolutionStage] == [0, 0, 1, 2, 3, 4, 5, 6]


class TestMilestones:
    def test_highest_milestone(self):
        assert highest_milestone(9_999) is None
        assert highest_milestone(10_000) == 10_000
        assert highest_milestone(60_000) == 50_000
        assert highest_milestone(2_000_000) == 1_000_000

    def test_guarantee_only_on_first_crossing(self):
        assert not should_receive_guaranteed_mutation(5_000, [])
        assert should_receive_guaranteed_mutation(10_000, [])
        assert not should_receive_guaranteed_mutation(12_000, [_entry(10_000, 10_000)])
        assert should_receive_guaranteed_mutation(25_000, [_entry(10_000, 10_000)])

    def test_available_rarities(self):
        assert available_mutation_rarities(0) == (Rarity.COMMON,)
        assert available_mutation_rarities(120_000) == (Rarity.COMMON, Rarity.UNCOMMON, Rarity.RARE)
        assert available_mutation_rarities(1_000_000) == (Rarity.EPIC, Rarity.LEGENDARY, Rarity.MYTHIC)
