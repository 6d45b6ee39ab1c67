"""Tests for protozoa.evolution.engine and the reference mutation service."""

from __future__ import annotations

import logging

import pytest

from protozoa.config.schema import EvolutionOptions
from protozoa.core.errors import EngineNotInitializedError, MutationServiceUnavailableError
from protozoa.core.types import BlockData, MutationCategory, Rarity, Tier
from protozoa.creature.generator import CreatureGenerator
from protozoa.creature.models import Creature
from protozoa.evolution.constants import ATTRIBUTE_BONUS_RANGES, EvolutionStage
from protozoa.evolution.engine import EvolutionEngine
from protozoa.evolution.models import Mutation
from protozoa.evolution.mutations import MutationContext, ReferenceMutationService
from protozoa.evolution.tracker import EvolutionTracker
from protozoa.rng.streams import RNGStream


# ── helpers ──────────────────────────────────────────────────────────


BLOCK = BlockData(
    height=840_000,
    hash="00000000000000000002a7c4c1e48d76c5a37902165a270156b7a8d72728a054",
    nonce=3_932_395_645,
    timestamp=1_713_571_767,
)


class _RecordingService:
    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.categories: list[MutationCategory] = []

    def is_available(self) -> bool:
        return self.available

    def generate_mutation(self, creature, category, context) -> Mutation:
        self.categories.append(category)
        return Mutation(
            id=f"{creature.id}-{len(self.categories)}",
            category=category,
            rarity=Rarity.COMMON,
            confirmations=context.confirmations,
        )

    def apply_mutation(self, creature, mutation) -> None:
        creature.mutations.append(mutation)


class _FailingService(_RecordingService):
    def generate_mutation(self, creature, category, context) -> Mutation:
        raise RuntimeError("content pool offline")


class _ShrinkingService(_RecordingService):
    """Sets every group to 60 particles (total 300 -> TIER_4)."""

    def apply_mutation(self, creature, mutation) -> None:
        for group in creature.groups:
            group.particle_count = 60
        creature.groups.total_particles = 300
        creature.mutations.append(mutation)


def _creature() -> Creature:
    return CreatureGenerator().generate(BLOCK)


def _engine(service=None, **options) -> EvolutionEngine:
    return EvolutionEngine(
        EvolutionOptions(**options), EvolutionTracker(),
        service if service is not None else _RecordingService(),
    )


def _at(confirmations: int) -> BlockData:
    return BLOCK.with_confirmations(confirmations)


# ── preconditions ────────────────────────────────────────────────────


class TestPreconditions:
    def test_missing_service_raises(self):
        engine = EvolutionEngine(EvolutionOptions(), EvolutionTracker(), None)
        with pytest.raises(MutationServiceUnavailableError):
            engine.evolve_creature(_creature(), _at(10_000))

    def test_unavailable_service_raises(self):
        with pytest.raises(MutationServiceUnavailableError):
            _engine(_RecordingService(available=False)).evolve_creature(_creature(), _at(10_000))

    def test_unavailable_is_an_engine_not_initialized_error(self):
        assert issubclass(MutationServiceUnavailableError, EngineNotInitializedError)

    def test_creature_without_seed_raises(self):
        creature = _creature()
        creature.seed = None
        with pytest.raises(EngineNotInitializedError):
            _engine().evolve_creature(creature, _at(10_000))


# ── mutation count and guarantees ────────────────────────────────────


class TestEvolveCreature:
    def test_first_crossing_is_guaranteed(self):
        engine = _engine()
        creature = _creature()
        result = engine.evolve_creature(creature, _at(10_000))
        assert result.is_guaranteed
        assert result.milestone == 10_000
        assert result.stage == EvolutionStage.EMERGING.value
        assert result.probability == 0.10
        assert result.strategy == "DEFAULT"
        assert len(result.mutations) == 1

        again = engine.evolve_creature(creature, _at(12_000))
        assert not again.is_guaranteed
        assert again.milestone is None
        assert len(again.mutations) == 1

    def test_count_scales_with_stage_and_is_capped(self):
        assert len(_engine().evolve_creature(_creature(), _at(1_000_000)).mutations) == 3
        capped = _engine(max_mutations_per_event=2)
        assert len(capped.evolve_creature(_creature(), _at(1_000_000)).mutations) == 2
        assert len(_engine().evolve_creature(_creature(), _at(100_000)).mutations) == 1
        assert len(_engine().evolve_creature(_creature(), _at(500_000)).mutations) == 2

    @pytest.mark.parametrize("stage, expected", [
        (EvolutionStage.EMERGING, 1),
        (EvolutionStage.DEVELOPING, 1),
        (EvolutionStage.MATURE, 1),
        (EvolutionStage.EVOLVED, 1),
        (EvolutionStage.ASCENDANT, 2),
        (EvolutionStage.AWAKENED, 2),
        (EvolutionStage.TRANSCENDENT, 3),
    ])
    def test_count_per_stage(self, stage: EvolutionStage, expected: int):
        stream = RNGStream(1, "mutation")
        assert _engine().mutation_count(stage, 0.0, False, stream) == expected

    def test_nascent_draws_at_most_one(self):
        result = _engine().evolve_creature(_creature(), _at(500))
        assert len(result.mutations) <= 1
        assert not result.is_guaranteed

    def test_history_entry_appended(self):
        engine = _engine()
        creature = _creature()
        engine.evolve_creature(creature, _at(10_000))
        engine.evolve_creature(creature, _at(50_000))
        history = engine.tracker.get_evolution_history(creature.id)
        assert [e.milestone for e in history] == [10_000, 50_000]
        assert engine.tracker.get_total_mutations(creature.id) == len(creature.mutations)

    def test_same_block_same_trajectory(self):
        a, b = _RecordingService(), _RecordingService()
        for service in (a, b):
            engine = _engine(service)
            creature = _creature()
            for confirmations in (10_000, 50_000, 1_000_000):
                engine.evolve_creature(creature, _at(confirmations))
        assert a.categories == b.categories

    def test_exotic_and_subclass_flags(self):
        stream = RNGStream(1, "mutation")
        default = _engine().category_distribution(stream)
        assert MutationCategory.EXOTIC not in default.items
        assert MutationCategory.SUBCLASS in default.items
        flipped = _engine(enable_exotic_mutations=True, enable_subclass_mutations=False)
        items = flipped.category_distribution(stream).items
        assert MutationCategory.EXOTIC in items
        assert MutationCategory.SUBCLASS not in items

    def test_failed_mutations_are_skipped(self, caplog: pytest.LogCaptureFixture):
        engine = _engine(_FailingService())
        creature = _creature()
        with caplog.at_level(logging.WARNING, logger="protozoa.evolution.engine"):
            result = engine.evolve_creature(creature, _at(10_000))
        assert result.mutations == []
        assert "Skipping" in caplog.text
        # the milestone is still consumed
        history = engine.tracker.get_evolution_history(creature.id)
        assert history[0].milestone == 10_000
        assert not engine.evolve_creature(creature, _at(11_000)).is_guaranteed

    def test_new_tier_reported_when_total_changes(self):
        creature = _creature()
        assert creature.tier is Tier.TIER_1
        result = _engine(_ShrinkingService()).evolve_creature(creature, _at(10_000))
        assert result.new_tier is Tier.TIER_4
        assert creature.tier is Tier.TIER_4

    def test_new_tier_absent_when_unchanged(self):
        assert _engine().evolve_creature(_creature(), _at(10_000)).new_tier is None


# ── reference service ────────────────────────────────────────────────


class TestReferenceMutationService:
    def _context(self, confirmations: int) -> MutationContext:
        return MutationContext(confirmations=confirmations, stream=RNGStream(1, "mutation"))

    def test_attribute_mutation_in_range(self):
        service = ReferenceMutationService()
        creature = _creature()
        mutation = service.generate_mutation(creature, MutationCategory.ATTRIBUTE, self._context(1_000_000))
        assert mutation.rarity in (Rarity.EPIC, Rarity.LEGENDARY, Rarity.MYTHIC)
        low, high = ATTRIBUTE_BONUS_RANGES[mutation.rarity]
        assert low <= mutation.effect["bonus"] <= high

        group = creature.groups[mutation.target_role]
        before = group.attribute
        service.apply_mutation(creature, mutation)
        assert group.attribute > before
        assert creature.mutations == [mutation]

    def test_particle_mutation_grows_total(self):
        service = ReferenceMutationService()
        creature = _creature()
        mutation = service.generate_mutation(creature, MutationCategory.PARTICLE, self._context(10_000))
        delta = mutation.effect["particle_delta"]
        assert 1 <= delta <= 5
        service.apply_mutation(creature, mutation)
        assert creature.groups.total_particles == 500 + delta
        assert creature.groups.current_total() == 500 + delta

    def test_intensity_scales_effects(self):
        creature = _creature()
        full = ReferenceMutationService(EvolutionOptions(mutation_intensity=1.0))
        mutation = full.generate_mutation(creature, MutationCategory.ABILITY, self._context(0))
        assert mutation.effect["cooldown_reduction"] == pytest.approx(0.10)

    def test_formation_targets_compatible_roles(self):
        service = ReferenceMutationService()
        mutation = service.generate_mutation(_creature(), MutationCategory.FORMATION, self._context(50_000))
        assert mutation.target_role in mutation.compatible_roles

    def test_end_to_end_with_engine(self):
        engine = EvolutionEngine(EvolutionOptions(), EvolutionTracker(), ReferenceMutationService())
        creature = _creature()
        result = engine.evolve_creature(creature, _at(250_000))
        assert len(result.mutations) == 2
        assert creature.mutations == result.mutations
