"""Evolution engine: confirmations -> mutation count -> categories -> history."""

from __future__ import annotations

import logging
import time

from protozoa.config.schema import EvolutionOptions
from protozoa.core.errors import EngineNotInitializedError, MutationServiceUnavailableError
from protozoa.core.seeding import seed_from_values
from protozoa.core.types import BlockData, MutationCategory
from protozoa.creature.models import Creature
from protozoa.evolution.constants import CATEGORY_WEIGHTS, EvolutionStage
from protozoa.evolution.models import EvolutionEntry, EvolutionResult, Mutation
from protozoa.evolution.mutations import MutationContext, MutationService
from protozoa.evolution.rules import (
    evolution_stage,
    highest_milestone,
    mutation_probability,
    should_receive_guaranteed_mutation,
    stage_value,
)
from protozoa.evolution.tracker import EvolutionTracker
from protozoa.group.classification import calculate_tier
from protozoa.rng.distributions import DistributionService, WeightedDistribution
from protozoa.rng.streams import RNGStream, RNGSystem

logger = logging.getLogger(__name__)

STRATEGY = "DEFAULT"


class EvolutionEngine:
    def __init__(
        self,
        options: EvolutionOptions | None = None,
        tracker: EvolutionTracker | None = None,
        mutation_service: MutationService | None = None,
    ) -> None:
        self.options = options or EvolutionOptions()
        self.tracker = tracker or EvolutionTracker()
        self.mutation_service = mutation_service

    def category_distribution(self, stream: RNGStream) -> WeightedDistribution[MutationCategory]:
        items: list[MutationCategory] = []
        weights: list[float] = []
        for category, weight in CATEGORY_WEIGHTS:
            if category is MutationCategory.EXOTIC and not self.options.enable_exotic_mutations:
                continue
            if category is MutationCategory.SUBCLASS and not self.options.enable_subclass_mutations:
                continue
            items.append(category)
            weights.append(weight)
        return DistributionService(stream).weighted(items, weights)

    def mutation_count(
        self, stage: EvolutionStage, probability: float, guaranteed: bool, stream: RNGStream,
    ) -> int:
        if stage is EvolutionStage.NASCENT:
            base = 1 if stream.next_bool(probability) else 0
        else:
            base = max(1, stage_value(stage) // 2)
        if guaranteed:
            base = max(base, 1)
        return min(self.options.max_mutations_per_event, base)

    def evolve_creature(self, creature: Creature, block: BlockData) -> EvolutionResult:
        """Run one evolution event and append it to the creature's history.

        Raises MutationServiceUnavailableError or EngineNotInitializedError
        before touching the creature.
        """
        service = self.mutation_service
        if service is None or not service.is_available():
            raise MutationServiceUnavailableError("Mutation service is not available")
        if creature.seed is None:
            raise EngineNotInitializedError(f"Creature {creature.id} has no seed")

        confirmations = block.confirmations
        stream = RNGSystem(seed_from_values(creature.seed, confirmations)).get_stream("mutation")
        stage = evolution_stage(confirmations)
        probability = mutation_probability(confirmations)
        timestamp = block.timestamp or int(time.time())
        old_tier = creature.tier

        applied: list[Mutation] = []
        with self.tracker.writer(creature.id):
            history = self.tracker.get_evolution_history(creature.id)
            guaranteed = should_receive_guaranteed_mutation(confirmations, history)
            count = self.mutation_count(stage, probability, guaranteed, stream)
            categories = self.category_distribution(stream)
            context = MutationContext(
                confirmations=confirmations, stream=stream, is_guaranteed=guaranteed,
            )

            for _ in range(count):
                category = categories.sample()
                try:
                    mutation = service.generate_mutation(creature, category, context)
                    if mutation is None:
                        continue
                    service.apply_mutation(creature, mutation)
                except Exception:
                    logger.warning(
                        "Skipping %s mutation for %s", category.value, creature.id, exc_info=True,
                    )
                    continue
                applied.append(mutation)

            milestone = highest_milestone(confirmations) if guaranteed else None
            self.tracker.track_evolution(EvolutionEntry(
                creature_id=creature.id,
                block_number=creature.block_number,
                confirmations=confirmations,
                mutations=tuple(applied),
                timestamp=timestamp,
                milestone=milestone,
                is_guaranteed=guaranteed,
            ))

        new_tier = calculate_tier(creature.groups.current_total())
        if new_tier is not old_tier:
            creature.tier = new_tier
            creature.touch()
        else:
            new_tier = None

        logger.info(
            "Evolved %s at %d confirmations: %d/%d mutations (%s)",
            creature.id, confirmations, len(applied), count, stage.value,
        )
        return EvolutionResult(
            creature_id=creature.id,
            block_number=creature.block_number,
            confirmations=confirmations,
            mutations=applied,
            timestamp=timestamp,
            strategy=STRATEGY,
            stage=stage.value,
            probability=probability,
            milestone=milestone,
            is_guaranteed=guaranteed,
            new_tier=new_tier,
        )
