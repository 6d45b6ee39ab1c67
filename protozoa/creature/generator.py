"""Creature generation: block -> seed -> groups -> tier -> traits -> class."""

from __future__ import annotations

import logging

from protozoa.config.schema import EngineConfig
from protozoa.core.seeding import derive_seed, seed_key
from protozoa.core.types import BlockData
from protozoa.creature.models import Creature, creature_id
from protozoa.group.classes import ClassAssignmentService
from protozoa.group.classification import calculate_tier
from protozoa.group.distribution import ParticleDistributionService
from protozoa.group.traits import TraitAssignmentService, TraitRepository

logger = logging.getLogger(__name__)


class CreatureGenerator:
    """Stateless apart from its collaborators; safe to share across blocks."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        repository: TraitRepository | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._particles = ParticleDistributionService()
        self._traits = TraitAssignmentService(repository=repository)
        self._classes = ClassAssignmentService()

    def generate(self, block: BlockData) -> Creature:
        """Raises InvalidBlockDataError / ConfigurationError."""
        seed = derive_seed(block)
        key = seed_key(seed)

        groups = self._particles.distribute_particles(
            self._config.generation.total_particles, key,
        )
        tier = calculate_tier(groups.total_particles)
        for group in groups:
            group.traits = self._traits.assign_traits(
                group.role, tier, f"{key}-{group.role.value}",
            )
        class_assignment = self._classes.assign_class(groups, f"{key}-class")

        creature = Creature(
            id=creature_id(block.height, seed),
            block_number=block.height,
            seed=seed,
            groups=groups,
            tier=tier,
            class_assignment=class_assignment,
        )
        logger.info(
            "Generated %s (%s, %s)",
            creature.id, tier.value, class_assignment.subclass.name,
        )
        return creature
