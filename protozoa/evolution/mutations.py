"""Mutation services.

The engine only decides *how many* mutations and *which categories*; a
:class:`MutationService` turns a category into a concrete change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from protozoa.config.schema import EvolutionOptions
from protozoa.core.types import ROLE_ORDER, MutationCategory, Role
from protozoa.creature.models import Creature
from protozoa.evolution.constants import (
    ABILITY_COOLDOWN_REDUCTIONS,
    ATTRIBUTE_BONUS_RANGES,
    PARTICLE_COUNT_RANGES,
    SUBCLASS_TIER_CHANGE_CHANCES,
)
from protozoa.evolution.models import Mutation
from protozoa.evolution.rules import available_mutation_rarities
from protozoa.group.classification import particle_rarity
from protozoa.group.constants import ROLE_ATTRIBUTE_NAMES
from protozoa.rng.streams import RNGStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MutationContext:
    """What the engine hands a service for one mutation."""

    confirmations: int
    stream: RNGStream
    is_guaranteed: bool = False


class MutationService(Protocol):
    def is_available(self) -> bool: ...

    def generate_mutation(
        self, creature: Creature, category: MutationCategory, context: MutationContext,
    ) -> Mutation | None: ...

    def apply_mutation(self, creature: Creature, mutation: Mutation) -> None: ...


CATEGORY_ROLES: MappingProxyType[MutationCategory, tuple[Role, ...]] = MappingProxyType({
    MutationCategory.ATTRIBUTE: ROLE_ORDER,
    MutationCategory.PARTICLE: ROLE_ORDER,
    MutationCategory.ABILITY: (Role.CORE, Role.CONTROL, Role.ATTACK),
    MutationCategory.BEHAVIOR: ROLE_ORDER,
    MutationCategory.FORMATION: (Role.MOVEMENT, Role.DEFENSE),
    MutationCategory.SYNERGY: ROLE_ORDER,
    MutationCategory.SUBCLASS: ROLE_ORDER,
    MutationCategory.EXOTIC: ROLE_ORDER,
})


class ReferenceMutationService:
    """Deterministic table-driven mutations.

    Every draw comes from ``context.stream``.  Magnitudes are the rarity
    table values scaled by ``2 * mutation_intensity``, so the default
    intensity of 0.5 applies the tables unchanged.
    """

    def __init__(self, options: EvolutionOptions | None = None) -> None:
        self._options = options or EvolutionOptions()

    def is_available(self) -> bool:
        return True

    @property
    def scale(self) -> float:
        return 2 * self._options.mutation_intensity

    def generate_mutation(
        self, creature: Creature, category: MutationCategory, context: MutationContext,
    ) -> Mutation | None:
        stream = context.stream
        compatible = CATEGORY_ROLES[category]
        target = stream.next_item(compatible)
        rarity = stream.next_item(available_mutation_rarities(context.confirmations))

        if category is MutationCategory.ATTRIBUTE:
            low, high = ATTRIBUTE_BONUS_RANGES[rarity]
            effect = {
                "attribute": ROLE_ATTRIBUTE_NAMES[target],
                "bonus": (low + stream.next() * (high - low)) * self.scale,
            }
        elif category is MutationCategory.PARTICLE:
            low, high = PARTICLE_COUNT_RANGES[rarity]
            effect = {"particle_delta": round(stream.next_int(low, high) * self.scale)}
        elif category is MutationCategory.ABILITY:
            effect = {"cooldown_reduction": ABILITY_COOLDOWN_REDUCTIONS[rarity] * self.scale}
        elif category is MutationCategory.SUBCLASS:
            chance = min(1.0, SUBCLASS_TIER_CHANGE_CHANCES[rarity] * self.scale)
            effect = {"tier_change_chance": chance, "tier_changed": stream.next_bool(chance)}
        else:
            low, high = ATTRIBUTE_BONUS_RANGES[rarity]
            effect = {"magnitude": (low + stream.next() * (high - low)) * self.scale}

        return Mutation(
            id=f"{creature.id}-{context.confirmations}-{len(creature.mutations)}",
            category=category,
            rarity=rarity,
            effect=effect,
            compatible_roles=compatible,
            target_role=target,
            confirmations=context.confirmations,
        )

    def apply_mutation(self, creature: Creature, mutation: Mutation) -> None:
        if mutation.target_role is not None:
            group = creature.groups[mutation.target_role]
            if mutation.category is MutationCategory.ATTRIBUTE:
                group.attribute += max(1, round(group.attribute * mutation.effect["bonus"]))
            elif mutation.category is MutationCategory.PARTICLE:
                delta = mutation.effect["particle_delta"]
                group.particle_count += delta
                group.attribute += delta
                group.rarity = particle_rarity(group.particle_count)
                creature.groups.total_particles += delta
        creature.mutations.append(mutation)
        creature.touch()
        logger.debug("Applied %s to %s", mutation.id, creature.id)
