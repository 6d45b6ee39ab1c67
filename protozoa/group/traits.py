"""Trait assignment: weighted rarity per slot, then a repository lookup.

Content lives behind :class:`TraitRepository`; this module only decides
*which rarity* each slot gets and asks the repository for a trait of that
rarity.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from pydantic import BaseModel, Field

from protozoa.core.types import RARITY_ORDER, ROLE_ORDER, Rarity, Role, Tier
from protozoa.group.classification import trait_count
from protozoa.group.constants import (
    RARITY_EFFECT_VALUES,
    ROLE_ATTRIBUTE_NAMES,
    TRAIT_RARITY_DISTRIBUTIONS,
    TRAIT_SLOTS,
)
from protozoa.group.models import GroupTrait, GroupTraits, GroupTraitType
from protozoa.rng.keyed import HashedKeyRandom, KeyedRandom

logger = logging.getLogger(__name__)


def select_rarity(distribution: Sequence[float], r: float) -> Rarity:
    """First rarity whose cumulative probability exceeds *r*.

    *distribution* is ordered like ``RARITY_ORDER``.  Falls back to COMMON
    when rounding leaves the total at or below *r*.
    """
    cumulative = 0.0
    for rarity, probability in zip(RARITY_ORDER, distribution):
        cumulative += probability
        if r < cumulative:
            return rarity
    return Rarity.COMMON


def get_trait_rarity_distribution(tier: Tier) -> dict[Rarity, float]:
    return dict(zip(RARITY_ORDER, TRAIT_RARITY_DISTRIBUTIONS[tier]))


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

class TraitRepository(Protocol):
    def resolve(self, role: Role, rarity: Rarity, seed: str) -> GroupTrait | None: ...


class TraitRecord(BaseModel):
    """One entry of a trait pool file."""

    role: Role
    rarity: Rarity
    id: str = Field(min_length=1)
    name: str
    description: str = ""
    type: GroupTraitType = GroupTraitType.PASSIVE
    effect: str = ""
    modifiers: dict[str, float] = Field(default_factory=dict)

    def to_trait(self) -> GroupTrait:
        return GroupTrait(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            rarity=self.rarity,
            effect=self.effect,
            modifiers=dict(self.modifiers),
        )


class TraitPoolFile(BaseModel):
    traits: list[TraitRecord]


class InMemoryTraitRepository:
    """Role x rarity pools held in memory.

    A trait is picked with ``floor(r * len(pool))`` where ``r`` is the keyed
    random number for the lookup seed.
    """

    def __init__(
        self,
        pools: dict[Role, dict[Rarity, list[GroupTrait]]],
        keyed_random: KeyedRandom | None = None,
    ) -> None:
        self._pools = pools
        self._keyed_random = keyed_random or HashedKeyRandom("traits")

    @classmethod
    def from_traits(
        cls,
        traits: Iterable[tuple[Role, GroupTrait]],
        keyed_random: KeyedRandom | None = None,
    ) -> InMemoryTraitRepository:
        pools: dict[Role, dict[Rarity, list[GroupTrait]]] = {}
        for role, trait in traits:
            pools.setdefault(role, {}).setdefault(trait.rarity, []).append(trait)
        return cls(pools, keyed_random)

    @classmethod
    def from_json(
        cls, path: str | Path, keyed_random: KeyedRandom | None = None,
    ) -> InMemoryTraitRepository:
        """Load a ``{"traits": [...]}`` pool file.

        Raises ``pydantic.ValidationError`` for malformed records.
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        pool_file = TraitPoolFile.model_validate(raw)
        return cls.from_traits(
            ((record.role, record.to_trait()) for record in pool_file.traits),
            keyed_random,
        )

    def pool(self, role: Role, rarity: Rarity) -> list[GroupTrait]:
        return list(self._pools.get(role, {}).get(rarity, []))

    def resolve(self, role: Role, rarity: Rarity, seed: str) -> GroupTrait | None:
        pool = self._pools.get(role, {}).get(rarity, [])
        if not pool and rarity is not Rarity.COMMON:
            logger.warning(
                "No %s traits for role %s; falling back to COMMON", rarity.value, role.value,
            )
            pool = self._pools.get(role, {}).get(Rarity.COMMON, [])
        if not pool:
            logger.warning("No traits available for role %s", role.value)
            return None
        index = math.floor(self._keyed_random.random_number(seed) * len(pool))
        return pool[min(index, len(pool) - 1)]


def default_trait_repository(keyed_random: KeyedRandom | None = None) -> InMemoryTraitRepository:
    """Three placeholder traits per role x rarity."""
    entries: list[tuple[Role, GroupTrait]] = []
    for role in ROLE_ORDER:
        attribute = ROLE_ATTRIBUTE_NAMES[role]
        for rarity in RARITY_ORDER:
            bonus = RARITY_EFFECT_VALUES[rarity]
            for i in range(1, 4):
                entries.append((role, GroupTrait(
                    id=f"{role.value}-{rarity.value}-{i}".lower(),
                    name=f"{rarity.value.title()} {role.value.title()} Trait {i}",
                    description=f"A {rarity.value.lower()} trait for {role.value.lower()} particles",
                    type=GroupTraitType.PASSIVE,
                    rarity=rarity,
                    effect=f"+{bonus}% {attribute}",
                    modifiers={attribute: bonus / 100},
                )))
    return InMemoryTraitRepository.from_traits(entries, keyed_random)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TraitAssignmentService:
    """Fills a group's trait slots for its tier."""

    def __init__(
        self,
        keyed_random: KeyedRandom | None = None,
        repository: TraitRepository | None = None,
    ) -> None:
        self._keyed_random = keyed_random or HashedKeyRandom("traits")
        self._repository = repository or default_trait_repository()

    def assign_traits(self, role: Role, tier: Tier, seed: str) -> GroupTraits:
        traits = GroupTraits()
        distribution = TRAIT_RARITY_DISTRIBUTIONS[tier]
        for slot in TRAIT_SLOTS[:trait_count(tier)]:
            slot_seed = f"{seed}-{slot}"
            rarity = select_rarity(distribution, self._keyed_random.random_number(slot_seed))
            trait = self._repository.resolve(role, rarity, slot_seed)
            setattr(traits, slot, trait)
        return traits
