"""Particle-distribution and classification tables.

Every range below is a closed interval.  Tables that feed a cumulative
walk are tuples ordered by :data:`~protozoa.core.types.RARITY_ORDER`.
"""

from __future__ import annotations

from types import MappingProxyType

from protozoa.core.types import Rarity, Role, Tier

BASE_PARTICLES_PER_GROUP = 40

MIN_PARTICLES_PER_GROUP = 60

PARTICLE_RANGE_MIN = 60
PARTICLE_RANGE_MAX = 200

TOTAL_PARTICLES = 500

ROLE_COUNT = len(Role)

DISTRIBUTABLE_PARTICLES = TOTAL_PARTICLES - BASE_PARTICLES_PER_GROUP * ROLE_COUNT

PARTICLE_RARITY_RANGES: tuple[tuple[Rarity, int, int], ...] = (
    (Rarity.COMMON, 60, 116),
    (Rarity.UNCOMMON, 117, 158),
    (Rarity.RARE, 159, 186),
    (Rarity.EPIC, 187, 197),
    (Rarity.LEGENDARY, 198, 199),
    (Rarity.MYTHIC, 200, 200),
)

TIER_PARTICLE_RANGES: tuple[tuple[Tier, int, int], ...] = (
    (Tier.TIER_1, 60, 116),
    (Tier.TIER_2, 117, 200),
    (Tier.TIER_3, 201, 250),
    (Tier.TIER_4, 251, 300),
    (Tier.TIER_5, 301, 350),
    (Tier.TIER_6, 351, 400),
)

# Probabilities per rarity, in RARITY_ORDER.
TRAIT_RARITY_DISTRIBUTIONS: MappingProxyType[Tier, tuple[float, ...]] = MappingProxyType({
    Tier.TIER_1: (0.7, 0.25, 0.05, 0.0, 0.0, 0.0),
    Tier.TIER_2: (0.5, 0.35, 0.15, 0.0, 0.0, 0.0),
    Tier.TIER_3: (0.3, 0.4, 0.25, 0.05, 0.0, 0.0),
    Tier.TIER_4: (0.2, 0.3, 0.35, 0.15, 0.0, 0.0),
    Tier.TIER_5: (0.1, 0.2, 0.3, 0.3, 0.1, 0.0),
    Tier.TIER_6: (0.0, 0.1, 0.2, 0.4, 0.25, 0.05),
})

TRAIT_SLOTS: tuple[str, ...] = ("primary", "secondary", "tertiary")

ROLE_ATTRIBUTE_NAMES: MappingProxyType[Role, str] = MappingProxyType({
    Role.CORE: "wisdom",
    Role.CONTROL: "intelligence",
    Role.ATTACK: "strength",
    Role.DEFENSE: "vitality",
    Role.MOVEMENT: "agility",
})

# Trait effect percentage by rarity.
RARITY_EFFECT_VALUES: MappingProxyType[Rarity, int] = MappingProxyType({
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 10,
    Rarity.RARE: 15,
    Rarity.EPIC: 20,
    Rarity.LEGENDARY: 25,
    Rarity.MYTHIC: 30,
})
