"""Evolution tables, keyed by confirmation milestones.

Threshold tables are ordered highest first so a linear scan returns the
highest milestone reached.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from protozoa.core.types import MutationCategory, Rarity


class EvolutionStage(str, Enum):
    NASCENT = "Nascent"
    EMERGING = "Emerging"
    DEVELOPING = "Developing"
    MATURE = "Mature"
    EVOLVED = "Evolved"
    ASCENDANT = "Ascendant"
    AWAKENED = "Awakened"
    TRANSCENDENT = "Transcendent"


STAGE_ORDER: tuple[EvolutionStage, ...] = tuple(EvolutionStage)

# Drives the mutation count; Nascent and Emerging share 0.
STAGE_VALUES: MappingProxyType[EvolutionStage, int] = MappingProxyType({
    EvolutionStage.NASCENT: 0,
    EvolutionStage.EMERGING: 0,
    EvolutionStage.DEVELOPING: 1,
    EvolutionStage.MATURE: 2,
    EvolutionStage.EVOLVED: 3,
    EvolutionStage.ASCENDANT: 4,
    EvolutionStage.AWAKENED: 5,
    EvolutionStage.TRANSCENDENT: 6,
})

MILESTONES: tuple[int, ...] = (10_000, 25_000, 50_000, 100_000, 250_000, 500_000, 1_000_000)

BASE_MUTATION_PROBABILITY = 0.01

MUTATION_PROBABILITIES: tuple[tuple[int, float], ...] = (
    (1_000_000, 0.60),
    (500_000, 0.50),
    (250_000, 0.40),
    (100_000, 0.35),
    (50_000, 0.30),
    (25_000, 0.25),
    (10_000, 0.10),
)

STAGE_THRESHOLDS: tuple[tuple[int, EvolutionStage], ...] = (
    (1_000_000, EvolutionStage.TRANSCENDENT),
    (500_000, EvolutionStage.AWAKENED),
    (250_000, EvolutionStage.ASCENDANT),
    (100_000, EvolutionStage.EVOLVED),
    (50_000, EvolutionStage.MATURE),
    (25_000, EvolutionStage.DEVELOPING),
    (10_000, EvolutionStage.EMERGING),
)

# Weighted category draw, in this order.
CATEGORY_WEIGHTS: tuple[tuple[MutationCategory, int], ...] = (
    (MutationCategory.ATTRIBUTE, 40),
    (MutationCategory.BEHAVIOR, 25),
    (MutationCategory.ABILITY, 15),
    (MutationCategory.PARTICLE, 5),
    (MutationCategory.SUBCLASS, 5),
    (MutationCategory.SYNERGY, 5),
    (MutationCategory.FORMATION, 3),
    (MutationCategory.EXOTIC, 2),
)

MILESTONE_RARITIES: MappingProxyType[int, tuple[Rarity, ...]] = MappingProxyType({
    0: (Rarity.COMMON,),
    10_000: (Rarity.COMMON,),
    25_000: (Rarity.COMMON,),
    50_000: (Rarity.COMMON, Rarity.UNCOMMON),
    100_000: (Rarity.COMMON, Rarity.UNCOMMON, Rarity.RARE),
    250_000: (Rarity.UNCOMMON, Rarity.RARE, Rarity.EPIC),
    500_000: (Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY),
    1_000_000: (Rarity.EPIC, Rarity.LEGENDARY, Rarity.MYTHIC),
})

# Fractional attribute bonus (low, high).
ATTRIBUTE_BONUS_RANGES: MappingProxyType[Rarity, tuple[float, float]] = MappingProxyType({
    Rarity.COMMON: (0.05, 0.10),
    Rarity.UNCOMMON: (0.10, 0.15),
    Rarity.RARE: (0.15, 0.20),
    Rarity.EPIC: (0.20, 0.30),
    Rarity.LEGENDARY: (0.30, 0.50),
    Rarity.MYTHIC: (0.50, 1.00),
})

PARTICLE_COUNT_RANGES: MappingProxyType[Rarity, tuple[int, int]] = MappingProxyType({
    Rarity.COMMON: (1, 5),
    Rarity.UNCOMMON: (5, 10),
    Rarity.RARE: (10, 15),
    Rarity.EPIC: (15, 25),
    Rarity.LEGENDARY: (25, 40),
    Rarity.MYTHIC: (40, 60),
})

ABILITY_COOLDOWN_REDUCTIONS: MappingProxyType[Rarity, float] = MappingProxyType({
    Rarity.COMMON: 0.05,
    Rarity.UNCOMMON: 0.10,
    Rarity.RARE: 0.15,
    Rarity.EPIC: 0.20,
    Rarity.LEGENDARY: 0.30,
    Rarity.MYTHIC: 0.50,
})

SUBCLASS_TIER_CHANGE_CHANCES: MappingProxyType[Rarity, float] = MappingProxyType({
    Rarity.COMMON: 0.01,
    Rarity.UNCOMMON: 0.05,
    Rarity.RARE: 0.10,
    Rarity.EPIC: 0.20,
    Rarity.LEGENDARY: 0.40,
    Rarity.MYTHIC: 0.80,
})
