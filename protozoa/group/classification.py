"""Tier and rarity classification — pure, total table lookups.

None of these functions raise: values outside every range fall back to
the lowest bucket.
"""

from __future__ import annotations

from protozoa.core.types import Rarity, Tier
from protozoa.group.constants import PARTICLE_RARITY_RANGES, TIER_PARTICLE_RANGES


def particle_rarity(particle_count: int) -> Rarity:
    """Rarity of one group's particle count.  Out of range → COMMON."""
    for rarity, low, high in PARTICLE_RARITY_RANGES:
        if low <= particle_count <= high:
            return rarity
    return Rarity.COMMON


def calculate_tier(total_particles: int) -> Tier:
    """Tier of a particle total.  Out of range → TIER_1.

    Note: the canonical 500-particle creature is above every range and so
    lands on TIER_1.
    """
    for tier, low, high in TIER_PARTICLE_RANGES:
        if low <= total_particles <= high:
            return tier
    return Tier.TIER_1


def tier_number(tier: Tier) -> int:
    """``TIER_3`` → 3."""
    return int(tier.value.rsplit("_", 1)[1])


def trait_count(tier: Tier) -> int:
    """1 trait for tiers 1–2, 2 for tiers 3–4, 3 for tiers 5–6."""
    return (tier_number(tier) + 1) // 2
