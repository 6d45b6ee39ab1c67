"""Particle distribution — splits a creature's particle budget across roles.

The split is a "normalized random split": one keyed draw per role,
normalized to proportions, applied to the budget left after every role
receives its base allocation, then clamped and rebalanced so the counts
always sum to the budget exactly.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from protozoa.core.errors import ConfigurationError
from protozoa.core.types import ROLE_ORDER, Role
from protozoa.group.classification import particle_rarity
from protozoa.group.constants import (
    BASE_PARTICLES_PER_GROUP,
    MIN_PARTICLES_PER_GROUP,
    PARTICLE_RANGE_MAX,
    PARTICLE_RANGE_MIN,
    TOTAL_PARTICLES,
)
from protozoa.group.models import ParticleGroup, ParticleGroups
from protozoa.rng.keyed import HashedKeyRandom, KeyedRandom

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Split algorithm
# ------------------------------------------------------------------

def normalized_random_split(
    roles: Sequence[Role],
    total_particles: int,
    keyed_random: KeyedRandom,
    seed: str,
) -> dict[Role, int]:
    """Return ``{role: count}`` summing to *total_particles*.

    Raises :class:`ConfigurationError` if the budget cannot cover the base
    allocation of every role.
    """
    roles = list(roles)
    base_total = BASE_PARTICLES_PER_GROUP * len(roles)
    distributable = total_particles - base_total
    if distributable < 0:
        raise ConfigurationError(
            f"Total particles ({total_particles}) is less than base allocation ({base_total})"
        )

    raw = [keyed_random.random_number(f"{seed}-{index}") for index in range(len(roles))]
    raw_sum = sum(raw)
    if raw_sum > 0:
        proportions = [value / raw_sum for value in raw]
    else:
        proportions = [1.0 / len(roles)] * len(roles)

    distribution: dict[Role, int] = {}
    remaining = total_particles
    for role, proportion in zip(roles, proportions):
        initial = BASE_PARTICLES_PER_GROUP + math.floor(proportion * distributable)
        count = max(PARTICLE_RANGE_MIN, min(initial, PARTICLE_RANGE_MAX))
        distribution[role] = count
        remaining -= count

    if remaining > 0:
        # fewest first; sorted() is stable so ties keep role order
        for role in sorted(roles, key=lambda r: distribution[r]):
            if remaining <= 0:
                break
            remaining -= _top_up(distribution, role, remaining)
        for role in roles:
            if remaining <= 0:
                break
            remaining -= _top_up(distribution, role, remaining)

    if remaining < 0:
        for role in sorted(roles, key=lambda r: distribution[r], reverse=True):
            if remaining >= 0:
                break
            remaining += _trim(distribution, role, -remaining, MIN_PARTICLES_PER_GROUP)

    if remaining != 0:
        remaining = _relax(distribution, roles, remaining)

    return distribution


def _top_up(distribution: dict[Role, int], role: Role, remaining: int) -> int:
    room = PARTICLE_RANGE_MAX - distribution[role]
    if room <= 0:
        return 0
    added = min(remaining, room)
    distribution[role] += added
    return added


def _trim(distribution: dict[Role, int], role: Role, excess: int, floor: int) -> int:
    spare = distribution[role] - floor
    if spare <= 0:
        return 0
    removed = min(excess, spare)
    distribution[role] -= removed
    return removed


def _relax(distribution: dict[Role, int], roles: list[Role], remaining: int) -> int:
    """Balance budgets the clamped ranges cannot hold.

    Excess is trimmed down to the base allocation; a surplus is spread
    evenly in role order, ignoring the per-group maximum.
    """
    logger.warning(
        "Particle budget %d cannot satisfy per-group limits; relaxing by %d",
        sum(distribution.values()) + remaining, remaining,
    )
    if remaining < 0:
        for role in sorted(roles, key=lambda r: distribution[r], reverse=True):
            if remaining >= 0:
                break
            remaining += _trim(distribution, role, -remaining, BASE_PARTICLES_PER_GROUP)
        return remaining

    share, extra = divmod(remaining, len(roles))
    for index, role in enumerate(roles):
        distribution[role] += share + (1 if index < extra else 0)
    return 0


# ------------------------------------------------------------------
# Service
# ------------------------------------------------------------------

class ParticleDistributionService:
    """Builds :class:`ParticleGroups` from a budget and a seed key."""

    def __init__(self, keyed_random: KeyedRandom | None = None) -> None:
        self._keyed_random = keyed_random or HashedKeyRandom("particle")

    def distribute_particles(
        self,
        total_particles: int | None,
        seed: str,
        roles: Sequence[Role] = ROLE_ORDER,
    ) -> ParticleGroups:
        total = total_particles or TOTAL_PARTICLES
        split = normalized_random_split(roles, total, self._keyed_random, seed)
        groups = {role: create_particle_group(role, count) for role, count in split.items()}
        logger.debug("Distributed %d particles for seed %s: %s", total, seed, split)
        return ParticleGroups(groups=groups, total_particles=total)


def create_particle_group(role: Role, particle_count: int) -> ParticleGroup:
    return ParticleGroup(
        role=role,
        particle_count=particle_count,
        attribute=particle_count,
        rarity=particle_rarity(particle_count),
    )


# ------------------------------------------------------------------
# Role ranking
# ------------------------------------------------------------------

def calculate_dominant_role(groups: ParticleGroups) -> Role:
    """Role with the most particles; the first in role order wins ties."""
    dominant = Role.CORE
    best = 0
    for group in groups:
        if group.particle_count > best:
            best = group.particle_count
            dominant = group.role
    return dominant


def calculate_secondary_role(groups: ParticleGroups, dominant_role: Role) -> Role:
    secondary = Role.CONTROL if dominant_role is Role.CORE else Role.CORE
    best = 0
    for group in groups:
        if group.role is dominant_role:
            continue
        if group.particle_count > best:
            best = group.particle_count
            secondary = group.role
    return secondary
