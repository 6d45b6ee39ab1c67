"""Pure confirmation -> probability/stage/milestone lookups."""

from __future__ import annotations

from typing import Iterable

from protozoa.core.types import Rarity
from protozoa.evolution.constants import (
    BASE_MUTATION_PROBABILITY,
    MILESTONE_RARITIES,
    MILESTONES,
    MUTATION_PROBABILITIES,
    STAGE_THRESHOLDS,
    STAGE_VALUES,
    EvolutionStage,
)
from protozoa.evolution.models import EvolutionEntry


def mutation_probability(confirmations: int) -> float:
    for threshold, probability in MUTATION_PROBABILITIES:
        if confirmations >= threshold:
            return probability
    return BASE_MUTATION_PROBABILITY


def evolution_stage(confirmations: int) -> EvolutionStage:
    for threshold, stage in STAGE_THRESHOLDS:
        if confirmations >= threshold:
            return stage
    return EvolutionStage.NASCENT


def stage_value(stage: EvolutionStage) -> int:
    """Nascent and Emerging -> 0, Developing -> 1 ... Transcendent -> 6."""
    return STAGE_VALUES.get(stage, 0)


def highest_milestone(confirmations: int) -> int | None:
    reached = [m for m in MILESTONES if confirmations >= m]
    return reached[-1] if reached else None


def should_receive_guaranteed_mutation(
    confirmations: int, history: Iterable[EvolutionEntry],
) -> bool:
    """True on the first event that reaches a milestone not yet recorded."""
    milestone = highest_milestone(confirmations)
    if milestone is None:
        return False
    return all(entry.milestone != milestone for entry in history)


def available_mutation_rarities(confirmations: int) -> tuple[Rarity, ...]:
    return MILESTONE_RARITIES[highest_milestone(confirmations) or 0]
