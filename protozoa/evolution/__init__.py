"""Confirmation-driven evolution: rules, engine, mutations and history."""

from protozoa.evolution.constants import EvolutionStage
from protozoa.evolution.engine import EvolutionEngine
from protozoa.evolution.history_store import JsonlHistoryStore
from protozoa.evolution.models import EvolutionEntry, EvolutionResult, Mutation
from protozoa.evolution.mutations import MutationContext, MutationService, ReferenceMutationService
from protozoa.evolution.rules import (
    available_mutation_rarities,
    evolution_stage,
    highest_milestone,
    mutation_probability,
    should_receive_guaranteed_mutation,
    stage_value,
)
from protozoa.evolution.tracker import EvolutionTracker

__all__ = [
    "EvolutionEngine",
    "EvolutionEntry",
    "EvolutionResult",
    "EvolutionStage",
    "EvolutionTracker",
    "JsonlHistoryStore",
    "Mutation",
    "MutationContext",
    "MutationService",
    "ReferenceMutationService",
    "available_mutation_rarities",
    "evolution_stage",
    "highest_milestone",
    "mutation_probability",
    "should_receive_guaranteed_mutation",
    "stage_value",
]
