"""Particle groups: distribution, classification, traits and classes."""

from protozoa.group.classes import ClassAssignmentService
from protozoa.group.classification import calculate_tier, particle_rarity, tier_number, trait_count
from protozoa.group.distribution import (
    ParticleDistributionService,
    calculate_dominant_role,
    calculate_secondary_role,
    normalized_random_split,
)
from protozoa.group.models import (
    ClassAssignment,
    GroupTrait,
    GroupTraits,
    GroupTraitType,
    MainClass,
    ParticleGroup,
    ParticleGroups,
    SpecializedPath,
    Subclass,
)
from protozoa.group.traits import (
    InMemoryTraitRepository,
    TraitAssignmentService,
    TraitRepository,
    default_trait_repository,
    select_rarity,
)

__all__ = [
    "ClassAssignment",
    "ClassAssignmentService",
    "GroupTrait",
    "GroupTraitType",
    "GroupTraits",
    "InMemoryTraitRepository",
    "MainClass",
    "ParticleDistributionService",
    "ParticleGroup",
    "ParticleGroups",
    "SpecializedPath",
    "Subclass",
    "TraitAssignmentService",
    "TraitRepository",
    "calculate_dominant_role",
    "calculate_secondary_role",
    "calculate_tier",
    "default_trait_repository",
    "normalized_random_split",
    "particle_rarity",
    "select_rarity",
    "tier_number",
    "trait_count",
]
