"""Records produced by the group services."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterator

from protozoa.core.types import ROLE_ORDER, Rarity, Role, Tier


# ---------------------------------------------------------------------------
# Traits
# ---------------------------------------------------------------------------

class GroupTraitType(str, Enum):
    OFFENSIVE = "Offensive"
    DEFENSIVE = "Defensive"
    UTILITY = "Utility"
    PASSIVE = "Passive"
    ACTIVE = "Active"


@dataclass(frozen=True, slots=True)
class GroupTrait:
    """A trait resolved from a content repository."""

    id: str
    name: str
    description: str
    type: GroupTraitType
    rarity: Rarity
    effect: str
    modifiers: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class GroupTraits:
    primary: GroupTrait | None = None
    secondary: GroupTrait | None = None
    tertiary: GroupTrait | None = None

    def assigned(self) -> list[GroupTrait]:
        return [t for t in (self.primary, self.secondary, self.tertiary) if t is not None]


# ---------------------------------------------------------------------------
# Particle groups
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ParticleGroup:
    """One role's share of the creature.

    ``attribute`` tracks ``particle_count`` at generation time; mutations
    may move it independently afterwards.
    """

    role: Role
    particle_count: int
    attribute: int
    rarity: Rarity
    traits: GroupTraits = field(default_factory=GroupTraits)


@dataclass(slots=True)
class ParticleGroups:
    groups: dict[Role, ParticleGroup]
    total_particles: int

    def __getitem__(self, role: Role) -> ParticleGroup:
        return self.groups[role]

    def __iter__(self) -> Iterator[ParticleGroup]:
        for role in ROLE_ORDER:
            if role in self.groups:
                yield self.groups[role]

    def counts(self) -> dict[Role, int]:
        return {g.role: g.particle_count for g in self}

    def current_total(self) -> int:
        return sum(g.particle_count for g in self)


# ---------------------------------------------------------------------------
# Class assignment
# ---------------------------------------------------------------------------

class MainClass(str, Enum):
    HEALER = "Healer"
    CASTER = "Caster"
    ROGUE = "Rogue"
    TANK = "Tank"
    STRIKER = "Striker"


class SpecializedPath(str, Enum):
    RESTORATION_SPECIALIST = "RestorationSpecialist"
    FIELD_MEDIC = "FieldMedic"
    ARCHMAGE = "Archmage"
    ENCHANTER = "Enchanter"
    ASSASSIN_ROGUE = "AssassinRogue"
    ACROBAT = "Acrobat"
    SENTINEL = "Sentinel"
    GUARDIAN = "Guardian"
    BERSERKER = "Berserker"
    ASSASSIN_STRIKER = "AssassinStriker"


@dataclass(frozen=True, slots=True)
class Subclass:
    name: str
    main_class: MainClass
    tier: Tier
    primary_role: Role | None = None
    secondary_role: Role | None = None
    specialized_path: SpecializedPath | None = None


@dataclass(frozen=True, slots=True)
class ClassAssignment:
    main_class: MainClass
    subclass: Subclass
    dominant_role: Role
    secondary_role: Role
    tier: Tier


def to_jsonable(obj: Any) -> Any:
    """Dataclass/enum tree → plain JSON types."""
    if hasattr(obj, "__dataclass_fields__"):
        return to_jsonable(asdict(obj))
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {to_jsonable(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj
