"""Class assignment: main class and subclass from the particle split."""

from __future__ import annotations

from types import MappingProxyType

from protozoa.core.types import Role, Tier
from protozoa.group.classification import calculate_tier, tier_number
from protozoa.group.distribution import calculate_dominant_role, calculate_secondary_role
from protozoa.group.models import (
    ClassAssignment,
    MainClass,
    ParticleGroups,
    SpecializedPath,
    Subclass,
)
from protozoa.rng.keyed import HashedKeyRandom, KeyedRandom

ROLE_TO_CLASS: MappingProxyType[Role, MainClass] = MappingProxyType({
    Role.CORE: MainClass.HEALER,
    Role.CONTROL: MainClass.CASTER,
    Role.MOVEMENT: MainClass.ROGUE,
    Role.DEFENSE: MainClass.TANK,
    Role.ATTACK: MainClass.STRIKER,
})

ROLE_PREFIXES: MappingProxyType[Role, str] = MappingProxyType({
    Role.CORE: "Vital",
    Role.CONTROL: "Arcane",
    Role.MOVEMENT: "Swift",
    Role.DEFENSE: "Guardian",
    Role.ATTACK: "Battle",
})

CLASS_PATHS: MappingProxyType[MainClass, tuple[SpecializedPath, SpecializedPath]] = MappingProxyType({
    MainClass.HEALER: (SpecializedPath.RESTORATION_SPECIALIST, SpecializedPath.FIELD_MEDIC),
    MainClass.CASTER: (SpecializedPath.ARCHMAGE, SpecializedPath.ENCHANTER),
    MainClass.ROGUE: (SpecializedPath.ASSASSIN_ROGUE, SpecializedPath.ACROBAT),
    MainClass.TANK: (SpecializedPath.SENTINEL, SpecializedPath.GUARDIAN),
    MainClass.STRIKER: (SpecializedPath.BERSERKER, SpecializedPath.ASSASSIN_STRIKER),
})

# Names for tiers 3, 4, 5 and 6.
PATH_EVOLUTION_NAMES: MappingProxyType[SpecializedPath, tuple[str, str, str, str]] = MappingProxyType({
    SpecializedPath.RESTORATION_SPECIALIST: ("Lifebinder", "Vitalizer", "Soulweaver", "Eternal Guardian"),
    SpecializedPath.FIELD_MEDIC: ("Mender", "Rejuvenator", "Lifebloom", "Divine Caretaker"),
    SpecializedPath.ARCHMAGE: ("Spellweaver", "Arcanist", "Archmage", "Arcane Master"),
    SpecializedPath.ENCHANTER: ("Illusionist", "Enchanter", "Mystic", "Reality Bender"),
    SpecializedPath.ASSASSIN_ROGUE: ("Stalker", "Shadowblade", "Assassin", "Death's Shadow"),
    SpecializedPath.ACROBAT: ("Tumbler", "Acrobat", "Windwalker", "Phantom Dancer"),
    SpecializedPath.SENTINEL: ("Bulwark", "Sentinel", "Juggernaut", "Living Fortress"),
    SpecializedPath.GUARDIAN: ("Protector", "Guardian", "Aegis", "Divine Shield"),
    SpecializedPath.BERSERKER: ("Warrior", "Berserker", "Warlord", "Godslayer"),
    SpecializedPath.ASSASSIN_STRIKER: ("Duelist", "Blademaster", "Deathbringer", "Reaper"),
})

# Probability of taking the first path, by secondary role.
PATH_THRESHOLDS: MappingProxyType[Role, float] = MappingProxyType({
    Role.ATTACK: 0.7,
    Role.DEFENSE: 0.7,
    Role.CONTROL: 0.3,
    Role.MOVEMENT: 0.3,
    Role.CORE: 0.5,
})


class ClassAssignmentService:
    def __init__(self, keyed_random: KeyedRandom | None = None) -> None:
        self._keyed_random = keyed_random or HashedKeyRandom("subclass")

    def assign_class(self, groups: ParticleGroups, seed: str) -> ClassAssignment:
        dominant = calculate_dominant_role(groups)
        secondary = calculate_secondary_role(groups, dominant)
        main_class = ROLE_TO_CLASS[dominant]
        tier = calculate_tier(groups[dominant].particle_count)

        if tier_number(tier) <= 2:
            subclass = self.create_hybrid_subclass(dominant, secondary, tier)
        else:
            subclass = self.create_specialized_subclass(main_class, secondary, tier, seed)

        return ClassAssignment(
            main_class=main_class,
            subclass=subclass,
            dominant_role=dominant,
            secondary_role=secondary,
            tier=tier,
        )

    def create_hybrid_subclass(self, dominant: Role, secondary: Role, tier: Tier) -> Subclass:
        main_class = ROLE_TO_CLASS[dominant]
        name = f"{ROLE_PREFIXES[dominant]} {ROLE_PREFIXES[secondary]} {main_class.value}"
        return Subclass(
            name=name,
            main_class=main_class,
            tier=tier,
            primary_role=dominant,
            secondary_role=secondary,
        )

    def create_specialized_subclass(
        self, main_class: MainClass, secondary: Role, tier: Tier, seed: str,
    ) -> Subclass:
        path = self.determine_specialized_path(main_class, secondary, seed)
        names = PATH_EVOLUTION_NAMES[path]
        index = min(max(tier_number(tier) - 3, 0), len(names) - 1)
        return Subclass(
            name=names[index],
            main_class=main_class,
            tier=tier,
            secondary_role=secondary,
            specialized_path=path,
        )

    def determine_specialized_path(
        self, main_class: MainClass, secondary: Role, seed: str,
    ) -> SpecializedPath:
        first, second = CLASS_PATHS[main_class]
        r = self._keyed_random.random_number(seed)
        return first if r < PATH_THRESHOLDS[secondary] else second
