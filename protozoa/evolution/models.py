"""Mutation and evolution-history records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from protozoa.core.types import MutationCategory, Rarity, Role, Tier
from protozoa.group.models import to_jsonable


@dataclass(frozen=True, slots=True)
class Mutation:
    """One applied change.  ``effect`` is service-defined payload."""

    id: str
    category: MutationCategory
    rarity: Rarity
    effect: dict[str, Any] = field(default_factory=dict)
    compatible_roles: tuple[Role, ...] = ()
    requires_mutations: tuple[str, ...] = ()
    target_role: Role | None = None
    confirmations: int = 0

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Mutation:
        target = data.get("target_role")
        return cls(
            id=data["id"],
            category=MutationCategory(data["category"]),
            rarity=Rarity(data["rarity"]),
            effect=dict(data.get("effect", {})),
            compatible_roles=tuple(Role(r) for r in data.get("compatible_roles", ())),
            requires_mutations=tuple(data.get("requires_mutations", ())),
            target_role=Role(target) if target is not None else None,
            confirmations=int(data.get("confirmations", 0)),
        )


@dataclass(frozen=True, slots=True)
class EvolutionEntry:
    """One line of a creature's append-only history."""

    creature_id: str
    block_number: int
    confirmations: int
    mutations: tuple[Mutation, ...]
    timestamp: int
    milestone: int | None = None
    is_guaranteed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvolutionEntry:
        return cls(
            creature_id=data["creature_id"],
            block_number=int(data["block_number"]),
            confirmations=int(data["confirmations"]),
            mutations=tuple(Mutation.from_dict(m) for m in data.get("mutations", ())),
            timestamp=int(data["timestamp"]),
            milestone=data.get("milestone"),
            is_guaranteed=bool(data.get("is_guaranteed", False)),
        )


@dataclass(slots=True)
class EvolutionResult:
    creature_id: str
    block_number: int
    confirmations: int
    mutations: list[Mutation]
    timestamp: int
    strategy: str
    stage: str
    probability: float
    milestone: int | None = None
    is_guaranteed: bool = False
    new_tier: Tier | None = None

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)
