"""The creature record: a generated particle layout plus its mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from protozoa.core import seeding
from protozoa.core.types import Tier
from protozoa.group.models import ClassAssignment, ParticleGroups, to_jsonable

if TYPE_CHECKING:
    from protozoa.evolution.models import Mutation


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def creature_id(height: int, seed: int) -> str:
    return f"creature-{height}-{seed:08x}"


@dataclass(slots=True)
class Creature:
    """Mutable while evolving; ``seed`` and ``block_number`` never change."""

    id: str
    block_number: int
    seed: int
    groups: ParticleGroups
    tier: Tier
    class_assignment: ClassAssignment
    mutations: list[Mutation] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    @property
    def seed_key(self) -> str:
        return seeding.seed_key(self.seed)

    def touch(self) -> None:
        self.updated_at = utc_now()

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)
