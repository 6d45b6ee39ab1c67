"""Framework-level types used across the engine.

These are the shared vocabulary of the generation and evolution engine.
Group-, creature- and evolution-specific records live in their respective
packages, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Roles, rarities, tiers
# ---------------------------------------------------------------------------

class Role(str, Enum):
    """The five particle-group roles, in canonical order."""

    CORE = "CORE"
    CONTROL = "CONTROL"
    MOVEMENT = "MOVEMENT"
    DEFENSE = "DEFENSE"
    ATTACK = "ATTACK"


class Rarity(str, Enum):
    """Quality label for particle groups, traits and mutations."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"
    MYTHIC = "MYTHIC"


class Tier(str, Enum):
    """Coarse creature power level."""

    TIER_1 = "TIER_1"
    TIER_2 = "TIER_2"
    TIER_3 = "TIER_3"
    TIER_4 = "TIER_4"
    TIER_5 = "TIER_5"
    TIER_6 = "TIER_6"


class MutationCategory(str, Enum):
    ATTRIBUTE = "ATTRIBUTE"
    PARTICLE = "PARTICLE"
    SUBCLASS = "SUBCLASS"
    ABILITY = "ABILITY"
    SYNERGY = "SYNERGY"
    FORMATION = "FORMATION"
    BEHAVIOR = "BEHAVIOR"
    EXOTIC = "EXOTIC"


# Cumulative-probability walks iterate these tuples, never a dict.
ROLE_ORDER: tuple[Role, ...] = (
    Role.CORE, Role.CONTROL, Role.MOVEMENT, Role.DEFENSE, Role.ATTACK,
)
RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.COMMON, Rarity.UNCOMMON, Rarity.RARE,
    Rarity.EPIC, Rarity.LEGENDARY, Rarity.MYTHIC,
)
TIER_ORDER: tuple[Tier, ...] = (
    Tier.TIER_1, Tier.TIER_2, Tier.TIER_3, Tier.TIER_4, Tier.TIER_5, Tier.TIER_6,
)


# ---------------------------------------------------------------------------
# Block data (external input)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BlockData:
    """Bitcoin block fields consumed by the engine.

    Only ``hash``, ``nonce`` and ``timestamp`` feed the seed;
    ``confirmations`` drives evolution.  Validation of the seed fields
    happens in :func:`protozoa.core.seeding.derive_seed`.
    """

    height: int
    hash: str
    nonce: int | str
    confirmations: int = 0
    timestamp: int = 0
    difficulty: float | None = None
    merkle_root: str | None = None
    version: int | None = None
    bits: str | None = None
    size: int | None = None
    weight: int | None = None
    transactions: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BlockData:
        """Build from an API/JSON mapping.  Unknown keys land in ``extra``."""
        known = {
            "height", "hash", "nonce", "confirmations", "timestamp",
            "difficulty", "merkle_root", "version", "bits", "size",
            "weight", "transactions",
        }
        payload = dict(data)
        if "merkleRoot" in payload and "merkle_root" not in payload:
            payload["merkle_root"] = payload.pop("merkleRoot")
        kwargs = {k: v for k, v in payload.items() if k in known}
        extra = {k: v for k, v in payload.items() if k not in known}
        return cls(**kwargs, extra=extra)

    def with_confirmations(self, confirmations: int) -> BlockData:
        """Return a copy carrying a newer confirmation count."""
        return BlockData(
            height=self.height,
            hash=self.hash,
            nonce=self.nonce,
            confirmations=confirmations,
            timestamp=self.timestamp,
            difficulty=self.difficulty,
            merkle_root=self.merkle_root,
            version=self.version,
            bits=self.bits,
            size=self.size,
            weight=self.weight,
            transactions=self.transactions,
            extra=dict(self.extra),
        )
