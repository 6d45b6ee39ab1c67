"""Request/response models for the API layer.

These are thin API-surface models only.  The engine config schema lives in
protozoa.config.schema and is imported directly — no duplication.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Creatures
# ---------------------------------------------------------------------------

class BlockDataRequest(BaseModel):
    """Block fields used to generate a creature."""

    height: int = Field(ge=0)
    hash: str = Field(description="Block hash, hex; at least 8 characters.")
    nonce: int | str = Field(description="Integer nonce or hex string.")
    confirmations: int = Field(default=0, ge=0)
    timestamp: int = Field(default=0, ge=0)
    difficulty: float | None = None
    merkle_root: str | None = None
    version: int | None = None
    bits: str | None = None
    size: int | None = None
    weight: int | None = None
    transactions: int | None = None
    total_particles: int | None = Field(
        default=None, ge=200,
        description="Override the configured particle budget.",
    )

    def block_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude={"total_particles"}, exclude_none=True)


class EvolveRequest(BaseModel):
    confirmations: int = Field(ge=0)
    timestamp: int | None = Field(default=None, ge=0)


class CreatureSummary(BaseModel):
    id: str
    block_number: int
    tier: str
    main_class: str
    subclass: str
    mutations: int
