"""Configuration schema for the engine — single source of truth.

This module defines the Pydantic models that fully describe how creatures
are generated and evolved.  The backend imports these directly; no
duplication.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Five roles x BASE_PARTICLES_PER_GROUP; kept literal to avoid a config ->
# group import cycle.
_MIN_TOTAL_PARTICLES = 200


# ---------------------------------------------------------------------------
# Section 1: Generation
# ---------------------------------------------------------------------------

class GenerationConfig(BaseModel):
    """How a creature's particle budget is laid out."""

    total_particles: int = Field(
        default=500,
        ge=_MIN_TOTAL_PARTICLES,
        description="Particle budget split across the five roles.",
    )


# ---------------------------------------------------------------------------
# Section 2: Evolution
# ---------------------------------------------------------------------------

class EvolutionOptions(BaseModel):
    """Knobs consumed by the evolution engine.

    The engine owns none of these; it reads them on every event.
    """

    mutation_intensity: float = Field(
        default=0.5, ge=0.0, le=1.0,
        description="Scales mutation effect magnitudes. 0.5 = table values.",
    )
    max_mutations_per_event: int = Field(
        default=3, ge=1, le=10,
        description="Upper bound on mutations applied by one evolution event.",
    )
    enable_exotic_mutations: bool = Field(
        default=False,
        description="Allow the EXOTIC mutation category to be drawn.",
    )
    enable_subclass_mutations: bool = Field(
        default=True,
        description="Allow the SUBCLASS mutation category to be drawn.",
    )


# ---------------------------------------------------------------------------
# Section 3: History
# ---------------------------------------------------------------------------

class HistoryConfig(BaseModel):
    """Where evolution history is mirrored."""

    storage_dir: Path | None = Field(
        default=None,
        description="Directory for per-creature JSONL logs. None = in-memory only.",
    )


# ---------------------------------------------------------------------------
# Section 4: Logging
# ---------------------------------------------------------------------------

class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level applied to the 'protozoa' logger.",
    )
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

class EngineConfig(BaseModel):
    """Complete configuration for one engine instance.

    A single instance of this model, together with the block data, fully
    defines a reproducible creature and its evolution.
    """

    generation: GenerationConfig = GenerationConfig()
    evolution: EvolutionOptions = EvolutionOptions()
    history: HistoryConfig = HistoryConfig()
    logging: LoggingConfig = LoggingConfig()
