"""Default engine configuration.

Provides the canonical baseline used by the API and the tests.
All values are explicit — no hidden magic.
"""

from __future__ import annotations

from pathlib import Path

from protozoa.config.schema import (
    EngineConfig,
    EvolutionOptions,
    GenerationConfig,
    HistoryConfig,
    LoggingConfig,
)


def default_config(storage_dir: str | Path | None = None) -> EngineConfig:
    """Return a complete, valid default config."""
    return EngineConfig(
        generation=GenerationConfig(total_particles=500),
        evolution=EvolutionOptions(
            mutation_intensity=0.5,
            max_mutations_per_event=3,
            enable_exotic_mutations=False,
            enable_subclass_mutations=True,
        ),
        history=HistoryConfig(
            storage_dir=Path(storage_dir) if storage_dir is not None else None,
        ),
        logging=LoggingConfig(level="INFO"),
    )


def load_config(path: str | Path) -> EngineConfig:
    """Read and validate an :class:`EngineConfig` from a JSON file."""
    return EngineConfig.model_validate_json(Path(path).read_text(encoding="utf-8"))
