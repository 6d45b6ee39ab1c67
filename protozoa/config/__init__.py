from protozoa.config.defaults import default_config, load_config
from protozoa.config.schema import (
    EngineConfig,
    EvolutionOptions,
    GenerationConfig,
    HistoryConfig,
    LoggingConfig,
)

__all__ = [
    "EngineConfig",
    "EvolutionOptions",
    "GenerationConfig",
    "HistoryConfig",
    "LoggingConfig",
    "default_config",
    "load_config",
]
