"""Error taxonomy for the generation and evolution engine.

Fatal errors are raised and must be handled by the caller before any
creature state is produced.  Recoverable misses (content lookups, single
mutation failures) are logged by the component that hits them and never
surface here.
"""

from __future__ import annotations


class ProtozoaError(Exception):
    """Base exception for the engine."""


class InvalidBlockDataError(ProtozoaError, ValueError):
    """Block data is missing a field or carries a malformed hash/nonce."""


class ConfigurationError(ProtozoaError, ValueError):
    """Configuration cannot be satisfied (e.g. particle budget below base)."""


class EmptySequenceError(ProtozoaError, ValueError):
    """A random selection was requested from an empty sequence."""


class EngineNotInitializedError(ProtozoaError, RuntimeError):
    """An engine or session was used before its seed/context was established."""


class MutationServiceUnavailableError(EngineNotInitializedError):
    """The injected mutation service is missing or reports itself unavailable."""
