"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; this only decides
level and format for the process, once.
"""

from __future__ import annotations

import logging

from protozoa.config.schema import LoggingConfig


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Apply level/format from *config* to the root logger."""
    config = config or LoggingConfig()
    logging.basicConfig(level=getattr(logging, config.level), format=config.format)
    logging.getLogger("protozoa").setLevel(getattr(logging, config.level))
