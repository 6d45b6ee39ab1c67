"""Config endpoints — expose the engine defaults."""

from __future__ import annotations

from fastapi import APIRouter

from protozoa.config.defaults import default_config
from protozoa.config.schema import EngineConfig

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("/defaults", response_model=EngineConfig)
async def get_defaults() -> EngineConfig:
    """Return the baseline engine config."""
    return default_config()
