"""Creature endpoints — generate, inspect, evolve and read history."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from fastapi import APIRouter, HTTPException

from protozoa.config.defaults import default_config
from protozoa.core.errors import ConfigurationError, InvalidBlockDataError
from protozoa.core.types import BlockData
from protozoa.session import CreatureSession

from backend.registry.session_registry import registry
from backend.schemas.api_models import BlockDataRequest, CreatureSummary, EvolveRequest

router = APIRouter(prefix="/api/creatures", tags=["creatures"])

HISTORY_DIR = Path("storage/history")


def _session(creature_id: str) -> CreatureSession:
    session = registry.get(creature_id)
    if session is None or session.creature is None:
        raise HTTPException(status_code=404, detail=f"Creature {creature_id} not found.")
    return session


@router.post("", status_code=201)
async def create_creature(req: BlockDataRequest) -> dict:
    """Generate a creature from block data.

    Re-posting a block returns the live creature; asking for a different
    particle budget than the live one is a 409.
    """
    config = default_config(storage_dir=HISTORY_DIR)
    if req.total_particles is not None:
        config.generation.total_particles = req.total_particles

    session = CreatureSession(config)
    try:
        session.generate(BlockData.from_dict(req.block_fields()))
    except (InvalidBlockDataError, ConfigurationError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    live = registry.add(session)
    if live is not session:
        requested = config.generation.total_particles
        existing = live.config.generation.total_particles
        if requested != existing:
            raise HTTPException(
                status_code=409,
                detail=f"Creature {live.creature.id} already exists with {existing} particles.",
            )
    return live.creature.to_dict()


@router.get("", response_model=list[CreatureSummary])
async def list_creatures() -> list[CreatureSummary]:
    items: list[CreatureSummary] = []
    for creature_id in registry.ids():
        creature = _session(creature_id).creature
        items.append(CreatureSummary(
            id=creature.id,
            block_number=creature.block_number,
            tier=creature.tier.value,
            main_class=creature.class_assignment.main_class.value,
            subclass=creature.class_assignment.subclass.name,
            mutations=len(creature.mutations),
        ))
    return items


@router.get("/{creature_id}")
async def get_creature(creature_id: str) -> dict:
    return _session(creature_id).creature.to_dict()


@router.post("/{creature_id}/evolve")
async def evolve_creature(creature_id: str, req: EvolveRequest) -> dict:
    """Run one evolution event at the given confirmation count."""
    session = _session(creature_id)
    changes: dict = {"confirmations": req.confirmations}
    if req.timestamp is not None:
        changes["timestamp"] = req.timestamp
    block = replace(session.block, **changes)
    return session.evolve(block).to_dict()


@router.get("/{creature_id}/history")
async def get_history(creature_id: str) -> list[dict]:
    return [entry.to_dict() for entry in _session(creature_id).history()]

