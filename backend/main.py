"""FastAPI application assembly."""

from __future__ import annotations

from fastapi import FastAPI

from protozoa.core.log import configure_logging

from backend.api.routes_config import router as config_router
from backend.api.routes_creatures import router as creatures_router

configure_logging()

app = FastAPI(title="Protozoa Engine", version="0.1.0")

app.include_router(config_router)
app.include_router(creatures_router)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok"}
