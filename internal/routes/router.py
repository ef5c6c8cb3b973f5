"""Internal routes aggregator, mounted at root level (not under /api/v1)."""

from fastapi import APIRouter

from internal.routes import probes

internal_router = APIRouter()

internal_router.include_router(probes.router)
