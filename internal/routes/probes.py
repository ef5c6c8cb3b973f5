"""Kubernetes probe endpoints.

Mounted at root level, outside /api/v1, and only reachable by probes
hitting the pod IP directly.
"""

from fastapi import APIRouter

router = APIRouter(tags=["internal"])


@router.get("/healthz")
async def healthz():
    """Liveness probe - is the process alive?"""
    return {"status": "ok"}


@router.get("/readyz")
async def readyz():
    """Readiness probe - is the service ready to receive traffic?"""
    return {"status": "ok"}
