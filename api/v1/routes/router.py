from fastapi import APIRouter

from api.v1.routes import health
from packages.subscriptions.routes import subscriptions

api_router = APIRouter()

# Health check
api_router.include_router(health.router, prefix="/health", tags=["health"])

api_router.include_router(
    subscriptions.router, prefix="/subscriptions", tags=["subscriptions"]
)
