"""HTTP presentation layer - REST API routes."""

from fastapi import APIRouter

from stormforge.presentation.http.health import router as health_router
from stormforge.presentation.http.metrics import router as metrics_router
from stormforge.presentation.http.users import router as users_router

# Service-level routes; users_router is mounted under the configured prefix
api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(metrics_router, tags=["Metrics"])

__all__ = ["api_router", "users_router"]
