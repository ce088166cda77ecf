"""API routes."""

from compensation_engine.api.routes.compensation import router as compensation_router
from compensation_engine.api.routes.health import router as health_router

__all__ = ["compensation_router", "health_router"]
