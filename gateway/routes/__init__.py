"""API route modules."""

from gateway.routes.file_routes import router as file_router
from gateway.routes.legacy_routes import router as legacy_router

__all__ = [
    "file_router",
    "legacy_router",
]
