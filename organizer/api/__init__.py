"""API endpoints."""

from .activities import router as activities_router
from .export import router as export_router

__all__ = ["activities_router", "export_router"]
