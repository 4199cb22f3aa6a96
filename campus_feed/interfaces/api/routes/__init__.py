from fastapi import FastAPI

from .content import router as content_router
from .maintenance import router as maintenance_router
from .notifications import router as notifications_router
from .taxonomy import router as taxonomy_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(users_router)
    app.include_router(notifications_router)
    app.include_router(content_router)
    app.include_router(taxonomy_router)
    app.include_router(maintenance_router)
