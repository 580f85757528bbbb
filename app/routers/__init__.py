"""
API routers package.
"""
from app.routers.albums import router as albums_router
from app.routers.health import router as health_router
from app.routers.photos import router as photos_router
from app.routers.system import router as system_router
from app.routers.theme import router as theme_router

__all__ = ["albums_router", "health_router", "photos_router", "system_router", "theme_router"]
