# Import all routes
from .auth import router as auth_router
from .sections import router as sections_router
from .admin import router as admin_router
from .health import router as health_router

# All routers that should be included in main app
__all__ = [
    "auth_router",
    "sections_router",
    "admin_router",
    "health_router",
]
