# site_api/routes/__init__.py
"""
API route handlers organized by domain.
"""

from site_api.routes.health import router as health_router
from site_api.routes.industries import router as industries_router

__all__ = [
    "health_router",
    "industries_router",
]
