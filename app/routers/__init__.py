"""
Fraudlr API Routers.

All routers are imported here for easy access.
"""

from app.routers.auth import router as auth_router

__all__ = [
    "auth_router",
]
