"""
API routers.
"""

from asset_manager.routers.store import router as store_router

__all__ = [
    "store_router",
]
