"""
app/api/routers package marker.
"""

from app.api.routers.collection_import import router as collection_import_router

__all__ = [
    "collection_import_router",
]
