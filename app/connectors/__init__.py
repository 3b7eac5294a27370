"""
app/connectors package marker.
"""

from app.connectors.base import BaseCatalogConnector, CatalogRequestError
from app.connectors.tmdb_connector import TMDBCatalogConnector

__all__ = [
    "BaseCatalogConnector",
    "CatalogRequestError",
    "TMDBCatalogConnector",
]
