"""
Catalog source factory and initialization.
"""

import logging
from functools import lru_cache

from src.config import settings
from src.integrations.catalog.base import (
    CatalogFetchError,
    CatalogMismatchError,
    CatalogSchemaError,
    CatalogSource,
)
from src.integrations.catalog.fallback import StaticCatalogSource
from src.integrations.catalog.gateway import CatalogGateway
from src.integrations.catalog.sheets import GoogleSheetsSource

logger = logging.getLogger(__name__)


def get_catalog_source() -> CatalogSource | None:
    """
    Get live catalog source.

    Returns:
        GoogleSheetsSource if configured, otherwise None
        (the gateway then serves built-in data only)
    """
    if settings.catalog_enabled:
        return GoogleSheetsSource()
    logger.warning("SHEET_ID / SHEET_API_KEY not set, serving built-in catalog")
    return None


@lru_cache(maxsize=1)
def get_default_catalog() -> CatalogGateway:
    """Get cached default catalog gateway."""
    return CatalogGateway(source=get_catalog_source())


__all__ = [
    "CatalogFetchError",
    "CatalogMismatchError",
    "CatalogSchemaError",
    "CatalogSource",
    "CatalogGateway",
    "GoogleSheetsSource",
    "StaticCatalogSource",
    "get_catalog_source",
    "get_default_catalog",
]
