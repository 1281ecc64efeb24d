"""FastAPI dependencies for injection."""
from fastapi import Depends

from core.auth import get_current_identity
from core.config import Settings, get_settings
from db.session import get_async_session
from services.catalog_client import CatalogClient, build_catalog_client


def get_catalog_client(settings: Settings = Depends(get_settings)) -> CatalogClient:
    """Catalog client configured from settings."""
    return build_catalog_client(settings)


__all__ = [
    "get_async_session",
    "get_catalog_client",
    "get_current_identity",
    "get_settings",
]
