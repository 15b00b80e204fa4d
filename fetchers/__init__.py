# fetchers/__init__.py
from .catalog_api import CatalogClient, fetch_all, fetch_by_id

__all__ = ["CatalogClient", "fetch_all", "fetch_by_id"]
