from __future__ import annotations

from .catalog_service import CatalogService, save_json

__all__ = ["CatalogService", "save_json"]
