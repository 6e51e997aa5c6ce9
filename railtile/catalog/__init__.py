"""Static tile catalogs."""

from .catalog_loader import TileCatalog, default_catalog, lookup

__all__ = ["TileCatalog", "default_catalog", "lookup"]
