"""Load static tile code tables and build tiles from them."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import yaml

from railtile import config
from railtile.errors import GameError, TileNotFound
from railtile.schemas import COLOR_ORDER, CatalogFile, TileColor
from railtile.tile import Tile

logger = logging.getLogger(__name__)


class TileCatalog:
    """Per-color tables of tile name to tile code."""

    def __init__(self, tables: Mapping[TileColor | str, Mapping[str, str]], name: str = "default"):
        self.name = name
        self.tables: dict[TileColor, dict[str, str]] = {
            TileColor(color): dict(table) for color, table in tables.items()
        }

    @classmethod
    def from_yaml(cls, path: Path | str) -> "TileCatalog":
        """Load a catalog from a YAML file."""
        yaml_path = Path(path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Catalog not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        catalog_file = CatalogFile.model_validate(data)
        catalog = cls(catalog_file.tiles, name=catalog_file.name)
        logger.info(f"Loaded catalog '{catalog.name}' with {len(catalog)} tiles from {yaml_path}")
        return catalog

    @classmethod
    def load_default(cls) -> "TileCatalog":
        return cls.from_yaml(config.DEFAULT_CATALOG_PATH)

    def __len__(self) -> int:
        return sum(len(table) for table in self.tables.values())

    def __contains__(self, name: str) -> bool:
        return any(name in table for table in self.tables.values())

    def code_for(self, name: str) -> tuple[TileColor, str]:
        """Find a tile's color and code, searching colors in upgrade order."""
        for color in COLOR_ORDER:
            table = self.tables.get(color, {})
            if name in table:
                return color, table[name]
        raise TileNotFound(name)

    def lookup(self, name: str, **options) -> Tile:
        """Build the named tile."""
        color, code = self.code_for(name)
        return Tile.from_code(name, color, code, **options)

    def names(self, color: Optional[TileColor | str] = None) -> list[str]:
        if color is not None:
            return list(self.tables.get(TileColor(color), {}))
        return [name for c in COLOR_ORDER for name in self.tables.get(c, {})]

    def tiles(self, color: Optional[TileColor | str] = None) -> list[Tile]:
        return [self.lookup(name) for name in self.names(color)]

    def upgrades_for(self, tile: Tile) -> list[Tile]:
        """Catalog tiles that ``tile`` may be upgraded to."""
        next_color = tile.color.next()
        if next_color is None:
            return []
        return [t for t in self.tiles(next_color) if tile.upgrades_to(t)]

    def validate(self) -> list[str]:
        """Decode every tile, returning one message per failure."""
        errors = []
        for name in self.names():
            try:
                self.lookup(name)
            except GameError as e:
                errors.append(f"{name}: {e}")
        return errors


_default_catalog: Optional[TileCatalog] = None


def default_catalog() -> TileCatalog:
    """The bundled catalog, loaded on first use."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = TileCatalog.load_default()
    return _default_catalog


def lookup(name: str, catalog: Optional[TileCatalog] = None, **options) -> Tile:
    """Build the named tile from ``catalog``, or the bundled catalog."""
    if catalog is None:
        catalog = default_catalog()
    return catalog.lookup(name, **options)
