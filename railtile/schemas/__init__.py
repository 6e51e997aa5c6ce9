"""Pydantic schemas for railtile."""

from .base import COLOR_ORDER, TileColor
from .catalog import CatalogFile
from .options import TileOptions

__all__ = [
    # base
    "TileColor",
    "COLOR_ORDER",
    # options
    "TileOptions",
    # catalog
    "CatalogFile",
]
