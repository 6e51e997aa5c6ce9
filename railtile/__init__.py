"""Hex tile geometry and connectivity engine for 18xx-style railway games."""

from .catalog import TileCatalog, lookup
from .decoder import decode
from .errors import DecodeError, GameError, TileNotFound, UnclassifiedPartError
from .schemas import TileColor, TileOptions
from .tile import Tile

__all__ = [
    "Tile",
    "TileCatalog",
    "TileColor",
    "TileOptions",
    "decode",
    "lookup",
    "GameError",
    "TileNotFound",
    "DecodeError",
    "UnclassifiedPartError",
]
