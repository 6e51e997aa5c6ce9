"""Errors raised by the tile engine."""


class GameError(Exception):
    """Base class for errors surfaced to the game-rules engine."""


class TileNotFound(GameError):
    """A tile name is absent from every color table of the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tile '{name}' not found")


class DecodeError(GameError):
    """A tile code string is malformed."""

    def __init__(self, message: str, segment: str | None = None):
        self.segment = segment
        if segment is not None:
            message = f"{message} (in segment '{segment}')"
        super().__init__(message)


class UnclassifiedPartError(RuntimeError):
    """A part matched none of the tile's part collections."""
