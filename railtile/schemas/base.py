"""Base types and enums for railtile schemas."""

from enum import Enum


class TileColor(str, Enum):
    WHITE = "white"
    YELLOW = "yellow"
    GREEN = "green"
    BROWN = "brown"
    GRAY = "gray"
    RED = "red"
    BLUE = "blue"

    @property
    def rank(self) -> int:
        """Position in the upgrade order, white lowest."""
        return COLOR_ORDER.index(self)

    def next(self) -> "TileColor | None":
        """The color one step up, or None for the last color."""
        if self.rank + 1 >= len(COLOR_ORDER):
            return None
        return COLOR_ORDER[self.rank + 1]


# Upgrade order
COLOR_ORDER: list[TileColor] = list(TileColor)
