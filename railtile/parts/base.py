"""Base type for tile parts."""

from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

if TYPE_CHECKING:
    from railtile.tile import Tile


class PartKind(str, Enum):
    """Variants a tile part can take."""
    PATH = "path"
    CITY = "city"
    TOWN = "town"
    OFFBOARD = "offboard"
    BORDER = "border"
    JUNCTION = "junction"
    UPGRADE = "upgrade"
    LABEL = "label"
    ICON = "icon"
    EDGE = "edge"
    BLOCKER = "blocker"


class Part:
    """A typed feature placed on a tile.

    The owning tile is only set when the tile aggregates its parts.
    """

    kind: ClassVar[Optional[PartKind]] = None

    def __init__(self):
        self.index = 0
        self.tile: Optional["Tile"] = None

    @property
    def blocks_lay(self) -> bool:
        return False

    def rotate(self, ticks: int) -> "Part":
        """Parts without a direction are unchanged by rotation."""
        return self

    def is_subset_of(self, other: "Part") -> bool:
        """Whether this endpoint is honored by ``other`` on an upgraded tile."""
        return self.kind == other.kind

    def is_path(self) -> bool:
        return self.kind == PartKind.PATH

    def is_city(self) -> bool:
        return self.kind == PartKind.CITY

    def is_town(self) -> bool:
        return self.kind == PartKind.TOWN

    def is_offboard(self) -> bool:
        return self.kind == PartKind.OFFBOARD

    def is_border(self) -> bool:
        return self.kind == PartKind.BORDER

    def is_junction(self) -> bool:
        return self.kind == PartKind.JUNCTION

    def is_upgrade(self) -> bool:
        return self.kind == PartKind.UPGRADE

    def is_label(self) -> bool:
        return self.kind == PartKind.LABEL

    def is_icon(self) -> bool:
        return self.kind == PartKind.ICON

    def is_edge(self) -> bool:
        return self.kind == PartKind.EDGE

    def is_blocker(self) -> bool:
        return self.kind == PartKind.BLOCKER

    def is_node(self) -> bool:
        return False

    def is_stop(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.index}>"


class Node(Part):
    """A structural connection point that paths can share."""

    def __init__(self):
        super().__init__()
        self._paths: Optional[list] = None

    def is_node(self) -> bool:
        return True

    @property
    def paths(self) -> list:
        """Current (rotated) paths of the owning tile that touch this node."""
        if self._paths is None:
            tile = self.tile
            if tile is None:
                return []
            self._paths = [
                path for path in tile.paths if path.a is self or path.b is self
            ]
        return self._paths

    def clear(self) -> None:
        """Drop state derived from the tile's current rotation."""
        self._paths = None
