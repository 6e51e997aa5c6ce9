"""Non-track tile features."""

from pathlib import PurePosixPath
from typing import Any, Optional

from .base import Part, PartKind


class Border(Part):
    """A feature along one hex edge, e.g. a river or impassable line."""

    kind = PartKind.BORDER

    def __init__(self, edge: int, type: Optional[str] = None, cost: Optional[int] = None):
        super().__init__()
        self.edge = edge
        self.type = type
        self.cost = cost

    def __repr__(self) -> str:
        return f"<Border {self.edge}: {self.type}>"


class Upgrade(Part):
    """Cost to lay track on the tile, with the terrain causing it."""

    kind = PartKind.UPGRADE

    def __init__(self, cost: int = 0, terrains: Optional[list[str]] = None):
        super().__init__()
        self.cost = cost
        self.terrains = terrains or []

    def __repr__(self) -> str:
        return f"<Upgrade {self.cost}: {self.terrains}>"


class Label(Part):
    """Text label matched when checking upgrades (e.g. ``OO``, ``Y``)."""

    kind = PartKind.LABEL

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(("label", self.text))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"<Label {self.text}>"


class Icon(Part):
    """An image shown on the tile, optionally blocking tile lays."""

    kind = PartKind.ICON

    def __init__(
        self,
        image: str,
        name: Optional[str] = None,
        sticky: bool = True,
        blocks_lay: bool = False,
    ):
        super().__init__()
        self.image = image
        self.name = name or PurePosixPath(image).stem
        self.sticky = sticky
        self._blocks_lay = blocks_lay

    @property
    def blocks_lay(self) -> bool:
        return self._blocks_lay

    def __repr__(self) -> str:
        return f"<Icon {self.name}>"


class Blocker(Part):
    """A game entity (e.g. a private company) blocking the tile."""

    kind = PartKind.BLOCKER

    def __init__(self, owner: Any):
        super().__init__()
        self.owner = owner

    def __repr__(self) -> str:
        return f"<Blocker {self.owner!r}>"
