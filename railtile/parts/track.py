"""Track parts: edge endpoints, paths and junctions."""

from typing import Optional

from railtile.hex_edges import is_valid_edge, rotate_edge

from .base import Node, Part, PartKind


class Edge(Part):
    """A raw hex edge used as a path endpoint."""

    kind = PartKind.EDGE

    def __init__(self, num: int | str):
        super().__init__()
        num = int(num)
        if not is_valid_edge(num):
            raise ValueError(f"Edge must be in 0-5, got {num}")
        self.num = num

    def rotate(self, ticks: int) -> "Edge":
        edge = Edge(rotate_edge(self.num, ticks))
        edge.index = self.index
        edge.tile = self.tile
        return edge

    def is_subset_of(self, other: Part) -> bool:
        return other.is_edge() and self.num == other.num

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.num == other.num

    def __hash__(self) -> int:
        return hash(("edge", self.num))

    def __repr__(self) -> str:
        return f"<Edge {self.num}>"


class Junction(Node):
    """Point where several paths meet without a revenue stop."""

    kind = PartKind.JUNCTION


class Path(Part):
    """A track segment between two endpoints.

    Each endpoint is either an Edge or a node (city, town, offboard or
    junction) shared with the other paths of the tile.
    """

    kind = PartKind.PATH

    def __init__(self, a: Part, b: Part):
        super().__init__()
        self.a = a
        self.b = b
        self.edges: list[Edge] = [e for e in (a, b) if e.is_edge()]

    @property
    def endpoints(self) -> tuple[Part, Part]:
        return (self.a, self.b)

    def _find(self, predicate) -> Optional[Part]:
        return next((e for e in self.endpoints if predicate(e)), None)

    @property
    def city(self) -> Optional[Part]:
        return self._find(lambda e: e.is_city())

    @property
    def town(self) -> Optional[Part]:
        return self._find(lambda e: e.is_town())

    @property
    def offboard(self) -> Optional[Part]:
        return self._find(lambda e: e.is_offboard())

    @property
    def junction(self) -> Optional[Part]:
        return self._find(lambda e: e.is_junction())

    @property
    def node(self) -> Optional[Part]:
        return self._find(lambda e: e.is_node())

    @property
    def stop(self) -> Optional[Part]:
        return self._find(lambda e: e.is_stop())

    @property
    def exits(self) -> list[int]:
        return [edge.num for edge in self.edges]

    def rotate(self, ticks: int) -> "Path":
        """Return a rotated copy sharing this path's nodes."""
        path = Path(self.a.rotate(ticks), self.b.rotate(ticks))
        path.index = self.index
        path.tile = self.tile
        return path

    def is_subset_of(self, other: Part) -> bool:
        """Whether ``other`` covers this path in either orientation."""
        if not other.is_path():
            return False
        return (
            self.a.is_subset_of(other.a) and self.b.is_subset_of(other.b)
        ) or (
            self.a.is_subset_of(other.b) and self.b.is_subset_of(other.a)
        )

    def __repr__(self) -> str:
        return f"<Path {self.index}: {self.a!r} - {self.b!r}>"
