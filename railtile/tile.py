"""Tile aggregate: parts, rotation, upgrades and placement queries."""

import logging
import re
from typing import Any, Iterable, Optional

from railtile.decoder import decode
from railtile.errors import UnclassifiedPartError
from railtile.hex_edges import ALL_EDGES, rotate_edge
from railtile.parts import (
    Blocker,
    Border,
    City,
    Edge,
    Icon,
    Junction,
    Label,
    Node,
    Offboard,
    Part,
    Path,
    Town,
    Upgrade,
)
from railtile.placement import compute_city_town_edges
from railtile.schemas import TileColor, TileOptions

logger = logging.getLogger(__name__)

LEADING_NUMBER = re.compile(r"^\d+")


class Tile:
    """A hex tile built from parts, rotated and upgraded during play."""

    def __init__(
        self,
        name: str,
        color: TileColor | str,
        parts: list[Part],
        rotation: int = 0,
        preprinted: bool = False,
        index: int = 0,
        location_name: Optional[str] = None,
        reservation_blocks: bool = False,
    ):
        if rotation not in ALL_EDGES:
            raise ValueError(f"Rotation must be in 0-5, got {rotation}")

        self.name = name
        self.color = TileColor(color)
        self.parts = list(parts)
        self.rotation = rotation
        self.preprinted = preprinted
        self.index = index
        self.location_name = location_name
        self.reservation_blocks = reservation_blocks

        self.cities: list[City] = []
        self.towns: list[Town] = []
        self.offboards: list[Offboard] = []
        self.upgrades: list[Upgrade] = []
        self.original_borders: list[Border] = []
        self.borders: list[Border] = []
        self.junction: Optional[Junction] = None
        self.icons: list[Icon] = []
        self.blockers: list[Blocker] = []
        self.reservations: list[Any] = []
        self.legal_rotations: list[int] = []
        self._label: Optional[Label] = None
        self._paths: list[Path] = []
        self.blocks_lay = False

        self._rotated_paths: Optional[list[Path]] = None
        self._exits: Optional[list[int]] = None
        self._preferred_city_town_edges: Optional[dict[Part, int]] = None
        self._lawson: Optional[bool] = None
        self._revenue_to_render: Optional[list] = None

        self._separate_parts()

    @classmethod
    def from_code(cls, name: str, color: TileColor | str, code: str, **options) -> "Tile":
        """Build a tile from a code string, validating the options."""
        opts = TileOptions.model_validate(options)
        return cls(name, color, decode(code), **opts.model_dump())

    @property
    def id(self) -> str:
        return f"{self.name}-{self.index}"

    def _sort_key(self) -> tuple[int, int]:
        match = LEADING_NUMBER.match(self.name)
        return (self.color.rank, int(match.group()) if match else 0)

    def __lt__(self, other: "Tile") -> bool:
        return self._sort_key() < other._sort_key()

    def __repr__(self) -> str:
        return f"<Tile: {self.name}, {self.color.value}, rotation {self.rotation}>"

    # Parts

    def _separate_parts(self) -> None:
        """Classify every part into its collection and give it an index."""
        for part in self.parts:
            self.blocks_lay = self.blocks_lay or part.blocks_lay

            if part.is_city():
                self.cities.append(part)
            elif part.is_label():
                self._label = part
            elif part.is_path():
                self._paths.append(part)
            elif part.is_town():
                self.towns.append(part)
            elif part.is_upgrade():
                self.upgrades.append(part)
            elif part.is_offboard():
                self.offboards.append(part)
            elif part.is_border():
                self.original_borders.append(part)
                self.borders.append(part)
            elif part.is_junction():
                self.junction = part
            elif part.is_icon():
                self.icons.append(part)
            elif part.is_blocker():
                self.blockers.append(part)
            else:
                raise UnclassifiedPartError(f"Part {part!r} not separated.")

        by_class: dict[type, list[Part]] = {}
        for part in self.parts:
            by_class.setdefault(type(part), []).append(part)
        for group in by_class.values():
            for index, part in enumerate(group):
                part.index = index
                part.tile = self

        self.nodes: list[Node] = _unique(p.node for p in self._paths if p.node is not None)
        self.stops: list[Node] = _unique(p.stop for p in self._paths if p.stop is not None)
        self.edges: list[Edge] = _unique(e for p in self._paths for e in p.edges)

    @property
    def label(self) -> Optional[Label]:
        return self._label

    @label.setter
    def label(self, label: Label | str | None) -> None:
        """Set the label of a recently placed tile."""
        if isinstance(label, str):
            label = Label(label)
        if label is not None:
            label.tile = self
        self._label = label
        self._invalidate_caches()

    # Rotation

    def rotate(self, absolute: Optional[int] = None) -> "Tile":
        """Rotate to ``absolute``, or to the next legal rotation.

        Without a legal rotation greater than the current one this wraps to
        the smallest legal rotation, and stays put when none are set.
        """
        if absolute is not None:
            if absolute not in ALL_EDGES:
                raise ValueError(f"Rotation must be in 0-5, got {absolute}")
            new_rotation = absolute
        else:
            legal = sorted(self.legal_rotations)
            new_rotation = next(
                (r for r in legal if r > self.rotation),
                legal[0] if legal else self.rotation,
            )

        self.rotation = new_rotation
        self._invalidate_caches()
        return self

    def _invalidate_caches(self) -> None:
        """Drop everything derived from rotation or label."""
        for node in self.nodes:
            node.clear()
        self._rotated_paths = None
        self._exits = None
        self._preferred_city_town_edges = None
        self._lawson = None
        self._revenue_to_render = None

    @property
    def paths(self) -> list[Path]:
        """Paths at the current rotation."""
        if self._rotated_paths is None:
            self._rotated_paths = [path.rotate(self.rotation) for path in self._paths]
        return self._rotated_paths

    @property
    def unrotated_paths(self) -> list[Path]:
        return list(self._paths)

    @property
    def exits(self) -> list[int]:
        """Edges touched by track at the current rotation."""
        if self._exits is None:
            self._exits = _unique(rotate_edge(e.num, self.rotation) for e in self.edges)
        return self._exits

    # Queries

    @property
    def lawson(self) -> bool:
        """Whether all track converges on a single unbranched point."""
        if self._lawson is None:
            self._lawson = (
                self.junction is not None
                or (len(self.cities) == 1 and not self.towns)
                or (not self.cities and len(self.towns) == 1 and len(self.edges) > 2)
            )
        return self._lawson

    def terrain(self) -> list[str]:
        return _unique(t for upgrade in self.upgrades for t in upgrade.terrains)

    @property
    def revenue_to_render(self) -> list:
        if self._revenue_to_render is None:
            self._revenue_to_render = [stop.revenue_to_render for stop in self.stops]
        return self._revenue_to_render

    # Upgrades

    def upgrades_to(self, other: "Tile", special_lay: bool = False) -> bool:
        """Whether ``other`` may replace this tile."""
        # correct color progression?
        if other.color.rank != self.color.rank + 1:
            return False

        # honors pre-existing track?
        if not self.paths_are_subset_of(other.paths):
            return False

        # special abilities skip the remaining checks
        if special_lay:
            return True

        if self.label != other.label:
            return False

        # labelled cities may merge (e.g. OO to a single brown city)
        if len(self.towns) != len(other.towns):
            return False
        if self.label is None and len(self.cities) != len(other.cities):
            return False

        return True

    def paths_are_subset_of(self, other_paths: list[Path]) -> bool:
        """Whether some single rotation fits every path into ``other_paths``."""
        return any(
            all(
                any(path.rotate(ticks).is_subset_of(other) for other in other_paths)
                for path in self._paths
            )
            for ticks in ALL_EDGES
        )

    # City/town placement

    @property
    def preferred_city_town_edges(self) -> dict[Part, int]:
        """Edge each city or town should be drawn at."""
        if self._preferred_city_town_edges is None:
            self._preferred_city_town_edges = compute_city_town_edges(self)
        return self._preferred_city_town_edges

    def city_town_edges(self) -> list[list[int]]:
        """Edges each city or town reaches through its paths."""
        ct_edges: dict[Part, list[int]] = {}
        for path in self.paths:
            ct = path.city or path.town
            if ct is None:
                continue
            ct_edges.setdefault(ct, []).extend(path.exits)
        return list(ct_edges.values())

    # Blockers and reservations

    def add_blocker(self, entity: Any) -> Blocker:
        blocker = entity if isinstance(entity, Blocker) else Blocker(entity)
        blocker.index = len(self.blockers)
        blocker.tile = self
        self.parts.append(blocker)
        self.blockers.append(blocker)
        return blocker

    def blocked_by(self, entity: Any) -> bool:
        return any(b.owner is entity for b in self.blockers)

    def reserved_by(self, entity: Any) -> bool:
        return any(entity in (r, getattr(r, "owner", None)) for r in self.reservations)

    def add_reservation(self, entity: Any, city: Optional[int] = None, slot: int = 0) -> None:
        """Reserve a city slot, or the tile as a whole when no city is given."""
        # a single city is assumed
        if len(self.cities) == 1:
            city = 0

        if city is not None:
            self.cities[city].add_reservation(entity, slot)
        else:
            self.reservations.append(entity)

    def token_blocked_by_reservation(self, entity: Any) -> bool:
        if not self.reservations:
            return False

        if self.reservation_blocks:
            return entity not in self.reservations

        others = sum(1 for r in self.reservations if r != entity)
        return others >= sum(city.available_slots for city in self.cities)

    # Borders

    def remove_border(self, edge: int) -> Optional[Border]:
        border = next((b for b in self.borders if b.edge == edge), None)
        if border is not None:
            self.borders.remove(border)
        return border

    def restore_borders(self, edges: Optional[Iterable[int]] = None) -> list[int]:
        """Re-add removed borders on ``edges``, returning the edges restored."""
        restored = []
        for edge in ALL_EDGES if edges is None else edges:
            original = next((b for b in self.original_borders if b.edge == edge), None)
            if original is None or original in self.borders:
                continue
            self.borders.append(original)
            restored.append(edge)
        if restored:
            logger.debug(f"Restored borders {restored} on {self.id}")
        return restored


def _unique(items: Iterable) -> list:
    """Deduplicate while keeping first-seen order."""
    seen = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen
