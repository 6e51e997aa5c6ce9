"""Revenue centers: cities, towns and offboard areas."""

from enum import Enum
from typing import Any, Optional

from .base import Node, PartKind

# Phases a flat revenue applies to
PHASES = ("yellow", "green", "brown", "gray", "diesel")


class RouteMode(str, Enum):
    """Whether routes may or must count a stop they pass through."""
    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    NEVER = "never"


def parse_revenue(revenue: int | str | None) -> tuple[dict[str, int], int | dict[str, int]]:
    """Parse a revenue string into per-phase values and the value to render.

    Accepts a flat value (``30``) or a phase list (``yellow_30|brown_60``).
    A flat value renders as an int, a phase list renders as the dict.
    """
    text = "0" if revenue is None or revenue == "" else str(revenue)

    if "|" in text or "_" in text:
        phased: dict[str, int] = {}
        for item in text.split("|"):
            phase, _, value = item.partition("_")
            phased[phase] = int(value)
        return phased, dict(phased)

    value = int(text)
    return {phase: value for phase in PHASES}, value


class RevenueCenter(Node):
    """A node routes can score at."""

    def __init__(
        self,
        revenue: int | str | None = None,
        groups: Optional[list[str]] = None,
        hide: bool = False,
        visit_cost: int = 1,
        route: RouteMode | str = RouteMode.MANDATORY,
        format: Optional[str] = None,
        loc: Optional[str] = None,
    ):
        super().__init__()
        self.revenue, self.revenue_to_render = parse_revenue(revenue)
        self.groups = groups or []
        self.hide = hide
        self.visit_cost = visit_cost
        self.route = RouteMode(route)
        self.format = format
        self.loc = loc

    def is_stop(self) -> bool:
        return True

    @property
    def max_revenue(self) -> int:
        return max(self.revenue.values(), default=0)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.index}: {self.revenue_to_render}>"


class City(RevenueCenter):
    """A revenue center with token slots."""

    kind = PartKind.CITY

    def __init__(self, revenue: int | str | None = None, slots: int = 1, **kwargs):
        super().__init__(revenue, **kwargs)
        self.slots = slots
        self.tokens: list[Any] = [None] * slots
        self.reservations: list[Any] = [None] * slots

    def _free_slot(self) -> Optional[int]:
        for slot in range(self.slots):
            if self.tokens[slot] is None and self.reservations[slot] is None:
                return slot
        return None

    def add_reservation(self, entity: Any, slot: Optional[int] = None) -> None:
        """Reserve a slot for an entity, the first free one by default."""
        if slot is None:
            slot = self._free_slot()
            if slot is None:
                raise ValueError(f"No free slot in {self!r} to reserve")
        self.reservations[slot] = entity

    def place_token(self, entity: Any, slot: Optional[int] = None) -> None:
        """Place a token, taking the entity's reserved slot if it has one."""
        if slot is None:
            if entity in self.reservations:
                slot = self.reservations.index(entity)
            else:
                slot = self._free_slot()
            if slot is None:
                raise ValueError(f"No free slot in {self!r} for token")
        self.tokens[slot] = entity
        if self.reservations[slot] is entity:
            self.reservations[slot] = None

    @property
    def available_slots(self) -> int:
        return sum(
            1
            for token, reservation in zip(self.tokens, self.reservations)
            if token is None and reservation is None
        )

    def reserved_by(self, entity: Any) -> bool:
        return any(r is not None and entity in (r, getattr(r, "owner", None)) for r in self.reservations)


class Town(RevenueCenter):
    """A small revenue center without token slots."""

    kind = PartKind.TOWN


class Offboard(RevenueCenter):
    """An off-map revenue location."""

    kind = PartKind.OFFBOARD
