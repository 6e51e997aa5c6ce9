"""Part types a tile is composed of."""

from .base import Node, Part, PartKind
from .features import Blocker, Border, Icon, Label, Upgrade
from .revenue import City, Offboard, RevenueCenter, RouteMode, Town, parse_revenue
from .track import Edge, Junction, Path

__all__ = [
    # base
    "Part",
    "PartKind",
    "Node",
    # track
    "Edge",
    "Path",
    "Junction",
    # revenue
    "RevenueCenter",
    "RouteMode",
    "City",
    "Town",
    "Offboard",
    "parse_revenue",
    # features
    "Border",
    "Upgrade",
    "Label",
    "Icon",
    "Blocker",
]
