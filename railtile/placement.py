"""Placement of cities and towns along tile edges for drawing."""

from collections import defaultdict
from typing import TYPE_CHECKING

from railtile import config
from railtile.hex_edges import EDGE_COUNT, neighbor_edges, opposite_edge
from railtile.parts import Part

if TYPE_CHECKING:
    from railtile.tile import Tile


def _weigh(edge_count: dict[int, float], edge: int) -> None:
    edge_count[edge] += config.PLACEMENT_EDGE_WEIGHT
    for neighbor in neighbor_edges(edge):
        edge_count[neighbor] += config.PLACEMENT_NEIGHBOR_WEIGHT


def compute_city_town_edges(tile: "Tile") -> dict[Part, int]:
    """Pick the edge each city or town of ``tile`` is drawn at.

    Edges are weighted by the track already on them (plus a little for the
    two neighboring edges) and each city/town takes its least crowded
    candidate edge, lowest candidate edges first.

    Returns:
        Mapping of city/town to edge index
    """
    cities = tile.cities
    towns = tile.towns

    if not tile.unrotated_paths and len(cities) >= 2:
        # no track to follow, spread the cities around the hex
        step = EDGE_COUNT // len(cities)
        return {city: index * step for index, city in enumerate(cities)}

    # edge -> tracks and cts on that edge, plus a fraction for each neighbor
    edge_count: dict[int, float] = defaultdict(float)
    # keep room along the bottom for the location name
    edge_count[0] += config.PLACEMENT_LOCATION_NAME_BIAS

    ct_edges: dict[Part, list[int]] = {}
    for path in tile.paths:
        ct = path.city or path.town
        if ct is None:
            continue
        for edge in path.exits:
            ct_edges.setdefault(ct, []).append(edge)
            _weigh(edge_count, edge)

    # lowest edges with any paths are handled first
    ordered = sorted(
        ((ct, sorted(edges)) for ct, edges in ct_edges.items()),
        key=lambda item: item[1],
    )

    result: dict[Part, int] = {}
    for ct, edges in ordered:
        edge = min(edges, key=lambda e: edge_count[e])
        # this edge is now taken, steer the remaining cts away from it
        _weigh(edge_count, edge)
        result[ct] = edge

    city_towns = cities + towns
    pathless = [ct for ct in city_towns if not ct.paths]
    if len(pathless) == 1 and len(city_towns) == 2 and result:
        result[pathless[0]] = opposite_edge(next(iter(result.values())))

    return result
