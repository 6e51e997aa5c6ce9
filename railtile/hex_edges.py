"""Hex edge utilities.

Edge numbering (clockwise, flat-topped hex, edge 0 at the bottom):
    Edge 0: S
    Edge 1: SW
    Edge 2: NW
    Edge 3: N
    Edge 4: NE
    Edge 5: SE
"""

EDGE_COUNT = 6

ALL_EDGES: tuple[int, ...] = tuple(range(EDGE_COUNT))

# Direction names for readability
EDGE_NAMES: dict[str, int] = {
    "S": 0,
    "SW": 1,
    "NW": 2,
    "N": 3,
    "NE": 4,
    "SE": 5,
}


def rotate_edge(edge: int, ticks: int = 1) -> int:
    """Rotate an edge clockwise by the given number of ticks.

    Args:
        edge: Edge index 0-5
        ticks: Number of 60 degree steps, may be negative

    Returns:
        Rotated edge index, always in 0-5
    """
    return (edge + ticks) % EDGE_COUNT


def opposite_edge(edge: int) -> int:
    """Get edge index on opposite side of hex.

    Edge 0 (S) opposite is Edge 3 (N), etc.
    """
    return (edge + 3) % EDGE_COUNT


def neighbor_edges(edge: int) -> tuple[int, int]:
    """Get the two edges adjacent to the given edge."""
    return ((edge - 1) % EDGE_COUNT, (edge + 1) % EDGE_COUNT)


def is_valid_edge(edge: int) -> bool:
    return 0 <= edge < EDGE_COUNT
