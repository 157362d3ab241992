# nav/hexgrid.py
from __future__ import annotations

from typing import List, Tuple

from nav.coords import Coord

# Offset-row layout: odd rows sit half a cell to the right of even rows.
# Order matters: it is the neighbour expansion order, and so part of the tie-break.
ODD_ROW_DIRS: Tuple[Tuple[int, int], ...] = (
    (0, -1),   # up
    (1, -1),   # up-right
    (1, 0),    # right
    (1, 1),    # down-right
    (0, 1),    # down
    (-1, 0),   # left
)

EVEN_ROW_DIRS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),  # up-left
    (0, -1),   # up
    (1, 0),    # right
    (0, 1),    # down
    (-1, 1),   # down-left
    (-1, 0),   # left
)


def row_directions(y: int) -> Tuple[Tuple[int, int], ...]:
    return ODD_ROW_DIRS if y % 2 == 1 else EVEN_ROW_DIRS


def hex_neighbors(c: Coord) -> List[Coord]:
    """All six neighbours of c, unfiltered (may be off-board)."""
    return [Coord(c.x + dx, c.y + dy) for dx, dy in row_directions(c.y)]


def offset_heuristic(a: Coord, b: Coord) -> float:
    """
    max(dx, dy) + min(dx, dy) / 2 on raw offset coordinates.

    This is the estimate the board has always used for its hex search. It is
    not exact: on odd rows a diagonal step can cover dx=1, dy=1 in one move
    while this returns 1.5. Use hex_distance when a strict lower bound matters.
    """
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    return max(dx, dy) + min(dx, dy) / 2


def offset_to_axial(c: Coord) -> Tuple[int, int]:
    q = c.x - (c.y - (c.y & 1)) // 2
    return q, c.y


def hex_distance(a: Coord, b: Coord) -> int:
    # axial distance via cube coords
    aq, ar = offset_to_axial(a)
    bq, br = offset_to_axial(b)
    dq = aq - bq
    dr = ar - br
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2
