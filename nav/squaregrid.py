# nav/squaregrid.py
from __future__ import annotations

from typing import List, Tuple

from nav.coords import Coord

ORTHOGONAL_DIRS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
DIAGONAL_DIRS: Tuple[Tuple[int, int], ...] = ((1, -1), (1, 1), (-1, 1), (-1, -1))


def square_neighbors(c: Coord, diagonal: bool = False) -> List[Coord]:
    dirs = ORTHOGONAL_DIRS + DIAGONAL_DIRS if diagonal else ORTHOGONAL_DIRS
    return [Coord(c.x + dx, c.y + dy) for dx, dy in dirs]


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def chebyshev(a: Coord, b: Coord) -> int:
    # Diagonal steps cost 1 like any other step.
    return max(abs(a.x - b.x), abs(a.y - b.y))
