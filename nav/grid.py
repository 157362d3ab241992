from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Iterator, List

from nav.coords import Coord, as_coord
from nav.errors import InvalidGridError
from nav.hexgrid import hex_distance, hex_neighbors, offset_heuristic
from nav.squaregrid import chebyshev, manhattan, square_neighbors

Heuristic = Callable[[Coord, Coord], float]


class Topology(Enum):
    HEX = "hex"
    SQUARE4 = "square4"
    SQUARE8 = "square8"

    @staticmethod
    def parse(value) -> "Topology":
        if isinstance(value, Topology):
            return value
        try:
            return Topology(str(value).strip().lower())
        except ValueError:
            names = ", ".join(t.value for t in Topology)
            raise ValueError(f"Unknown topology {value!r} (expected one of: {names})") from None


def default_heuristic(topology: Topology) -> Heuristic:
    """Estimate used by the min-scan search."""
    if topology is Topology.HEX:
        return offset_heuristic
    if topology is Topology.SQUARE8:
        return chebyshev
    return manhattan


def bucket_heuristic(topology: Topology) -> Heuristic:
    """Integer, consistent estimate required by the bucket search."""
    if topology is Topology.HEX:
        return hex_distance
    if topology is Topology.SQUARE8:
        return chebyshev
    return manhattan


@dataclass(frozen=True)
class Grid:
    """
    Square board of side map_size, cells (0..map_size-1, 0..map_size-1).
    Frozen: a search may assume the board never changes under it.
    """

    map_size: int
    obstacles: FrozenSet[Coord] = field(default_factory=frozenset)
    topology: Topology = Topology.HEX

    def __post_init__(self):
        if isinstance(self.map_size, bool) or not isinstance(self.map_size, int) or self.map_size <= 0:
            raise InvalidGridError(f"map_size must be a positive integer, got {self.map_size!r}")
        object.__setattr__(self, "topology", Topology.parse(self.topology))
        # Off-board obstacles can never be reached; drop them.
        blocked = frozenset(c for c in (as_coord(o) for o in self.obstacles) if self.in_bounds(c))
        object.__setattr__(self, "obstacles", blocked)

    def in_bounds(self, c: Coord) -> bool:
        return 0 <= c.x < self.map_size and 0 <= c.y < self.map_size

    def is_blocked(self, c: Coord) -> bool:
        return c in self.obstacles

    def is_passable(self, c: Coord) -> bool:
        return self.in_bounds(c) and not self.is_blocked(c)

    def candidate_neighbors(self, c: Coord) -> List[Coord]:
        if self.topology is Topology.HEX:
            return hex_neighbors(c)
        return square_neighbors(c, diagonal=self.topology is Topology.SQUARE8)

    def neighbors(self, c: Coord) -> List[Coord]:
        """Passable neighbours in fixed direction order."""
        return [n for n in self.candidate_neighbors(c) if self.is_passable(n)]

    def is_adjacent(self, a: Coord, b: Coord) -> bool:
        return b in self.candidate_neighbors(a)

    def cells(self) -> Iterator[Coord]:
        for y in range(self.map_size):
            for x in range(self.map_size):
                yield Coord(x, y)

    def passable_cells(self) -> Iterator[Coord]:
        return (c for c in self.cells() if not self.is_blocked(c))

    def with_obstacles(self, extra: Iterable) -> "Grid":
        return Grid(self.map_size, self.obstacles | {as_coord(o) for o in extra}, self.topology)

    def without_obstacles(self, removed: Iterable) -> "Grid":
        return Grid(self.map_size, self.obstacles - {as_coord(o) for o in removed}, self.topology)
