from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from nav.coords import Coord, as_coord
from nav.grid import Grid, Heuristic, bucket_heuristic
from nav.pathfinding import STEP_COST, validate_endpoints

logger = logging.getLogger(__name__)

# f can grow by at most 2 per unit step under a consistent heuristic
# (1 for the step, 1 for the estimate), so three buckets cover every push.
DEFAULT_RING_WIDTH = 3


class AdjacencyGraph:
    """
    Neighbour links between passable cells of one static grid.
    Never mutated after construction; safe to share between searches.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.links: Dict[Coord, Tuple[Coord, ...]] = {
            c: tuple(grid.neighbors(c)) for c in grid.passable_cells()
        }

    def __len__(self):
        return len(self.links)

    def __contains__(self, c: Coord) -> bool:
        return c in self.links

    def neighbors(self, c: Coord) -> Tuple[Coord, ...]:
        return self.links[c]


class _Cell:
    __slots__ = ("generation", "g", "parent", "closed")

    def __init__(self):
        self.generation = 0
        self.g = 0
        self.parent: Optional[Coord] = None
        self.closed = False


class BucketSearch:
    """
    Unit-cost A* that keeps the frontier in a ring of buckets keyed by
    f - base_cost instead of scanning for the minimum.

    Per-cell state is stamped with a generation; every search() bumps the
    generation so cells touched by older searches read as unvisited without
    being cleared. One instance must not run two searches at once. Searches
    in parallel need one BucketSearch each (they may share the graph).
    """

    def __init__(self, graph: AdjacencyGraph, heuristic: Optional[Heuristic] = None,
                 ring_width: int = DEFAULT_RING_WIDTH):
        if ring_width < 1:
            raise ValueError("ring_width must be >= 1")
        self.graph = graph
        self.heuristic = heuristic or bucket_heuristic(graph.grid.topology)
        self.ring_width = ring_width
        self.generation = 0
        self._cells: Dict[Coord, _Cell] = {c: _Cell() for c in graph.links}

    def _estimate(self, c: Coord, end: Coord) -> int:
        h = self.heuristic(c, end)
        if h != int(h):
            raise ValueError(f"bucket search needs an integer heuristic, got {h!r} at {c}")
        return int(h)

    def search(self, start, end) -> Optional[List[Coord]]:
        """
        Returns the path from end back to start, EXCLUDING start
        ([] when start == end), or None if end is unreachable.
        """
        start, end = validate_endpoints(self.graph.grid, start, end)
        base_cost = self._estimate(start, end)

        self.generation += 1
        gen = self.generation

        cell = self._cells[start]
        cell.generation = gen
        cell.g = 0
        cell.parent = None
        cell.closed = False

        buckets: Deque[List[Tuple[Coord, int]]] = deque([] for _ in range(self.ring_width))
        buckets[0].append((start, 0))
        live = 1
        popped = 0

        while live:
            bucket = buckets[0]
            if not bucket:
                buckets.popleft()
                buckets.append([])
                base_cost += 1
                continue

            coord, g = bucket.pop()
            live -= 1
            cell = self._cells[coord]
            if cell.closed or g != cell.g:
                continue  # stale duplicate
            cell.closed = True
            popped += 1

            if coord == end:
                path = self._walk_back(end)
                logger.debug(
                    "bucket %s -> %s: %d steps, %d popped, generation %d",
                    start, end, len(path), popped, gen,
                )
                return path

            ng = g + STEP_COST
            for nbr in self.graph.neighbors(coord):
                nc = self._cells[nbr]
                if nc.generation != gen:
                    nc.generation = gen
                    nc.closed = False
                elif nc.closed or ng >= nc.g:
                    continue
                nc.g = ng
                nc.parent = coord

                idx = ng + self._estimate(nbr, end) - base_cost
                if idx < 0:
                    raise ValueError(f"heuristic is not consistent: f dropped below {base_cost} at {nbr}")
                while idx >= len(buckets):
                    buckets.append([])
                buckets[idx].append((nbr, ng))
                live += 1

        logger.debug("bucket %s -> %s: no path, %d popped, generation %d", start, end, popped, gen)
        return None

    def _walk_back(self, end: Coord) -> List[Coord]:
        path: List[Coord] = []
        cur = end
        while True:
            parent = self._cells[cur].parent
            if parent is None:
                break
            path.append(cur)
            cur = parent
        return path

    def find_path(self, start, end) -> Optional[List[Coord]]:
        """Same shape as astar_path: start..end inclusive, or None."""
        rev = self.search(start, end)
        if rev is None:
            return None
        rev.append(as_coord(start))
        rev.reverse()
        return rev
