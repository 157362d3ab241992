from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, List, Optional

from nav.bucket import AdjacencyGraph, BucketSearch
from nav.coords import Coord
from nav.grid import Grid, Heuristic, Topology, bucket_heuristic, default_heuristic
from nav.hexgrid import hex_distance, offset_heuristic
from nav.pathfinding import astar_path
from nav.squaregrid import chebyshev, manhattan

logger = logging.getLogger(__name__)


class Strategy(Enum):
    SCAN = "scan"      # general A*, linear min-f scan
    BUCKET = "bucket"  # unit-cost A*, bucket ring

    @staticmethod
    def parse(value) -> "Strategy":
        if isinstance(value, Strategy):
            return value
        try:
            return Strategy(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown strategy {value!r} (expected 'scan' or 'bucket')") from None


HEURISTICS: Dict[str, Heuristic] = {
    "offset": offset_heuristic,
    "hex": hex_distance,
    "manhattan": manhattan,
    "chebyshev": chebyshev,
}


def heuristic_by_name(name: str) -> Heuristic:
    try:
        return HEURISTICS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown heuristic {name!r} (known: {', '.join(sorted(HEURISTICS))})") from None


def select_strategy(grid: Grid) -> Strategy:
    # The hex board's reference estimate is fractional, which the buckets can't index.
    if grid.topology is Topology.HEX:
        return Strategy.SCAN
    return Strategy.BUCKET


class Pathfinder:
    """
    Path queries against one static grid.

    The adjacency graph for the bucket strategy is built on first use and
    shared by every later query. Bucket search state is kept per thread, so
    one Pathfinder can serve concurrent callers.
    """

    def __init__(self, grid: Grid, strategy: Optional[Strategy] = None,
                 heuristic: Optional[Heuristic] = None):
        self.grid = grid
        self.strategy = select_strategy(grid) if strategy is None else Strategy.parse(strategy)
        if heuristic is not None:
            self.heuristic = heuristic
        elif self.strategy is Strategy.BUCKET:
            self.heuristic = bucket_heuristic(grid.topology)
        else:
            self.heuristic = default_heuristic(grid.topology)

        if self.strategy is Strategy.BUCKET and self.heuristic is offset_heuristic:
            raise ValueError("bucket strategy needs an integer heuristic; 'offset' is fractional")

        self._graph: Optional[AdjacencyGraph] = None
        self._graph_lock = threading.Lock()
        self._local = threading.local()

    def __repr__(self):
        return f"Pathfinder(size={self.grid.map_size}, topology={self.grid.topology.value}, strategy={self.strategy.value})"

    @property
    def graph(self) -> AdjacencyGraph:
        if self._graph is None:
            with self._graph_lock:
                if self._graph is None:
                    self._graph = AdjacencyGraph(self.grid)
                    logger.debug("built adjacency graph: %d cells", len(self._graph))
        return self._graph

    def _bucket_search(self) -> BucketSearch:
        searcher = getattr(self._local, "searcher", None)
        if searcher is None:
            searcher = BucketSearch(self.graph, self.heuristic)
            self._local.searcher = searcher
        return searcher

    def find_path(self, start, end) -> Optional[List[Coord]]:
        """
        Path from start to end, both included, or None when end is unreachable.
        Raises InvalidCoordinateError / BlockedEndpointError for bad endpoints.
        """
        if self.strategy is Strategy.BUCKET:
            return self._bucket_search().find_path(start, end)
        return astar_path(self.grid, start, end, self.heuristic)


def find_path(grid: Grid, start, end, strategy: Optional[Strategy] = None,
              heuristic: Optional[Heuristic] = None) -> Optional[List[Coord]]:
    return Pathfinder(grid, strategy, heuristic).find_path(start, end)
