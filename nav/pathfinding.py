from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from nav.coords import Coord, as_coord
from nav.errors import BlockedEndpointError, InvalidCoordinateError
from nav.grid import Grid, Heuristic, default_heuristic

logger = logging.getLogger(__name__)

STEP_COST = 1


@dataclass
class SearchNode:
    coord: Coord
    g: int
    h: float
    f: float
    parent: Optional[int] = None  # arena index of the predecessor; None for the start node


def validate_endpoints(grid: Grid, start, end) -> Tuple[Coord, Coord]:
    """
    Normalizes start/end and checks them against the grid.
    Raises before any search state exists.
    """
    start = as_coord(start)
    end = as_coord(end)

    if not grid.in_bounds(start):
        raise InvalidCoordinateError(f"start {start} is outside the {grid.map_size}x{grid.map_size} board")
    if not grid.in_bounds(end):
        raise InvalidCoordinateError(f"end {end} is outside the {grid.map_size}x{grid.map_size} board")

    if grid.is_blocked(start):
        raise BlockedEndpointError(f"start {start} is an obstacle")
    if grid.is_blocked(end):
        raise BlockedEndpointError(f"end {end} is an obstacle")

    return start, end


def _min_f_index(frontier: List[int], nodes: List[SearchNode]) -> int:
    # Strict '<' keeps the earliest-inserted node on equal f.
    best = 0
    best_f = nodes[frontier[0]].f
    for i in range(1, len(frontier)):
        f = nodes[frontier[i]].f
        if f < best_f:
            best = i
            best_f = f
    return best


def _build_path(nodes: List[SearchNode], idx: int) -> List[Coord]:
    path: List[Coord] = []
    cur: Optional[int] = idx
    while cur is not None:
        node = nodes[cur]
        path.append(node.coord)
        cur = node.parent
    path.reverse()
    return path


def astar_path(grid: Grid, start, end, heuristic: Optional[Heuristic] = None) -> Optional[List[Coord]]:
    """
    A* with a linear min-f scan over an insertion-ordered frontier.

    Returns the path INCLUDING both start and end, or None when the frontier
    empties without reaching end. Invalid endpoints raise (see nav.errors).
    Deterministic: ties on f go to the node discovered first, and neighbours
    are expanded in the grid's fixed direction order.
    """
    start, end = validate_endpoints(grid, start, end)
    h_fn = heuristic or default_heuristic(grid.topology)

    # Per-call arena; parents are indices into it.
    nodes: List[SearchNode] = []
    frontier: List[int] = []
    open_index: Dict[Coord, int] = {}
    closed: Set[Coord] = set()

    h = h_fn(start, end)
    nodes.append(SearchNode(start, 0, h, h, None))
    frontier.append(0)
    open_index[start] = 0

    expanded = 0
    while frontier:
        pos = _min_f_index(frontier, nodes)
        cur_idx = frontier[pos]
        current = nodes[cur_idx]

        if current.coord == end:
            path = _build_path(nodes, cur_idx)
            logger.debug(
                "astar %s -> %s: %d steps, %d expanded, %d discovered",
                start, end, len(path) - 1, expanded, len(nodes),
            )
            return path

        del frontier[pos]
        del open_index[current.coord]
        closed.add(current.coord)
        expanded += 1

        g = current.g + STEP_COST
        for nbr in grid.neighbors(current.coord):
            if nbr in closed:
                continue

            existing = open_index.get(nbr)
            if existing is None:
                h = h_fn(nbr, end)
                nodes.append(SearchNode(nbr, g, h, g + h, cur_idx))
                new_idx = len(nodes) - 1
                frontier.append(new_idx)
                open_index[nbr] = new_idx
            elif g < nodes[existing].g:
                # Updated in place; the next scan will see the new f.
                node = nodes[existing]
                node.g = g
                node.f = g + node.h
                node.parent = cur_idx

    logger.debug("astar %s -> %s: no path, %d expanded", start, end, expanded)
    return None


def bfs_path(grid: Grid, start, end) -> Optional[List[Coord]]:
    """
    Breadth-first search over the same adjacency.
    Returns a shortest path INCLUDING start and end, or None if unreachable.
    """
    start, end = validate_endpoints(grid, start, end)

    frontier = deque([start])
    came_from: Dict[Coord, Optional[Coord]] = {start: None}

    while frontier:
        current = frontier.popleft()
        if current == end:
            break

        for nxt in grid.neighbors(current):
            if nxt in came_from:
                continue
            came_from[nxt] = current
            frontier.append(nxt)

    if end not in came_from:
        return None

    # Reconstruct backwards from end -> start
    path_rev: List[Coord] = [end]
    cur = end
    while cur != start:
        cur = came_from[cur]
        assert cur is not None  # for type checkers
        path_rev.append(cur)

    path_rev.reverse()
    return path_rev
