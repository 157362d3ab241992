import random

from nav.coords import Coord
from nav.grid import Grid, Topology


def random_grid(rng, map_size=5, topology=Topology.HEX, min_obstacles=3, max_obstacles=6):
    cells = [Coord(x, y) for y in range(map_size) for x in range(map_size)]
    obstacles = rng.sample(cells, rng.randint(min_obstacles, max_obstacles))
    return Grid(map_size, obstacles, topology)


def random_cases(seed, count, **grid_kwargs):
    """(grid, start, end) triples with passable endpoints."""
    rng = random.Random(seed)
    cases = []
    while len(cases) < count:
        grid = random_grid(rng, **grid_kwargs)
        free = list(grid.passable_cells())
        if len(free) < 2:
            continue
        start, end = rng.sample(free, 2)
        cases.append((grid, start, end))
    return cases


def assert_valid_path(grid, path, start, end):
    assert path[0] == start
    assert path[-1] == end
    for c in path:
        assert grid.is_passable(c), f"{c} is not passable"
    for a, b in zip(path, path[1:]):
        assert grid.is_adjacent(a, b), f"{a} -> {b} is not a single step"
