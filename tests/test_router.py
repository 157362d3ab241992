from concurrent.futures import ThreadPoolExecutor

import pytest

from nav.coords import Coord
from nav.errors import BlockedEndpointError
from nav.grid import Grid, Topology
from nav.hexgrid import hex_distance, offset_heuristic
from nav.pathfinding import astar_path, bfs_path
from nav.router import Pathfinder, Strategy, find_path, heuristic_by_name, select_strategy
from nav.squaregrid import chebyshev, manhattan
from scenarios.boards import build_maze_board


def test_select_strategy_by_topology():
    assert select_strategy(Grid(4)) is Strategy.SCAN
    assert select_strategy(Grid(4, topology=Topology.SQUARE4)) is Strategy.BUCKET
    assert select_strategy(Grid(4, topology=Topology.SQUARE8)) is Strategy.BUCKET


def test_default_heuristics_follow_strategy():
    assert Pathfinder(Grid(4)).heuristic is offset_heuristic
    assert Pathfinder(Grid(4), Strategy.BUCKET).heuristic is hex_distance
    assert Pathfinder(Grid(4, topology=Topology.SQUARE4)).heuristic is manhattan
    assert Pathfinder(Grid(4, topology=Topology.SQUARE8), Strategy.SCAN).heuristic is chebyshev


def test_hex_default_matches_plain_astar():
    grid = build_maze_board()
    assert find_path(grid, Coord(0, 0), Coord(7, 7)) == astar_path(grid, Coord(0, 0), Coord(7, 7))


def test_strategies_are_interchangeable():
    grid = build_maze_board(Topology.SQUARE4)
    scan = Pathfinder(grid, Strategy.SCAN).find_path(Coord(0, 0), Coord(7, 7))
    bucket = Pathfinder(grid, Strategy.BUCKET).find_path(Coord(0, 0), Coord(7, 7))
    assert scan[0] == bucket[0] == Coord(0, 0)
    assert scan[-1] == bucket[-1] == Coord(7, 7)
    assert len(scan) == len(bucket)


def test_strategy_accepts_names():
    pf = Pathfinder(Grid(3), "bucket")
    assert pf.strategy is Strategy.BUCKET
    assert Strategy.parse(" SCAN ") is Strategy.SCAN
    with pytest.raises(ValueError):
        Strategy.parse("dijkstra")


def test_bucket_rejects_offset_estimate_up_front():
    with pytest.raises(ValueError):
        Pathfinder(Grid(5), Strategy.BUCKET, offset_heuristic)
    with pytest.raises(ValueError):
        find_path(Grid(5), Coord(0, 0), Coord(1, 2), Strategy.BUCKET, offset_heuristic)
    # Scan takes it; bucket on hex takes the exact distance.
    assert Pathfinder(Grid(5), Strategy.SCAN, offset_heuristic).heuristic is offset_heuristic
    assert Pathfinder(Grid(5), Strategy.BUCKET, hex_distance).heuristic is hex_distance


def test_heuristic_by_name():
    assert heuristic_by_name("hex") is hex_distance
    assert heuristic_by_name("Offset") is offset_heuristic
    with pytest.raises(ValueError):
        heuristic_by_name("euclid")


def test_graph_is_built_once():
    pf = Pathfinder(Grid(5, topology=Topology.SQUARE4))
    pf.find_path(Coord(0, 0), Coord(4, 4))
    graph = pf.graph
    pf.find_path(Coord(4, 0), Coord(0, 4))
    assert pf.graph is graph


def test_errors_pass_through_both_strategies():
    grid = Grid(4, [Coord(1, 1)], Topology.SQUARE4)
    for strategy in Strategy:
        with pytest.raises(BlockedEndpointError):
            Pathfinder(grid, strategy).find_path(Coord(1, 1), Coord(3, 3))


def test_concurrent_queries_share_one_pathfinder():
    grid = build_maze_board(Topology.SQUARE8)
    pf = Pathfinder(grid)
    cells = list(grid.passable_cells())
    pairs = [(a, b) for a in cells[::4] for b in cells[::9]]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda p: pf.find_path(*p), pairs))

    for (a, b), path in zip(pairs, results):
        expected = bfs_path(grid, a, b)
        assert (path is None) == (expected is None)
        if path is not None:
            assert len(path) == len(expected)
