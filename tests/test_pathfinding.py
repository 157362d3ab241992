import pytest

from nav.coords import Coord
from nav.errors import BlockedEndpointError, InvalidCoordinateError
from nav.grid import Grid, Topology
from nav.hexgrid import hex_distance
from nav.pathfinding import astar_path, bfs_path, validate_endpoints

from helpers import assert_valid_path, random_cases


def test_astar_path_three_cells_along_a_row():
    g = Grid(3)
    assert astar_path(g, Coord(0, 0), Coord(2, 0)) == [Coord(0, 0), Coord(1, 0), Coord(2, 0)]


def test_astar_path_straight_down():
    g = Grid(3)
    assert astar_path(g, Coord(0, 0), Coord(0, 2)) == [Coord(0, 0), Coord(0, 1), Coord(0, 2)]


def test_start_equals_end_is_single_cell(open_hex):
    for c in open_hex.cells():
        assert astar_path(open_hex, c, c) == [c]


def test_accepts_pairs_and_keys():
    g = Grid(3)
    assert astar_path(g, (0, 0), "2,0") == [Coord(0, 0), Coord(1, 0), Coord(2, 0)]


def test_wall_means_no_path(walled):
    assert astar_path(walled, Coord(0, 0), Coord(3, 3)) is None
    assert bfs_path(walled, Coord(0, 0), Coord(3, 3)) is None


def test_routes_around_block():
    g = Grid(5, [Coord(1, 0)])  # block the direct step
    path = astar_path(g, Coord(0, 0), Coord(2, 0))
    assert path is not None
    assert Coord(1, 0) not in path
    assert_valid_path(g, path, Coord(0, 0), Coord(2, 0))
    assert len(path) == len(bfs_path(g, Coord(0, 0), Coord(2, 0)))


@pytest.mark.parametrize("start,end", [
    (Coord(-1, 0), Coord(2, 2)),
    (Coord(0, 5), Coord(2, 2)),
    (Coord(2, 2), Coord(5, 0)),
    (Coord(2, 2), Coord(0, -1)),
])
def test_out_of_bounds_endpoint_is_rejected(open_hex, start, end):
    with pytest.raises(InvalidCoordinateError):
        astar_path(open_hex, start, end)


def test_blocked_start_or_end_is_rejected():
    g = Grid(5, [Coord(1, 1), Coord(3, 3)])
    with pytest.raises(BlockedEndpointError):
        astar_path(g, Coord(1, 1), Coord(0, 0))
    with pytest.raises(BlockedEndpointError):
        astar_path(g, Coord(0, 0), Coord(3, 3))


def test_bounds_checked_before_obstacles():
    g = Grid(5, [Coord(3, 3)])
    with pytest.raises(InvalidCoordinateError):
        validate_endpoints(g, Coord(9, 9), Coord(3, 3))


def test_bfs_path_rejects_same_inputs():
    g = Grid(5, [Coord(3, 3)])
    with pytest.raises(InvalidCoordinateError):
        bfs_path(g, Coord(0, 0), Coord(0, 7))
    with pytest.raises(BlockedEndpointError):
        bfs_path(g, Coord(0, 0), Coord(3, 3))


def test_open_board_always_has_a_path(open_hex):
    cells = list(open_hex.cells())
    for a in cells:
        for b in cells:
            path = astar_path(open_hex, a, b)
            assert path is not None
            assert_valid_path(open_hex, path, a, b)


def test_repeat_calls_are_identical():
    for grid, start, end in random_cases(seed=7, count=30):
        assert astar_path(grid, start, end) == astar_path(grid, start, end)


def test_default_estimate_gives_valid_paths_and_same_reachability():
    for grid, start, end in random_cases(seed=11, count=200):
        expected = bfs_path(grid, start, end)
        path = astar_path(grid, start, end)
        if expected is None:
            assert path is None
            continue
        assert path is not None
        assert_valid_path(grid, path, start, end)
        assert len(path) >= len(expected)


def test_exact_hex_distance_gives_shortest_paths():
    for grid, start, end in random_cases(seed=3, count=300):
        expected = bfs_path(grid, start, end)
        path = astar_path(grid, start, end, heuristic=hex_distance)
        if expected is None:
            assert path is None
        else:
            assert_valid_path(grid, path, start, end)
            assert len(path) == len(expected), f"{grid.obstacles} {start} -> {end}"


@pytest.mark.parametrize("topology", [Topology.SQUARE4, Topology.SQUARE8])
def test_square_boards_give_shortest_paths(topology):
    for grid, start, end in random_cases(seed=5, count=200, topology=topology):
        expected = bfs_path(grid, start, end)
        path = astar_path(grid, start, end)
        if expected is None:
            assert path is None
        else:
            assert_valid_path(grid, path, start, end)
            assert len(path) == len(expected)



def test_offset_estimate_can_miss_the_shortest_route():
    # The default hex estimate overshoots here, so scan settles on a longer route.
    grid = Grid(8, [Coord(1, 6), Coord(2, 3), Coord(3, 1), Coord(5, 5), Coord(6, 6), Coord(7, 5)])
    start, end = Coord(3, 0), Coord(7, 7)

    loose = astar_path(grid, start, end)
    exact = astar_path(grid, start, end, heuristic=hex_distance)

    assert_valid_path(grid, loose, start, end)
    assert_valid_path(grid, exact, start, end)
    assert len(bfs_path(grid, start, end)) - 1 == 8
    assert len(exact) - 1 == 8
    assert len(loose) - 1 == 9
