from nav.coords import Coord
from nav.grid import Grid, Topology


def build_open_board(map_size=8, topology=Topology.HEX):
    return Grid(map_size, topology=topology)


def build_walled_board(topology=Topology.HEX):
    # Row 2 is solid, so nothing above it can reach anything below it.
    wall = [Coord(x, 2) for x in range(4)]
    return Grid(4, wall, topology)


def build_maze_board(topology=Topology.HEX):
    """
    8x8 with two staggered walls: row 2 open only at x=7, row 5 open only at x=0.
    (0,0) -> (7,7) has to snake through both gaps.
    """
    obstacles = [Coord(x, 2) for x in range(7)]
    obstacles += [Coord(x, 5) for x in range(1, 8)]
    return Grid(8, obstacles, topology)


BOARDS = {
    "open": build_open_board,
    "walled": build_walled_board,
    "maze": build_maze_board,
}


def build_board(name, topology=Topology.HEX):
    try:
        builder = BOARDS[name]
    except KeyError:
        raise ValueError(f"Unknown board {name!r} (known: {', '.join(sorted(BOARDS))})") from None
    return builder(topology=topology)
