from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from nav import settings
from nav.coords import Coord, coord_key
from nav.errors import PathfindingError
from nav.grid import Grid, Topology
from nav.logger_config import setup_logging
from nav.router import Pathfinder, Strategy
from scenarios.boards import BOARDS, build_board

HELP = [
    "Commands:",
    "  size <n>                  - new empty board of side n (keeps topology)",
    "  topology <hex|square4|square8>",
    "  board <name>              - load a sample board (" + ", ".join(sorted(BOARDS)) + ")",
    "  block <x> <y>             - add an obstacle",
    "  unblock <x> <y>           - remove an obstacle",
    "  clear                     - remove all obstacles",
    "  obstacles                 - list obstacles",
    "  strategy <auto|scan|bucket>",
    "  path <x1> <y1> <x2> <y2>  - find a path",
    "  exit",
]


def _configured_strategy() -> Optional[Strategy]:
    name = settings.default_strategy()
    return None if name is None else Strategy.parse(name)


@dataclass
class Session:
    grid: Grid = field(default_factory=lambda: Grid(settings.DEFAULT_MAP_SIZE))
    strategy: Optional[Strategy] = field(default_factory=_configured_strategy)
    _pathfinder: Optional[Pathfinder] = field(default=None, init=False, repr=False)

    def set_grid(self, grid: Grid) -> None:
        self.grid = grid
        self._pathfinder = None

    def set_strategy(self, strategy: Optional[Strategy]) -> None:
        self.strategy = strategy
        self._pathfinder = None

    def pathfinder(self) -> Pathfinder:
        # Rebuilt only when the board or strategy changes, so the adjacency graph is reused.
        if self._pathfinder is None:
            self._pathfinder = Pathfinder(self.grid, self.strategy)
        return self._pathfinder


def _ints(parts: List[str], n: int) -> Optional[List[int]]:
    if len(parts) != n:
        return None
    try:
        return [int(p) for p in parts]
    except ValueError:
        return None


def handle_command(session: Session, raw: str) -> List[str]:
    parts = raw.strip().split()
    if not parts:
        return []
    cmd, args = parts[0].lower(), parts[1:]

    if cmd == "help":
        return list(HELP)

    if cmd == "size":
        nums = _ints(args, 1)
        if nums is None:
            return ["Usage: size <n>"]
        try:
            session.set_grid(Grid(nums[0], topology=session.grid.topology))
        except PathfindingError as e:
            return [f"ERROR: {e}"]
        return [f"Board is now {nums[0]}x{nums[0]}"]

    if cmd == "topology":
        if len(args) != 1:
            return ["Usage: topology <hex|square4|square8>"]
        try:
            topology = Topology.parse(args[0])
        except ValueError as e:
            return [f"ERROR: {e}"]
        g = session.grid
        session.set_grid(Grid(g.map_size, g.obstacles, topology))
        return [f"Topology is now {topology.value}"]

    if cmd == "board":
        if len(args) != 1:
            return ["Usage: board <name>"]
        try:
            session.set_grid(build_board(args[0], session.grid.topology))
        except ValueError as e:
            return [f"ERROR: {e}"]
        g = session.grid
        return [f"Loaded '{args[0]}': {g.map_size}x{g.map_size}, {len(g.obstacles)} obstacles"]

    if cmd in ("block", "unblock"):
        nums = _ints(args, 2)
        if nums is None:
            return [f"Usage: {cmd} <x> <y>"]
        c = Coord(*nums)
        if not session.grid.in_bounds(c):
            return [f"ERROR: {c} is off the board"]
        if cmd == "block":
            session.set_grid(session.grid.with_obstacles([c]))
        else:
            session.set_grid(session.grid.without_obstacles([c]))
        return [f"{cmd}ed {c}"]

    if cmd == "clear":
        g = session.grid
        session.set_grid(Grid(g.map_size, topology=g.topology))
        return ["Obstacles cleared"]

    if cmd == "obstacles":
        if not session.grid.obstacles:
            return ["(no obstacles)"]
        keys = [coord_key(c) for c in sorted(session.grid.obstacles, key=lambda c: (c.y, c.x))]
        return ["Obstacles: " + " ".join(keys)]

    if cmd == "strategy":
        if len(args) != 1:
            return ["Usage: strategy <auto|scan|bucket>"]
        if args[0].lower() == "auto":
            session.set_strategy(None)
        else:
            try:
                session.set_strategy(Strategy.parse(args[0]))
            except ValueError as e:
                return [f"ERROR: {e}"]
        return [f"Strategy is now {session.pathfinder().strategy.value}"]

    if cmd == "path":
        nums = _ints(args, 4)
        if nums is None:
            return ["Usage: path <x1> <y1> <x2> <y2>"]
        start, end = Coord(nums[0], nums[1]), Coord(nums[2], nums[3])
        pf = session.pathfinder()
        try:
            path = pf.find_path(start, end)
        except PathfindingError as e:
            return [f"ERROR: {e}"]
        if path is None:
            return [f"No path from {start} to {end} ({pf.strategy.value})"]
        return [
            f"{len(path) - 1} steps ({pf.strategy.value})",
            " -> ".join(coord_key(c) for c in path),
        ]

    return [f"Unknown command: {raw.strip()}"]


def run_repl(session: Optional[Session] = None):
    session = session or Session()
    print("hexroute console")
    print("Type 'help' for commands. Type 'exit' to quit.\n")

    while True:
        g = session.grid
        prompt = f"[{g.map_size}x{g.map_size} {g.topology.value}]> "
        try:
            raw = input(prompt)
        except EOFError:
            break

        if raw.strip().lower() in ("quit", "exit"):
            break

        for line in handle_command(session, raw):
            print(line)


if __name__ == "__main__":
    setup_logging()
    run_repl()
