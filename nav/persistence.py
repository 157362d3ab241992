# nav/persistence.py
from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional

from nav.coords import Coord, coord_from_key, coord_key
from nav.grid import Grid, Topology

SCHEMA_VERSION = 1


def grid_to_dict(grid: Grid) -> dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "map_size": grid.map_size,
        "topology": grid.topology.value,
        "obstacles": sorted((coord_key(c) for c in grid.obstacles), key=_key_order),
    }


def grid_from_dict(data: dict[str, Any]) -> Grid:
    if int(data.get("schema_version", 0)) != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema_version: {data.get('schema_version')}")
    return Grid(
        map_size=int(data["map_size"]),
        obstacles=frozenset(coord_from_key(s) for s in data.get("obstacles", [])),
        topology=Topology.parse(data.get("topology", Topology.HEX.value)),
    )


def grid_to_json(grid: Grid) -> str:
    return json.dumps(grid_to_dict(grid), sort_keys=True)


def grid_from_json(s: str) -> Grid:
    return grid_from_dict(json.loads(s))


def path_to_keys(path: Optional[Iterable[Coord]]) -> Optional[List[str]]:
    if path is None:
        return None
    return [coord_key(c) for c in path]


def _key_order(key: str):
    # Row-major, numeric.
    c = coord_from_key(key)
    return c.y, c.x
