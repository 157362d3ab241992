from __future__ import annotations

import logging
import threading
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException

import db
from nav import settings
from nav.coords import as_coord, coord_key
from nav.errors import PathfindingError
from nav.grid import Grid, Topology
from nav.logger_config import setup_logging
from nav.persistence import grid_from_json, grid_to_dict, grid_to_json, path_to_keys
from nav.router import Pathfinder, Strategy, heuristic_by_name
from scenarios.boards import build_board

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    db.init_db()
    logger.info("board store at %s", db.db_path())
    yield


app = FastAPI(title="hexroute", lifespan=lifespan)

# (board_id, strategy, heuristic) -> Pathfinder. Each keeps the board's adjacency graph.
_pathfinders: Dict[Tuple[str, Optional[str], Optional[str]], Pathfinder] = {}
# board_id -> bumped each time the stored board is replaced or deleted.
_board_epochs: Dict[str, int] = {}
_cache_lock = threading.Lock()


def _bad_request(kind: str, message: str) -> HTTPException:
    return HTTPException(status_code=400, detail={"error": kind, "message": message})


def _parse_grid(d: Any) -> Grid:
    if not isinstance(d, dict):
        raise _bad_request("invalid_grid", "grid must be an object")
    if "map_size" not in d:
        raise _bad_request("invalid_grid", "grid.map_size is required")

    map_size = d["map_size"]
    if isinstance(map_size, int) and map_size > settings.MAX_MAP_SIZE:
        raise _bad_request("invalid_grid", f"map_size may not exceed {settings.MAX_MAP_SIZE}")

    try:
        return Grid(
            map_size=map_size,
            obstacles=[as_coord(o) for o in d.get("obstacles", [])],
            topology=Topology.parse(d.get("topology", Topology.HEX.value)),
        )
    except PathfindingError as e:
        raise _bad_request(e.kind, str(e))
    except (TypeError, ValueError) as e:
        raise _bad_request("invalid_grid", str(e))


def _parse_coord(payload: Dict[str, Any], field: str):
    if field not in payload:
        raise _bad_request("invalid_coordinate", f"{field} is required")
    try:
        return as_coord(payload[field])
    except (TypeError, ValueError) as e:
        raise _bad_request("invalid_coordinate", str(e))


def _options(payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    strategy = payload.get("strategy") or settings.default_strategy()
    heuristic = payload.get("heuristic")
    if heuristic is not None:
        heuristic = str(heuristic)
    try:
        if strategy is not None:
            strategy = Strategy.parse(strategy).value
        if heuristic is not None:
            heuristic_by_name(heuristic)
    except ValueError as e:
        raise _bad_request("invalid_option", str(e))
    return strategy, heuristic


def _make_pathfinder(grid: Grid, strategy: Optional[str], heuristic: Optional[str]) -> Pathfinder:
    try:
        return Pathfinder(
            grid,
            Strategy.parse(strategy) if strategy else None,
            heuristic_by_name(heuristic) if heuristic else None,
        )
    except ValueError as e:
        raise _bad_request("invalid_option", str(e))


def _run_query(pf: Pathfinder, payload: Dict[str, Any]) -> Dict[str, Any]:
    start = _parse_coord(payload, "start")
    end = _parse_coord(payload, "end")
    try:
        path = pf.find_path(start, end)
    except PathfindingError as e:
        raise _bad_request(e.kind, str(e))
    except ValueError as e:
        # Custom heuristic rejected mid-search.
        raise _bad_request("invalid_option", str(e))

    return {
        "found": path is not None,
        "path": path_to_keys(path),
        "steps": None if path is None else len(path) - 1,
        "strategy": pf.strategy.value,
        "start": coord_key(start),
        "end": coord_key(end),
    }


def _load_board(board_id: str) -> Tuple[str, Grid]:
    row = db.get_board(board_id)
    if row is None:
        raise HTTPException(status_code=404, detail="No such board")
    name, grid_json = row
    return name, grid_from_json(grid_json)


def _board_pathfinder(board_id: str, strategy: Optional[str], heuristic: Optional[str]) -> Pathfinder:
    key = (board_id, strategy, heuristic)
    with _cache_lock:
        pf = _pathfinders.get(key)
        epoch = _board_epochs.get(board_id, 0)
    if pf is not None:
        return pf

    _, grid = _load_board(board_id)
    pf = _make_pathfinder(grid, strategy, heuristic)
    with _cache_lock:
        if _board_epochs.get(board_id, 0) != epoch:
            # Board changed or went away while this was built; serve it once, never cache it.
            return pf
        return _pathfinders.setdefault(key, pf)


def _forget_board(board_id: str) -> None:
    with _cache_lock:
        _board_epochs[board_id] = _board_epochs.get(board_id, 0) + 1
        for key in [k for k in _pathfinders if k[0] == board_id]:
            del _pathfinders[key]


@app.post("/paths")
def query_path(payload: Dict[str, Any]):
    grid = _parse_grid(payload.get("grid"))
    strategy, heuristic = _options(payload)
    return _run_query(_make_pathfinder(grid, strategy, heuristic), payload)


@app.get("/boards")
def list_boards():
    return {"boards": [{"board_id": bid, "name": name} for bid, name in db.list_boards()]}


@app.post("/boards")
def create_board(payload: Dict[str, Any]):
    """Body is either {"grid": {...}} or {"preset": "<name>", "topology": "..."}."""
    preset = payload.get("preset")
    if preset is not None:
        try:
            grid = build_board(str(preset), Topology.parse(payload.get("topology", Topology.HEX.value)))
        except ValueError as e:
            raise _bad_request("invalid_grid", str(e))
    else:
        grid = _parse_grid(payload.get("grid"))

    board_id = str(uuid.uuid4())
    name = str(payload.get("name") or preset or "board")
    db.create_board(board_id, name, grid_to_json(grid))
    logger.info("created board %s (%s, %dx%d %s)", board_id, name, grid.map_size, grid.map_size,
                grid.topology.value)
    return {"board_id": board_id, "name": name}


@app.get("/boards/{board_id}")
def get_board(board_id: str):
    name, grid = _load_board(board_id)
    return {"board_id": board_id, "name": name, "grid": grid_to_dict(grid)}


@app.put("/boards/{board_id}")
def replace_board(board_id: str, payload: Dict[str, Any]):
    """Body is {"grid": {...}} with an optional new "name"."""
    old_name, _ = _load_board(board_id)
    grid = _parse_grid(payload.get("grid"))
    name = str(payload.get("name") or old_name)

    if not db.update_board(board_id, name, grid_to_json(grid)):
        raise HTTPException(status_code=404, detail="No such board")
    _forget_board(board_id)
    logger.info("replaced board %s (%s, %dx%d %s)", board_id, name, grid.map_size, grid.map_size,
                grid.topology.value)
    return {"board_id": board_id, "name": name}


@app.delete("/boards/{board_id}")
def delete_board(board_id: str):
    deleted = db.delete_board(board_id)
    _forget_board(board_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="No such board")
    return {"deleted": board_id}


@app.post("/boards/{board_id}/paths")
def query_board_path(board_id: str, payload: Dict[str, Any]):
    strategy, heuristic = _options(payload)
    return _run_query(_board_pathfinder(board_id, strategy, heuristic), payload)
