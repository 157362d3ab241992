from __future__ import annotations

import logging
import os
import sqlite3
from datetime import datetime, timezone
from typing import Optional
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = str((Path(__file__).parent / "boards.db").resolve())


def db_path() -> str:
    return os.environ.get("HEXROUTE_DB_PATH", DEFAULT_DB_PATH)


def _connect() -> sqlite3.Connection:
    # New connection per call keeps things simple and avoids threading pitfalls.
    return sqlite3.connect(db_path())


def init_db() -> None:
    with _connect() as con:
        con.execute(
            """
            CREATE TABLE IF NOT EXISTS boards (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                grid_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        con.commit()
    logger.debug("board store ready at %s", db_path())


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def list_boards() -> list[tuple[str, str]]:
    """(id, name) pairs, most recently updated first."""
    init_db()
    with _connect() as con:
        rows = con.execute("SELECT id, name FROM boards ORDER BY updated_at DESC").fetchall()
    return [(r[0], r[1]) for r in rows]


def create_board(board_id: str, name: str, grid_json: str) -> None:
    init_db()
    with _connect() as con:
        con.execute(
            "INSERT INTO boards(id, name, grid_json, updated_at) VALUES(?,?,?,?)",
            (board_id, name, grid_json, _now_iso()),
        )
        con.commit()


def get_board(board_id: str) -> Optional[tuple[str, str]]:
    """(name, grid_json) or None."""
    init_db()
    with _connect() as con:
        row = con.execute("SELECT name, grid_json FROM boards WHERE id = ?", (board_id,)).fetchone()
    return None if row is None else (row[0], row[1])


def update_board(board_id: str, name: str, grid_json: str) -> bool:
    """Replace a stored board's name and grid. False when there is no such board."""
    init_db()
    with _connect() as con:
        cur = con.execute(
            "UPDATE boards SET name = ?, grid_json = ?, updated_at = ? WHERE id = ?",
            (name, grid_json, _now_iso(), board_id),
        )
        con.commit()
        return cur.rowcount > 0


def delete_board(board_id: str) -> bool:
    init_db()
    with _connect() as con:
        cur = con.execute("DELETE FROM boards WHERE id = ?", (board_id,))
        con.commit()
        return cur.rowcount > 0
