import pytest

from nav.grid import Grid
from scenarios.boards import build_walled_board


@pytest.fixture
def open_hex():
    return Grid(5)


@pytest.fixture
def walled():
    return build_walled_board()


@pytest.fixture(autouse=True)
def _board_store(tmp_path, monkeypatch):
    # Keep the sqlite board store out of the working tree.
    monkeypatch.setenv("HEXROUTE_DB_PATH", str(tmp_path / "boards.db"))
