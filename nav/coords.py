# nav/coords.py
from __future__ import annotations

from typing import Any


class Coord:
    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Coord) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"({self.x},{self.y})"


def coord_key(c: Coord) -> str:
    return f"{c.x},{c.y}"


def coord_from_key(s: str) -> Coord:
    parts = s.split(",")
    if len(parts) != 2:
        raise ValueError(f"Bad coordinate key: {s!r}")
    try:
        return Coord(int(parts[0]), int(parts[1]))
    except ValueError:
        raise ValueError(f"Bad coordinate key: {s!r}") from None


def as_coord(value: Any) -> Coord:
    """
    Accepts a Coord, an (x, y) pair or an "x,y" key.
    Booleans and floats are rejected so 1.5 never silently becomes 1.
    """
    if isinstance(value, Coord):
        return value
    if isinstance(value, str):
        return coord_from_key(value)
    try:
        x, y = value
    except (TypeError, ValueError):
        raise TypeError(f"Cannot interpret {value!r} as a coordinate") from None
    for part in (x, y):
        if isinstance(part, bool) or not isinstance(part, int):
            raise TypeError(f"Coordinate components must be ints, got {value!r}")
    return Coord(x, y)
