# nav/errors.py
from __future__ import annotations


class PathfindingError(ValueError):
    """Base class for invalid input to a path search. "No path" is never one of these."""

    kind = "pathfinding_error"


class InvalidGridError(PathfindingError):
    kind = "invalid_grid"


class InvalidCoordinateError(PathfindingError):
    kind = "invalid_coordinate"


class BlockedEndpointError(PathfindingError):
    kind = "blocked_endpoint"
