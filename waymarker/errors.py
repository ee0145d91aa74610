"""Central error types used across the route core."""

from __future__ import annotations


class WaymarkerError(RuntimeError):
    """Base error for route-processing failures."""


class DecodeError(WaymarkerError, ValueError):
    """Raised when an encoded polyline ends in the middle of a value."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class EmptyStreamError(WaymarkerError):
    """Raised when a caller requires at least one point and none is present."""


class RouteImportError(WaymarkerError):
    """Raised when a route file cannot be parsed."""


__all__ = [
    "WaymarkerError",
    "DecodeError",
    "EmptyStreamError",
    "RouteImportError",
]
