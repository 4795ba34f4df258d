from __future__ import annotations


class WeathermapError(Exception):
    pass


class DegenerateEdgeGeometryError(WeathermapError, ValueError):
    def __init__(self, message: str = "Cannot normalize a zero-length vector") -> None:
        super().__init__(message)
