"""Typed failures raised by grid mutations.

Callers are expected to validate before mutating; these signal a broken
caller contract and carry the offending coordinates.
"""
from typing import Tuple


class GridError(Exception):
    """Base exception for invalid grid mutations."""
    def __init__(self, message: str, position: Tuple[int, int]):
        super().__init__(message)
        self.position = position


class CellOccupiedError(GridError):
    """Target cell already holds a ball."""
    def __init__(self, x: int, y: int):
        super().__init__(f"Cell ({x}, {y}) is already occupied", (x, y))


class EmptySourceError(GridError):
    """Move source cell holds no ball."""
    def __init__(self, x: int, y: int):
        super().__init__(f"Cell ({x}, {y}) has no ball to move", (x, y))
