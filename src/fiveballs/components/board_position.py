from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Grid coordinate of a cell entity. x is the column, y is the row."""
    x: int
    y: int
