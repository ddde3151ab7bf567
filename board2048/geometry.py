"""Flat-index geometry for rectangular 2048 boards.

Cells are numbered row by row::

    rows: 3, columns: 4
    | 0  | 1  | 2  | 3  |
    | 4  | 5  | 6  | 7  |
    | 8  | 9  | 10 | 11 |

A direction defines a traversal order inside each line; tiles are compacted
toward the first cell of the line.
"""

from enum import Enum
from typing import List, NamedTuple, Optional


class Direction(Enum):
    UP = "UP"
    RIGHT = "RIGHT"
    DOWN = "DOWN"
    LEFT = "LEFT"

    @classmethod
    def parse(cls, name: str) -> "Direction":
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name}") from None


DIRECTION_NAMES = tuple(d.value for d in Direction)


class Position(NamedTuple):
    row: int
    column: int


def to_index(position: Position, columns: int) -> int:
    row, column = position
    return row * columns + column


def to_position(index: int, columns: int) -> Position:
    return Position(*divmod(index, columns))


def successor(direction: Direction, index: int, rows: int, columns: int) -> Optional[int]:
    """Next flat index along ``direction``, or None at the line's far end."""
    if direction is Direction.UP:
        return None if index >= columns * (rows - 1) else index + columns
    if direction is Direction.DOWN:
        return None if index < columns else index - columns
    if direction is Direction.LEFT:
        return None if index % columns == columns - 1 else index + 1
    if direction is Direction.RIGHT:
        return None if index % columns == 0 else index - 1
    raise ValueError(f"Unknown direction: {direction}")


def line_starts(direction: Direction, rows: int, columns: int) -> List[int]:
    """First cell of every independent line for ``direction``."""
    if direction is Direction.UP:
        return list(range(columns))
    if direction is Direction.DOWN:
        return list(range(columns * (rows - 1), columns * rows))
    if direction is Direction.LEFT:
        return [k * columns for k in range(rows)]
    if direction is Direction.RIGHT:
        return [k * columns - 1 for k in range(1, rows + 1)]
    raise ValueError(f"Unknown direction: {direction}")


def line(direction: Direction, start: int, rows: int, columns: int) -> List[int]:
    indices = [start]
    nxt = successor(direction, start, rows, columns)
    while nxt is not None:
        indices.append(nxt)
        nxt = successor(direction, nxt, rows, columns)
    return indices


__all__ = [
    "DIRECTION_NAMES",
    "Direction",
    "Position",
    "line",
    "line_starts",
    "successor",
    "to_index",
    "to_position",
]
