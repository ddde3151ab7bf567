"""Board state: a flat array of tile ranks plus dimensions and score."""

from typing import List, Optional, Sequence

import numpy as np

from .geometry import Position, to_index, to_position


class Board:
    """Flat rank grid. Rank 0 is empty, rank r displays as ``2**r``."""

    def __init__(self, rows: int, columns: int, content: Optional[Sequence[int]] = None, score: int = 0):
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Invalid board size {rows}x{columns}: rows and columns must be positive")
        if score < 0:
            raise ValueError(f"Score must be non-negative, received {score}")

        if content is None:
            cells = np.zeros(rows * columns, dtype=np.int64)
        else:
            cells = np.array(content, dtype=np.int64).flatten()
            if cells.shape != (rows * columns,):
                raise ValueError(f"Expected {rows * columns} cells for a {rows}x{columns} board, received {cells.size}")
            if np.any(cells < 0):
                raise ValueError("Tile ranks must be non-negative")

        self.rows = rows
        self.columns = columns
        self.content = cells
        self.score = score

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]], score: int = 0) -> "Board":
        arr = np.array(grid, dtype=np.int64)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D grid, received shape {arr.shape}")
        rows, columns = arr.shape
        return cls(rows, columns, arr.flatten(), score)

    def __len__(self) -> int:
        return self.content.size

    def __getitem__(self, index: int) -> int:
        return int(self.content[index])

    def __setitem__(self, index: int, rank: int) -> None:
        self.content[index] = rank

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.columns == other.columns
            and self.score == other.score
            and np.array_equal(self.content, other.content)
        )

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, columns={self.columns}, score={self.score}, content={self.content.tolist()})"

    def index_of(self, position: Position) -> int:
        row, column = position
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise IndexError(f"Position {tuple(position)} outside {self.rows}x{self.columns} board")
        return to_index(position, self.columns)

    def position_of(self, index: int) -> Position:
        return to_position(index, self.columns)

    def rank_at(self, position: Position) -> int:
        return self[self.index_of(position)]

    def empty_indices(self) -> List[int]:
        return np.flatnonzero(self.content == 0).tolist()

    def power_sum(self) -> int:
        """Sum of displayed tile values."""
        return int(sum(1 << int(r) for r in self.content if r))

    def grid(self) -> List[List[int]]:
        return self.content.reshape(self.rows, self.columns).tolist()

    def copy(self) -> "Board":
        return Board(self.rows, self.columns, self.content.copy(), self.score)


def new_board(rows: int, columns: int) -> Board:
    return Board(rows, columns)


__all__ = ["Board", "new_board"]
