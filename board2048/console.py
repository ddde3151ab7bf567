"""Terminal front end: mirrors the board from events and reads WASD input."""

import sys
from typing import Iterable, List, Optional, TextIO

from . import config
from .events import CombineInto, Create, Event, GameOver, Move, ScoreAdd
from .geometry import Direction, Position
from .session import new_session

KEY_TO_DIRECTION = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}


class FrontendBoard:
    """Display-side copy of the grid, kept in sync only through events."""

    def __init__(self, rows: int, columns: int):
        self.rows = rows
        self.columns = columns
        self.cells: List[List[int]] = [[0] * columns for _ in range(rows)]
        self.score = 0
        self.final_score: Optional[int] = None

    def __getitem__(self, pos: Position) -> int:
        return self.cells[pos[0]][pos[1]]

    def __setitem__(self, pos: Position, rank: int) -> None:
        self.cells[pos[0]][pos[1]] = rank

    @property
    def over(self) -> bool:
        return self.final_score is not None

    def apply(self, events: Iterable[Event]) -> None:
        for event in events:
            if isinstance(event, Create):
                self[event.pos] = event.rank
            elif isinstance(event, Move):
                self[event.dest] = self[event.source]
                self[event.source] = 0
            elif isinstance(event, CombineInto):
                rank = self[event.a]
                self[event.a] = 0
                self[event.b] = 0
                self[event.target] = rank + 1
            elif isinstance(event, ScoreAdd):
                self.score += event.amount
            elif isinstance(event, GameOver):
                self.final_score = event.final_score

    def render(self) -> str:
        width = max([4] + [len(str(1 << r)) for row in self.cells for r in row if r])
        lines = [f"Score: {self.score}"]
        for row in self.cells:
            lines.append(" ".join(f"{(1 << r) if r else '.':>{width}}" for r in row))
        return "\n".join(lines)


def main(stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    rows, columns = config.board_rows(), config.board_columns()
    session = new_session(rows, columns, seed=config.seed())
    frontend = FrontendBoard(rows, columns)
    frontend.apply(session.start())

    print("Use 'w' (up), 's' (down), 'a' (left), 'd' (right) to move tiles, 'q' to quit", file=stdout)
    while True:
        print(frontend.render(), file=stdout)
        line = stdin.readline()
        if not line:
            break
        key = line.strip().lower()
        if key == "q":
            print("Thanks for playing!", file=stdout)
            break
        if key not in KEY_TO_DIRECTION:
            print(f"Invalid input: {key!r}", file=stdout)
            continue

        frontend.apply(session.apply(KEY_TO_DIRECTION[key]))
        if frontend.over:
            print(frontend.render(), file=stdout)
            print(f"Game over! Your score: {frontend.final_score}", file=stdout)
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())
