"""Turn sequencing for a single game: start spawn, move + spawn, game over."""

from typing import List, Optional

import numpy as np

from .board import Board, new_board
from .board_rules import is_game_over, resolve, spawn
from .events import Event, GameOver
from .geometry import Direction, Position

START_TILES = 4
TURN_TILES = 2

STATE_NEW = "new"
STATE_PLAYING = "playing"
STATE_OVER = "over"


class SessionError(RuntimeError):
    """Raised when a session operation is called in the wrong state."""


class GameOverError(SessionError):
    pass


class Session:
    """Owns one board and the random source that feeds it."""

    def __init__(self, board: Board, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.state = STATE_NEW

    @property
    def score(self) -> int:
        return self.board.score

    @property
    def is_over(self) -> bool:
        return self.state == STATE_OVER

    def rank_at(self, position: Position) -> int:
        return self.board.rank_at(position)

    def grid(self) -> List[List[int]]:
        return self.board.grid()

    def start(self) -> List[Event]:
        if self.state != STATE_NEW:
            raise SessionError(f"Game already started (state: {self.state})")
        self.state = STATE_PLAYING
        return spawn(self.board, START_TILES, self.rng)

    def apply(self, direction: Direction) -> List[Event]:
        if self.state == STATE_OVER:
            raise GameOverError(f"Game is over with score {self.score}")
        if self.state != STATE_PLAYING:
            raise SessionError("Game has not been started")
        direction = Direction.parse(direction)

        events = resolve(self.board, direction)
        events.extend(spawn(self.board, TURN_TILES, self.rng))
        if is_game_over(self.board):
            self.state = STATE_OVER
            events.append(GameOver(self.score))
        return events


def new_session(rows: int, columns: int, seed: Optional[int] = None) -> Session:
    return Session(new_board(rows, columns), seed=seed)


def start(session: Session) -> List[Event]:
    return session.start()


def apply(session: Session, direction: Direction) -> List[Event]:
    return session.apply(direction)


__all__ = [
    "GameOverError",
    "Session",
    "SessionError",
    "apply",
    "new_board",
    "new_session",
    "start",
]
