"""Rules engine for the sliding-tile game 2048."""

from .board import Board, new_board
from .board_rules import is_game_over, resolve, spawn, valid_moves
from .events import CombineInto, Create, Event, GameOver, Move, ScoreAdd
from .geometry import Direction, Position, line_starts, successor, to_index, to_position
from .session import GameOverError, Session, SessionError, apply, new_session, start

__all__ = [
    "Board",
    "CombineInto",
    "Create",
    "Direction",
    "Event",
    "GameOver",
    "GameOverError",
    "Move",
    "Position",
    "ScoreAdd",
    "Session",
    "SessionError",
    "apply",
    "is_game_over",
    "line_starts",
    "new_board",
    "new_session",
    "resolve",
    "spawn",
    "start",
    "successor",
    "to_index",
    "to_position",
    "valid_moves",
]
