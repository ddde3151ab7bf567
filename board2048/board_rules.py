"""Core 2048 board mechanics shared by the session, the game server and tests."""

from typing import List

import numpy as np

from .board import Board
from .events import CombineInto, Create, Event, Move, ScoreAdd
from .geometry import Direction, line, line_starts, successor

SPAWN_LOW_RANK = 1
SPAWN_HIGH_RANK = 2
SPAWN_LOW_PROBABILITY = 0.9


def _resolve_line(board: Board, target_ind: List[int]) -> List[Event]:
    compact_ind = [idx for idx in target_ind if board[idx] != 0]
    ranks = [board[idx] for idx in compact_ind]
    events: List[Event] = []

    ptr = 0
    i = 0
    while i < len(compact_ind):
        current = compact_ind[i]
        dest = target_ind[ptr]
        rank = ranks[i]

        if i + 1 < len(compact_ind) and ranks[i + 1] == rank:
            nxt = compact_ind[i + 1]
            board[current] = 0
            board[nxt] = 0
            board[dest] = rank + 1
            amount = 2 << rank
            board.score += amount
            events.append(
                CombineInto(
                    a=board.position_of(nxt),
                    b=board.position_of(current),
                    target=board.position_of(dest),
                )
            )
            events.append(ScoreAdd(amount))
            i += 2
        else:
            if current != dest:
                board[current] = 0
                board[dest] = rank
                events.append(Move(board.position_of(current), board.position_of(dest)))
            i += 1
        ptr += 1

    return events


def resolve(board: Board, direction: Direction) -> List[Event]:
    """Slide and merge every line toward ``direction``; mutates ``board``.

    Returns the ordered Move/CombineInto/ScoreAdd events. A direction with no
    legal move yields an empty list.
    """
    direction = Direction.parse(direction)
    events: List[Event] = []
    for start in line_starts(direction, board.rows, board.columns):
        events.extend(_resolve_line(board, line(direction, start, board.rows, board.columns)))
    return events


def next_tile_rank(rng: np.random.Generator) -> int:
    return SPAWN_LOW_RANK if rng.random() < SPAWN_LOW_PROBABILITY else SPAWN_HIGH_RANK


def spawn(board: Board, count: int, rng: np.random.Generator) -> List[Event]:
    """Place up to ``count`` new tiles on uniformly chosen empty cells."""
    events: List[Event] = []
    for _ in range(count):
        empties = board.empty_indices()
        if not empties:
            break
        idx = empties[int(rng.integers(len(empties)))]
        rank = next_tile_rank(rng)
        board[idx] = rank
        events.append(Create(board.position_of(idx), rank))
    return events


def is_game_over(board: Board) -> bool:
    for idx in range(len(board)):
        rank = board[idx]
        if rank == 0:
            return False
        for direction in (Direction.DOWN, Direction.RIGHT):
            neighbour = successor(direction, idx, board.rows, board.columns)
            if neighbour is not None and board[neighbour] == rank:
                return False
    return True


def valid_moves(board: Board) -> List[Direction]:
    allowed: List[Direction] = []
    for direction in Direction:
        if resolve(board.copy(), direction):
            allowed.append(direction)
    return allowed


__all__ = ["is_game_over", "next_tile_rank", "resolve", "spawn", "valid_moves"]
