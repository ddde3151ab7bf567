"""Display events produced by a turn, in the order a mirror must apply them."""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

from .geometry import Position


@dataclass(frozen=True)
class Create:
    pos: Position
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "create", "pos": list(self.pos), "rank": self.rank}


@dataclass(frozen=True)
class Move:
    source: Position
    dest: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "move", "from": list(self.source), "to": list(self.dest)}


@dataclass(frozen=True)
class CombineInto:
    # a and b are the merged cells (a is the one scanned later); target receives the new rank
    a: Position
    b: Position
    target: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "combine", "a": list(self.a), "b": list(self.b), "target": list(self.target)}


@dataclass(frozen=True)
class ScoreAdd:
    amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "score", "amount": self.amount}


@dataclass(frozen=True)
class GameOver:
    final_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "game_over", "score": self.final_score}


Event = Union[Create, Move, CombineInto, ScoreAdd, GameOver]


def events_to_json(events: Sequence[Event]) -> List[Dict[str, Any]]:
    return [event.to_dict() for event in events]


__all__ = ["CombineInto", "Create", "Event", "GameOver", "Move", "ScoreAdd", "events_to_json"]
