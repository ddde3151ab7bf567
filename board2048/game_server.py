import threading
import uuid
from typing import Dict, Optional, Tuple

from flask import Flask, jsonify, request
from flask_cors import CORS

from . import config
from .board_rules import valid_moves
from .events import events_to_json
from .session import GameOverError, Session, SessionError, new_session


class GameEntry:
    def __init__(self, session: Session):
        self.session = session
        self.lock = threading.Lock()


app = Flask(__name__)
CORS(app, resources={r"/games*": {"origins": config.allowed_origins()}})

_games: Dict[str, GameEntry] = {}
_games_lock = threading.Lock()


def _snapshot(game_id: str, session: Session) -> Dict:
    return {
        "id": game_id,
        "grid": session.grid(),
        "rows": session.board.rows,
        "columns": session.board.columns,
        "score": session.score,
        "over": session.is_over,
        "valid_moves": [] if session.is_over else [d.value for d in valid_moves(session.board)],
    }


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _lookup(game_id: str) -> Optional[GameEntry]:
    with _games_lock:
        return _games.get(game_id)


def _register(game_id: str, entry: GameEntry) -> None:
    limit = max(config.max_games(), 1)
    with _games_lock:
        while len(_games) >= limit:
            # finished games go first, then the oldest in creation order
            finished = [gid for gid, e in _games.items() if e.session.is_over]
            victim = finished[0] if finished else next(iter(_games))
            del _games[victim]
            app.logger.info("Evicted game %s", victim)
        _games[game_id] = entry


def _read_payload() -> Dict:
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("Payload must be a JSON object")
    return payload


def _read_dimensions(payload: Dict) -> Tuple[int, int, Optional[int]]:
    rows = payload.get("rows", config.board_rows())
    columns = payload.get("columns", config.board_columns())
    seed = payload.get("seed", config.seed())
    limit = config.max_side()
    for name, value in (("rows", rows), ("columns", columns)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"'{name}' must be an integer")
        if value > limit:
            raise ValueError(f"'{name}' must be at most {limit}")
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ValueError("'seed' must be an integer")
    return rows, columns, seed


# A board can be stuck right after the opening spawn (e.g. 1x1). Its snapshot
# then has "over": false with empty "valid_moves"; the next move of any
# direction changes nothing and returns the game_over event.
@app.post("/games")
def create_game():
    try:
        payload = _read_payload()
        rows, columns, seed = _read_dimensions(payload)
        session = new_session(rows, columns, seed=seed)
    except ValueError as exc:
        app.logger.warning("Rejected new game: %s", exc)
        return _error(str(exc), 400)

    events = session.start()
    game_id = uuid.uuid4().hex
    _register(game_id, GameEntry(session))
    app.logger.info("Created game %s (%dx%d)", game_id, rows, columns)

    response = _snapshot(game_id, session)
    response["events"] = events_to_json(events)
    return jsonify(response), 201


@app.get("/games/<game_id>")
def get_game(game_id: str):
    entry = _lookup(game_id)
    if entry is None:
        return _error(f"Unknown game: {game_id}", 404)
    with entry.lock:
        return jsonify(_snapshot(game_id, entry.session))


@app.delete("/games/<game_id>")
def delete_game(game_id: str):
    with _games_lock:
        entry = _games.pop(game_id, None)
    if entry is None:
        return _error(f"Unknown game: {game_id}", 404)
    app.logger.info("Deleted game %s", game_id)
    return "", 204


@app.post("/games/<game_id>/move")
def move(game_id: str):
    entry = _lookup(game_id)
    if entry is None:
        return _error(f"Unknown game: {game_id}", 404)

    try:
        payload = _read_payload()
    except ValueError as exc:
        return _error(str(exc), 400)
    direction = payload.get("direction")
    if direction is None:
        return _error("Payload must include 'direction' key", 400)

    with entry.lock:
        session = entry.session
        try:
            events = session.apply(direction)
        except GameOverError as exc:
            return _error(str(exc), 409)
        except (SessionError, ValueError) as exc:
            app.logger.warning("Rejected move for game %s: %s", game_id, exc)
            return _error(str(exc), 400)

        if session.is_over:
            app.logger.info("Game %s over with score %d", game_id, session.score)

        response = _snapshot(game_id, session)
        response["events"] = events_to_json(events)
    return jsonify(response)


if __name__ == "__main__":
    # Use 0.0.0.0 so a front end can reach it from another process on the same machine.
    app.run(host="0.0.0.0", port=config.port(), debug=config.debug())
