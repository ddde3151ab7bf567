import json
import os
import socket
import subprocess
import sys
import time
from pathlib import Path
from urllib import error as urllib_error
from urllib import request as urllib_request

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PORT = 5061


@pytest.fixture(scope="session")
def game_server():
    env = os.environ.copy()
    env["PORT"] = str(PORT)
    env.setdefault("BOARD2048_SEED", "2048")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    proc = subprocess.Popen(
        [sys.executable, "-m", "board2048.game_server"],
        cwd=str(PROJECT_ROOT),
        env=env,
    )

    try:
        for _ in range(40):
            if proc.poll() is not None:
                raise RuntimeError("game server exited before responding")
            try:
                with socket.create_connection(("127.0.0.1", PORT), timeout=0.5):
                    break
            except OSError:
                time.sleep(0.25)
        else:
            raise RuntimeError("game server did not accept connections in time")

        yield f"http://127.0.0.1:{PORT}"
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait(timeout=5)


def _post(url: str, payload: dict) -> dict:
    req = urllib_request.Request(
        url=url,
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    with urllib_request.urlopen(req, timeout=10) as resp:
        return json.loads(resp.read().decode("utf-8"))


def _apply_events(grid, events):
    for event in events:
        kind = event["type"]
        if kind == "create":
            r, c = event["pos"]
            grid[r][c] = event["rank"]
        elif kind == "move":
            (fr, fc), (tr, tc) = event["from"], event["to"]
            grid[tr][tc] = grid[fr][fc]
            grid[fr][fc] = 0
        elif kind == "combine":
            (ar, ac), (br, bc), (tr, tc) = event["a"], event["b"], event["target"]
            rank = grid[ar][ac]
            grid[ar][ac] = 0
            grid[br][bc] = 0
            grid[tr][tc] = rank + 1


# Game is played to a terminal state and a mirrored grid stays in sync with the server
def test_autoplay_reaches_game_over(game_server):
    created = _post(f"{game_server}/games", {"rows": 4, "columns": 4})
    game_id = created["id"]
    mirror = [[0] * 4 for _ in range(4)]
    _apply_events(mirror, created["events"])
    assert mirror == created["grid"]

    snapshot = created
    score = 0
    max_turns = 5000
    for _ in range(max_turns):
        direction = snapshot["valid_moves"][0] if snapshot["valid_moves"] else "LEFT"
        snapshot = _post(f"{game_server}/games/{game_id}/move", {"direction": direction})

        _apply_events(mirror, snapshot["events"])
        score += sum(e["amount"] for e in snapshot["events"] if e["type"] == "score")
        assert mirror == snapshot["grid"], f"Mirror drifted after {direction}: {snapshot['events']}"

        if snapshot["over"]:
            break
    else:
        pytest.fail(f"Game did not reach a terminal state within {max_turns} moves")

    assert snapshot["events"][-1] == {"type": "game_over", "score": snapshot["score"]}
    assert snapshot["score"] == score
    assert all(cell != 0 for row in snapshot["grid"] for cell in row), "Board not full at game over"
    assert snapshot["valid_moves"] == []

    with pytest.raises(urllib_error.HTTPError) as excinfo:
        _post(f"{game_server}/games/{game_id}/move", {"direction": "UP"})
    assert excinfo.value.code == 409
