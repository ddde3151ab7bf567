"""Environment-driven settings for the game server."""

import os
from typing import Optional

DEFAULT_ROWS = 4
DEFAULT_COLUMNS = 4
DEFAULT_PORT = 5050
DEFAULT_MAX_SIDE = 16
DEFAULT_MAX_GAMES = 1000


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, received {raw!r}") from None


def board_rows() -> int:
    return _int_from_env("BOARD2048_ROWS", DEFAULT_ROWS)


def board_columns() -> int:
    return _int_from_env("BOARD2048_COLUMNS", DEFAULT_COLUMNS)


def seed() -> Optional[int]:
    return _int_from_env("BOARD2048_SEED", None)


def max_side() -> int:
    return _int_from_env("BOARD2048_MAX_SIDE", DEFAULT_MAX_SIDE)


def max_games() -> int:
    return _int_from_env("BOARD2048_MAX_GAMES", DEFAULT_MAX_GAMES)


def allowed_origins() -> str:
    return os.environ.get("BOARD2048_ALLOWED_ORIGINS", "*")


def port() -> int:
    return _int_from_env("PORT", DEFAULT_PORT)


def debug() -> bool:
    return bool(os.environ.get("FLASK_DEBUG"))
