from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from conquest.game_store import DEFAULT_TERRITORY_COUNT

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class GameSettings:
    territory_count: int = DEFAULT_TERRITORY_COUNT
    # Fixed seed for a reproducible game; None draws one from the OS.
    seed: int | None = None
    # "Press ENTER to continue" after each command.
    pause_after_command: bool = True
    log_level: str = "WARNING"


def _int_from_env(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from e


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().casefold()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


def settings_from_env() -> GameSettings:
    territory_count = _int_from_env("CONQUEST_TERRITORY_COUNT", DEFAULT_TERRITORY_COUNT)
    return GameSettings(
        territory_count=DEFAULT_TERRITORY_COUNT if territory_count is None else territory_count,
        seed=_int_from_env("CONQUEST_SEED", None),
        pause_after_command=_bool_from_env("CONQUEST_PAUSE", True),
        log_level=os.environ.get("CONQUEST_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )


def load_dotenv_file(*, project_root: Path) -> None:
    """Load `<project_root>/.env` without overriding variables already set."""

    env_path = project_root / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)
