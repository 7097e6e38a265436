# src/todo_cli/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object per process, passed explicitly to the pieces that need it.
- Every value has a default, so the tool runs with no configuration at all.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_FILE_PATH = Path("./todo.json")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_optional_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str
    log_file: Path | None

    file_path: Path

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "todo"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            log_file=_env_optional_path(_k("LOG_FILE")),
            file_path=_env_path(_k("FILE_PATH"), DEFAULT_FILE_PATH),
        )


def get_settings(*, dotenv: bool = True) -> Settings:
    """
    Read settings from the current environment.

    A .env file found from the working directory upwards is loaded first,
    without overriding variables that are already set. dotenv=False skips it.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings.from_env()
