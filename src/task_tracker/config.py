# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every setting has a default, so a bare `task-tracker add ...` needs no environment.
- Existing environment variables win over values from .env.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TT"

# Look for .env next to where the command runs, not next to this file.
load_dotenv(find_dotenv(usecwd=True), override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_optional_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Optional[Path]

    # ---- Storage ----
    tasks_path: Path
    json_indent: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tracker").strip() or "task-tracker"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_dir = _env_optional_path(_k("LOG_DIR"))

        tasks_path = _env_path(_k("TASKS_PATH"), Path("tasks.json"))
        # Negative indent is meaningless for json.dumps; clamp to compact output.
        json_indent = max(0, _env_int(_k("JSON_INDENT"), 2))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            tasks_path=tasks_path,
            json_indent=json_indent,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
