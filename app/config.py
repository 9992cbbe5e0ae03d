"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SOURCE_DIR = "src/gtfs"
DEFAULT_ROUTES_PATH = "src/gtfs/routes.txt"
DEFAULT_MAX_FILE_SIZE_BYTES = 45 * 1024 * 1024
DEFAULT_CHUNK_SIZE_BYTES = 64 * 1024


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = PROJECT_ROOT / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _resolve_path(raw: str) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


@dataclass(frozen=True)
class SplitterSettings:
    """
    Runtime settings for the oversized GTFS file splitter.
    """

    source_dir: Path
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    chunk_size_bytes: int = DEFAULT_CHUNK_SIZE_BYTES


@dataclass(frozen=True)
class RouteDataSettings:
    """
    Runtime settings for loading routes.txt at startup.
    """

    routes_path: Path
    log_validation_errors: bool = True
    max_logged_validation_errors: int = 50


@lru_cache(maxsize=1)
def get_splitter_settings() -> SplitterSettings:
    """
    Return cached splitter settings from environment variables.
    """

    return SplitterSettings(
        source_dir=_resolve_path(_get_str_env("GTFS_SOURCE_DIR", DEFAULT_SOURCE_DIR)),
        max_file_size_bytes=max(1, _get_int_env("GTFS_SPLIT_MAX_BYTES", DEFAULT_MAX_FILE_SIZE_BYTES)),
        chunk_size_bytes=max(1, _get_int_env("GTFS_SPLIT_CHUNK_BYTES", DEFAULT_CHUNK_SIZE_BYTES)),
    )


@lru_cache(maxsize=1)
def get_route_data_settings() -> RouteDataSettings:
    """
    Return cached route loading settings from environment variables.
    """

    return RouteDataSettings(
        routes_path=_resolve_path(_get_str_env("GTFS_ROUTES_PATH", DEFAULT_ROUTES_PATH)),
        log_validation_errors=_get_bool_env("GTFS_LOG_VALIDATION_ERRORS", True),
        max_logged_validation_errors=max(1, _get_int_env("GTFS_MAX_LOGGED_VALIDATION_ERRORS", 50)),
    )


def get_log_level() -> str:
    """
    Return the configured root log level name.
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()
