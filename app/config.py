"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import env_int, load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    _load_env_once()
    return env_int(name, default)


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class DealImportSettings:
    """
    Runtime settings for the deal import pipeline.
    """

    chunk_size: int = 1000
    max_workers: int = 10


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@lru_cache(maxsize=1)
def get_deal_import_settings() -> DealImportSettings:
    """
    Return cached deal import settings from environment variables.
    """

    return DealImportSettings(
        chunk_size=max(1, _get_int_env("DEAL_IMPORT_CHUNK_SIZE", 1000)),
        max_workers=max(1, _get_int_env("DEAL_IMPORT_MAX_WORKERS", 10)),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings(level=_get_str_env("LOG_LEVEL", "INFO").upper())
