from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Number of spaces per level when a SyncedFile writes in pretty mode
    pretty_indent: int = 2

    # os.fsync after every write (off by default: flush only)
    fsync_writes: bool = False


def get_settings() -> Settings:
    pretty_indent = _env_int("FILESYNC_PRETTY_INDENT", 2)
    if pretty_indent < 0:
        pretty_indent = 2

    fsync_writes = _env_bool("FILESYNC_FSYNC", False)

    return Settings(
        pretty_indent=pretty_indent,
        fsync_writes=fsync_writes,
    )
