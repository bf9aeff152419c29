"""Environment-driven settings for the admin server."""

from __future__ import annotations

import os
from pathlib import Path

from log_channel.core.config import DEFAULT_DIR_NAME
from log_channel.core.paths import PathResolver

STORAGE_DIR_ENV = "LOG_CHANNEL_STORAGE_DIR"
DIR_NAME_ENV = "LOG_CHANNEL_DIR_NAME"
LOG_LEVEL_ENV = "LOG_CHANNEL_LOG_LEVEL"


def storage_base() -> Path:
    """Return the resolved storage base (defaults to the working directory)."""
    raw = os.getenv(STORAGE_DIR_ENV, os.getcwd())
    return Path(raw).expanduser().resolve()


def log_directory() -> Path:
    """Return the log directory the admin server browses."""
    dir_name = os.getenv(DIR_NAME_ENV) or DEFAULT_DIR_NAME
    return PathResolver.directory_path(storage_base(), dir_name)
