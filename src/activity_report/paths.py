"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "ActivityReport"
APP_AUTHOR = "ActivityReport"


def get_config_dir() -> Path:
    """Return the per-user configuration directory (not created)."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    return Path(dirs.user_config_path)


def get_default_ignore_path(file_name: str = "IgnoreList.tsv") -> Path:
    return get_config_dir() / file_name
