"""Exceptions raised while loading activity logs and writing reports."""

from __future__ import annotations

from pathlib import Path


class InputError(ValueError):
    """The activity log is empty or not shaped as an array of records."""


class ReportWriteError(OSError):
    """A report file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
