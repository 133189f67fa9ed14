"""Configuration models and helpers for the activity report converter."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class FieldMapping:
    """Record keys holding each logical field of a tracker event."""

    app_name: str = "ApplicationName"
    start_time: str = "TimeStarted"
    keystrokes: str = "KeyStrokes"
    mouse_clicks: str = "MouseClicks"

    @classmethod
    def from_overrides(
        cls,
        app_name: str | None = None,
        start_time: str | None = None,
        keystrokes: str | None = None,
        mouse_clicks: str | None = None,
    ) -> "FieldMapping":
        overrides = {
            "app_name": app_name,
            "start_time": start_time,
            "keystrokes": keystrokes,
            "mouse_clicks": mouse_clicks,
        }
        return replace(cls(), **{k: v for k, v in overrides.items() if v})


@dataclass(slots=True)
class ReportSettings:
    """File names and layout options for the generated reports."""

    ignore_file_name: str = "IgnoreList.tsv"
    event_log_name: str = "EventLog.tsv"
    app_log_name: str = "AppLog.tsv"
    switch_log_name: str = "SwitchLog.tsv"
    include_open_segment: bool = True
