"""Tab-separated report rendering and console summaries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .config import ReportSettings
from .errors import ReportWriteError
from .models import AggregateResult, AppTotals, SegmentEvent, SwitchTotals

logger = logging.getLogger(__name__)

# Header strings are consumed downstream verbatim, including "SwithTo".
EVENT_LOG_HEADER = "App\tDuration\tKeyStrokes\tMouseClicks\tStartTime\tEndTime\tSwithTo"
APP_LOG_HEADER = "App\tKeyStrokes\tMouseClicks\tDuration"
SWITCH_LOG_HEADER = "AppSwitch\tFrom\tTo\tCount"


@dataclass(slots=True)
class ReportPaths:
    event_log: Path
    app_log: Path
    switch_log: Path


def format_timestamp(value: datetime) -> str:
    return value.replace(microsecond=0).isoformat(sep=" ")


def format_seconds(value: Optional[float]) -> str:
    if value is None:
        return ""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def event_log_rows(
    segments: list[SegmentEvent], include_open_segment: bool = True
) -> list[str]:
    rows = [EVENT_LOG_HEADER]
    for position, segment in enumerate(segments):
        if segment.is_open and not include_open_segment:
            continue
        # The switch that closed this segment is recorded on the next one.
        switch_to = segments[position + 1].switch_label if position + 1 < len(segments) else ""
        end_time = "" if segment.is_open else format_timestamp(segment.end_time)
        rows.append(
            "\t".join(
                [
                    str(segment.index),
                    segment.application_name or "",
                    format_seconds(segment.duration_seconds),
                    str(segment.keystrokes),
                    str(segment.mouse_clicks),
                    format_timestamp(segment.start_time),
                    end_time,
                    switch_to,
                ]
            )
        )
    return rows


def app_log_rows(apps: Iterable[AppTotals]) -> list[str]:
    rows = [APP_LOG_HEADER]
    for app in apps:
        rows.append(
            f"{app.application_name or ''}\t{app.keystrokes}\t{app.mouse_clicks}\t"
            f"{format_seconds(app.duration_seconds)}"
        )
    return rows


def switch_log_rows(switches: Iterable[SwitchTotals]) -> list[str]:
    rows = [SWITCH_LOG_HEADER]
    for item in switches:
        rows.append(f"{item.switch_label}\t{item.from_app}\t{item.to_app}\t{item.count}")
    return rows


def render_report(
    result: AggregateResult, report: str, settings: Optional[ReportSettings] = None
) -> str:
    """Render one of ``events``, ``apps`` or ``switches`` as TSV text."""
    settings = settings or ReportSettings()
    if report == "events":
        rows = event_log_rows(result.segments, settings.include_open_segment)
    elif report == "apps":
        rows = app_log_rows(result.apps)
    elif report == "switches":
        rows = switch_log_rows(result.switches)
    else:
        raise ValueError(f"Unknown report: {report}")
    return "".join(f"{row}\n" for row in rows)


def write_reports(
    result: AggregateResult,
    directory: Path,
    settings: Optional[ReportSettings] = None,
) -> ReportPaths:
    settings = settings or ReportSettings()
    directory = Path(directory)
    paths = ReportPaths(
        event_log=directory / settings.event_log_name,
        app_log=directory / settings.app_log_name,
        switch_log=directory / settings.switch_log_name,
    )
    for report, path in (
        ("events", paths.event_log),
        ("apps", paths.app_log),
        ("switches", paths.switch_log),
    ):
        _write_text(path, render_report(result, report, settings))
    return paths


def _write_text(path: Path, text: str) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise ReportWriteError(path, exc.strerror or str(exc)) from exc
    logger.info("Wrote %s", path)


class SummaryPrinter:
    """Render human-readable summaries in the console."""

    def __init__(self, result: AggregateResult) -> None:
        self.result = result

    def print_summary(self, top: int = 5) -> None:
        result = self.result
        if not result.segments:
            print("No tracked activity in the selected log.")
            return

        tracked = sum(app.duration_seconds for app in result.apps)
        print(f"Segments:     {len(result.segments)}")
        print(f"Switches:     {result.total_switches}")
        print(f"Keystrokes:   {result.total_keystrokes}")
        print(f"Mouse clicks: {result.total_mouse_clicks}")
        print(f"Closed time:  {format_duration(tracked)}")
        print()

        top_apps = sorted(result.apps, key=lambda app: app.duration_seconds, reverse=True)
        print("Top applications:")
        for app in top_apps[:top]:
            name = app.application_name or "(unknown)"
            print(f"  {name[:30]:<30} {format_duration(app.duration_seconds)}")

        top_switches = sorted(result.switches, key=lambda item: item.count, reverse=True)
        if top_switches:
            print()
            print("Top switches:")
            for item in top_switches[:top]:
                print(f"  {item.switch_label[:45]:<45} {item.count}")


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    sign = "-" if total_seconds < 0 else ""
    hours, remainder = divmod(abs(total_seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"
