"""Command-line interface for the activity report converter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .aggregator import EventAggregator
from .config import FieldMapping, ReportSettings
from .errors import InputError
from .loader import load_events, load_ignore_list, resolve_ignore_path
from .models import AggregateResult
from .server_runner import run_server

app = typer.Typer(help="Convert tracker activity logs into TSV reports.")

_APP_FIELD = typer.Option(None, "--app-field", help="Record key holding the application name.")
_TIME_FIELD = typer.Option(None, "--time-field", help="Record key holding the start timestamp.")
_KEYS_FIELD = typer.Option(None, "--keys-field", help="Record key holding the keystroke count.")
_CLICKS_FIELD = typer.Option(
    None, "--clicks-field", help="Record key holding the mouse-click count."
)
_IGNORE_LIST = typer.Option(
    None,
    "--ignore-list",
    path_type=Path,
    help="Newline-separated application names to skip (defaults to IgnoreList.tsv beside the log).",
)


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def convert(
    json_path: Path = typer.Argument(..., help="Activity log exported by the tracker."),
    ignore_list: Optional[Path] = _IGNORE_LIST,
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        path_type=Path,
        help="Directory for the reports. Defaults to the log's directory.",
    ),
    closed_only: bool = typer.Option(
        False,
        "--closed-only",
        help="Omit the still-open final segment from the event log.",
    ),
    app_field: Optional[str] = _APP_FIELD,
    time_field: Optional[str] = _TIME_FIELD,
    keys_field: Optional[str] = _KEYS_FIELD,
    clicks_field: Optional[str] = _CLICKS_FIELD,
) -> None:
    """Write the event, application and switch reports for a log."""
    from .reporting import write_reports

    settings = ReportSettings(include_open_segment=not closed_only)
    fields = FieldMapping.from_overrides(app_field, time_field, keys_field, clicks_field)
    result = _aggregate_or_exit(json_path, ignore_list, fields, settings)

    target_dir = output_dir or json_path.parent
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        paths = write_reports(result, target_dir, settings)
    except OSError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for path in (paths.event_log, paths.app_log, paths.switch_log):
        typer.echo(str(path))


@app.command()
def summary(
    json_path: Path = typer.Argument(..., help="Activity log exported by the tracker."),
    ignore_list: Optional[Path] = _IGNORE_LIST,
    app_field: Optional[str] = _APP_FIELD,
    time_field: Optional[str] = _TIME_FIELD,
    keys_field: Optional[str] = _KEYS_FIELD,
    clicks_field: Optional[str] = _CLICKS_FIELD,
) -> None:
    """Print a high-level summary of a log without writing reports."""
    from .reporting import SummaryPrinter

    fields = FieldMapping.from_overrides(app_field, time_field, keys_field, clicks_field)
    result = _aggregate_or_exit(json_path, ignore_list, fields, ReportSettings())
    SummaryPrinter(result).print_summary()


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the API."
    ),
    open_browser: bool = typer.Option(
        False,
        "--open-browser/--no-open-browser",
        help="Open the interactive API docs in your default browser.",
    ),
) -> None:
    """Serve the conversion HTTP API."""
    run_server(host=host, port=port, open_browser=open_browser)


def _aggregate_or_exit(
    json_path: Path,
    ignore_list: Optional[Path],
    fields: FieldMapping,
    settings: ReportSettings,
) -> AggregateResult:
    ignore_path = ignore_list or resolve_ignore_path(json_path, settings)
    try:
        events = load_events(json_path, fields)
        return EventAggregator(load_ignore_list(ignore_path)).aggregate(events)
    except InputError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
