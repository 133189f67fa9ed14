"""FastAPI application exposing the converter over HTTP."""

from __future__ import annotations

import logging
from dataclasses import asdict, replace
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict

from .aggregator import EventAggregator
from .config import FieldMapping, ReportSettings
from .errors import InputError
from .loader import parse_events
from .models import AggregateResult, AppTotals, SegmentEvent, SwitchTotals
from .reporting import format_timestamp, render_report

REPORT_NAMES = ("events", "apps", "switches")


class FieldMappingPayload(BaseModel):
    app_name: Optional[str] = None
    start_time: Optional[str] = None
    keystrokes: Optional[str] = None
    mouse_clicks: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class AggregatePayload(BaseModel):
    events: list[Any]
    ignore: list[str] = []
    fields: Optional[FieldMappingPayload] = None
    include_open_segment: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    fields: Optional[FieldMapping] = None,
    settings: Optional[ReportSettings] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_fields = fields or FieldMapping()
    resolved_settings = settings or ReportSettings()

    app = FastAPI(title="Activity Report", version="0.1.0")
    app.state.fields = resolved_fields
    app.state.settings = resolved_settings

    @app.on_event("startup")
    async def _startup() -> None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        field_mapping: FieldMapping = request.app.state.fields
        report_settings: ReportSettings = request.app.state.settings
        return {
            "fields": asdict(field_mapping),
            "include_open_segment": report_settings.include_open_segment,
            "reports": list(REPORT_NAMES),
        }

    @app.post("/api/aggregate")
    def aggregate_endpoint(payload: AggregatePayload, request: Request) -> Dict[str, Any]:
        result = _aggregate_payload(payload, request.app.state.fields)
        return {
            "segments": [_segment_payload(segment) for segment in result.segments],
            "apps": [_app_payload(app_totals) for app_totals in result.apps],
            "switches": [_switch_payload(item) for item in result.switches],
        }

    @app.post("/api/reports/{report}", response_class=PlainTextResponse)
    def report_endpoint(
        report: str, payload: AggregatePayload, request: Request
    ) -> PlainTextResponse:
        if report not in REPORT_NAMES:
            raise HTTPException(status_code=404, detail="Unknown report")
        result = _aggregate_payload(payload, request.app.state.fields)
        report_settings = ReportSettings(
            include_open_segment=(
                payload.include_open_segment
                if payload.include_open_segment is not None
                else request.app.state.settings.include_open_segment
            )
        )
        return PlainTextResponse(
            render_report(result, report, report_settings),
            media_type="text/tab-separated-values",
        )

    return app


def _aggregate_payload(payload: AggregatePayload, default_fields: FieldMapping) -> AggregateResult:
    fields = default_fields
    if payload.fields is not None:
        # Empty keys fall back to the defaults, as on the command line.
        overrides = {k: v for k, v in payload.fields.model_dump().items() if v}
        fields = replace(default_fields, **overrides)
    try:
        events = parse_events(payload.events, fields)
        return EventAggregator(payload.ignore).aggregate(events)
    except InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _segment_payload(segment: SegmentEvent) -> Dict[str, Any]:
    return {
        "index": segment.index,
        "application_name": segment.application_name,
        "duration_seconds": segment.duration_seconds,
        "keystrokes": segment.keystrokes,
        "mouse_clicks": segment.mouse_clicks,
        "start_time": format_timestamp(segment.start_time),
        "end_time": format_timestamp(segment.end_time),
        "switch_label": segment.switch_label,
    }


def _app_payload(app_totals: AppTotals) -> Dict[str, Any]:
    return {
        "application_name": app_totals.application_name,
        "keystrokes": app_totals.keystrokes,
        "mouse_clicks": app_totals.mouse_clicks,
        "duration_seconds": app_totals.duration_seconds,
    }


def _switch_payload(item: SwitchTotals) -> Dict[str, Any]:
    return {
        "switch_label": item.switch_label,
        "from_app": item.from_app,
        "to_app": item.to_app,
        "count": item.count,
    }
