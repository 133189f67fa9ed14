"""Domain models for tracked activity and the reports derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

SWITCH_SEPARATOR = " > "


def make_switch_label(from_app: Optional[str], to_app: Optional[str]) -> str:
    return f"{from_app or ''}{SWITCH_SEPARATOR}{to_app or ''}"


@dataclass(frozen=True, slots=True)
class RawEvent:
    """A single application-focus record as captured by the tracker."""

    application_name: Optional[str]
    timestamp: datetime
    keystrokes: int = 0
    mouse_clicks: int = 0


@dataclass(slots=True)
class SegmentEvent:
    """Represents a contiguous span of time spent in a single application."""

    index: int
    application_name: Optional[str]
    start_time: datetime
    end_time: datetime
    keystrokes: int = 0
    mouse_clicks: int = 0
    duration_seconds: Optional[float] = None
    switch_label: str = ""

    @property
    def is_open(self) -> bool:
        return self.duration_seconds is None

    def close(self, end_time: datetime) -> float:
        self.end_time = end_time
        self.duration_seconds = (end_time - self.start_time).total_seconds()
        return self.duration_seconds


@dataclass(slots=True)
class AppTotals:
    application_name: Optional[str]
    keystrokes: int = 0
    mouse_clicks: int = 0
    duration_seconds: float = 0.0


@dataclass(slots=True)
class SwitchTotals:
    switch_label: str
    from_app: str
    to_app: str
    count: int = 0


@dataclass(slots=True)
class AggregateResult:
    """The three report tables produced by a single aggregation pass."""

    segments: list[SegmentEvent] = field(default_factory=list)
    apps: list[AppTotals] = field(default_factory=list)
    switches: list[SwitchTotals] = field(default_factory=list)

    @property
    def total_keystrokes(self) -> int:
        return sum(app.keystrokes for app in self.apps)

    @property
    def total_mouse_clicks(self) -> int:
        return sum(app.mouse_clicks for app in self.apps)

    @property
    def total_switches(self) -> int:
        return sum(item.count for item in self.switches)
