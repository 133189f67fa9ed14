"""Single-pass aggregation of tracker events into segment, app and switch tables."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from .errors import InputError
from .models import (
    AggregateResult,
    AppTotals,
    RawEvent,
    SegmentEvent,
    SwitchTotals,
    make_switch_label,
)

logger = logging.getLogger(__name__)


class EventAggregator:
    """Fold an ordered event sequence into the three report tables."""

    def __init__(self, ignore: Iterable[Optional[str]] = ()) -> None:
        self.ignore = frozenset(ignore)

    def aggregate(self, events: Sequence[RawEvent]) -> AggregateResult:
        if not events:
            raise InputError("no data")

        # The tracker closes each log with a copy of its first record, so the
        # final element is dropped. Whether that record is always a duplicate
        # is unconfirmed; a log without one loses its last event here.
        candidates = list(events[:-1]) or list(events)

        start = self._first_tracked(candidates)
        if start is None:
            logger.warning("All %d events are ignored; nothing to report.", len(events))
            return AggregateResult()

        seed = candidates[start]
        apps: dict[Optional[str], AppTotals] = {}
        switches: dict[str, SwitchTotals] = {}
        current = SegmentEvent(
            index=0,
            application_name=seed.application_name,
            start_time=seed.timestamp,
            end_time=seed.timestamp,
            keystrokes=seed.keystrokes,
            mouse_clicks=seed.mouse_clicks,
        )
        segments = [current]
        self._tally(apps, seed)

        for event in candidates[start + 1 :]:
            if event.application_name in self.ignore:
                continue
            self._tally(apps, event)

            if event.application_name == current.application_name:
                current.keystrokes += event.keystrokes
                current.mouse_clicks += event.mouse_clicks
                continue

            elapsed = current.close(event.timestamp)
            apps[current.application_name].duration_seconds += elapsed

            label = make_switch_label(current.application_name, event.application_name)
            if label not in switches:
                switches[label] = SwitchTotals(
                    switch_label=label,
                    from_app=current.application_name or "",
                    to_app=event.application_name or "",
                )
            switches[label].count += 1

            current = SegmentEvent(
                index=len(segments),
                application_name=event.application_name,
                start_time=event.timestamp,
                end_time=event.timestamp,
                keystrokes=event.keystrokes,
                mouse_clicks=event.mouse_clicks,
                switch_label=label,
            )
            segments.append(current)

        logger.debug(
            "Aggregated %d events into %d segments, %d apps, %d switch pairs.",
            len(events),
            len(segments),
            len(apps),
            len(switches),
        )
        return AggregateResult(
            segments=segments,
            apps=list(apps.values()),
            switches=list(switches.values()),
        )

    def _first_tracked(self, events: Sequence[RawEvent]) -> Optional[int]:
        for position, event in enumerate(events):
            if event.application_name not in self.ignore:
                return position
        return None

    @staticmethod
    def _tally(apps: dict[Optional[str], AppTotals], event: RawEvent) -> None:
        totals = apps.get(event.application_name)
        if totals is None:
            totals = apps[event.application_name] = AppTotals(event.application_name)
        totals.keystrokes += event.keystrokes
        totals.mouse_clicks += event.mouse_clicks


def aggregate(
    events: Sequence[RawEvent], ignore: Iterable[Optional[str]] = ()
) -> AggregateResult:
    """Convenience wrapper around :meth:`EventAggregator.aggregate`."""
    return EventAggregator(ignore).aggregate(events)
