"""Convert desktop activity-tracker logs into tab-separated reports."""

from .aggregator import EventAggregator, aggregate
from .errors import InputError, ReportWriteError

__all__ = ["EventAggregator", "InputError", "ReportWriteError", "aggregate"]
