"""Shared telemetry: logging setup and tracing helpers."""

from orderlookup.shared.telemetry.logging import RequestIdFilter, setup_logging
from orderlookup.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "RequestIdFilter",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
