"""Span helpers for the lookup path.

Uses the OpenTelemetry API only; without an SDK configured every span is a
no-op, so the resolver and relationship checker are traced unconditionally.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Call arguments recorded on spans as lookup.<name>. Anything else is skipped.
_RECORDED_ARGS = frozenset({"identifier", "actor_id", "entity_id", "store", "field"})


def _record_call_args(span: trace.Span, signature: inspect.Signature, args: tuple, kwargs: dict) -> None:
    """Record allowlisted arguments (positional or keyword) as span attributes."""
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return
    for name, value in bound.arguments.items():
        if name in _RECORDED_ARGS and isinstance(value, str):
            span.set_attribute(f"lookup.{name}", value)


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Wrap a coroutine function in a span named operation_name.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Static attributes set on every span.

    Returns:
        Decorator. Raises TypeError when applied to a plain function.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() supports coroutine functions only, got {func!r}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, attributes=attributes, record_exception=False, set_status_on_exception=False
            ) as span:
                _record_call_args(span, signature, args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name, attributes=attributes or {})
