"""ASGI middleware: request id propagation and request timeout."""

from orderlookup.middleware.request_id import RequestIDMiddleware
from orderlookup.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware"]
