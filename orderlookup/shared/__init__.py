"""Shared utilities: request context, telemetry, and retry helpers.

Used by application and infrastructure. No business logic.
"""

from orderlookup.shared.context import get_request_id, reset_request_id, set_request_id

__all__ = ["get_request_id", "reset_request_id", "set_request_id"]
