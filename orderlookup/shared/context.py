"""Request context management using contextvars.

Holds the current request id so log records emitted anywhere during a
request (resolver, strategies, gateway) can carry it.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request id for the current context; returns a token for reset."""
    return _current_request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _current_request_id.get()


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request id that was current before set_request_id."""
    _current_request_id.reset(token)
