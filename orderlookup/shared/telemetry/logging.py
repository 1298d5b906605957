"""Logging configuration for the application."""

import logging
import sys

from orderlookup.core.config import get_settings
from orderlookup.shared.context import get_request_id


class RequestIdFilter(logging.Filter):
    """Attach the current request id (or '-') to every record as request_id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True (cache hits and misses become
    visible), otherwise INFO. Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
        handlers=[handler],
    )

