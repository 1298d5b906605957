"""Shared utilities: retry with exponential backoff."""

from orderlookup.shared.utils.retry import RetryPolicy, with_retry

__all__ = ["RetryPolicy", "with_retry"]
