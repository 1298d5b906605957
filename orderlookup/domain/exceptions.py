"""Domain exceptions for order lookup.

Defines domain-level exceptions that represent lookup outcomes callers must
tell apart ("record does not exist" vs "backend is down"). These exceptions
are independent of infrastructure concerns. Presentation layer maps them to
HTTP responses in exception handlers.
"""

from typing import Any


class OrderLookupException(Exception):
    """Base exception for all order lookup errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. identifier, store).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(OrderLookupException):
    """Raised when input validation fails (e.g. empty identifier or unknown store)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class OrderNotFoundException(OrderLookupException):
    """Raised when no strategy resolved the identifier and synthetic fallback is off."""

    def __init__(self, identifier: str, attempted: list[str] | None = None) -> None:
        """Initialize with the unresolved identifier.

        Args:
            identifier: The identifier the caller supplied.
            attempted: Names of strategies that ran and found nothing.
        """
        super().__init__(
            f"Order not found: {identifier}",
            "RECORD_NOT_FOUND",
            {"identifier": identifier, "attempted": attempted or []},
        )


class TransientGatewayError(OrderLookupException):
    """Raised when a backend gateway call fails (timeout, connection, driver error).

    Strategies recover from it locally. The resolver raises it only when every
    applicable strategy failed this way, so callers can answer "backend down"
    instead of "not found".
    """

    def __init__(
        self,
        operation: str,
        store: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the failing operation.

        Args:
            operation: Gateway operation (e.g. 'fetch_by_exact_key') or 'resolve'.
            store: Store the operation targeted, when known.
            reason: Short description of the underlying failure.
            details: Optional extra keys merged into details.
        """
        merged: dict[str, Any] = {"operation": operation}
        if store:
            merged["store"] = store
        if reason:
            merged["reason"] = reason
        merged.update(details or {})
        message = f"Backend gateway unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "GATEWAY_UNAVAILABLE", merged)


class CapabilityProbeFailure(OrderLookupException):
    """Schema introspection failed; the probe answers False for this call only.

    Never raised to callers; built so the probe logs a consistent payload.
    """

    def __init__(self, store: str, field: str, reason: str) -> None:
        super().__init__(
            f"Could not introspect {store} for field {field}: {reason}",
            "CAPABILITY_PROBE_FAILED",
            {"store": store, "field": field, "reason": reason},
        )


class SqlNotConfiguredException(OrderLookupException):
    """Raised when a lookup is requested but no database is configured."""

    def __init__(self) -> None:
        super().__init__(
            message="Order lookup requires a database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class AmbiguousPrefixWarning(UserWarning):
    """Emitted when a shortened ID matches more than one order key.

    Not an error: the first sorted key is used. Surfaced so the weak
    tie-break can be seen in logs and asserted in tests.
    """
