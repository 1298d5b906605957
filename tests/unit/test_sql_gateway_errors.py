"""SqlBackendGateway error mapping: which driver errors are retried."""

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from orderlookup.domain.exceptions import TransientGatewayError
from orderlookup.infrastructure.persistence.sql_gateway import SqlBackendGateway
from orderlookup.shared.utils.retry import RetryPolicy


class FailingSession:
    """Async session context manager that raises on entry."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def __aenter__(self) -> "FailingSession":
        raise self.error

    async def __aexit__(self, *exc_info: object) -> bool:
        return False


class FailingSessionFactory:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    def __call__(self) -> FailingSession:
        self.calls += 1
        return FailingSession(self.error)


async def _no_sleep(seconds: float) -> None:
    return None


async def test_operational_error_is_retried_then_transient() -> None:
    factory = FailingSessionFactory(
        OperationalError("SELECT 1", {}, Exception("connection refused"))
    )
    gateway = SqlBackendGateway(factory, retry_policy=RetryPolicy(max_attempts=3), sleep=_no_sleep)

    with pytest.raises(TransientGatewayError):
        await gateway.fetch_related("notifications", "n-1")
    assert factory.calls == 3


async def test_connection_os_error_is_transient() -> None:
    factory = FailingSessionFactory(ConnectionRefusedError("refused"))
    gateway = SqlBackendGateway(factory, retry_policy=RetryPolicy(max_attempts=2), sleep=_no_sleep)

    with pytest.raises(TransientGatewayError):
        await gateway.fetch_related("notifications", "n-1")
    assert factory.calls == 2


async def test_schema_errors_are_not_retried() -> None:
    """A ProgrammingError (e.g. a missing column) propagates on the first attempt."""
    factory = FailingSessionFactory(
        ProgrammingError("SELECT reference_number", {}, Exception("column does not exist"))
    )
    gateway = SqlBackendGateway(factory, retry_policy=RetryPolicy(max_attempts=3), sleep=_no_sleep)

    with pytest.raises(ProgrammingError):
        await gateway.fetch_by_exact_key("orders", "a1b2c3d4-0000-4000-8000-000000000001")
    assert factory.calls == 1
