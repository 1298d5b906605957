"""Unit tests for CapabilityProbe (caches answers, never caches failures)."""

from unittest.mock import AsyncMock

from orderlookup.application.services.capability_probe import CapabilityProbe
from orderlookup.domain.enums import CacheNamespace
from orderlookup.domain.exceptions import TransientGatewayError
from orderlookup.infrastructure.cache.resolution_cache import ResolutionCache


async def test_present_field_is_cached(gateway: AsyncMock, cache: ResolutionCache) -> None:
    """Second call for the same pair does not introspect again."""
    probe = CapabilityProbe(gateway, cache)
    assert await probe.has_field("orders", "reference_number") is True
    assert await probe.has_field("orders", "reference_number") is True
    gateway.introspect_columns.assert_awaited_once_with("orders")


async def test_absent_field_is_cached_as_false(
    gateway: AsyncMock, cache: ResolutionCache
) -> None:
    """A missing column is a successful answer and is cached."""
    gateway.introspect_columns.return_value = ["id", "status"]
    probe = CapabilityProbe(gateway, cache)
    assert await probe.has_field("orders", "reference_number") is False
    assert await probe.has_field("orders", "reference_number") is False
    assert gateway.introspect_columns.await_count == 1
    assert cache.get(CacheNamespace.CAPABILITY, "orders:reference_number") == (False, True)


async def test_failure_answers_false_and_is_not_cached(
    gateway: AsyncMock, cache: ResolutionCache
) -> None:
    """A failed introspection returns False for that call and probes again next time."""
    gateway.introspect_columns.side_effect = [
        TransientGatewayError("introspect_columns", store="orders", reason="timeout"),
        ["id", "reference_number"],
    ]
    probe = CapabilityProbe(gateway, cache)
    assert await probe.has_field("orders", "reference_number") is False
    assert cache.get(CacheNamespace.CAPABILITY, "orders:reference_number")[1] is False
    assert await probe.has_field("orders", "reference_number") is True
    assert gateway.introspect_columns.await_count == 2


async def test_unexpected_error_is_not_cached(
    gateway: AsyncMock, cache: ResolutionCache
) -> None:
    """Any exception (not only gateway errors) is handled the same way."""
    gateway.introspect_columns.side_effect = RuntimeError("boom")
    probe = CapabilityProbe(gateway, cache)
    assert await probe.has_field("orders", "reference_number") is False
    assert cache.stats()["capability"]["size"] == 0
