"""Tests for Settings loading and validation."""

import pytest
from pydantic import ValidationError

from orderlookup.application.services.order_lookup_service import cache_from_settings
from orderlookup.core.config import Settings, get_settings
from orderlookup.domain.enums import CacheNamespace


def test_defaults() -> None:
    settings = Settings(database_url="")
    assert settings.short_id_length == 8
    assert settings.cache_ttl_entities == 120
    assert settings.cache_ttl_capabilities == 3600
    assert settings.secondary_key_field == "reference_number"
    assert settings.synthetic_fallback_enabled is False


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """get_settings() picks up env vars after cache_clear()."""
    monkeypatch.setenv("CACHE_TTL_ENTITIES", "30")
    monkeypatch.setenv("SYNTHETIC_FALLBACK_ENABLED", "true")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.cache_ttl_entities == 30
    assert settings.synthetic_fallback_enabled is True


@pytest.mark.parametrize(
    "field", ["short_id_length", "prefix_scan_limit", "cache_ttl_relationships"]
)
def test_non_positive_values_rejected(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(database_url="", **{field: 0})


def test_backoff_multiplier_below_one_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(database_url="", gateway_retry_backoff_multiplier=0.5)


def test_cache_from_settings_applies_ttls() -> None:
    cache = cache_from_settings(
        Settings(database_url="", cache_ttl_entities=15, cache_ttl_capabilities=60)
    )
    assert cache.ttl_for(CacheNamespace.ENTITY) == 15
    assert cache.ttl_for(CacheNamespace.CAPABILITY) == 3600
