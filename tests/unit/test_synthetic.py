"""Unit tests for degraded-mode placeholder orders."""

from orderlookup.application.services.synthetic import build_synthetic_order, is_synthetic


def test_placeholder_is_deterministic() -> None:
    """Same identifier, same placeholder (no clock or randomness)."""
    assert build_synthetic_order("abc") == build_synthetic_order("abc")


def test_placeholder_is_marked() -> None:
    record = build_synthetic_order("abc")
    assert record["id"] == "abc"
    assert record["_synthetic"] is True
    assert record["_debug_note"]
    assert record["items"] == []
    assert is_synthetic(record)


def test_real_records_are_not_synthetic() -> None:
    assert is_synthetic({"id": "abc"}) is False
    assert is_synthetic({"id": "abc", "_synthetic": "yes"}) is False
    assert is_synthetic(None) is False
