"""Placeholder orders for explicitly enabled degraded/debug mode.

The record is derived only from the identifier (no clock, no randomness, no
I/O), so the same identifier always yields the same placeholder. It carries
SYNTHETIC_MARKER_FIELD so consumers can never mistake it for a real order.
"""

from typing import Any

from orderlookup.core.constants import (
    PLACEHOLDER_PARTY_ID,
    SYNTHETIC_MARKER_FIELD,
    SYNTHETIC_NOTE_FIELD,
)


def _placeholder_party(role: str) -> dict[str, Any]:
    return {
        "id": PLACEHOLDER_PARTY_ID,
        "business_name": f"Placeholder {role}",
        "address": None,
        "city": None,
        "pincode": None,
        "phone": None,
    }


def build_synthetic_order(identifier: str) -> dict[str, Any]:
    """Return a clearly marked placeholder order for identifier."""
    return {
        "id": identifier,
        "status": "pending",
        "payment_status": "pending",
        "payment_method": None,
        "total_amount": 0,
        "created_at": None,
        "updated_at": None,
        "retailer_id": PLACEHOLDER_PARTY_ID,
        "wholesaler_id": PLACEHOLDER_PARTY_ID,
        "delivery_partner_id": None,
        "reference_number": None,
        "retailer": _placeholder_party("retailer"),
        "wholesaler": _placeholder_party("wholesaler"),
        "delivery_partner": None,
        "items": [],
        SYNTHETIC_MARKER_FIELD: True,
        SYNTHETIC_NOTE_FIELD: (
            "Placeholder order generated in degraded mode; no record exists for this identifier"
        ),
    }


def is_synthetic(record: dict[str, Any] | None) -> bool:
    """Return True if record is a degraded-mode placeholder."""
    return record is not None and record.get(SYNTHETIC_MARKER_FIELD) is True
