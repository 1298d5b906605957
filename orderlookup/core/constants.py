"""Core constants: cache key structure and lookup literals.

Single source of truth for cache key format and identifier heuristics (DRY).
Used by the resolution cache, key builders and lookup strategies.
"""

import re

# Delimiter for composite cache keys (actor + entity, store + field)
CACHE_KEY_SEP = ":"

# Capability answers are effectively static; never cache them for less than an hour.
MIN_CAPABILITY_TTL_SECONDS = 3600

# Canonical order key: UUID shape, any version, case-insensitive.
CANONICAL_KEY_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Field names used by the lookup chain
KEY_FIELD = "id"
RELATED_ENTITY_FIELD = "related_entity_id"
DELIVERY_PARTNER_FIELD = "delivery_partner_id"
ACTOR_FIELD = "user_id"

# Prefix strategy asks for two rows so a shared prefix is detected, not hidden.
PREFIX_PROBE_LIMIT = 2

# Marker fields on synthetic (degraded-mode) records
SYNTHETIC_MARKER_FIELD = "_synthetic"
SYNTHETIC_NOTE_FIELD = "_debug_note"
PLACEHOLDER_PARTY_ID = "00000000-0000-0000-0000-000000000000"
