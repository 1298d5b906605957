"""Cache key builders. Single place for key format (DRY).

Composite key components (actor_id, entity_id, store, field) must not contain
CACHE_KEY_SEP to avoid ambiguous or colliding keys. Entity keys are the raw
identifier: they are the whole key, so no separator check is needed.
"""

from orderlookup.core.constants import CACHE_KEY_SEP
from orderlookup.domain.exceptions import ValidationException


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValidationException if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValidationException: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValidationException(f"Cache key component {name!r} must not be empty", field=name)
    if CACHE_KEY_SEP in value:
        raise ValidationException(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}",
            field=name,
        )


def _validate_key_components(components: list[tuple[str, str]]) -> None:
    """Validate multiple key components; raise on first invalid one.

    Args:
        components: List of (value, name) pairs to validate.

    Raises:
        ValidationException: If any value is empty or contains CACHE_KEY_SEP.
    """
    for value, name in components:
        _validate_key_component(value, name)


def entity_key(identifier: str) -> str:
    """Cache key for a resolved order, by the identifier the caller used."""
    return identifier


def relationship_key(actor_id: str, entity_id: str) -> str:
    """Cache key for an actor/order association check."""
    _validate_key_components([(actor_id, "actor_id"), (entity_id, "entity_id")])
    return f"{actor_id}{CACHE_KEY_SEP}{entity_id}"


def relationship_key_entity(key: str) -> str:
    """Return the entity component of a relationship key."""
    return key.split(CACHE_KEY_SEP, 1)[1]


def capability_key(store: str, field: str) -> str:
    """Cache key for 'does store have field'."""
    _validate_key_components([(store, "store"), (field, "field")])
    return f"{store}{CACHE_KEY_SEP}{field}"
