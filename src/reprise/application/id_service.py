"""Service for generating stable identifiers for cards and collections."""

from ulid import ULID


def generate_card_id() -> str:
    """Generate a stable card ID using ULID."""
    return f"card_{ULID()}"


def generate_collection_id() -> str:
    return f"col_{ULID()}"
