"""Identity key calculation for deduplication."""

from ..models import Item


def normalize_url(url: str) -> str:
    """Case-insensitive URL key."""
    if not url:
        return ""
    return url.strip().lower()


def normalize_title(title: str) -> str:
    if not title:
        return ""
    return title.strip().lower()


def identity_key(item: Item) -> str:
    """
    Get the dedup key for an item.

    Priority:
        1. URL (lower-cased)
        2. Title (lower-cased), when the item has no URL
    """
    return normalize_url(item.url) or normalize_title(item.title)
