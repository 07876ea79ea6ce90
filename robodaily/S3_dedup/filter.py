"""In-batch deduplication by identity key and item id."""

from ..models import Item
from .fingerprint import identity_key


def _duplicate_of(item: Item, seen_keys: set[str], seen_ids: set[str]) -> str | None:
    """The key an item collides on, or None if it is new."""
    key = identity_key(item)
    if key in seen_keys:
        return key
    if item.id in seen_ids:
        return item.id
    return None


def filter_duplicates_in_batch(items: list[Item]) -> list[Item]:
    """
    Remove duplicates within the current batch.

    An item is a duplicate when its identity key or its id was already seen.
    The id check covers feeds whose native id matches another item's URL.
    The first occurrence always wins, whichever source produced it.
    Order of the surviving items is preserved.
    """
    seen_keys: set[str] = set()
    seen_ids: set[str] = set()
    unique_items: list[Item] = []

    for item in items:
        if _duplicate_of(item, seen_keys, seen_ids) is not None:
            continue
        seen_keys.add(identity_key(item))
        seen_ids.add(item.id)
        unique_items.append(item)

    return unique_items


def find_duplicates(items: list[Item]) -> dict[str, list[Item]]:
    """
    Items that filter_duplicates_in_batch() would drop, grouped by the key
    (identity key, or else id) they collided on.

    Returns:
        {key: [dropped items in encounter order]}
    """
    seen_keys: set[str] = set()
    seen_ids: set[str] = set()
    dropped: dict[str, list[Item]] = {}

    for item in items:
        key = _duplicate_of(item, seen_keys, seen_ids)
        if key is not None:
            dropped.setdefault(key, []).append(item)
            continue
        seen_keys.add(identity_key(item))
        seen_ids.add(item.id)

    return dropped
