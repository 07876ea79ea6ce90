"""Filter and order snapshot items for a query."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from ..core import now_utc
from ..models import Item, Query, Snapshot, SortMode
from ..S2_normalize import TAG_VOCABULARY
from ..S4_snapshot import published_or_epoch
from .scoring import hot_score
from .windows import window_start


def matches(item: Item, query: Query, now: datetime) -> bool:
    """True if the item passes every filter set on the query."""
    if query.type is not None and item.type != query.type:
        return False

    if query.tag is not None and query.tag not in item.tags:
        return False

    if query.text and query.text.lower() not in item.text.lower():
        return False

    start = window_start(query.window, now)
    if start is not None:
        # Undated items cannot be placed inside any window
        if item.published_at is None or item.published_at < start:
            return False

    return True


def rank(
    source: Snapshot | Iterable[Item],
    query: Query | None = None,
    now: datetime | None = None,
) -> list[Item]:
    """
    Items matching the query, ordered by its sort mode.

    The input is never modified. Ties keep their input order.

    Args:
        source: Snapshot, or any iterable of items
        query: Filters and sort mode (default: everything, latest first)
        now: Evaluation time for windows and hot scores (default: now)
    """
    query = query or Query()
    now = now or now_utc()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    items = source.items if isinstance(source, Snapshot) else source

    selected = [item for item in items if matches(item, query, now)]

    if query.sort == SortMode.HOT:
        return sorted(selected, key=lambda it: hot_score(it, now), reverse=True)
    return sorted(selected, key=published_or_epoch, reverse=True)


def available_tags(items: Iterable[Item]) -> list[str]:
    """Vocabulary tags present on at least one item, in rule order."""
    present = {t for item in items for t in item.tags}
    return [t for t in TAG_VOCABULARY if t in present]
