"""Snapshot assembly."""

from datetime import datetime

from ..core import EPOCH, now_utc
from ..models import Item, Snapshot


def published_or_epoch(item: Item) -> datetime:
    return item.published_at or EPOCH


def sort_by_date(items: list[Item]) -> list[Item]:
    """Newest first; items without a timestamp sort last. Stable for ties."""
    return sorted(items, key=published_or_epoch, reverse=True)


def build_snapshot(items: list[Item], generated_at: datetime | None = None) -> Snapshot:
    """
    Wrap deduplicated items into a Snapshot.

    Args:
        items: Deduplicated items in aggregation order
        generated_at: Aggregation start time (default: now)
    """
    return Snapshot(
        generated_at=generated_at or now_utc(),
        items=tuple(sort_by_date(items)),
    )
