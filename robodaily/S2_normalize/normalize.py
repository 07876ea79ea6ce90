"""Map adapter records onto the canonical Item shape."""

from datetime import datetime

from ..core import now_utc
from ..models import Item, ItemType, RawEntry
from .html import SUMMARY_MAX_CHARS, clean_text, clean_whitespace
from .tagger import tag

UNTITLED = "(untitled)"


def resolve_id(raw_id: str, url: str, title: str) -> str:
    """
    Stable identity for an item.

    Priority:
        1. Native identifier from the feed (guid / Atom id)
        2. Resolved URL
        3. Title
    """
    for candidate in (raw_id, url, title):
        candidate = (candidate or "").strip()
        if candidate:
            return candidate
    return UNTITLED


def normalize(
    raw: RawEntry,
    *,
    source: str,
    type: ItemType,
    now: datetime | None = None,
    max_chars: int = SUMMARY_MAX_CHARS,
) -> Item:
    """
    Normalize a single adapter record.

    Never raises: absent fields fall back to defaults (placeholder title,
    ingestion time for the timestamp, empty summary).
    """
    title = clean_whitespace(raw.title) or UNTITLED
    url = (raw.url or "").strip()
    summary = clean_text(raw.body, max_chars)

    return Item(
        id=resolve_id(raw.id, url, title),
        title=title,
        url=url,
        published_at=raw.published_at or now or now_utc(),
        summary=summary,
        source=source,
        type=type,
        tags=tag(title, summary),
    )


def renormalize(item: Item, max_chars: int = SUMMARY_MAX_CHARS) -> Item:
    """Run an existing Item back through normalize(); unchanged if already normalized."""
    raw = RawEntry(
        id=item.id,
        title=item.title,
        url=item.url,
        body=item.summary,
        published_at=item.published_at,
    )
    return normalize(
        raw,
        source=item.source,
        type=item.type,
        now=item.published_at,
        max_chars=max_chars,
    )


def batch_normalize(
    entries: list[RawEntry],
    *,
    source: str,
    type: ItemType,
    now: datetime | None = None,
    max_chars: int = SUMMARY_MAX_CHARS,
) -> list[Item]:
    """Normalize multiple records, sharing one ingestion timestamp."""
    now = now or now_utc()
    return [
        normalize(entry, source=source, type=type, now=now, max_chars=max_chars)
        for entry in entries
    ]
