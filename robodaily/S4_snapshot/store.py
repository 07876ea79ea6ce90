"""Snapshot persistence - one JSON document, fully replaced on each run."""

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from ..core import EPOCH, load_json, parse_timestamp, save_json
from ..models import Item, Snapshot
from ..S2_normalize import UNTITLED, resolve_id

logger = logging.getLogger(__name__)


def write_snapshot(snapshot: Snapshot, path: Union[str, Path]) -> Path:
    """Serialize the snapshot to path, replacing the previous one."""
    path = save_json(snapshot.to_payload(), path)
    logger.info(f"Wrote {snapshot.count} items -> {path}")
    return path


def read_snapshot(path: Union[str, Path]) -> Snapshot | None:
    """
    Load a snapshot payload.

    Returns:
        Snapshot, or None when the file is absent, empty or not a payload
    """
    data = load_json(path)
    if not isinstance(data, dict):
        return None
    return snapshot_from_payload(data)


def snapshot_from_payload(data: dict) -> Snapshot:
    """Build a Snapshot from its wire shape; unusable items are skipped."""
    items = []
    for raw in data.get("items") or []:
        item = item_from_dict(raw)
        if item is not None:
            items.append(item)

    generated_at = parse_timestamp(data.get("generatedAt"), default=EPOCH)
    # Order is kept as written; count is recomputed from the items
    return Snapshot(generated_at=generated_at, items=tuple(items))


def item_from_dict(raw: dict) -> Item | None:
    """Item from one payload entry, or None if it cannot be typed."""
    if not isinstance(raw, dict):
        return None

    title = str(raw.get("title") or "").strip()
    url = str(raw.get("url") or "").strip()
    tags = raw.get("tags") or []
    try:
        return Item(
            id=resolve_id(str(raw.get("id") or ""), url, title),
            title=title or UNTITLED,
            url=url,
            published_at=parse_timestamp(raw.get("publishedAt")),
            summary=str(raw.get("summary") or ""),
            source=str(raw.get("source") or ""),
            type=raw.get("type"),
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        )
    except ValidationError as e:
        logger.warning(f"Skipping payload item {raw.get('id')!r}: {e.error_count()} invalid field(s)")
        return None
