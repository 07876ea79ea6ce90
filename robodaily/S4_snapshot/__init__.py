"""Step 4: Snapshot assembly and persistence."""

from .builder import build_snapshot, published_or_epoch, sort_by_date
from .loader import DEFAULT_POLICY, FallbackPolicy, LoadedSnapshot, SnapshotOrigin, load_snapshot
from .store import item_from_dict, read_snapshot, snapshot_from_payload, write_snapshot

__all__ = [
    "build_snapshot",
    "sort_by_date",
    "published_or_epoch",
    "write_snapshot",
    "read_snapshot",
    "snapshot_from_payload",
    "item_from_dict",
    "load_snapshot",
    "LoadedSnapshot",
    "SnapshotOrigin",
    "FallbackPolicy",
    "DEFAULT_POLICY",
]
