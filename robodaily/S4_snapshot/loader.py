"""Loading a snapshot for queries, with the bundled seed as fallback.

When the live snapshot is absent, unreadable or empty, the seed dataset is
served instead. Seed items are old, so the fallback policy widens the time
window of incoming queries (5y by default). The widening is explicit: it is
applied by LoadedSnapshot.effective_query() and logged, never silently.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from ..core import now_utc
from ..models import Query, Snapshot, TimeWindow
from .store import read_snapshot

logger = logging.getLogger(__name__)


class SnapshotOrigin(str, Enum):
    LIVE = "live"
    SEED = "seed"
    EMPTY = "empty"     # neither live nor seed data available


@dataclass(frozen=True)
class FallbackPolicy:
    """What happens to queries answered from the seed dataset."""
    widen_window: bool = True
    window: TimeWindow = TimeWindow.FIVE_YEARS


DEFAULT_POLICY = FallbackPolicy()


@dataclass(frozen=True)
class LoadedSnapshot:
    snapshot: Snapshot
    origin: SnapshotOrigin

    @property
    def is_fallback(self) -> bool:
        return self.origin != SnapshotOrigin.LIVE

    def effective_query(self, query: Query, policy: FallbackPolicy = DEFAULT_POLICY) -> Query:
        """The query to evaluate against this snapshot under the given policy."""
        if self.origin != SnapshotOrigin.SEED or not policy.widen_window:
            return query
        if query.window == policy.window:
            return query
        logger.info(
            f"Serving seed data: window {query.window.value} -> {policy.window.value}"
        )
        return query.model_copy(update={"window": policy.window})


def load_snapshot(
    path: Union[str, Path],
    seed_path: Union[str, Path, None] = None,
) -> LoadedSnapshot:
    """
    Load the live snapshot, falling back to the seed dataset.

    Args:
        path: Live snapshot written by the aggregation run
        seed_path: Bundled fallback dataset (optional)
    """
    snapshot = read_snapshot(path)
    if snapshot is not None and snapshot.count > 0:
        return LoadedSnapshot(snapshot, SnapshotOrigin.LIVE)

    reason = "missing or unreadable" if snapshot is None else "empty"
    if seed_path is not None:
        seed = read_snapshot(seed_path)
        if seed is not None and seed.count > 0:
            logger.warning(f"Live snapshot {path} is {reason}; using seed {seed_path}")
            return LoadedSnapshot(seed, SnapshotOrigin.SEED)

    logger.warning(f"Live snapshot {path} is {reason} and no seed data is available")
    if snapshot is not None:
        return LoadedSnapshot(snapshot, SnapshotOrigin.EMPTY)
    return LoadedSnapshot(Snapshot(generated_at=now_utc()), SnapshotOrigin.EMPTY)
