"""Step 1: Aggregate from the configured sources, one at a time."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import yaml
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..core import load_json, now_utc, save_json, today
from ..errors import AggregateError
from ..models import Item, RawEntry, SourceDescriptor, SourceKind
from ..S2_normalize import batch_normalize
from ..S4_snapshot import item_from_dict
from . import arxiv
from . import rss

__all__ = ["fetch_all", "load_sources", "save_raw", "load_raw", "AggregateReport"]

logger = logging.getLogger(__name__)


@dataclass
class AggregateReport:
    """Per-source outcome of one run, in source order."""
    counts: dict[str, int] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> int:
        return len(self.errors)


def load_sources(path: Path | None = None) -> list[SourceDescriptor]:
    """Load sources from yaml config. Invalid entries are logged and skipped."""
    path = path or get_settings().sources_path
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []

    sources = []
    for idx, entry in enumerate(data):
        try:
            sources.append(SourceDescriptor(**entry))
        except (TypeError, ValidationError) as e:
            logger.error(f"Invalid source #{idx} in {path}: {e}")
    return sources


def fetch_all(
    sources: list[SourceDescriptor] | None = None,
    *,
    settings: Settings | None = None,
    sleep: Callable[[float], None] = time.sleep,
    report: AggregateReport | None = None,
) -> list[Item]:
    """
    Fetch every source in order and normalize the results.

    A source that fails is logged and skipped; the run always completes.

    Args:
        sources: Source list. If None, loads from sources.yaml
        settings: Runtime settings (pacing, HTTP client, summary budget)
        sleep: Pacing function, replaced in tests
        report: Optional report filled with per-source counts and errors

    Returns:
        Items in source order, then feed order (not deduplicated, not sorted)
    """
    settings = settings or get_settings()
    if sources is None:
        sources = load_sources(settings.sources_path)
    if report is None:
        report = AggregateReport()

    all_items: list[Item] = []
    first = True
    for source in sources:
        if not source.enabled:
            logger.info(f"[{source.name}] disabled, skipped")
            continue

        if not first and settings.pacing_seconds > 0:
            sleep(settings.pacing_seconds)
        first = False

        try:
            entries = _fetch_single_source(source, settings)
        except AggregateError as e:
            logger.warning(f"Source error: {source.kind.value} {source.name} ({source.target}): {e}")
            report.errors[source.name] = str(e)
            continue

        items = batch_normalize(
            entries,
            source=source.name,
            type=source.type,
            now=now_utc(),
            max_chars=settings.summary_max_chars,
        )
        report.counts[source.name] = len(items)
        all_items.extend(items)

    logger.info(
        f"Aggregated {len(all_items)} items from {len(report.counts)} sources "
        f"({report.failed} failed)"
    )
    return all_items


def _fetch_single_source(source: SourceDescriptor, settings: Settings) -> list[RawEntry]:
    """Fetch a single source (arXiv query or RSS/Atom feed)."""
    if source.kind == SourceKind.ARXIV:
        return arxiv.fetch(source, settings)
    if source.kind == SourceKind.RSS:
        return rss.fetch(source, settings)
    raise ValueError(f"Unknown source kind: {source.kind}")


def save_raw(items: list[Item], raw_dir: Path, date: str | None = None) -> Path:
    """Save combined results to {raw_dir}/{date}/all.json"""
    dir_path = Path(raw_dir) / (date or today())
    filepath = dir_path / "all.json"
    save_json([item.to_dict() for item in items], filepath)
    logger.info(f"Saved {len(items)} raw items to {filepath}")
    return filepath


def load_raw(raw_dir: Path, date: str | None = None) -> list[Item] | None:
    """Items from a previous save_raw(), or None if that dump does not exist."""
    filepath = Path(raw_dir) / (date or today()) / "all.json"
    data = load_json(filepath)
    if not isinstance(data, list):
        return None
    items = [item_from_dict(raw) for raw in data]
    return [item for item in items if item is not None]
