"""Syndication fetcher - RSS 2.0 and Atom behind one adapter.

The dialect is sniffed once per feed; each dialect has its own entry
mapping, and both produce the same RawEntry shape.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

import feedparser

from ..config import Settings
from ..core import parse_timestamp
from ..errors import ParseError
from ..models import RawEntry, SourceDescriptor
from .client import fetch_text

logger = logging.getLogger(__name__)


class FeedDialect(str, Enum):
    RSS = "rss"
    ATOM = "atom"


def fetch(source: SourceDescriptor, settings: Settings) -> list[RawEntry]:
    """
    Fetch and parse a syndication feed.

    Args:
        source: {"kind": "rss", "name": "...", "url": "...", "type": "..."}
        settings: HTTP client settings
    """
    content = fetch_text(source.url, settings)
    entries = parse(content, url=source.url)
    logger.info(f"[{source.name}] {len(entries)} entries")
    return entries


def parse(content: str, url: str = "") -> list[RawEntry]:
    """
    Parse feed text into RawEntry records.

    Raises:
        ParseError: the payload is neither an RSS nor an Atom feed
    """
    feed = feedparser.parse(content)
    dialect = sniff_dialect(feed)
    if dialect is None:
        reason = "not an RSS or Atom feed"
        if feed.get("bozo"):
            reason = f"{reason} ({feed.get('bozo_exception')})"
        raise ParseError(url, reason)

    if feed.get("bozo"):
        logger.debug(f"Feed {url} parsed with errors: {feed.get('bozo_exception')}")

    mapper = ENTRY_MAPPERS[dialect]
    return [mapper(entry) for entry in feed.entries]


def sniff_dialect(feed) -> FeedDialect | None:
    """Resolve the dialect from feedparser's detected version (rss20, atom10, ...)."""
    version = feed.get("version") or ""
    if version.startswith("atom"):
        return FeedDialect.ATOM
    if version.startswith("rss"):
        return FeedDialect.RSS
    return None


def _rss_entry(entry: dict) -> RawEntry:
    title = entry.get("title", "")
    link = entry.get("link", "")
    return RawEntry(
        id=entry.get("id") or link or title,   # feedparser exposes <guid> as id
        title=title,
        url=link,
        body=entry.get("summary") or _content(entry) or title,
        published_at=_extract_published_at(entry),
    )


def _atom_entry(entry: dict) -> RawEntry:
    title = entry.get("title", "")
    link = _first_link(entry)
    return RawEntry(
        id=entry.get("id") or link or title,
        title=title,
        url=link,
        body=entry.get("summary") or _content(entry) or title,
        published_at=_extract_published_at(entry),
    )


ENTRY_MAPPERS: dict[FeedDialect, Callable[[dict], RawEntry]] = {
    FeedDialect.RSS: _rss_entry,
    FeedDialect.ATOM: _atom_entry,
}


def _first_link(entry: dict) -> str:
    links = entry.get("links") or []
    for link in links:
        href = link.get("href")
        if href:
            return href
    return entry.get("link", "")


def _content(entry: dict) -> str:
    """content:encoded (RSS) or <content> (Atom); feedparser returns a list of dicts."""
    content_list = entry.get("content") or []
    if isinstance(content_list, list) and content_list:
        return content_list[0].get("value", "") or ""
    return ""


def _extract_published_at(entry: dict) -> datetime | None:
    published_parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if published_parsed:
        try:
            return datetime(*published_parsed[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError):
            pass

    return parse_timestamp(entry.get("published") or entry.get("updated"))
