"""arXiv fetcher via the export query API.

API documentation: https://info.arxiv.org/help/api/user-manual.html

The response is an Atom feed; each <entry> is one paper.
"""

from __future__ import annotations

import logging
import urllib.parse
import xml.etree.ElementTree as ET

from ..config import Settings
from ..core import parse_timestamp
from ..errors import ParseError
from ..models import RawEntry, SourceDescriptor
from .client import fetch_text

logger = logging.getLogger(__name__)

API_BASE = "http://export.arxiv.org/api/query"
ATOM_NS = "{http://www.w3.org/2005/Atom}"


def build_url(query: str, max_results: int = 35) -> str:
    params = {
        "search_query": query,
        "sortBy": "lastUpdatedDate",
        "max_results": str(max_results),
    }
    return f"{API_BASE}?{urllib.parse.urlencode(params, quote_via=urllib.parse.quote)}"


def fetch(source: SourceDescriptor, settings: Settings) -> list[RawEntry]:
    """
    Run one search request and parse the entries.

    Source example:
      {
        "kind": "arxiv",
        "name": "arXiv",
        "type": "paper",
        "query": "cat:cs.RO OR (all:robotics)",
        "max_results": 35,
      }
    """
    url = build_url(source.query, source.max_results or settings.arxiv_max_results)
    xml_text = fetch_text(url, settings)
    entries = parse(xml_text, url=url)
    logger.info(f"[{source.name}] {len(entries)} entries")
    return entries


def parse(xml_text: str, url: str = API_BASE) -> list[RawEntry]:
    """
    Parse an arXiv Atom envelope.

    Raises:
        ParseError: malformed XML, or the root element is not an Atom feed
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ParseError(url, f"invalid XML: {e}") from e

    if root.tag != f"{ATOM_NS}feed":
        raise ParseError(url, f"unexpected root element {root.tag!r}")

    return [_parse_entry(entry) for entry in root.findall(f"{ATOM_NS}entry")]


def _parse_entry(entry: ET.Element) -> RawEntry:
    entry_id = _text(entry, "id")
    title = _text(entry, "title")
    published = _text(entry, "published") or _text(entry, "updated")

    return RawEntry(
        id=entry_id,
        title=title,
        url=_resolve_link(entry) or entry_id,
        body=_text(entry, "summary") or title,
        published_at=parse_timestamp(published),
    )


def _resolve_link(entry: ET.Element) -> str:
    """Prefer rel="alternate" (the abstract page), else the first link."""
    links = entry.findall(f"{ATOM_NS}link")
    for link in links:
        if link.get("rel") == "alternate" and link.get("href"):
            return link.get("href")
    if links:
        return links[0].get("href") or ""
    return ""


def _text(entry: ET.Element, name: str) -> str:
    node = entry.find(f"{ATOM_NS}{name}")
    if node is None:
        return ""
    return "".join(node.itertext()).strip()
