"""Errors raised by source adapters.

Both are caught at the aggregator boundary; a failing source is skipped.
"""


class AggregateError(Exception):
    """Base class for per-source failures."""


class FetchError(AggregateError):
    """Non-2xx HTTP response, or the request never completed."""

    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else (reason or "request failed")
        super().__init__(f"Fetch failed ({detail}) for {url}")


class ParseError(AggregateError):
    """Payload does not match the schema the adapter expects."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Parse failed for {url}: {reason}")
