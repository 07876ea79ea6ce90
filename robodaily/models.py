"""Data models for RoboDaily."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ItemType(str, Enum):
    """内容类型."""
    PAPER = "paper"
    NEWS = "news"
    VIDEO = "video"


class SourceKind(str, Enum):
    """Adapter family used to fetch a source."""
    ARXIV = "arxiv"    # 查询型 API (Atom envelope)
    RSS = "rss"        # RSS 2.0 / Atom 订阅源


class TimeWindow(str, Enum):
    NONE = "none"
    WEEK = "7d"
    MONTH = "30d"
    YEAR = "1y"
    FIVE_YEARS = "5y"


class SortMode(str, Enum):
    LATEST = "latest"
    HOT = "hot"


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str | None:
    """ISO-8601 with millisecond precision and a trailing Z."""
    value = _as_utc(value)
    if value is None:
        return None
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class RawEntry(BaseModel):
    """
    Intermediate record produced by a source adapter.

    Fields are taken as-is from the feed; ``body`` may still hold markup.
    """

    id: str = ""
    title: str = ""
    url: str = ""
    body: str = ""
    published_at: datetime | None = None

    @field_validator("published_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class Item(BaseModel):
    """一条聚合内容 (论文 / 新闻 / 视频)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, use_enum_values=False)

    id: str
    title: str
    url: str = ""
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    summary: str = ""
    source: str = ""
    type: ItemType
    tags: list[str] = []

    @field_validator("published_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @property
    def text(self) -> str:
        """Title and summary, as matched by tagging, search and boosts."""
        return f"{self.title} {self.summary}"

    def to_dict(self) -> dict:
        """Wire shape of one item inside the snapshot payload."""
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "publishedAt": format_timestamp(self.published_at),
            "summary": self.summary,
            "source": self.source,
            "type": self.type.value,
            "tags": list(self.tags),
        }


class SourceDescriptor(BaseModel):
    """
    One configured feed.

    Source example (config/sources.yaml):
      - kind: rss
        name: "The Robot Report"
        url: "https://www.therobotreport.com/feed/"
        type: news
    """

    kind: SourceKind
    name: str
    type: ItemType
    query: str = ""         # arxiv
    url: str = ""           # rss
    max_results: int | None = None   # arxiv; settings.arxiv_max_results when unset
    enabled: bool = True

    @property
    def target(self) -> str:
        return self.query if self.kind == SourceKind.ARXIV else self.url


class Snapshot(BaseModel):
    """Output of one aggregation run. Replaced wholesale by the next run."""

    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    items: tuple[Item, ...] = ()

    @computed_field
    @property
    def count(self) -> int:
        return len(self.items)

    def to_payload(self) -> dict:
        return {
            "generatedAt": format_timestamp(self.generated_at),
            "count": self.count,
            "items": [item.to_dict() for item in self.items],
        }


class Query(BaseModel):
    """
    Ranking / filter request.

    Unknown or malformed values never raise; they fall back to "unset".
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    type: ItemType | None = None
    tag: str | None = None
    window: TimeWindow = TimeWindow.NONE
    sort: SortMode = SortMode.LATEST

    @field_validator("text", mode="before")
    @classmethod
    def _text(cls, value):
        return value.strip() if isinstance(value, str) else ""

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return _enum_or(ItemType, value, None)

    @field_validator("tag", mode="before")
    @classmethod
    def _tag(cls, value):
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @field_validator("window", mode="before")
    @classmethod
    def _window(cls, value):
        return _enum_or(TimeWindow, value, TimeWindow.NONE)

    @field_validator("sort", mode="before")
    @classmethod
    def _sort(cls, value):
        return _enum_or(SortMode, value, SortMode.LATEST)


def _enum_or(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default
