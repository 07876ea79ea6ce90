#!/usr/bin/env python
"""Step 4: Snapshot - 单元测试"""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from robodaily.config import CONFIG_DIR
from robodaily.models import Item, ItemType, Query, TimeWindow
from robodaily.S4_snapshot import (
    FallbackPolicy,
    SnapshotOrigin,
    build_snapshot,
    item_from_dict,
    load_snapshot,
    read_snapshot,
    sort_by_date,
    write_snapshot,
)

T0 = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)
SEED_PATH = CONFIG_DIR / "seed_items.json"


def _item(title: str, published_at=None, **kw) -> Item:
    kw.setdefault("url", f"https://x.com/{title}")
    kw.setdefault("type", ItemType.NEWS)
    return Item(id=kw["url"], title=title, published_at=published_at, **kw)


class TestSortByDate:
    """测试时间排序"""

    def test_newest_first(self):
        items = [_item("old", T0 - timedelta(days=2)), _item("new", T0), _item("mid", T0 - timedelta(days=1))]
        assert [it.title for it in sort_by_date(items)] == ["new", "mid", "old"]

    def test_missing_timestamp_sorts_last(self):
        """缺失时间视为最早"""
        items = [_item("undated"), _item("dated", T0 - timedelta(days=3650))]
        assert [it.title for it in sort_by_date(items)] == ["dated", "undated"]

    def test_ties_keep_input_order(self):
        """同一时间保持原顺序"""
        items = [_item(str(i), T0) for i in range(5)]
        assert [it.title for it in sort_by_date(items)] == ["0", "1", "2", "3", "4"]


class TestBuildSnapshot:
    """测试快照组装"""

    def test_count_matches_items(self):
        snap = build_snapshot([_item("a", T0), _item("b", T0)], generated_at=T0)
        assert snap.count == 2
        assert snap.generated_at == T0

    def test_items_sorted_descending(self):
        """相邻条目满足 items[i] >= items[i+1]"""
        items = [_item(str(i), T0 - timedelta(hours=(i * 7) % 11)) for i in range(11)] + [_item("undated")]
        snap = build_snapshot(items, generated_at=T0)
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        stamps = [it.published_at or epoch for it in snap.items]
        assert all(a >= b for a, b in zip(stamps, stamps[1:]))

    def test_empty_snapshot_is_valid(self):
        """零条也是合法快照"""
        snap = build_snapshot([], generated_at=T0)
        assert snap.count == 0
        assert snap.to_payload() == {"generatedAt": "2025-01-10T12:00:00.000Z", "count": 0, "items": []}


class TestPayload:
    """测试序列化格式"""

    def test_payload_shape(self):
        item = _item("Robot", T0, source="The Robot Report", summary="Text.", tags=["Robotics"])
        payload = build_snapshot([item], generated_at=T0).to_payload()
        assert payload["count"] == 1
        assert payload["items"][0] == {
            "id": "https://x.com/Robot",
            "title": "Robot",
            "url": "https://x.com/Robot",
            "publishedAt": "2025-01-10T12:00:00.000Z",
            "summary": "Text.",
            "source": "The Robot Report",
            "type": "news",
            "tags": ["Robotics"],
        }

    def test_write_and_read(self, tmp_path):
        """写入后读取内容一致"""
        items = [_item("a", T0, tags=["Vision"]), _item("b", T0 - timedelta(days=1), type=ItemType.VIDEO)]
        snap = build_snapshot(items, generated_at=T0)
        path = write_snapshot(snap, tmp_path / "data" / "items.json")

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert set(raw) == {"generatedAt", "count", "items"}
        assert read_snapshot(path) == snap

    def test_write_replaces_previous(self, tmp_path):
        """每次运行整体替换"""
        path = tmp_path / "items.json"
        write_snapshot(build_snapshot([_item("a", T0), _item("b", T0)], generated_at=T0), path)
        write_snapshot(build_snapshot([_item("c", T0)], generated_at=T0), path)
        assert [it.title for it in read_snapshot(path).items] == ["c"]
        assert not (tmp_path / "items.json.tmp").exists()

    def test_non_ascii_preserved(self, tmp_path):
        """中文不转义"""
        path = write_snapshot(build_snapshot([_item("机器人", T0)], generated_at=T0), tmp_path / "items.json")
        assert "机器人" in path.read_text(encoding="utf-8")


class TestReadSnapshot:
    """测试读取容错"""

    def test_missing_file(self, tmp_path):
        assert read_snapshot(tmp_path / "nope.json") is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text("", encoding="utf-8")
        assert read_snapshot(path) is None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text("{not json", encoding="utf-8")
        assert read_snapshot(path) is None

    def test_bad_items_skipped(self, tmp_path):
        """类型非法的条目被跳过，count 重新计算"""
        path = tmp_path / "items.json"
        path.write_text(json.dumps({
            "generatedAt": "2025-01-01T00:00:00Z",
            "count": 3,
            "items": [
                {"title": "ok", "url": "https://x/1", "type": "paper"},
                {"title": "bad", "url": "https://x/2", "type": "podcast"},
                "garbage",
            ],
        }), encoding="utf-8")
        snap = read_snapshot(path)
        assert snap.count == 1
        assert snap.items[0].id == "https://x/1"
        assert snap.items[0].published_at is None

    def test_item_from_dict_defaults(self):
        item = item_from_dict({"type": "video"})
        assert item.id == "(untitled)"
        assert item.tags == []


class TestLoadSnapshot:
    """测试加载与种子数据回退"""

    def test_live_snapshot(self, tmp_path):
        path = write_snapshot(build_snapshot([_item("a", T0)], generated_at=T0), tmp_path / "items.json")
        loaded = load_snapshot(path, SEED_PATH)
        assert loaded.origin == SnapshotOrigin.LIVE
        assert not loaded.is_fallback

    def test_missing_live_uses_seed(self, tmp_path):
        """快照缺失时使用种子数据"""
        loaded = load_snapshot(tmp_path / "items.json", SEED_PATH)
        assert loaded.origin == SnapshotOrigin.SEED
        assert loaded.snapshot.count > 0

    def test_empty_live_uses_seed(self, tmp_path):
        """快照为空时使用种子数据"""
        path = write_snapshot(build_snapshot([], generated_at=T0), tmp_path / "items.json")
        loaded = load_snapshot(path, SEED_PATH)
        assert loaded.origin == SnapshotOrigin.SEED

    def test_no_seed_available(self, tmp_path):
        loaded = load_snapshot(tmp_path / "items.json", tmp_path / "seed.json")
        assert loaded.origin == SnapshotOrigin.EMPTY
        assert loaded.snapshot.count == 0

    def test_seed_widens_window(self, tmp_path):
        """种子数据下时间窗口被放宽到 5y"""
        loaded = load_snapshot(tmp_path / "items.json", SEED_PATH)
        query = Query(window="7d", sort="hot")
        effective = loaded.effective_query(query)
        assert effective.window == TimeWindow.FIVE_YEARS
        assert effective.sort == query.sort
        assert query.window == TimeWindow.WEEK

    def test_policy_can_disable_widening(self, tmp_path):
        loaded = load_snapshot(tmp_path / "items.json", SEED_PATH)
        query = Query(window="30d")
        assert loaded.effective_query(query, FallbackPolicy(widen_window=False)) == query

    def test_live_query_unchanged(self, tmp_path):
        """实时快照不修改查询"""
        path = write_snapshot(build_snapshot([_item("a", T0)], generated_at=T0), tmp_path / "items.json")
        query = Query(window="7d")
        assert load_snapshot(path, SEED_PATH).effective_query(query) == query
