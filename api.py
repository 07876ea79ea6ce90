"""RoboDaily API - 查询接口 (列表 / 筛选 / 排序)."""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Query as QueryParam
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from robodaily import __version__
from robodaily.config import get_settings
from robodaily.core import now_utc
from robodaily.models import Query, format_timestamp
from robodaily.S4_snapshot import load_snapshot
from robodaily.S5_rank import available_tags, rank

# ─────────────────────────────────────────────────────────────
# 日志配置
# ─────────────────────────────────────────────────────────────

def setup_api_logging(log_dir: Path = Path("logs")) -> Path:
    """Configure logging for API process."""
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "api.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)

    return log_file


logger = logging.getLogger(__name__)

app = FastAPI(
    title="RoboDaily API",
    description="Robotics / autonomous driving / embodied AI feed",
    version=__version__,
)

# 允许跨域 (静态页面调用)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ─────────────────────────────────────────────────────────────
# 响应模型
# ─────────────────────────────────────────────────────────────

class ItemOut(BaseModel):
    id: str
    title: str
    url: str
    publishedAt: Optional[str]
    summary: str
    source: str
    type: str
    tags: list[str]


class ItemsResponse(BaseModel):
    """查询结果"""
    generatedAt: Optional[str]
    count: int           # 快照总条数
    total: int           # 命中条数 (截断前)
    origin: str          # live | seed | empty
    window: str          # 实际生效的时间窗口
    sort: str
    items: list[ItemOut]


class TagsResponse(BaseModel):
    tags: list[str]


# ─────────────────────────────────────────────────────────────
# API 端点
# ─────────────────────────────────────────────────────────────

def _load():
    settings = get_settings()
    return load_snapshot(settings.output_path, settings.seed_path)


@app.get("/api/health")
async def health_check():
    """健康检查"""
    return {
        "service": "RoboDaily API",
        "version": __version__,
        "status": "ok",
    }


@app.get("/api/items", response_model=ItemsResponse)
async def get_items(
    q: str = QueryParam("", description="标题/摘要全文匹配"),
    type: Optional[str] = QueryParam(None, description="paper | news | video"),
    tag: Optional[str] = QueryParam(None, description="标签"),
    window: str = QueryParam("none", description="none | 7d | 30d | 1y | 5y"),
    sort: str = QueryParam("latest", description="latest | hot"),
    limit: int = QueryParam(100, ge=1, le=1000),
):
    """
    查询快照

    Unknown type / window / sort values are ignored rather than rejected.
    When the live snapshot is unavailable, seed data is served and the
    window is widened (see `origin` and `window` in the response).
    """
    loaded = _load()
    query = loaded.effective_query(Query(text=q, type=type, tag=tag, window=window, sort=sort))
    results = rank(loaded.snapshot, query, now_utc())

    return ItemsResponse(
        generatedAt=format_timestamp(loaded.snapshot.generated_at),
        count=loaded.snapshot.count,
        total=len(results),
        origin=loaded.origin.value,
        window=query.window.value,
        sort=query.sort.value,
        items=[ItemOut(**item.to_dict()) for item in results[:limit]],
    )


@app.get("/api/tags", response_model=TagsResponse)
async def get_tags():
    """快照中出现过的标签"""
    loaded = _load()
    return TagsResponse(tags=available_tags(loaded.snapshot.items))


# ─────────────────────────────────────────────────────────────
# 启动
# ─────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    setup_api_logging(get_settings().log_dir)
    uvicorn.run(app, host="0.0.0.0", port=8080)
