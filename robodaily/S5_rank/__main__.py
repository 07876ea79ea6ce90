"""Query the current snapshot from the command line.

    python -m robodaily.S5_rank --sort hot --window 30d --tag Robotics
"""

import argparse

from ..config import get_settings
from ..core import now_utc
from ..models import Query
from ..S4_snapshot import load_snapshot
from . import hot_score, rank


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Rank items in the current snapshot")
    parser.add_argument("q", nargs="?", default="", help="Free-text filter")
    parser.add_argument("--type", default=None, help="paper | news | video")
    parser.add_argument("--tag", default=None, help="Tag filter, e.g. 'Embodied AI'")
    parser.add_argument("--window", default="none", help="none | 7d | 30d | 1y | 5y")
    parser.add_argument("--sort", default="latest", help="latest | hot")
    parser.add_argument("--top", type=int, default=20)
    parser.add_argument("--input", default=str(settings.output_path))
    args = parser.parse_args()

    loaded = load_snapshot(args.input, settings.seed_path)
    query = loaded.effective_query(
        Query(text=args.q, type=args.type, tag=args.tag, window=args.window, sort=args.sort)
    )
    now = now_utc()
    results = rank(loaded.snapshot, query, now)

    print(f"Snapshot: {loaded.origin.value}, {loaded.snapshot.count} items, window={query.window.value}")
    print(f"Matched: {len(results)}\n")
    for item in results[:args.top]:
        date = item.published_at.strftime("%Y-%m-%d") if item.published_at else "----------"
        print(f"  {hot_score(item, now):.4f}  {date}  [{item.type.value}] {item.title[:70]}")
        if item.tags:
            print(f"          {', '.join(item.tags)}")


if __name__ == "__main__":
    main()
