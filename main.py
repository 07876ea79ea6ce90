"""RoboDaily - robotics / autonomous driving / embodied AI feed aggregation."""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from robodaily import S1_aggregate as aggregate
from robodaily import S3_dedup as dedup
from robodaily import S4_snapshot as snapshot
from robodaily.config import get_settings
from robodaily.core import now_utc, today
from robodaily.models import format_timestamp


STEPS = [
    {"step": 1, "name": "Aggregate", "desc": "抓取 arXiv / RSS"},
    {"step": 2, "name": "Dedup", "desc": "去重"},
    {"step": 3, "name": "Snapshot", "desc": "按时间排序"},
    {"step": 4, "name": "Write", "desc": "输出 items.json"},
]


# ─────────────────────────────────────────────────────────────
# Logging setup
# ─────────────────────────────────────────────────────────────

def setup_logging(log_dir: Path) -> Path:
    """Append this run's log records to {log_dir}/{date}.log."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{today()}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)
    return log_file


# ─────────────────────────────────────────────────────────────
# Output formatting
# ─────────────────────────────────────────────────────────────

def print_header(sources: str, output: str):
    started = datetime.now().strftime("%Y-%m-%d %H:%M")
    print()
    print("=" * 62)
    print(f"  RoboDaily snapshot run  {started}")
    print(f"  sources: {sources}")
    print(f"  output:  {output}")
    print("=" * 62)
    print()


def print_step(step: int, name: str):
    info = STEPS[step - 1]
    print(f"[Step {step}/{len(STEPS)}] {name} ({info['desc']})")


def print_detail(key: str, value):
    print(f"|  - {key}: {value}")


def print_table(headers: list[str], rows: list[list]):
    """Left-aligned columns, sized to the widest cell."""
    widths = [
        max([len(h)] + [len(str(row[i])) for row in rows])
        for i, h in enumerate(headers)
    ]

    def line(cells) -> str:
        return "  ".join(str(c).ljust(w) for c, w in zip(cells, widths)).rstrip()

    header_line = line(headers)
    print(f"|  {header_line}")
    print(f"|  {'-' * len(header_line)}")
    for row in rows:
        print(f"|  {line(row)}")


def print_step_end(before: int, after: int):
    """Item count going into and coming out of the step."""
    dropped = before - after
    print("|")
    if dropped:
        print(f"|  {before} -> {after} items ({dropped} dropped)")
    else:
        print(f"|  {after} items")
    print("-" * 50)
    print()


def parse_args(argv=None):
    """Parse command line arguments."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="RoboDaily - aggregate feeds into a ranked snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                           # Fetch all sources, write data/items.json
  python main.py --output site/items.json  # Write the snapshot elsewhere
  python main.py --skip-fetch              # Rebuild from today's raw dump
        """
    )

    parser.add_argument(
        "--output",
        type=str,
        default=str(settings.output_path),
        help=f"Snapshot output path (default: {settings.output_path})"
    )

    parser.add_argument(
        "--sources",
        type=str,
        default=None,
        help="Sources yaml (default: config/sources.yaml)"
    )

    parser.add_argument(
        "--no-pacing",
        action="store_true",
        help="Do not wait between sources"
    )

    parser.add_argument(
        "--skip-fetch",
        action="store_true",
        help="Skip step 1, load from data/raw/{date}/all.json instead"
    )

    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Date to load raw data from (default: today). Format: YYYY-MM-DD"
    )

    return parser.parse_args(argv)


def run(args=None):
    """Run the aggregation pipeline and write the snapshot."""
    if args is None:
        args = parse_args()

    settings = get_settings()
    if args.no_pacing:
        settings = replace(settings, pacing_seconds=0)

    log_file = setup_logging(settings.log_dir)
    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("RoboDaily started")

    print_header(args.sources or str(settings.sources_path), args.output)
    started_at = now_utc()

    # ─────────────────────────────────────────────────────────
    # Step 1: Aggregate
    # ─────────────────────────────────────────────────────────
    print_step(1, "Aggregate")
    report = aggregate.AggregateReport()

    if args.skip_fetch:
        items = aggregate.load_raw(settings.raw_dir, args.date)
        if items is None:
            print_detail("Status", f"FAILED - no raw dump for {args.date or 'today'}")
            print("No raw data found. Run without --skip-fetch first.")
            return None
        print_detail("Status", f"SKIPPED (loaded {len(items)} items from raw dump)")
    else:
        sources = aggregate.load_sources(Path(args.sources)) if args.sources else None
        items = aggregate.fetch_all(sources, settings=settings, report=report)
        if items:
            aggregate.save_raw(items, settings.raw_dir)

    rows = [[name, count] for name, count in report.counts.items()]
    rows += [[name, "FAILED"] for name in report.errors]
    if rows:
        print_table(["Source", "Count"], rows)

    total = len(items)
    print_step_end(total, total)

    # ─────────────────────────────────────────────────────────
    # Step 2: Dedup
    # ─────────────────────────────────────────────────────────
    print_step(2, "Dedup")
    duplicates = dedup.find_duplicates(items)
    items = dedup.filter_duplicates_in_batch(items)
    print_detail("Duplicate keys", len(duplicates))
    print_step_end(total, len(items))

    # ─────────────────────────────────────────────────────────
    # Step 3: Snapshot
    # ─────────────────────────────────────────────────────────
    print_step(3, "Snapshot")
    snap = snapshot.build_snapshot(items, generated_at=started_at)
    print_detail("Generated at", format_timestamp(snap.generated_at))
    print_step_end(len(items), snap.count)

    # ─────────────────────────────────────────────────────────
    # Step 4: Write
    # ─────────────────────────────────────────────────────────
    print_step(4, "Write")
    path = snapshot.write_snapshot(snap, args.output)
    print_detail("JSON saved", path)
    print_step_end(snap.count, snap.count)

    print("=" * 62)
    print(f"  Fetched:      {total:>5}  items")
    print(f"  Sources:      {len(report.counts):>5}  ok, {report.failed} failed")
    print(f"  Final output: {snap.count:>5}  items")
    print("=" * 62)
    print()

    logger.info(f"RoboDaily completed: {snap.count} items -> {path}")
    logger.info("=" * 60)
    print(f"[OK] Done! (log: {log_file})")
    return snap


if __name__ == "__main__":
    try:
        run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
