import json
import sys
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from robodaily.config import Settings
from robodaily.errors import FetchError, ParseError
from robodaily.models import RawEntry


SOURCES_YAML = """
- kind: arxiv
  name: arXiv
  type: paper
  query: 'cat:cs.RO'
- kind: rss
  name: Robot News
  type: news
  url: https://news.example.com/feed
- kind: rss
  name: Broken Feed
  type: news
  url: https://broken.example.com/feed
- kind: rss
  name: Robot Videos
  type: video
  url: https://videos.example.com/feed
"""


def _entry(n: int, url: str, day: int) -> RawEntry:
    return RawEntry(
        id=url,
        title=f"Item {n}",
        url=url,
        body=f"<p>Body {n}.</p>",
        published_at=datetime(2025, 1, day, tzinfo=timezone.utc),
    )


def _fake_arxiv(source, settings):
    return [
        _entry(1, "http://arxiv.org/abs/1", 3),
        _entry(2, "http://arxiv.org/abs/2", 5),
    ]


def _fake_rss(source, settings):
    if "broken" in source.url:
        raise FetchError(source.url, status=503)
    if "videos" in source.url:
        # Same URL as an arXiv entry with different case -> duplicate
        return [_entry(3, "HTTP://ARXIV.ORG/abs/1", 9)]
    return [_entry(4, "https://news.example.com/a", 7)]


class TestMainPipeline(unittest.TestCase):
    def _run(self, td_path: Path, *argv: str):
        sources_path = td_path / "sources.yaml"
        sources_path.write_text(SOURCES_YAML, encoding="utf-8")
        settings = Settings(
            pacing_seconds=0,
            output_path=td_path / "items.json",
            raw_dir=td_path / "raw",
            log_dir=td_path / "logs",
            sources_path=sources_path,
        )
        args = main.parse_args(["--output", str(settings.output_path), "--no-pacing", *argv])

        with (
            patch.object(main, "get_settings", return_value=settings),
            patch.object(main.aggregate.arxiv, "fetch", side_effect=_fake_arxiv),
            patch.object(main.aggregate.rss, "fetch", side_effect=_fake_rss),
        ):
            return main.run(args), settings

    def test_run_skips_failing_source(self):
        with tempfile.TemporaryDirectory() as td:
            snap, settings = self._run(Path(td), "--sources", str(Path(td) / "sources.yaml"))

            # 4 fetched from 3 good sources, 1 duplicate dropped, broken feed skipped
            self.assertEqual(snap.count, 3)
            self.assertEqual([it.title for it in snap.items], ["Item 4", "Item 2", "Item 1"])
            self.assertEqual(snap.items[-1].source, "arXiv")

            payload = json.loads(settings.output_path.read_text(encoding="utf-8"))
            self.assertEqual(payload["count"], 3)
            self.assertEqual(len(payload["items"]), 3)
            self.assertEqual(payload["items"][0]["publishedAt"], "2025-01-07T00:00:00.000Z")

    def test_raw_dump_and_skip_fetch(self):
        with tempfile.TemporaryDirectory() as td:
            td_path = Path(td)
            self._run(td_path, "--sources", str(td_path / "sources.yaml"))
            raw_files = list((td_path / "raw").glob("*/all.json"))
            self.assertEqual(len(raw_files), 1)

            date = raw_files[0].parent.name
            settings_output = td_path / "items.json"
            settings_output.unlink()

            with patch.object(main.aggregate, "fetch_all") as fetch_all:
                snap, _ = self._run(td_path, "--skip-fetch", "--date", date)
                fetch_all.assert_not_called()

            self.assertEqual(snap.count, 3)
            self.assertTrue(settings_output.exists())

    def test_progress_output_and_log_file(self):
        with tempfile.TemporaryDirectory() as td:
            td_path = Path(td)
            with patch("builtins.print") as mock_print:
                self._run(td_path, "--sources", str(td_path / "sources.yaml"))
            printed = "\n".join(" ".join(str(a) for a in c.args) for c in mock_print.call_args_list)

            self.assertIn(f"sources: {td_path / 'sources.yaml'}", printed)
            self.assertIn("Broken Feed", printed)
            self.assertIn("4 -> 3 items (1 dropped)", printed)
            self.assertEqual(len(list((td_path / "logs").glob("*.log"))), 1)

    def test_print_table_aligns_columns(self):
        with patch("builtins.print") as mock_print:
            main.print_table(["Source", "Count"], [["arXiv", 35], ["The Robot Report", "FAILED"]])
        lines = [c.args[0] for c in mock_print.call_args_list]
        self.assertEqual(lines[0], "|  Source            Count")
        self.assertEqual(lines[2], "|  arXiv             35")
        self.assertEqual(lines[3], "|  The Robot Report  FAILED")

    def test_skip_fetch_without_dump(self):
        with tempfile.TemporaryDirectory() as td:
            snap, settings = self._run(Path(td), "--skip-fetch", "--date", "2000-01-01")
            self.assertIsNone(snap)
            self.assertFalse(settings.output_path.exists())

    def test_all_sources_failing_writes_empty_snapshot(self):
        def _parse_error(source, settings):
            raise ParseError(source.target, "not a feed")

        with tempfile.TemporaryDirectory() as td:
            td_path = Path(td)
            with (
                patch.object(main.aggregate.arxiv, "fetch", side_effect=_parse_error),
                patch.object(main.aggregate.rss, "fetch", side_effect=_parse_error),
            ):
                sources_path = td_path / "sources.yaml"
                sources_path.write_text(SOURCES_YAML, encoding="utf-8")
                settings = Settings(
                    pacing_seconds=0,
                    output_path=td_path / "items.json",
                    raw_dir=td_path / "raw",
                    log_dir=td_path / "logs",
                    sources_path=sources_path,
                )
                with patch.object(main, "get_settings", return_value=settings):
                    snap = main.run(main.parse_args(["--output", str(settings.output_path)]))

            self.assertEqual(snap.count, 0)
            payload = json.loads(settings.output_path.read_text(encoding="utf-8"))
            self.assertEqual(payload["items"], [])


if __name__ == "__main__":
    unittest.main()
