from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

ITEMS = {
    "items": [
        {"uid": "a", "text": "Planning", "begin": "2026-10-14T09:00", "end": "2026-10-14T10:00", "lane": 0},
        {"uid": "b", "text": "Review", "begin": "2026-10-14T09:30", "end": "2026-10-14T10:30", "lane": 1},
        {"uid": "c", "text": "Later", "begin": "2026-10-27T08:00", "end": "2026-10-27T09:00"},
    ]
}


def _run(args: list[str], td: Path) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT)
    for k in ("CALGRID_MODE", "CALGRID_ALIGN", "CALGRID_FIRST_DAY", "CALGRID_LOG_LEVEL"):
        env.pop(k, None)
    return subprocess.run(
        [sys.executable, "-m", "calgrid.cli", *args],
        cwd=str(td),
        env=env,
        capture_output=True,
        text=True,
    )


class TestCliLayoutContract(unittest.TestCase):
    def test_week_layout_json(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps(ITEMS), encoding="utf-8")
            out_path = td / "out" / "layout.json"

            p = _run(["--items", str(items_path), "--anchor", "2026-10-14", "--out", str(out_path)], td)
            self.assertEqual(p.returncode, 0, p.stdout + "\n" + p.stderr)

            data = json.loads(out_path.read_text(encoding="utf-8"))

        self.assertEqual(data["first_visible_date"], "2026-10-11")
        self.assertEqual(data["day_count"], 7)
        self.assertEqual(len(data["visible_dates"]), 7)
        self.assertEqual(len(data["headers"]), 7)

        wed = [d for d in data["days"] if d["date"] == "2026-10-14"][0]
        kinds = [r["kind"] for r in wed["rows"]]
        self.assertEqual(kinds, ["empty", "group", "empty"])
        group = wed["rows"][1]["group"]
        self.assertEqual(group["lane_count"], 2)
        self.assertAlmostEqual(group["end"], 0.4375)
        self.assertEqual([c["kind"] for c in group["lanes"][1]], ["empty", "item"])
        self.assertEqual(group["lanes"][1][1]["item"]["uid"], "b")

    def test_scroll_to_reanchors(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps(ITEMS), encoding="utf-8")

            p = _run(
                [
                    "--items", str(items_path),
                    "--anchor", "2026-10-14",
                    "--scroll-to", "c",
                    "--viewport", "700,600",
                    "--content", "700,2400",
                ],
                td,
            )
            self.assertEqual(p.returncode, 0, p.stdout + "\n" + p.stderr)
            data = json.loads(p.stdout)

        self.assertEqual(data["scroll"]["anchor_date"], "2026-10-27")
        self.assertFalse(data["scroll"]["noop"])
        self.assertAlmostEqual(data["scroll"]["offset"][0], 200.0)
        self.assertAlmostEqual(data["scroll"]["offset"][1], 800.0)
        self.assertEqual(data["first_visible_date"], "2026-10-25")

    def test_day_count_above_max_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps(ITEMS), encoding="utf-8")

            p = _run(["--items", str(items_path), "--anchor", "2026-10-14", "--mode", "day", "--days", "11"], td)
            self.assertNotEqual(p.returncode, 0)
            self.assertIn("Invalid calendar configuration", p.stderr)

    def test_day_count_below_one_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps(ITEMS), encoding="utf-8")

            for days in ("0", "-2"):
                p = _run(
                    [
                        "--items", str(items_path),
                        "--anchor", "2026-10-14",
                        "--mode", "day",
                        "--days", days,
                        "--scroll-to", "a",
                    ],
                    td,
                )
                self.assertEqual(p.returncode, 1, p.stderr)
                self.assertIn("Invalid --days value", p.stderr)
                self.assertNotIn("Traceback", p.stderr)

    def test_mixed_awareness_items_are_rejected(self) -> None:
        doc = {
            "items": [
                {"uid": "a", "begin": "2026-10-14T09:00", "end": "2026-10-14T10:00"},
                {"uid": "b", "begin": "2026-10-14T11:00+02:00", "end": "2026-10-14T12:00+02:00"},
            ]
        }
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps(doc), encoding="utf-8")

            p = _run(["--items", str(items_path), "--anchor", "2026-10-14"], td)
            self.assertEqual(p.returncode, 1, p.stderr)
            self.assertIn("items[1] is offset-aware", p.stderr)
            self.assertNotIn("Traceback", p.stderr)

    def test_day_span_sizes_content_and_offset(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps(ITEMS), encoding="utf-8")

            p = _run(
                [
                    "--items", str(items_path),
                    "--anchor", "2026-10-14",
                    "--viewport", "700,600",
                    "--day-span", "08:00-20:00",
                    "--scroll-to", "c",
                ],
                td,
            )
            self.assertEqual(p.returncode, 0, p.stdout + "\n" + p.stderr)
            data = json.loads(p.stdout)

        self.assertAlmostEqual(data["day_span"]["content_height"], 1200.0)
        self.assertAlmostEqual(data["day_span"]["offset_y"], 400.0)
        self.assertEqual(data["scroll"]["anchor_date"], "2026-10-27")
        self.assertAlmostEqual(data["scroll"]["offset"][0], 200.0)
        self.assertAlmostEqual(data["scroll"]["offset"][1], 400.0)

    def test_invalid_items_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            items_path = td / "items.json"
            items_path.write_text(json.dumps({"items": [{"begin": "x", "end": "y"}]}), encoding="utf-8")

            p = _run(["--items", str(items_path), "--anchor", "2026-10-14"], td)
            self.assertNotEqual(p.returncode, 0)
            self.assertIn("items[0].begin", p.stderr)


if __name__ == "__main__":
    unittest.main(verbosity=2)
