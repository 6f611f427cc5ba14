#!/usr/bin/env python3

from __future__ import annotations

import json
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

TOOL_DIR = Path(__file__).resolve().parents[1]
if str(TOOL_DIR) not in sys.path:
    sys.path.insert(0, str(TOOL_DIR))

from parse_scan import build_report
from regression_metrics import build_report as build_regression_report
from scan_config import REGRESSION_DIR


class CLIGateTests(unittest.TestCase):
    def run_script(self, script: str, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
        cmd = [sys.executable, str(TOOL_DIR / script), *args]
        return subprocess.run(cmd, cwd=TOOL_DIR, input=stdin, text=True, capture_output=True, check=False)

    def test_regression_gate(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            report_path = Path(temp_dir) / "regression.json"
            result = self.run_script("regression_metrics.py", "--gate", "--report", str(report_path))
            self.assertEqual(result.returncode, 0, msg=result.stdout + "\n" + result.stderr)
            self.assertIn("REGRESSION METRICS", result.stdout)

            payload = json.loads(report_path.read_text(encoding="utf-8"))
            self.assertTrue(payload["passes_threshold"])
            self.assertEqual(payload["fixture_count"], len(list(REGRESSION_DIR.glob("*.json"))))

    def test_every_regression_fixture_matches(self) -> None:
        report = build_regression_report(REGRESSION_DIR)
        for case in report["cases"]:
            with self.subTest(case=case["name"]):
                self.assertTrue(case["ingredient_exact"])
                self.assertTrue(case["step_exact"])
                self.assertTrue(case["strategy_match"])

    def test_parse_scan_stub_with_target(self) -> None:
        result = self.run_script("parse_scan.py", "--stub-ocr", "--target", "4")
        self.assertEqual(result.returncode, 0, msg=result.stdout + "\n" + result.stderr)

        payload = json.loads(result.stdout)
        self.assertEqual(payload["title"], "Chocolate Cake")
        self.assertEqual(payload["original_servings"], 8)
        self.assertEqual(payload["step_strategy"], "header")
        self.assertEqual(payload["scaling_factor"], 0.5)
        self.assertEqual(payload["ingredients"][0]["display"], "2 cups all-purpose flour")
        self.assertEqual(payload["scaled_ingredients"][0]["display"], "1 cups all-purpose flour")
        self.assertEqual(payload["scaled_ingredients"][0]["id"], payload["ingredients"][0]["id"])

    def test_parse_scan_reads_stdin(self) -> None:
        result = self.run_script("parse_scan.py", "-", stdin="2 cups flour\n1/2 cup sugar\n3 eggs\n100 ml milk\n")
        self.assertEqual(result.returncode, 0, msg=result.stdout + "\n" + result.stderr)
        payload = json.loads(result.stdout)
        self.assertEqual(
            [item["display"] for item in payload["ingredients"]],
            ["2 cups flour", "0.5 cup sugar", "3 eggs", "100 ml milk"],
        )
        self.assertNotIn("scaled_ingredients", payload)

    def test_parse_scan_missing_file(self) -> None:
        result = self.run_script("parse_scan.py", "does-not-exist.txt")
        self.assertEqual(result.returncode, 1)
        self.assertIn("Input not found", result.stderr)

    def test_build_report_in_process(self) -> None:
        report = build_report("Toast\nServes 2\n2 slices bread", target=3)
        self.assertEqual(report["original_servings"], 2)
        self.assertEqual(report["scaled_ingredients"][0]["quantity"], 3.0)
        self.assertTrue(report["comparison"][0]["changed"])
        self.assertIsNone(report["step_strategy"])


if __name__ == "__main__":
    unittest.main()
