#!/usr/bin/env python3
"""Regression harness for scan parser outcomes.

Each fixture holds raw OCR text plus the ingredients and steps the parsers
are expected to produce. The harness reports exact-match rates per section.
"""

from __future__ import annotations

import argparse
import json
import math
from pathlib import Path
from typing import Any, Dict, List, Tuple

from scan_config import MIN_INGREDIENT_EXACT_RATE, MIN_STEP_EXACT_RATE, REGRESSION_DIR, configure_logging
from scan_ingredients import parse_ingredients
from scan_models import Ingredient
from scan_steps import detect_step_strategy, parse_steps


def _normalize(text: str) -> str:
    return " ".join(text.strip().lower().split())


def _ingredient_key(item: Ingredient | Dict[str, Any]) -> Tuple[float, str, str]:
    if isinstance(item, Ingredient):
        quantity, unit, label = item.quantity, item.unit, item.label
    else:
        quantity, unit, label = float(item["quantity"]), item.get("unit"), str(item["label"])
    return round(quantity, 4), (unit or "").lower(), _normalize(label)


def score_case(case_payload: Dict[str, Any]) -> Dict[str, Any]:
    text = str(case_payload["text"])
    expected = case_payload["expected"]

    predicted_ingredients = [_ingredient_key(item) for item in parse_ingredients(text)]
    expected_ingredients = [_ingredient_key(item) for item in expected.get("ingredients", [])]
    predicted_steps = [_normalize(step) for step in parse_steps(text)]
    expected_steps = [_normalize(step) for step in expected.get("steps", [])]

    ingredient_exact = predicted_ingredients == expected_ingredients
    step_exact = predicted_steps == expected_steps

    strategy = detect_step_strategy(text)
    expected_strategy = expected.get("step_strategy", strategy)

    missed_ingredients = [key for key in expected_ingredients if key not in predicted_ingredients]
    extra_ingredients = [key for key in predicted_ingredients if key not in expected_ingredients]

    return {
        "name": case_payload.get("name", ""),
        "ingredient_exact": ingredient_exact,
        "step_exact": step_exact,
        "strategy": strategy,
        "strategy_match": strategy == expected_strategy,
        "missed_ingredients": len(missed_ingredients),
        "extra_ingredients": len(extra_ingredients),
    }


def build_report(regression_dir: Path) -> Dict[str, Any]:
    fixtures = sorted(regression_dir.glob("*.json"))
    if not fixtures:
        raise SystemExit(f"No regression fixtures found in {regression_dir}")

    cases: List[Dict[str, Any]] = []
    for fixture in fixtures:
        payload = json.loads(fixture.read_text(encoding="utf-8"))
        cases.append(score_case(payload))

    total = len(cases)
    ingredient_rate = sum(1 for case in cases if case["ingredient_exact"]) / total
    step_rate = sum(1 for case in cases if case["step_exact"]) / total
    strategy_rate = sum(1 for case in cases if case["strategy_match"]) / total

    return {
        "fixture_count": total,
        "ingredient_exact_rate": ingredient_rate,
        "step_exact_rate": step_rate,
        "strategy_match_rate": strategy_rate,
        "passes_threshold": (
            ingredient_rate >= MIN_INGREDIENT_EXACT_RATE
            and step_rate >= MIN_STEP_EXACT_RATE
            and math.isclose(strategy_rate, 1.0)
        ),
        "cases": cases,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Run scan parser regression metrics harness")
    parser.add_argument("--regression-dir", type=Path, default=REGRESSION_DIR)
    parser.add_argument("--report", type=Path, default=None)
    parser.add_argument("--gate", action="store_true", help="Exit non-zero when rates fall below thresholds")
    args = parser.parse_args()

    configure_logging()
    report = build_report(args.regression_dir)

    for case in report["cases"]:
        print(
            f"{case['name']}: ingredients={'PASS' if case['ingredient_exact'] else 'FAIL'} "
            f"steps={'PASS' if case['step_exact'] else 'FAIL'} strategy={case['strategy']}"
        )

    summary = {key: value for key, value in report.items() if key != "cases"}
    print("REGRESSION METRICS")
    print(json.dumps(summary, indent=2))

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(json.dumps(report, indent=2) + "\n", encoding="utf-8")

    if args.gate and not report["passes_threshold"]:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
