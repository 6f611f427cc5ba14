#!/usr/bin/env python3
"""Parse OCR recipe text into ingredients and steps, optionally scaled."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from scan_config import DEFAULT_MAX_DECIMALS, configure_logging
from scan_recipe import StubOcrProvider, build_recipe
from scan_scaling import compare_scaled, format_ingredient, scale_ingredients, scaling_factor
from scan_steps import detect_step_strategy


def _read_text(args: argparse.Namespace) -> str:
    if args.stub_ocr:
        return StubOcrProvider().recognize(b"")
    if args.input is None or str(args.input) == "-":
        return sys.stdin.read()
    if not args.input.exists():
        raise FileNotFoundError(f"Input not found: {args.input}")
    return args.input.read_text(encoding="utf-8")


def build_report(
    text: str,
    *,
    servings: int | None = None,
    target: int | None = None,
    max_decimals: int = DEFAULT_MAX_DECIMALS,
) -> dict[str, Any]:
    recipe = build_recipe(text, servings=servings)
    report: dict[str, Any] = {
        "title": recipe.title,
        "original_servings": recipe.original_servings,
        "step_strategy": detect_step_strategy(text),
        "ingredients": [
            {**item.to_payload(), "display": format_ingredient(item, max_decimals)} for item in recipe.ingredients
        ],
        "steps": recipe.steps,
    }

    if target is not None:
        scaled = scale_ingredients(recipe.ingredients, recipe.original_servings, target)
        report["target_servings"] = target
        report["scaling_factor"] = scaling_factor(recipe.original_servings, target)
        report["scaled_ingredients"] = [
            {**item.to_payload(), "display": format_ingredient(item, max_decimals)} for item in scaled
        ]
        report["comparison"] = compare_scaled(recipe.ingredients, scaled, max_decimals)

    return report


def main() -> int:
    parser = argparse.ArgumentParser(description="Parse OCR recipe text into ingredients and steps")
    parser.add_argument("input", type=Path, nargs="?", default=None, help="Text file with OCR output ('-' for stdin)")
    parser.add_argument("--stub-ocr", action="store_true", help="Use the bundled stub OCR sample instead of input")
    parser.add_argument("--servings", type=int, default=None, help="Original servings (detected when omitted)")
    parser.add_argument("--target", type=int, default=None, help="Target servings to scale ingredients to")
    parser.add_argument("--decimals", type=int, default=DEFAULT_MAX_DECIMALS, help="Max decimals in display quantities")
    parser.add_argument("--out", type=Path, default=None, help="Also write the JSON report to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else None)

    if args.decimals < 0:
        parser.error("--decimals must be >= 0")

    try:
        text = _read_text(args)
    except (OSError, RuntimeError) as exc:
        print(f"Failed to read recipe text: {exc}", file=sys.stderr)
        return 1

    report = build_report(text, servings=args.servings, target=args.target, max_decimals=args.decimals)
    payload = json.dumps(report, indent=2, ensure_ascii=False)
    print(payload)

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(payload + "\n", encoding="utf-8")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
