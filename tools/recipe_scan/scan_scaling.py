from __future__ import annotations

import math
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from scan_config import DEFAULT_MAX_DECIMALS
from scan_models import Ingredient


def scaling_factor(original_servings: float, target_servings: float) -> float:
    if original_servings <= 0 or target_servings <= 0:
        return 1.0
    if original_servings == target_servings:
        return 1.0
    return target_servings / original_servings


def scale_ingredients(
    ingredients: list[Ingredient],
    original_servings: float,
    target_servings: float,
) -> list[Ingredient]:
    """Return a new list with every quantity multiplied by target/original.

    Non-positive or equal serving counts return unscaled copies. Always
    scale from the originally parsed list; feeding a scaled list back in
    compounds rounding.
    """
    if original_servings <= 0 or target_servings <= 0 or original_servings == target_servings:
        return [replace(item) for item in ingredients]

    factor = target_servings / original_servings
    return [replace(item, quantity=item.quantity * factor) for item in ingredients]


def format_quantity(quantity: float, max_decimals: int = DEFAULT_MAX_DECIMALS) -> str:
    value = float(quantity)
    if not math.isfinite(value):
        return str(value)

    exponent = Decimal(1).scaleb(-max(0, int(max_decimals)))
    try:
        rounded = Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Past decimal context precision; there are no fractional digits to keep.
        return format(value, ".0f")
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"", "-0"}:
        return "0"
    return text


def format_ingredient(ingredient: Ingredient, max_decimals: int = DEFAULT_MAX_DECIMALS) -> str:
    quantity = format_quantity(ingredient.quantity, max_decimals)
    if ingredient.unit:
        return f"{quantity} {ingredient.unit} {ingredient.label}"
    return f"{quantity} {ingredient.label}"


def compare_scaled(
    original: list[Ingredient],
    scaled: list[Ingredient],
    max_decimals: int = DEFAULT_MAX_DECIMALS,
) -> list[dict[str, Any]]:
    scaled_by_id = {item.id: item for item in scaled}
    rows: list[dict[str, Any]] = []
    for item in original:
        counterpart = scaled_by_id.get(item.id, item)
        original_qty = format_quantity(item.quantity, max_decimals)
        scaled_qty = format_quantity(counterpart.quantity, max_decimals)
        rows.append(
            {
                "id": item.id,
                "label": item.label,
                "unit": item.unit,
                "original": original_qty,
                "scaled": scaled_qty,
                "changed": original_qty != scaled_qty,
            }
        )
    return rows
