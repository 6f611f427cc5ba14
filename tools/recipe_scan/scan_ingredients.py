from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable

from scan_config import INGREDIENT_BULLET_MARKERS, UNIT_TOKENS
from scan_models import Ingredient, new_id

log = logging.getLogger("recipe_scan.ingredients")

_LEADING_MARKERS = re.compile(rf"^[\s{re.escape(INGREDIENT_BULLET_MARKERS)}]+")

# Alternatives are ordered: mixed number, simple fraction, decimal.
_QUANTITY_TOKEN = re.compile(r"^(\d+\s+\d+/\d+|\d+/\d+|\d*\.?\d+)\s*")

_UNIT_PATTERN = re.compile(
    r"^(" + "|".join(re.escape(token).replace(r"\ ", r"\s+") for token in UNIT_TOKENS) + r")\b\.?",
    flags=re.IGNORECASE,
)

_LEADING_OF = re.compile(r"^of(?:\s+|$)", flags=re.IGNORECASE)

# "1. Preheat the oven" is a numbered instruction, not an ingredient.
_NUMBERED_INSTRUCTION = re.compile(r"^\d+\s*[.)]\s+[A-Za-z]")


def _mixed_number(match: re.Match[str]) -> float:
    denominator = int(match.group(3))
    if denominator == 0:
        return math.nan
    return int(match.group(1)) + int(match.group(2)) / denominator


def _simple_fraction(match: re.Match[str]) -> float:
    denominator = int(match.group(2))
    if denominator == 0:
        return math.nan
    return int(match.group(1)) / denominator


def _plain_number(match: re.Match[str]) -> float:
    return float(match.group(0))


_FRACTION_GRAMMAR: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], float]], ...] = (
    (re.compile(r"(\d+)\s+(\d+)/(\d+)"), _mixed_number),
    (re.compile(r"(\d+)/(\d+)"), _simple_fraction),
    (re.compile(r"\d*\.?\d+"), _plain_number),
)


def parse_fraction(value: str) -> float:
    """Convert "1 1/2", "3/4", "2" or ".5" to a float.

    Returns NaN when the token is not a finite quantity (zero denominator,
    digit runs too long for a float).
    """
    text = str(value).strip()
    for pattern, convert in _FRACTION_GRAMMAR:
        match = pattern.fullmatch(text)
        if not match:
            continue
        try:
            quantity = convert(match)
        except (OverflowError, ValueError):
            return math.nan
        return quantity if math.isfinite(quantity) else math.nan
    return math.nan


def _parse_line(line: str, id_factory: Callable[[], str]) -> Ingredient | None:
    cleaned = _LEADING_MARKERS.sub("", line).strip()
    if not cleaned:
        return None

    if _NUMBERED_INSTRUCTION.match(cleaned):
        return None

    quantity_match = _QUANTITY_TOKEN.match(cleaned)
    if not quantity_match:
        return None

    quantity = parse_fraction(quantity_match.group(1))
    if math.isnan(quantity) or quantity <= 0:
        return None

    remainder = cleaned[quantity_match.end() :].strip()
    if not remainder:
        return None

    unit: str | None = None
    unit_match = _UNIT_PATTERN.match(remainder)
    if unit_match:
        unit = re.sub(r"\s+", " ", unit_match.group(1)).lower()
        remainder = remainder[unit_match.end() :].strip()

    label = _LEADING_OF.sub("", remainder).strip()
    if not label:
        return None

    return Ingredient(id=id_factory(), quantity=quantity, unit=unit, label=label)


def parse_ingredients(text: Any, id_factory: Callable[[], str] = new_id) -> list[Ingredient]:
    if not isinstance(text, str) or not text:
        return []

    ingredients: list[Ingredient] = []
    dropped = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        ingredient = _parse_line(line, id_factory)
        if ingredient is None:
            dropped += 1
            continue
        ingredients.append(ingredient)

    log.debug("parsed %d ingredients, dropped %d lines", len(ingredients), dropped)
    return ingredients
