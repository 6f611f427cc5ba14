from __future__ import annotations

import logging
import os
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


TOOL_DIR = Path(__file__).resolve().parent
FIXTURES_DIR = TOOL_DIR / "fixtures"
REGRESSION_DIR = FIXTURES_DIR / "regression"
SAMPLE_SCAN_PATH = FIXTURES_DIR / "chocolate_cake.txt"

LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "WARNING").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

DEFAULT_SERVINGS = 4
DEFAULT_MAX_DECIMALS = 2
DEFAULT_TITLE = "Untitled Recipe"

# Numbered/bulleted fallbacks need at least this many steps.
MIN_FALLBACK_STEPS = _env_int("RECIPE_SCAN_MIN_FALLBACK_STEPS", 2)
# Lowest step number must be <= this ("350" in "350 degrees" is not step one).
MAX_FIRST_STEP_NUMBER = _env_int("RECIPE_SCAN_MAX_FIRST_STEP_NUMBER", 2)
MIN_BULLET_STEP_LENGTH = _env_int("RECIPE_SCAN_MIN_BULLET_STEP_LENGTH", 15)
BULLET_RUN_BREAK = _env_int("RECIPE_SCAN_BULLET_RUN_BREAK", 2)

UNIT_TOKENS: tuple[str, ...] = (
    # weight
    "g",
    "gram",
    "grams",
    "kg",
    "kilogram",
    "kilograms",
    "oz",
    "ounce",
    "ounces",
    "lb",
    "lbs",
    "pound",
    "pounds",
    # volume
    "ml",
    "milliliter",
    "milliliters",
    "millilitre",
    "millilitres",
    "l",
    "liter",
    "liters",
    "litre",
    "litres",
    "cup",
    "cups",
    "tsp",
    "teaspoon",
    "teaspoons",
    "tbsp",
    "tablespoon",
    "tablespoons",
    "fl oz",
    "fluid ounce",
    "fluid ounces",
    # count-style
    "pinch",
    "pinches",
    "dash",
    "dashes",
    "bunch",
    "bunches",
    "clove",
    "cloves",
    "slice",
    "slices",
    "piece",
    "pieces",
    "can",
    "cans",
    "package",
    "packages",
    "pkg",
    "stick",
    "sticks",
)

STEP_HEADERS: tuple[str, ...] = (
    "instructions",
    "directions",
    "steps",
    "method",
    "preparation",
    "procedure",
    "how to make",
    "to make",
)

SECTION_END_HEADERS: tuple[str, ...] = (
    "ingredients",
    "notes",
    "tips",
    "nutrition",
    "nutritional",
    "serving",
    "servings",
    "yield",
    "makes",
    "storage",
    "variations",
)

INGREDIENT_HEADERS: tuple[str, ...] = (
    "ingredient",
    "ingredients",
    "for the ingredients",
    "what you'll need",
)

# Short unit abbreviations that mark an ingredient line leaking into steps.
STEP_INGREDIENT_UNITS: tuple[str, ...] = ("cups?", "tsps?", "tbsps?", "oz", "g", "ml", "lbs?")

BULLET_MARKERS = "-•*·"
INGREDIENT_BULLET_MARKERS = "-*•"

YIELD_PREFIXES: tuple[str, ...] = ("serves", "serving", "servings", "yield", "yields", "makes", "portion", "portions")

RECIPE_CATEGORIES: tuple[str, ...] = ("appetizer", "entree", "dessert", "snack", "drink", "other")
DEFAULT_CATEGORY = "other"

SORT_OPTIONS: tuple[str, ...] = ("recent", "created", "alphabetical")

# Regression gate thresholds.
MIN_INGREDIENT_EXACT_RATE = 0.9
MIN_STEP_EXACT_RATE = 0.9


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
