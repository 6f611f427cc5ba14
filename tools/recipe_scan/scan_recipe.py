from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from scan_config import (
    DEFAULT_CATEGORY,
    DEFAULT_SERVINGS,
    DEFAULT_TITLE,
    INGREDIENT_HEADERS,
    SAMPLE_SCAN_PATH,
    SECTION_END_HEADERS,
    STEP_HEADERS,
    YIELD_PREFIXES,
)
from scan_ingredients import parse_ingredients
from scan_models import Recipe
from scan_steps import clean_step_line, is_header, parse_steps

log = logging.getLogger("recipe_scan.recipe")


class OcrError(RuntimeError):
    """Raised by an OCR provider when it cannot return text for an image."""


class OcrProvider(Protocol):
    def recognize(self, image: bytes) -> str: ...


class StubOcrProvider:
    """Returns a canned recipe regardless of the image, for demos and tests."""

    def __init__(self, sample_path: Path = SAMPLE_SCAN_PATH) -> None:
        self.sample_path = sample_path

    def recognize(self, image: bytes) -> str:
        if not self.sample_path.exists():
            raise OcrError(f"Missing stub OCR sample: {self.sample_path}")
        return self.sample_path.read_text(encoding="utf-8")


@dataclass(frozen=True)
class ScanResult:
    text: str | None
    recipe: Recipe | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_section_header(line: str) -> bool:
    return (
        is_header(line, STEP_HEADERS)
        or is_header(line, SECTION_END_HEADERS)
        or is_header(line, INGREDIENT_HEADERS)
    )


def _looks_like_title(line: str) -> bool:
    cleaned = re.sub(r"\s+", " ", line).strip()
    if not cleaned:
        return False
    if _is_section_header(cleaned):
        return False
    if re.match(r"^[\d\s½¼¾⅓⅔⅛⅜⅝⅞/.-]", cleaned):
        return False
    if clean_step_line(cleaned) != cleaned:
        return False
    if cleaned.endswith((".", ":")):
        return False
    if detect_servings(cleaned) is not None:
        return False

    words = re.findall(r"[A-Za-z][A-Za-z'&-]*", cleaned)
    return 1 <= len(words) <= 16


def detect_title(text: str) -> str | None:
    if not isinstance(text, str):
        return None
    for line in text.splitlines():
        if not line.strip():
            continue
        if _looks_like_title(line):
            return re.sub(r"\s+", " ", line).strip()
    return None


def _servings_from_line(line: str) -> int | None:
    lowered = line.strip().lower()
    if not any(
        lowered == key or lowered.startswith(f"{key} ") or lowered.startswith(f"{key}:") for key in YIELD_PREFIXES
    ):
        return None
    match = re.search(r"(?<!\d)(\d{1,6})(?!\d)(?:\s*(?:-|–|to)\s*\d+)?", lowered)
    if not match:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def detect_servings(text: str) -> int | None:
    if not isinstance(text, str):
        return None
    for line in text.splitlines():
        value = _servings_from_line(line)
        if value is not None:
            return value
    return None


def build_recipe(
    text: str,
    *,
    title: str | None = None,
    servings: int | None = None,
    category: str = DEFAULT_CATEGORY,
    tags: Iterable[str] = (),
) -> Recipe:
    resolved_title = (title or "").strip() or detect_title(text) or DEFAULT_TITLE
    resolved_servings = servings if servings and servings > 0 else detect_servings(text) or DEFAULT_SERVINGS
    return Recipe(
        title=resolved_title,
        ingredients=parse_ingredients(text),
        steps=parse_steps(text),
        original_servings=resolved_servings,
        category=category,
        tags=[tag.strip().lower() for tag in tags if tag.strip()],
        raw_text=text,
    )


def run_scan(
    provider: OcrProvider,
    image: bytes,
    *,
    title: str | None = None,
    servings: int | None = None,
) -> ScanResult:
    try:
        text = provider.recognize(image)
    except OcrError as exc:
        log.warning("OCR failed: %s", exc)
        return ScanResult(text=None, recipe=None, error=str(exc) or "Failed to scan recipe")

    if not text or not text.strip():
        return ScanResult(text=text, recipe=None, error="No text found in image")

    return ScanResult(text=text, recipe=build_recipe(text, title=title, servings=servings))
