from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from scan_config import (
    BULLET_MARKERS,
    BULLET_RUN_BREAK,
    MAX_FIRST_STEP_NUMBER,
    MIN_BULLET_STEP_LENGTH,
    MIN_FALLBACK_STEPS,
    SECTION_END_HEADERS,
    STEP_HEADERS,
    STEP_INGREDIENT_UNITS,
)

log = logging.getLogger("recipe_scan.steps")

# "1.", "1)", "1:", "1 ", "Step 1", "Step 1:"; longer digit runs are not step numbers.
_NUMBERED_STEP = re.compile(r"^(?:step\s*)?(\d{1,9})[.):\s]\s*", flags=re.IGNORECASE)
_BULLET = re.compile(rf"^[{re.escape(BULLET_MARKERS)}]\s*")
_INGREDIENT_LIKE = re.compile(
    r"^\d+\s*[\d/]*\s*(?:" + "|".join(STEP_INGREDIENT_UNITS) + r")\b",
    flags=re.IGNORECASE,
)


def _header_key(line: str) -> str:
    return re.sub(r"[:\s]+$", "", line.lower()).strip()


def is_header(line: str, headers: Iterable[str]) -> bool:
    key = _header_key(line)
    if not key:
        return False
    return any(key == header or key.startswith(f"{header} ") for header in headers)


def looks_like_ingredient(line: str) -> bool:
    return _INGREDIENT_LIKE.match(line.strip()) is not None


def clean_step_line(line: str) -> str:
    cleaned = line.strip()
    cleaned = _NUMBERED_STEP.sub("", cleaned, count=1)
    cleaned = _BULLET.sub("", cleaned, count=1)
    return cleaned.strip()


def _section_steps(lines: list[str], start: int) -> list[str]:
    steps: list[str] = []
    for raw in lines[start:]:
        line = raw.strip()
        if is_header(line, SECTION_END_HEADERS):
            break
        if not line:
            continue
        if looks_like_ingredient(_BULLET.sub("", line, count=1)):
            continue
        cleaned = clean_step_line(line)
        if cleaned:
            steps.append(cleaned)
    return steps


def steps_after_header(lines: list[str]) -> list[str]:
    for idx, raw in enumerate(lines):
        if not is_header(raw.strip(), STEP_HEADERS):
            continue
        steps = _section_steps(lines, idx + 1)
        if steps:
            return steps
        log.debug("step header at line %d yielded no steps", idx)
    return []


def numbered_steps(lines: list[str]) -> list[str]:
    numbered: list[tuple[int, str]] = []
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        match = _NUMBERED_STEP.match(line)
        if not match:
            continue
        cleaned = clean_step_line(line)
        if cleaned:
            numbered.append((int(match.group(1)), cleaned))

    if len(numbered) < MIN_FALLBACK_STEPS:
        return []

    numbered.sort(key=lambda item: item[0])
    if numbered[0][0] > MAX_FIRST_STEP_NUMBER:
        log.debug("numbered lines start at %d, not a step list", numbered[0][0])
        return []
    return [text for _, text in numbered]


def bulleted_steps(lines: list[str]) -> list[str]:
    run: list[str] = []
    gap = 0

    for raw in lines:
        line = raw.strip()
        if not _BULLET.match(line):
            if run:
                gap += 1
                if gap >= BULLET_RUN_BREAK:
                    if len(run) >= MIN_FALLBACK_STEPS:
                        return run
                    log.debug("abandoning bulleted run of %d", len(run))
                    run = []
                    gap = 0
            continue

        gap = 0
        cleaned = clean_step_line(line)
        if looks_like_ingredient(cleaned):
            continue
        if len(cleaned) > MIN_BULLET_STEP_LENGTH:
            run.append(cleaned)

    return run if len(run) >= MIN_FALLBACK_STEPS else []


@dataclass(frozen=True)
class StepStrategy:
    name: str
    extract: Callable[[list[str]], list[str]]
    min_steps: int


STEP_STRATEGIES: tuple[StepStrategy, ...] = (
    StepStrategy("header", steps_after_header, 1),
    StepStrategy("numbered", numbered_steps, MIN_FALLBACK_STEPS),
    StepStrategy("bulleted", bulleted_steps, MIN_FALLBACK_STEPS),
)


def _run_strategies(text: Any) -> tuple[str | None, list[str]]:
    if not isinstance(text, str) or not text:
        return None, []

    lines = text.splitlines()
    for strategy in STEP_STRATEGIES:
        steps = strategy.extract(lines)
        if len(steps) >= strategy.min_steps:
            log.debug("%s strategy found %d steps", strategy.name, len(steps))
            return strategy.name, steps

    log.debug("no steps detected")
    return None, []


def parse_steps(text: Any) -> list[str]:
    _, steps = _run_strategies(text)
    return steps


def detect_step_strategy(text: Any) -> str | None:
    name, _ = _run_strategies(text)
    return name
