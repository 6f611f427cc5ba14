"""Value types shared by the scan parsers, the scaler and the recipe tools."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from scan_config import DEFAULT_CATEGORY, RECIPE_CATEGORIES


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Ingredient:
    id: str
    quantity: float
    unit: str | None
    label: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "quantity": self.quantity,
            "unit": self.unit,
            "label": self.label,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Ingredient:
        unit = payload.get("unit")
        return cls(
            id=str(payload.get("id") or new_id()),
            quantity=float(payload["quantity"]),
            unit=str(unit).lower() if unit else None,
            label=str(payload.get("label", "")).strip(),
        )


def normalize_category(value: Any) -> str:
    category = str(value or "").strip().lower()
    if category in RECIPE_CATEGORIES:
        return category
    return DEFAULT_CATEGORY


@dataclass
class Recipe:
    title: str
    ingredients: list[Ingredient]
    steps: list[str]
    original_servings: int
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    notes: str | None = None
    raw_text: str | None = None
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = ""

    def __post_init__(self) -> None:
        self.category = normalize_category(self.category)
        if not self.updated_at:
            self.updated_at = self.created_at

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": [item.to_payload() for item in self.ingredients],
            "steps": list(self.steps),
            "original_servings": self.original_servings,
            "category": self.category,
            "tags": list(self.tags),
            "notes": self.notes,
            "raw_text": self.raw_text,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
