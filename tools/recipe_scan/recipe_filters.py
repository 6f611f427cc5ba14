"""Pure filtering, search and sorting over saved recipes."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from scan_config import SORT_OPTIONS
from scan_models import Recipe


def filter_by_category(recipes: list[Recipe], category: str | None) -> list[Recipe]:
    if category is None:
        return list(recipes)
    wanted = category.strip().lower()
    return [recipe for recipe in recipes if recipe.category == wanted]


def filter_by_tags(recipes: list[Recipe], tags: Iterable[str]) -> list[Recipe]:
    """Keep recipes carrying every tag in ``tags`` (case-insensitive)."""
    wanted = [tag.strip().lower() for tag in tags if tag.strip()]
    if not wanted:
        return list(recipes)

    out: list[Recipe] = []
    for recipe in recipes:
        have = {tag.lower() for tag in recipe.tags}
        if all(tag in have for tag in wanted):
            out.append(recipe)
    return out


def _matches(recipe: Recipe, query: str) -> bool:
    if query in recipe.title.lower():
        return True
    if any(query in ingredient.label.lower() for ingredient in recipe.ingredients):
        return True
    return any(query in step.lower() for step in recipe.steps)


def search_recipes(recipes: list[Recipe], query: str) -> list[Recipe]:
    needle = query.strip().lower()
    if not needle:
        return list(recipes)
    return [recipe for recipe in recipes if _matches(recipe, needle)]


def _timestamp(value: str) -> float:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


def sort_recipes(recipes: list[Recipe], sort_by: str) -> list[Recipe]:
    if sort_by == "recent":
        return sorted(recipes, key=lambda recipe: _timestamp(recipe.updated_at), reverse=True)
    if sort_by == "created":
        return sorted(recipes, key=lambda recipe: _timestamp(recipe.created_at), reverse=True)
    if sort_by == "alphabetical":
        return sorted(recipes, key=lambda recipe: recipe.title.casefold())
    raise ValueError(f"Unsupported sort option: {sort_by} (expected one of {', '.join(SORT_OPTIONS)})")


def all_tags(recipes: list[Recipe]) -> list[str]:
    return sorted({tag.lower() for recipe in recipes for tag in recipe.tags})
