#!/usr/bin/env python3

from __future__ import annotations

import sys
import unittest
from pathlib import Path

TOOL_DIR = Path(__file__).resolve().parents[1]
if str(TOOL_DIR) not in sys.path:
    sys.path.insert(0, str(TOOL_DIR))

from recipe_filters import all_tags, filter_by_category, filter_by_tags, search_recipes, sort_recipes
from scan_models import Ingredient, Recipe


def _recipe(title: str, category: str, tags: list[str], created: str, updated: str, **kwargs) -> Recipe:
    return Recipe(
        title=title,
        ingredients=kwargs.get("ingredients", []),
        steps=kwargs.get("steps", []),
        original_servings=4,
        category=category,
        tags=tags,
        created_at=created,
        updated_at=updated,
    )


class RecipeFilterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cake = _recipe(
            "Chocolate Cake",
            "dessert",
            ["Sweet", "baking"],
            "2026-01-01T10:00:00+00:00",
            "2026-03-01T10:00:00+00:00",
            steps=["Bake at 350 for 30 minutes."],
        )
        self.curry = _recipe(
            "chickpea curry",
            "entree",
            ["vegetarian", "quick"],
            "2026-02-01T10:00:00+00:00",
            "2026-02-02T10:00:00+00:00",
            ingredients=[Ingredient("c1", 400.0, "g", "Chickpeas")],
        )
        self.toast = _recipe(
            "Avocado Toast",
            "snack",
            ["quick", "vegetarian", "breakfast"],
            "2026-03-01T09:00:00Z",
            "2026-03-01T09:00:00Z",
        )
        self.recipes = [self.cake, self.curry, self.toast]

    def test_filter_by_category(self) -> None:
        self.assertEqual(filter_by_category(self.recipes, "entree"), [self.curry])
        self.assertEqual(filter_by_category(self.recipes, "Dessert"), [self.cake])
        self.assertEqual(filter_by_category(self.recipes, None), self.recipes)
        self.assertIsNot(filter_by_category(self.recipes, None), self.recipes)

    def test_filter_by_tags_requires_all(self) -> None:
        self.assertEqual(filter_by_tags(self.recipes, ["quick", "VEGETARIAN"]), [self.curry, self.toast])
        self.assertEqual(filter_by_tags(self.recipes, ["sweet"]), [self.cake])
        self.assertEqual(filter_by_tags(self.recipes, ["quick", "sweet"]), [])
        self.assertEqual(filter_by_tags(self.recipes, []), self.recipes)

    def test_search_title_ingredients_and_steps(self) -> None:
        self.assertEqual(search_recipes(self.recipes, "TOAST"), [self.toast])
        self.assertEqual(search_recipes(self.recipes, "chickpeas"), [self.curry])
        self.assertEqual(search_recipes(self.recipes, "bake at 350"), [self.cake])
        self.assertEqual(search_recipes(self.recipes, "   "), self.recipes)
        self.assertEqual(search_recipes(self.recipes, "lasagna"), [])

    def test_sort(self) -> None:
        self.assertEqual(sort_recipes(self.recipes, "recent"), [self.cake, self.toast, self.curry])
        self.assertEqual(sort_recipes(self.recipes, "created"), [self.toast, self.curry, self.cake])
        self.assertEqual(sort_recipes(self.recipes, "alphabetical"), [self.toast, self.curry, self.cake])
        self.assertEqual(self.recipes, [self.cake, self.curry, self.toast])

    def test_unknown_sort_option(self) -> None:
        with self.assertRaises(ValueError):
            sort_recipes(self.recipes, "popular")

    def test_all_tags(self) -> None:
        self.assertEqual(all_tags(self.recipes), ["baking", "breakfast", "quick", "sweet", "vegetarian"])
        self.assertEqual(all_tags([]), [])


if __name__ == "__main__":
    unittest.main()
