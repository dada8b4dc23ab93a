# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fittrack.shopping.categories import (
    CATEGORY_STYLES,
    DEFAULT_STYLE,
    ShoppingCategory,
    categorize,
    category_color,
    category_icon,
    parse_category,
)


class TestParseCategory(unittest.TestCase):
    def test_exact_and_case_insensitive(self) -> None:
        self.assertIs(parse_category("Dairy"), ShoppingCategory.dairy)
        self.assertIs(parse_category("meat & fish"), ShoppingCategory.meat_and_fish)
        self.assertIs(parse_category("  Breads & Grains "), ShoppingCategory.breads_and_grains)

    def test_legacy_aliases(self) -> None:
        self.assertIs(parse_category("Produce"), ShoppingCategory.fruit_and_veg)
        self.assertIs(parse_category("Meat & Seafood"), ShoppingCategory.meat_and_fish)
        self.assertIs(parse_category("Pantry"), ShoppingCategory.store_cupboard)

    def test_unknown_is_other(self) -> None:
        self.assertIs(parse_category("Hardware"), ShoppingCategory.other)
        self.assertIs(parse_category(None), ShoppingCategory.other)
        self.assertIs(parse_category(""), ShoppingCategory.other)


class TestCategoryStyles(unittest.TestCase):
    def test_every_category_has_a_style(self) -> None:
        for category in ShoppingCategory:
            self.assertIn(category, CATEGORY_STYLES)

    def test_lookup(self) -> None:
        self.assertEqual(category_icon("Dairy"), "drop.fill")
        self.assertEqual(category_color("Fruit & Veg"), "green")
        self.assertEqual(category_icon("mystery"), DEFAULT_STYLE.icon)
        self.assertEqual(category_color("mystery"), DEFAULT_STYLE.color)


class TestCategorize(unittest.TestCase):
    def test_example(self) -> None:
        milk = {"name": "Milk", "category": "Dairy"}
        cod = {"name": "Cod", "category": "Meat & Fish"}
        self.assertEqual(categorize([milk, cod]), {"Dairy": [milk], "Meat & Fish": [cod]})

    def test_partition_has_no_empty_keys_and_keeps_every_item(self) -> None:
        items = [
            {"name": "Bread", "category": "Breads & Grains"},
            {"name": "Peas", "category": "Frozen"},
            {"name": "Apples", "category": "Produce"},
            {"name": "Foil", "category": "Household"},
            {"name": "Rice", "category": "Breads & Grains"},
        ]
        buckets = categorize(items)

        self.assertTrue(all(buckets.values()))
        flattened = [item for bucket in buckets.values() for item in bucket]
        self.assertEqual(len(flattened), len(items))
        for item in items:
            self.assertEqual(sum(1 for x in flattened if x is item), 1)
        self.assertEqual(list(buckets), ["Fruit & Veg", "Frozen", "Breads & Grains", "Other"])
        self.assertEqual([i["name"] for i in buckets["Breads & Grains"]], ["Bread", "Rice"])

    def test_empty_input(self) -> None:
        self.assertEqual(categorize([]), {})


if __name__ == "__main__":
    unittest.main()
