# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fittrack.nutrition.models import MealComponent, NutritionTotals
from fittrack.nutrition.portions import (
    MAX_SCALE,
    MIN_SCALE,
    clamp_scale_factor,
    display_macro,
    meal_nutrition,
    scale_nutrition,
    scale_options,
)


class TestScaleFactor(unittest.TestCase):
    def test_clamps(self) -> None:
        self.assertEqual(clamp_scale_factor(0.0), MIN_SCALE)
        self.assertEqual(clamp_scale_factor(0.1), 0.25)
        self.assertEqual(clamp_scale_factor(3.5), MAX_SCALE)
        self.assertEqual(clamp_scale_factor(10), 3.0)

    def test_non_finite_input(self) -> None:
        self.assertEqual(clamp_scale_factor(float("inf")), MAX_SCALE)
        self.assertEqual(clamp_scale_factor(float("-inf")), MIN_SCALE)
        self.assertEqual(clamp_scale_factor(float("nan")), 1.0)
        self.assertEqual(clamp_scale_factor(1e308), MAX_SCALE)

    def test_snaps_to_quarters(self) -> None:
        self.assertEqual(clamp_scale_factor(1.0), 1.0)
        self.assertEqual(clamp_scale_factor(1.1), 1.0)
        self.assertEqual(clamp_scale_factor(1.4), 1.5)
        self.assertEqual(clamp_scale_factor(2.74), 2.75)

    def test_options(self) -> None:
        options = scale_options()
        self.assertEqual(options[0], 0.25)
        self.assertEqual(options[-1], 3.0)
        self.assertEqual(len(options), 12)


class TestScaling(unittest.TestCase):
    def test_scale_keeps_precision(self) -> None:
        scaled = scale_nutrition(NutritionTotals(calories=333, protein=25, carbs=10, fat=7), 1.5)
        self.assertAlmostEqual(scaled.calories, 499.5)
        self.assertAlmostEqual(scaled.fat, 10.5)
        self.assertEqual(display_macro(scaled.calories), 500)

    def test_meal_from_components(self) -> None:
        components = [
            MealComponent(name="Rice", grams=200, calories_per_100g=130, protein_per_100g=2.7, carbs_per_100g=28, fat_per_100g=0.3),
            MealComponent(name="Chicken", grams=150, calories_per_100g=165, protein_per_100g=31, carbs_per_100g=0, fat_per_100g=3.6),
        ]
        total = meal_nutrition(components)
        self.assertAlmostEqual(total.calories, 260 + 247.5)
        self.assertAlmostEqual(total.protein, 5.4 + 46.5)
        self.assertAlmostEqual(total.carbs, 56.0)

    def test_empty_meal(self) -> None:
        self.assertEqual(meal_nutrition([]).calories, 0.0)


if __name__ == "__main__":
    unittest.main()
