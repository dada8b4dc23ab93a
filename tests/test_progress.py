# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fittrack.goals.models import MacroGoals
from fittrack.nutrition.models import NutritionTotals
from fittrack.progress import (
    is_goal_achieved,
    macro_progress,
    progress_percentage,
    progress_ratio,
    remaining,
)


class TestProgressRatio(unittest.TestCase):
    def test_examples(self) -> None:
        self.assertAlmostEqual(progress_ratio(1600, 2000), 0.8)
        self.assertEqual(progress_ratio(120, 0), 0.0)
        self.assertEqual(progress_ratio(250, 200), 1.0)

    def test_non_positive_goal_is_zero(self) -> None:
        for goal in (0, -1, -150.5):
            for current in (0, 10, 5000):
                self.assertEqual(progress_ratio(current, goal), 0.0)

    def test_bounded_and_monotonic(self) -> None:
        previous = -1.0
        for current in range(0, 400, 7):
            ratio = progress_ratio(current, 200)
            self.assertGreaterEqual(ratio, 0.0)
            self.assertLessEqual(ratio, 1.0)
            self.assertGreaterEqual(ratio, previous)
            previous = ratio

    def test_percentage_and_achieved(self) -> None:
        self.assertEqual(progress_percentage(75, 150), 50)
        self.assertEqual(progress_percentage(999, 100), 100)
        self.assertFalse(is_goal_achieved(149, 150))
        self.assertTrue(is_goal_achieved(150, 150))
        self.assertFalse(is_goal_achieved(10, 0))
        self.assertEqual(remaining(50, 80), 30.0)
        self.assertEqual(remaining(120, 80), 0.0)


class TestMacroProgress(unittest.TestCase):
    def test_rings_in_macro_order(self) -> None:
        totals = NutritionTotals(calories=1600, protein=75, carbs=250, fat=0)
        rings = macro_progress(totals, MacroGoals())

        self.assertEqual(list(rings), ["calories", "protein", "carbs", "fat"])
        self.assertAlmostEqual(rings["calories"].ratio, 0.8)
        self.assertEqual(rings["protein"].percentage, 50)
        self.assertTrue(rings["carbs"].achieved)
        self.assertEqual(rings["carbs"].ratio, 1.0)
        self.assertEqual(rings["fat"].remaining, 80.0)
        self.assertEqual(rings["protein"].label, "75g")

    def test_zero_goal_ring(self) -> None:
        rings = macro_progress(NutritionTotals(calories=500), MacroGoals(calories=0))
        self.assertEqual(rings["calories"].ratio, 0.0)
        self.assertFalse(rings["calories"].achieved)


if __name__ == "__main__":
    unittest.main()
