# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from datetime import date
from unittest import mock

import httpx
from fastapi import HTTPException

from fittrack.goals.models import MacroGoals
from fittrack.plans import generator
from fittrack.plans.models import GenerateMealPlanRequest, MealPlan
from fittrack.shopping.categories import ShoppingCategory

_PLAN = {
    "title": "High Protein Week",
    "description": "Simple batch-cooked meals.",
    "totalDays": 2,
    "dailyMeals": [
        {
            "day": 1,
            "date": "Mon, Jun 16",
            "meals": [
                {
                    "type": "Breakfast",
                    "name": "Greek yogurt bowl",
                    "ingredients": ["yogurt", "berries"],
                    "instructions": ["mix"],
                    "prepTime": 5,
                    "nutrition": {"calories": 350, "protein": 30, "carbs": 40, "fat": 8},
                }
            ],
            "dailyNutrition": {"totalCalories": 1900, "totalProtein": 160, "totalCarbs": 180, "totalFat": 70},
        }
    ],
    "shoppingList": [
        {"name": "Greek yogurt", "amount": "1kg", "category": "Dairy"},
        {"name": "Salmon", "amount": "400g", "category": "Meat & Seafood"},
        "Olive oil",
    ],
}


class TestParseGeneratedMealPlan(unittest.TestCase):
    def test_fenced_camel_case_json(self) -> None:
        text = "Here you go:\n```json\n" + json.dumps(_PLAN) + "\n```"
        plan = generator.parse_generated_meal_plan(text)

        self.assertEqual(plan.title, "High Protein Week")
        self.assertEqual(plan.total_days, 2)
        meal = plan.daily_meals[0].meals[0]
        self.assertEqual(meal.type.value, "breakfast")
        self.assertEqual(meal.prep_time, 5)
        self.assertEqual(plan.daily_meals[0].daily_nutrition.total_protein, 160)

        items = plan.shopping_items()
        self.assertEqual([i.name for i in items], ["Greek yogurt", "Salmon", "Olive oil"])
        self.assertEqual(items[1].category, ShoppingCategory.meat_and_fish)
        self.assertEqual(items[2].category, ShoppingCategory.other)
        self.assertEqual(items[2].amount, "")

    def test_legacy_category_mapping(self) -> None:
        payload = dict(_PLAN, shoppingList={"Produce": ["Spinach", "Lemons"], "Dairy & Eggs": ["Eggs"]})
        plan = generator.parse_generated_meal_plan(json.dumps(payload))

        self.assertIsNone(plan.shopping_list)
        items = plan.shopping_items()
        self.assertEqual(len(items), 3)
        self.assertEqual({i.category for i in items}, {ShoppingCategory.fruit_and_veg, ShoppingCategory.dairy})

    def test_missing_total_days_defaults_to_request(self) -> None:
        payload = {k: v for k, v in _PLAN.items() if k != "totalDays"}
        plan = generator.parse_generated_meal_plan(json.dumps(payload), number_of_days=4)
        self.assertEqual(plan.total_days, 4)

    def test_no_json(self) -> None:
        with self.assertRaises(ValueError):
            generator.parse_generated_meal_plan("Sorry, I can't help with that.")


class TestPrompt(unittest.TestCase):
    def test_includes_requirements_and_macros(self) -> None:
        request = GenerateMealPlanRequest(
            start_date=date(2025, 6, 16),
            number_of_days=3,
            preferences="quick lunches",
            allergens=["peanuts"],
            diet_type="pescatarian",
        )
        prompt = generator.build_meal_plan_prompt(request, MacroGoals(calories=2200, protein=160, carbs=220, fat=70))

        self.assertIn("3 days starting from Jun 16, 2025", prompt)
        self.assertIn("peanuts", prompt)
        self.assertIn("pescatarian", prompt)
        self.assertIn("quick lunches", prompt)
        self.assertIn("Calories: 2200", prompt)
        self.assertIn("Store Cupboard", prompt)

    def test_without_goals(self) -> None:
        request = GenerateMealPlanRequest(start_date=date(2025, 6, 16))
        self.assertNotIn("Daily macro targets", generator.build_meal_plan_prompt(request))


class TestChatCompletion(unittest.TestCase):
    def _client_factory(self, handler):
        real_client = httpx.Client

        def factory(*args, **kwargs):
            return real_client(*args, transport=httpx.MockTransport(handler), **kwargs)

        return factory

    def test_missing_key_is_503(self) -> None:
        with mock.patch.object(generator.settings, "meal_plan_api_key", None):
            with self.assertRaises(HTTPException) as ctx:
                generator.quick_meal_suggestion("vegetarian")
        self.assertEqual(ctx.exception.status_code, 503)

    def test_upstream_error_is_502(self) -> None:
        handler = lambda request: httpx.Response(500, json={"error": "boom"})  # noqa: E731
        with mock.patch.object(generator.settings, "meal_plan_api_key", "k"), mock.patch.object(
            generator.httpx, "Client", self._client_factory(handler)
        ):
            with self.assertRaises(HTTPException) as ctx:
                generator.quick_meal_suggestion("vegetarian")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_generate_meal_plan(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": json.dumps(_PLAN)}}]})

        request = GenerateMealPlanRequest(start_date=date(2025, 6, 16), number_of_days=2)
        with mock.patch.object(generator.settings, "meal_plan_api_key", "secret"), mock.patch.object(
            generator.httpx, "Client", self._client_factory(handler)
        ):
            plan = generator.generate_meal_plan(request, MacroGoals())

        self.assertEqual(seen["auth"], "Bearer secret")
        self.assertEqual(seen["body"]["messages"][0]["role"], "system")
        self.assertIn("Protein: 150g", seen["body"]["messages"][1]["content"])
        self.assertEqual(plan.title, "High Protein Week")

    def test_unparseable_answer_is_502(self) -> None:
        handler = lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "no plan today"}}]})  # noqa: E731
        request = GenerateMealPlanRequest(start_date=date(2025, 6, 16))
        with mock.patch.object(generator.settings, "meal_plan_api_key", "k"), mock.patch.object(
            generator.httpx, "Client", self._client_factory(handler)
        ):
            with self.assertRaises(HTTPException) as ctx:
                generator.generate_meal_plan(request)
        self.assertEqual(ctx.exception.status_code, 502)


class TestMealPlanDates(unittest.TestCase):
    def test_end_date_and_range(self) -> None:
        plan = MealPlan(id="p", start_date=date(2025, 6, 16), number_of_days=7, created_at="2025-06-15T00:00:00+00:00")
        self.assertEqual(plan.end_date, date(2025, 6, 22))
        self.assertEqual(plan.date_range, "Jun 16, 2025 - Jun 22, 2025")
        single = plan.model_copy(update={"number_of_days": 1})
        self.assertEqual(single.date_range, "Jun 16, 2025")


if __name__ == "__main__":
    unittest.main()
