# -*- coding: utf-8 -*-

from __future__ import annotations

import asyncio
import unittest
from unittest import mock

from fastapi import HTTPException

from fittrack import services as services_module
from fittrack.goals.models import MacroGoals
from fittrack.nutrition.models import DailyNutritionSummary, NutritionTotals
from fittrack.progress import macro_progress
from fittrack.screens.bridge import run_request
from fittrack.screens.store import Store
from fittrack.screens.views import (
    ExerciseLibraryScreen,
    GoalSettingsScreen,
    QuickClassLoggerScreen,
    ShoppingListScreen,
    TodayNutritionScreen,
    WorkoutDetailScreen,
)
from fittrack.services import AuthService, ExerciseService, Services, WorkoutService
from fittrack.shopping.models import ShoppingList, ShoppingListItem
from fittrack.workouts.models import PersonalRecord, WorkoutSession, WorkoutSet


def _session(**overrides) -> WorkoutSession:
    data = dict(
        id="s1",
        user_id="u1",
        name="Push Day",
        started_at="2025-06-16T10:00:00+00:00",
        ended_at=None,
        duration_minutes=None,
        created_at="2025-06-16T10:00:00+00:00",
    )
    data.update(overrides)
    return WorkoutSession(**data)


def _set(exercise_id: str, number: int, reps: int, weight: float) -> WorkoutSet:
    return WorkoutSet(
        id=f"{exercise_id}-{number}",
        workout_session_id="s1",
        exercise_id=exercise_id,
        set_number=number,
        reps=reps,
        weight_lbs=weight,
        completed_at="2025-06-16T10:05:00+00:00",
    )


class FakeNutrition:
    def __init__(self) -> None:
        self.totals = NutritionTotals(calories=1600, protein=75, carbs=100, fat=40)

    async def summary(self, day: str) -> DailyNutritionSummary:
        goals = MacroGoals()
        return DailyNutritionSummary(
            date=day,
            totals=self.totals,
            goals=goals,
            rings=macro_progress(self.totals, goals),
            by_meal_type={},
            entry_count=0,
        )

    async def entries(self, day: str):
        return []


class FakeWorkouts:
    def __init__(self, *, fail: bool = False, sets=None) -> None:
        self.fail = fail
        self.logged = []
        self._sets = sets if sets is not None else [
            _set("bench_press", 2, 8, 145),
            _set("overhead_press", 1, 10, 75),
            _set("bench_press", 1, 8, 135),
        ]

    async def session(self, session_id: str) -> WorkoutSession:
        if self.fail:
            raise HTTPException(status_code=404, detail="Workout session not found")
        return _session(id=session_id)

    async def sets(self, session_id: str):
        return list(self._sets)

    async def log_class(self, class_type: str, duration_minutes: int) -> WorkoutSession:
        self.logged.append((class_type, duration_minutes))
        return _session(name=f"{class_type} Class", ended_at="2025-06-16T11:00:00+00:00", duration_minutes=duration_minutes)


class FakeGoals:
    def __init__(self) -> None:
        self.saved = None

    async def load(self) -> MacroGoals:
        return MacroGoals()

    async def save(self, goals: MacroGoals) -> MacroGoals:
        self.saved = goals
        return goals


class FakeShopping:
    def __init__(self, *, fail_toggle: bool = False) -> None:
        self.fail_toggle = fail_toggle
        self.create_calls = 0
        self.during_toggle = None

    async def create_for_plan(self, meal_plan_id: str) -> ShoppingList:
        self.create_calls += 1
        return ShoppingList(
            id="list-1",
            meal_plan_id=meal_plan_id,
            meal_plan_title="Week 1",
            created_at="2025-06-16T10:00:00+00:00",
            items=[
                ShoppingListItem(id="i1", name="Milk", amount="1L", category="Dairy"),
                ShoppingListItem(id="i2", name="Cod", amount="400g", category="Meat & Fish"),
            ],
        )

    async def set_item_completed(self, list_id: str, item_id: str, is_completed: bool) -> ShoppingListItem:
        if self.during_toggle is not None:
            await self.during_toggle()
        if self.fail_toggle:
            raise RuntimeError("network down")
        return ShoppingListItem(id=item_id, name="Milk", is_completed=is_completed)

    async def delete(self, list_id: str) -> None:
        return None


def _services(**overrides) -> Services:
    return Services("u1", **overrides)


class TestStoreAndBridge(unittest.TestCase):
    def test_store_notifies_until_unsubscribed(self) -> None:
        store = Store(count=0)
        seen = []
        unsubscribe = store.subscribe(lambda state: seen.append(state["count"]))
        store.set(count=1)
        unsubscribe()
        store.set(count=2)
        self.assertEqual(seen, [1])
        self.assertEqual(store.get("count"), 2)

    def test_run_request_error_message(self) -> None:
        store = Store()
        loading = []
        store.subscribe(lambda state: loading.append(state["is_loading"]))

        async def boom():
            raise HTTPException(status_code=404, detail="Meal plan not found")

        result = asyncio.run(run_request(store, boom))
        self.assertIsNone(result)
        self.assertEqual(store.get("error"), "Meal plan not found")
        self.assertFalse(store.get("is_loading"))
        self.assertEqual(loading, [True, False])

    def test_run_request_fallback_message(self) -> None:
        store = Store()

        async def boom():
            raise RuntimeError()

        asyncio.run(run_request(store, boom))
        self.assertEqual(store.get("error"), "Operation failed")

    def test_empty_result_is_not_an_error(self) -> None:
        store = Store()

        async def nothing():
            return []

        asyncio.run(run_request(store, nothing, lambda items: {"items": items}))
        self.assertIsNone(store.get("error"))
        self.assertEqual(store.get("items"), [])


class TestScreens(unittest.TestCase):
    def test_today_nutrition_rings(self) -> None:
        screen = TodayNutritionScreen(_services(nutrition=FakeNutrition()), "2025-06-16")
        asyncio.run(screen.load())

        rings = screen.state["rings"]
        self.assertAlmostEqual(rings["calories"].ratio, 0.8)
        self.assertEqual(rings["protein"].percentage, 50)
        self.assertEqual(screen.state["entries"], [])
        self.assertIsNone(screen.state["error"])

    def test_workout_detail_groups_sets(self) -> None:
        screen = WorkoutDetailScreen(_services(workouts=FakeWorkouts()), "s1")
        asyncio.run(screen.load())

        exercises = screen.state["exercises"]
        self.assertEqual([g.exercise_name for g in exercises], ["Bench Press", "Overhead Press"])
        self.assertEqual([s.set_number for s in exercises[0].sets], [1, 2])
        self.assertEqual(exercises[0].best_set, "145 lbs x 8")
        self.assertEqual(screen.state["total_sets"], 3)
        self.assertEqual(screen.state["total_volume_lbs"], 135 * 8 + 145 * 8 + 75 * 10)

    def test_workout_detail_keeps_ids_with_same_name_apart(self) -> None:
        workouts = FakeWorkouts(sets=[_set("sled_push", 1, 10, 90), _set("sled push", 1, 12, 70)])
        screen = WorkoutDetailScreen(_services(workouts=workouts), "s1")
        asyncio.run(screen.load())

        exercises = screen.state["exercises"]
        self.assertEqual(len(exercises), 2)
        self.assertEqual({g.exercise_name for g in exercises}, {"Sled Push"})
        self.assertEqual({g.exercise_id for g in exercises}, {"sled_push", "sled push"})
        self.assertEqual(sum(len(g.sets) for g in exercises), 2)

    def test_workout_detail_error(self) -> None:
        screen = WorkoutDetailScreen(_services(workouts=FakeWorkouts(fail=True)), "missing")
        asyncio.run(screen.load())
        self.assertEqual(screen.state["error"], "Workout session not found")
        self.assertIsNone(screen.state["session"])

    def test_shopping_list_toggle(self) -> None:
        shopping = FakeShopping()
        screen = ShoppingListScreen(_services(shopping=shopping), "plan-1")

        async def scenario() -> None:
            await screen.load()
            await screen.toggle("i1")

        asyncio.run(scenario())
        shopping_list = screen.state["shopping_list"]
        self.assertEqual(list(screen.state["categories"]), ["Dairy", "Meat & Fish"])
        self.assertTrue(next(i for i in shopping_list.items if i.id == "i1").is_completed)
        self.assertEqual(shopping_list.completion_text, "1 of 2 completed")
        self.assertEqual(shopping_list.completion_percentage, 50)

    def test_shopping_list_toggle_reverts_on_failure(self) -> None:
        screen = ShoppingListScreen(_services(shopping=FakeShopping(fail_toggle=True)), "plan-1")

        async def scenario() -> None:
            await screen.load()
            await screen.toggle("i1")

        asyncio.run(scenario())
        shopping_list = screen.state["shopping_list"]
        self.assertFalse(any(i.is_completed for i in shopping_list.items))
        self.assertEqual(screen.state["error"], "network down")

    def test_failed_toggle_after_list_deleted(self) -> None:
        shopping = FakeShopping(fail_toggle=True)
        screen = ShoppingListScreen(_services(shopping=shopping), "plan-1")
        shopping.during_toggle = screen.delete

        async def scenario() -> None:
            await screen.load()
            await screen.toggle("i1")

        asyncio.run(scenario())
        self.assertIsNone(screen.state["shopping_list"])
        self.assertEqual(screen.state["categories"], {})
        self.assertEqual(screen.state["error"], "network down")

    def test_goal_settings_save(self) -> None:
        goals = FakeGoals()
        screen = GoalSettingsScreen(_services(goals=goals))

        async def scenario() -> None:
            await screen.load()
            await screen.save(calories=2400, protein=180, carbs=250, fat=70)

        asyncio.run(scenario())
        self.assertTrue(screen.state["saved"])
        self.assertEqual(goals.saved.calories, 2400)

    def test_goal_settings_rejects_negative(self) -> None:
        goals = FakeGoals()
        screen = GoalSettingsScreen(_services(goals=goals))
        asyncio.run(screen.save(calories=-5, protein=180, carbs=250, fat=70))
        self.assertIsNotNone(screen.state["error"])
        self.assertIsNone(goals.saved)
        self.assertFalse(screen.state["saved"])

    def test_quick_class_logger(self) -> None:
        workouts = FakeWorkouts()
        screen = QuickClassLoggerScreen(_services(workouts=workouts))

        asyncio.run(screen.log())
        self.assertEqual(screen.state["error"], "Choose a class type")
        self.assertEqual(workouts.logged, [])

        screen.select_class("Spin")
        screen.select_duration(30)
        asyncio.run(screen.log())
        self.assertEqual(workouts.logged, [("Spin", 30)])
        self.assertEqual(screen.state["logged_session"].name, "Spin Class")
        self.assertIsNone(screen.state["error"])

    def test_exercise_library_search(self) -> None:
        screen = ExerciseLibraryScreen(_services(exercises=ExerciseService()), search_delay=0.01)

        async def scenario() -> None:
            await screen.load()
            screen.on_query_change("curl")
            await asyncio.sleep(0.1)

        asyncio.run(scenario())
        self.assertEqual(len(screen.muscle_group_names()), 6)
        self.assertEqual(screen.state["query"], "curl")
        self.assertTrue(screen.state["results"])
        self.assertTrue(all("curl" in e.name.lower() or "curl" in e.instructions.lower() for e in screen.state["results"]))


USER_ROW = {
    "id": "u1",
    "email": "lifter@example.com",
    "password_hash": "x",
    "created_at": "2025-06-01T08:00:00+00:00",
}


class TestServices(unittest.TestCase):
    def test_sign_in_current_user_and_sign_out(self) -> None:
        auth = AuthService()

        async def scenario():
            before = await auth.current_user()
            user, token = await auth.sign_in("lifter@example.com", "password123")
            me = await auth.current_user()
            await auth.sign_out()
            after = await auth.current_user()
            return before, user, token, me, after

        with mock.patch.object(services_module.security, "sign_in", return_value=USER_ROW), mock.patch.object(
            services_module.auth_storage, "get_user_by_id", return_value=USER_ROW
        ) as lookup:
            before, user, token, me, after = asyncio.run(scenario())

        self.assertIsNone(before)
        self.assertEqual(user["id"], "u1")
        self.assertTrue(token)
        self.assertEqual(me.email, "lifter@example.com")
        self.assertEqual(me.created_at, "2025-06-01T08:00:00+00:00")
        self.assertIsNone(after)
        self.assertIsNone(auth.token)
        lookup.assert_called_once_with("u1")

    def test_personal_records(self) -> None:
        records = [PersonalRecord(exercise_id="bench_press", max_weight_lbs=185, reps=5, achieved_at="2025-06-16T10:05:00+00:00")]
        with mock.patch.object(services_module.workout_storage, "list_personal_records", return_value=records) as listing:
            found = asyncio.run(WorkoutService("u1").personal_records())
        self.assertEqual(found, records)
        listing.assert_called_once_with("u1")


if __name__ == "__main__":
    unittest.main()
