# -*- coding: utf-8 -*-
"""Async service objects bound to one user.

Screens and other non-HTTP callers receive a ``Services`` instance instead of
reaching for module-level storage. Blocking SQLite work runs through
``asyncio.to_thread`` so the event loop stays free for timers and UI updates.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from .auth import security
from .auth import storage as auth_storage
from .auth.models import UserPublic
from .exercises import catalog
from .exercises.models import Exercise, MuscleGroup
from .goals import storage as goals_storage
from .goals.models import MacroGoals
from .nutrition import storage as nutrition_storage
from .nutrition.models import DailyNutritionSummary, FoodEntry, MealComponent, MealType, NutritionTotals, RecentFoodItem
from .plans import generator as plan_generator
from .plans import storage as plan_storage
from .plans.models import GenerateMealPlanRequest, MealPlan
from .shopping import storage as shopping_storage
from .shopping.models import ShoppingList, ShoppingListItem
from .workouts import storage as workout_storage
from .workouts.models import PersonalRecord, PreviousSessionData, WorkoutSession, WorkoutSet


class AuthService:
    """Holds the signed-in user's token between calls."""

    def __init__(self) -> None:
        self.user_id: Optional[str] = None
        self.token: Optional[str] = None

    def _signed_in(self, user: Dict[str, Any]) -> Tuple[Dict[str, Any], str]:
        self.user_id = user["id"]
        self.token = security.create_access_token(user_id=user["id"], email=user["email"])
        return user, self.token

    async def sign_up(self, email: str, password: str) -> Tuple[Dict[str, Any], str]:
        user = await asyncio.to_thread(security.sign_up, email=email, password=password)
        return self._signed_in(user)

    async def sign_in(self, email: str, password: str) -> Tuple[Dict[str, Any], str]:
        user = await asyncio.to_thread(security.sign_in, email=email, password=password)
        return self._signed_in(user)

    async def sign_out(self) -> None:
        # Tokens are stateless; forgetting it is the whole sign-out.
        self.user_id = None
        self.token = None

    async def current_user(self) -> Optional[UserPublic]:
        if self.user_id is None:
            return None
        row = await asyncio.to_thread(auth_storage.get_user_by_id, self.user_id)
        if row is None:
            return None
        return UserPublic(id=row["id"], email=row["email"], created_at=row["created_at"])


class _UserBound:
    def __init__(self, user_id: str) -> None:
        self.user_id = user_id


class WorkoutService(_UserBound):
    async def start_session(self, name: str) -> WorkoutSession:
        return await asyncio.to_thread(workout_storage.create_session, self.user_id, name=name)

    async def finish_session(self, session_id: str) -> WorkoutSession:
        return await asyncio.to_thread(workout_storage.finish_session, self.user_id, session_id)

    async def sessions(self, limit: Optional[int] = None) -> List[WorkoutSession]:
        return await asyncio.to_thread(workout_storage.list_sessions, self.user_id, limit=limit)

    async def session(self, session_id: str) -> WorkoutSession:
        return await asyncio.to_thread(workout_storage.get_session, self.user_id, session_id)

    async def sets(self, session_id: str) -> List[WorkoutSet]:
        return await asyncio.to_thread(workout_storage.get_sets, self.user_id, session_id)

    async def add_set(self, session_id: str, **fields: Any) -> WorkoutSet:
        return await asyncio.to_thread(workout_storage.add_set, self.user_id, session_id, **fields)

    async def log_class(self, class_type: str, duration_minutes: int) -> WorkoutSession:
        return await asyncio.to_thread(
            workout_storage.log_gym_class,
            self.user_id,
            class_type=class_type,
            duration_minutes=duration_minutes,
        )

    async def weekly_volume(self) -> Dict[str, Any]:
        return await asyncio.to_thread(workout_storage.weekly_volume, self.user_id)

    async def personal_record(self, exercise_id: str) -> Optional[PersonalRecord]:
        return await asyncio.to_thread(workout_storage.get_personal_record, self.user_id, exercise_id)

    async def personal_records(self) -> List[PersonalRecord]:
        return await asyncio.to_thread(workout_storage.list_personal_records, self.user_id)

    async def previous_session(self, exercise_id: str) -> Optional[PreviousSessionData]:
        return await asyncio.to_thread(workout_storage.previous_session_data, self.user_id, exercise_id)

    async def progress(self, exercise_id: str, days: int = 90) -> List[WorkoutSet]:
        return await asyncio.to_thread(workout_storage.progress_data, self.user_id, exercise_id, days=days)


class ExerciseService:
    # The catalog is static and in memory; no thread hop needed.
    async def muscle_groups(self) -> List[MuscleGroup]:
        return catalog.list_muscle_groups()

    async def search(self, query: str) -> List[Exercise]:
        return catalog.search_exercises(query)

    async def exercise(self, exercise_id: str) -> Optional[Exercise]:
        return catalog.get_exercise(exercise_id)

    async def muscle_group_for(self, exercise_id: str) -> Optional[MuscleGroup]:
        return catalog.get_muscle_group_for(exercise_id)


class GoalsService(_UserBound):
    async def load(self) -> MacroGoals:
        return await asyncio.to_thread(goals_storage.current_goals, self.user_id)

    async def save(self, goals: MacroGoals) -> MacroGoals:
        return await asyncio.to_thread(goals_storage.update_goals, self.user_id, **goals.model_dump())


class MealPlanService(_UserBound):
    async def plans(self) -> List[MealPlan]:
        return await asyncio.to_thread(plan_storage.list_meal_plans, self.user_id)

    async def save(self, *, start_date: date, number_of_days: int, meal_plan_text: str) -> MealPlan:
        plan = plan_storage.new_meal_plan(
            start_date=start_date,
            number_of_days=number_of_days,
            meal_plan_text=meal_plan_text,
        )
        return await asyncio.to_thread(plan_storage.save_meal_plan, self.user_id, plan)

    async def delete(self, plan_id: str) -> None:
        await asyncio.to_thread(plan_storage.delete_meal_plan, self.user_id, plan_id)

    async def generate(self, request: GenerateMealPlanRequest) -> MealPlan:
        goals = await asyncio.to_thread(goals_storage.current_goals, self.user_id)
        generated = await asyncio.to_thread(plan_generator.generate_meal_plan, request, goals)
        plan = plan_storage.new_meal_plan(
            start_date=request.start_date,
            number_of_days=request.number_of_days,
            meal_plan_text=plan_generator.default_plan_text(generated, request.start_date),
            generated=generated,
        )
        return await asyncio.to_thread(plan_storage.save_meal_plan, self.user_id, plan)

    async def quick_suggestion(self, preferences: str) -> str:
        return await asyncio.to_thread(plan_generator.quick_meal_suggestion, preferences)


class ShoppingService(_UserBound):
    async def lists(self) -> List[ShoppingList]:
        return await asyncio.to_thread(shopping_storage.list_shopping_lists, self.user_id)

    async def create_for_plan(self, meal_plan_id: str) -> ShoppingList:
        return await asyncio.to_thread(shopping_storage.create_shopping_list_for_plan, self.user_id, meal_plan_id)

    async def get(self, list_id: str) -> ShoppingList:
        return await asyncio.to_thread(shopping_storage.get_shopping_list, self.user_id, list_id)

    async def set_item_completed(self, list_id: str, item_id: str, is_completed: bool) -> ShoppingListItem:
        return await asyncio.to_thread(
            shopping_storage.toggle_item,
            self.user_id,
            list_id,
            item_id,
            is_completed=is_completed,
        )

    async def reset(self, list_id: str) -> ShoppingList:
        return await asyncio.to_thread(shopping_storage.reset_list, self.user_id, list_id)

    async def delete(self, list_id: str) -> None:
        await asyncio.to_thread(shopping_storage.delete_list, self.user_id, list_id)


class NutritionService(_UserBound):
    async def log(
        self,
        *,
        name: str,
        consumed_date: str,
        meal_type: MealType,
        base: Optional[NutritionTotals] = None,
        components: Optional[List[MealComponent]] = None,
        scale_factor: float = 1.0,
    ) -> FoodEntry:
        return await asyncio.to_thread(
            nutrition_storage.log_food,
            self.user_id,
            name=name,
            consumed_date=consumed_date,
            meal_type=meal_type,
            base=base,
            components=components,
            scale_factor=scale_factor,
        )

    async def entries(self, day: str) -> List[FoodEntry]:
        return await asyncio.to_thread(nutrition_storage.list_entries, self.user_id, date=day)

    async def delete(self, entry_id: str) -> None:
        await asyncio.to_thread(nutrition_storage.delete_entry, self.user_id, entry_id)

    async def recent(self, limit: int = 10) -> List[RecentFoodItem]:
        return await asyncio.to_thread(nutrition_storage.recent_foods, self.user_id, limit=limit)

    async def summary(self, day: str) -> DailyNutritionSummary:
        return await asyncio.to_thread(nutrition_storage.daily_summary, self.user_id, date=day)


class Services:
    """Every service a screen may need, bound to the signed-in user."""

    def __init__(
        self,
        user_id: str,
        *,
        workouts: Optional[WorkoutService] = None,
        exercises: Optional[ExerciseService] = None,
        goals: Optional[GoalsService] = None,
        meal_plans: Optional[MealPlanService] = None,
        shopping: Optional[ShoppingService] = None,
        nutrition: Optional[NutritionService] = None,
        auth: Optional[AuthService] = None,
    ) -> None:
        self.user_id = user_id
        self.workouts = workouts or WorkoutService(user_id)
        self.exercises = exercises or ExerciseService()
        self.goals = goals or GoalsService(user_id)
        self.meal_plans = meal_plans or MealPlanService(user_id)
        self.shopping = shopping or ShoppingService(user_id)
        self.nutrition = nutrition or NutritionService(user_id)
        self.auth = auth or AuthService()
