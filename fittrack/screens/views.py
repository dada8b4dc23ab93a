# -*- coding: utf-8 -*-
"""Screen controllers: each owns a Store and talks to Services."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..goals.models import MacroGoals
from ..nutrition.models import MealType, NutritionTotals, RecentFoodItem
from ..shopping.categories import categorize
from ..shopping.models import ShoppingList
from ..services import Services
from ..workouts.grouping import build_session_detail
from ..workouts.models import GYM_CLASS_DURATIONS, GYM_CLASS_TYPES
from ..workouts.timer import Debouncer
from .bridge import run_request
from .store import Store


class _Screen:
    def __init__(self, services: Services, **initial: Any) -> None:
        self.services = services
        self.store = Store(is_loading=False, error=None, **initial)

    @property
    def state(self) -> Dict[str, Any]:
        return self.store.state


class TodayNutritionScreen(_Screen):
    """Macro rings and the food log for one day."""

    def __init__(self, services: Services, day: str) -> None:
        super().__init__(services, day=day, summary=None, entries=[], rings={}, recent=[])

    async def load(self) -> None:
        day = self.store.get("day")

        async def fetch():
            summary = await self.services.nutrition.summary(day)
            entries = await self.services.nutrition.entries(day)
            return summary, entries

        await run_request(
            self.store,
            fetch,
            lambda result: {"summary": result[0], "rings": result[0].rings, "entries": result[1]},
        )

    async def load_recent(self, limit: int = 10) -> None:
        await run_request(self.store, lambda: self.services.nutrition.recent(limit), lambda items: {"recent": items})

    async def log_recent(self, item: RecentFoodItem, meal_type: MealType, scale_factor: float = 1.0) -> None:
        base = None if item.is_composite else NutritionTotals(
            calories=item.calories, protein=item.protein, carbs=item.carbs, fat=item.fat
        )
        logged = await run_request(
            self.store,
            lambda: self.services.nutrition.log(
                name=item.name,
                consumed_date=self.store.get("day"),
                meal_type=meal_type,
                base=base,
                components=item.components or None,
                scale_factor=scale_factor,
            ),
        )
        if logged is not None:
            await self.load()

    async def delete_entry(self, entry_id: str) -> None:
        await run_request(self.store, lambda: self.services.nutrition.delete(entry_id))
        if self.store.get("error") is None:
            await self.load()


class WorkoutDetailScreen(_Screen):
    """Sets of one session grouped per exercise id, in display order."""

    def __init__(self, services: Services, session_id: str) -> None:
        super().__init__(services, session_id=session_id, session=None, exercises=[], total_sets=0, total_volume_lbs=0.0)

    async def load(self) -> None:
        session_id = self.store.get("session_id")

        async def fetch():
            session = await self.services.workouts.session(session_id)
            sets = await self.services.workouts.sets(session_id)
            return build_session_detail(session, sets)

        await run_request(
            self.store,
            fetch,
            lambda detail: {
                "session": detail.session,
                "exercises": detail.exercises,
                "total_sets": detail.total_sets,
                "total_volume_lbs": detail.total_volume_lbs,
            },
        )


class ShoppingListScreen(_Screen):
    """Categorized list for a meal plan with optimistic ticking."""

    def __init__(self, services: Services, meal_plan_id: str) -> None:
        super().__init__(services, meal_plan_id=meal_plan_id, shopping_list=None, categories={})

    def _list_changes(self, shopping_list: Optional[ShoppingList]) -> Dict[str, Any]:
        if shopping_list is None:
            return {"shopping_list": None, "categories": {}}
        return {"shopping_list": shopping_list, "categories": categorize(shopping_list.items)}

    async def load(self) -> None:
        await run_request(
            self.store,
            lambda: self.services.shopping.create_for_plan(self.store.get("meal_plan_id")),
            self._list_changes,
        )

    def _with_item_state(self, shopping_list: ShoppingList, item_id: str, is_completed: bool) -> ShoppingList:
        items = [
            item.model_copy(update={"is_completed": is_completed}) if item.id == item_id else item
            for item in shopping_list.items
        ]
        return shopping_list.model_copy(update={"items": items})

    async def toggle(self, item_id: str) -> None:
        current: Optional[ShoppingList] = self.store.get("shopping_list")
        if current is None:
            return
        item = next((i for i in current.items if i.id == item_id), None)
        if item is None:
            return
        target = not item.is_completed
        self.store.set(**self._list_changes(self._with_item_state(current, item_id, target)))
        saved = await run_request(
            self.store,
            lambda: self.services.shopping.set_item_completed(current.id, item_id, target),
        )
        if saved is None:
            latest = self.store.get("shopping_list")
            if latest is None:
                return
            self.store.set(**self._list_changes(self._with_item_state(latest, item_id, item.is_completed)))

    async def reset(self) -> None:
        current: Optional[ShoppingList] = self.store.get("shopping_list")
        if current is None:
            return
        await run_request(self.store, lambda: self.services.shopping.reset(current.id), self._list_changes)

    async def delete(self) -> None:
        current: Optional[ShoppingList] = self.store.get("shopping_list")
        if current is None:
            return
        await run_request(self.store, lambda: self.services.shopping.delete(current.id), lambda _: self._list_changes(None))


class GoalSettingsScreen(_Screen):
    def __init__(self, services: Services) -> None:
        super().__init__(services, goals=None, saved=False)

    async def load(self) -> None:
        await run_request(self.store, self.services.goals.load, lambda goals: {"goals": goals, "saved": False})

    async def save(self, *, calories: float, protein: float, carbs: float, fat: float) -> None:
        async def persist():
            goals = MacroGoals(calories=calories, protein=protein, carbs=carbs, fat=fat)
            return await self.services.goals.save(goals)

        await run_request(self.store, persist, lambda goals: {"goals": goals, "saved": True})


class QuickClassLoggerScreen(_Screen):
    def __init__(self, services: Services) -> None:
        super().__init__(
            services,
            class_types=list(GYM_CLASS_TYPES),
            durations=list(GYM_CLASS_DURATIONS),
            selected_class=None,
            selected_duration=45,
            logged_session=None,
        )

    def select_class(self, class_type: str) -> None:
        self.store.set(selected_class=class_type, logged_session=None)

    def select_duration(self, minutes: int) -> None:
        self.store.set(selected_duration=int(minutes), logged_session=None)

    async def log(self) -> None:
        class_type = self.store.get("selected_class")
        if not class_type:
            self.store.set(error="Choose a class type")
            return
        await run_request(
            self.store,
            lambda: self.services.workouts.log_class(class_type, self.store.get("selected_duration")),
            lambda session: {"logged_session": session},
        )


class ExerciseLibraryScreen(_Screen):
    """Muscle groups plus a debounced name search."""

    def __init__(self, services: Services, *, search_delay: float = 0.3) -> None:
        super().__init__(services, muscle_groups=[], query="", results=[])
        self._debouncer = Debouncer(search_delay)

    async def load(self) -> None:
        await run_request(self.store, self.services.exercises.muscle_groups, lambda groups: {"muscle_groups": groups})

    async def search(self, query: str) -> None:
        self.store.set(query=query)
        await run_request(self.store, lambda: self.services.exercises.search(query), lambda found: {"results": found})

    def on_query_change(self, query: str) -> None:
        """Schedule a search; requires a running event loop."""
        self.store.set(query=query)
        self._debouncer.debounce(lambda: self.search(query))

    def muscle_group_names(self) -> List[str]:
        return [g.name for g in self.store.get("muscle_groups") or []]
