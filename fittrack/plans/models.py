# -*- coding: utf-8 -*-
"""Meal plan models for API payloads and generated plans."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..nutrition.models import MealType
from ..shopping.categories import ShoppingCategory, parse_category

# Model output uses camelCase keys; our own payloads use snake_case. Accept both.
_CAMEL_INPUT = ConfigDict(
    alias_generator=AliasGenerator(validation_alias=to_camel),
    populate_by_name=True,
)


class NutritionInfo(BaseModel):
    model_config = _CAMEL_INPUT

    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: Optional[float] = Field(None, ge=0)
    sugar: Optional[float] = Field(None, ge=0)
    sodium: Optional[float] = Field(None, ge=0)


class NutritionSummary(BaseModel):
    model_config = _CAMEL_INPUT

    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0


class PlannedMeal(BaseModel):
    model_config = _CAMEL_INPUT

    type: MealType
    name: str
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    prep_time: Optional[int] = Field(None, ge=0, description="minutes")
    nutrition: Optional[NutritionInfo] = None

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class DailyMeal(BaseModel):
    model_config = _CAMEL_INPUT

    day: int = Field(..., ge=1)
    date: str = ""
    meals: List[PlannedMeal] = Field(default_factory=list)
    daily_nutrition: Optional[NutritionSummary] = None


class ShoppingListItemDetail(BaseModel):
    name: str = Field(..., min_length=1)
    amount: str = ""
    category: ShoppingCategory = ShoppingCategory.other

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> ShoppingCategory:
        return parse_category(value)


class GeneratedMealPlan(BaseModel):
    model_config = _CAMEL_INPUT

    title: str = "Meal Plan"
    description: str = ""
    total_days: int = Field(1, ge=1)
    daily_meals: List[DailyMeal] = Field(default_factory=list)
    shopping_list: Optional[List[ShoppingListItemDetail]] = None
    categorized_shopping_list: Optional[Dict[str, List[str]]] = None
    meal_prep_instructions: Optional[List[str]] = None
    total_nutrition: Optional[NutritionSummary] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_shopping_list(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        key = "shoppingList" if "shoppingList" in data else "shopping_list"
        raw = data.get(key)
        if isinstance(raw, dict):
            # Older generations grouped plain names under category labels.
            data.pop(key)
            data.setdefault("categorized_shopping_list", raw)
        elif isinstance(raw, list):
            data[key] = [{"name": item} if isinstance(item, str) else item for item in raw if item]
        return data

    def shopping_items(self) -> List[ShoppingListItemDetail]:
        """Structured list when present, otherwise the legacy category-to-names mapping."""
        if self.shopping_list is not None:
            return list(self.shopping_list)
        items: List[ShoppingListItemDetail] = []
        for label, names in (self.categorized_shopping_list or {}).items():
            category = parse_category(label)
            items.extend(ShoppingListItemDetail(name=n, category=category) for n in names if n)
        return items


class MealPlan(BaseModel):
    id: str
    start_date: date
    number_of_days: int = Field(..., ge=1)
    meal_plan_text: str = ""
    created_at: str
    is_ai_generated: bool = False
    generated_meal_plan: Optional[GeneratedMealPlan] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=self.number_of_days - 1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date_range(self) -> str:
        fmt = "%b %d, %Y"
        if self.number_of_days == 1:
            return self.start_date.strftime(fmt)
        return f"{self.start_date.strftime(fmt)} - {self.end_date.strftime(fmt)}"

    @property
    def title(self) -> str:
        if self.generated_meal_plan:
            return self.generated_meal_plan.title
        return "Meal Plan"


class SaveMealPlanRequest(BaseModel):
    start_date: date
    number_of_days: int = Field(..., ge=1, le=14)
    meal_plan_text: str = Field("", max_length=20000)
    generated_meal_plan: Optional[GeneratedMealPlan] = None


class GenerateMealPlanRequest(BaseModel):
    start_date: date
    number_of_days: int = Field(3, ge=1, le=14)
    preferences: str = Field("", max_length=2000)
    meal_types: List[MealType] = Field(
        default_factory=lambda: [MealType.breakfast, MealType.lunch, MealType.dinner]
    )
    household_size: int = Field(1, ge=1, le=12)
    max_prep_minutes: Optional[int] = Field(None, ge=5, le=240)
    diet_type: Optional[str] = Field(None, max_length=64)
    allergens: List[str] = Field(default_factory=list)
    additional_notes: str = Field("", max_length=2000)
    use_macro_goals: bool = True


class MealPlanListResponse(BaseModel):
    count: int
    items: List[MealPlan]


class QuickSuggestionRequest(BaseModel):
    preferences: str = Field(..., min_length=1, max_length=2000)


class QuickSuggestionResponse(BaseModel):
    suggestion: str
    model: str
