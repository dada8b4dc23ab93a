# -*- coding: utf-8 -*-
"""Nutrition domain: Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from ..goals.models import MacroGoals
from ..progress import MacroRing


class NutritionTotals(BaseModel):
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)

    def __add__(self, other: "NutritionTotals") -> "NutritionTotals":
        return NutritionTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class MealComponent(BaseModel):
    name: str = Field(..., min_length=1)
    grams: float = Field(..., ge=0)
    calories_per_100g: float = Field(0.0, ge=0)
    protein_per_100g: float = Field(0.0, ge=0)
    carbs_per_100g: float = Field(0.0, ge=0)
    fat_per_100g: float = Field(0.0, ge=0)


class RecentFoodItem(BaseModel):
    name: str
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    components: List[MealComponent] = Field(default_factory=list)
    last_logged_at: Optional[str] = None

    @property
    def is_composite(self) -> bool:
        return bool(self.components)


class FoodEntry(BaseModel):
    id: str
    user_id: str
    name: str
    consumed_date: str = Field(..., description="YYYY-MM-DD")
    meal_type: MealType
    quantity_grams: Optional[float] = Field(None, ge=0)
    calories: float = Field(0.0, ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)
    scale_factor: float = Field(1.0, ge=0.25, le=3.0)
    components: List[MealComponent] = Field(default_factory=list)
    notes: Optional[str] = None
    source: str = "manual"
    created_at: str

    @property
    def totals(self) -> NutritionTotals:
        return NutritionTotals(calories=self.calories, protein=self.protein_g, carbs=self.carbs_g, fat=self.fat_g)


class LogFoodRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    consumed_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    meal_type: MealType
    calories: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    components: List[MealComponent] = Field(default_factory=list)
    scale_factor: float = Field(1.0, allow_inf_nan=False, description="Portion multiplier, clamped to 0.25-3.0")
    quantity_grams: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)
    source: str = Field("manual", max_length=64)

    @model_validator(mode="after")
    def _needs_macros(self) -> "LogFoodRequest":
        if not self.components and self.calories is None:
            raise ValueError("Provide per-serving macros or meal components")
        return self


class FoodEntriesResponse(BaseModel):
    date: str
    count: int
    entries: List[FoodEntry]


class DailyNutritionSummary(BaseModel):
    date: str
    totals: NutritionTotals
    goals: MacroGoals
    rings: Dict[str, MacroRing]
    by_meal_type: Dict[str, NutritionTotals] = Field(default_factory=dict)
    entry_count: int = Field(0, ge=0)
