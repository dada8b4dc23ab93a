# -*- coding: utf-8 -*-
"""Portion scaling for logged foods and composite meals."""

from __future__ import annotations

import math
from typing import Iterable, List

from .models import MealComponent, NutritionTotals

MIN_SCALE = 0.25
MAX_SCALE = 3.0
SCALE_STEP = 0.25


def clamp_scale_factor(value: float) -> float:
    """Snap to the nearest quarter serving within [0.25, 3.0].

    NaN has no sensible portion and falls back to a single serving.
    """
    value = float(value)
    if math.isnan(value):
        return 1.0
    bounded = min(max(value, MIN_SCALE), MAX_SCALE)
    return math.floor(bounded / SCALE_STEP + 0.5) * SCALE_STEP


def scale_options() -> List[float]:
    count = int((MAX_SCALE - MIN_SCALE) / SCALE_STEP) + 1
    return [MIN_SCALE + i * SCALE_STEP for i in range(count)]


def scale_nutrition(base: NutritionTotals, factor: float) -> NutritionTotals:
    # No rounding here: stored values keep full precision.
    return NutritionTotals(
        calories=base.calories * factor,
        protein=base.protein * factor,
        carbs=base.carbs * factor,
        fat=base.fat * factor,
    )


def component_nutrition(component: MealComponent) -> NutritionTotals:
    factor = component.grams / 100.0
    return NutritionTotals(
        calories=component.calories_per_100g * factor,
        protein=component.protein_per_100g * factor,
        carbs=component.carbs_per_100g * factor,
        fat=component.fat_per_100g * factor,
    )


def meal_nutrition(components: Iterable[MealComponent]) -> NutritionTotals:
    total = NutritionTotals()
    for component in components:
        total = total + component_nutrition(component)
    return total


def display_macro(value: float) -> int:
    return int(round(value))