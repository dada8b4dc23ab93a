# -*- coding: utf-8 -*-
"""Nutrition domain: API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from .models import DailyNutritionSummary, FoodEntriesResponse, FoodEntry, LogFoodRequest, NutritionTotals, RecentFoodItem
from .storage import daily_summary, delete_entry, list_entries, log_food, recent_foods

router = APIRouter(prefix="/api/nutrition", tags=["Nutrition"])

_DATE = r"^\d{4}-\d{2}-\d{2}$"


@router.post("/entries", response_model=FoodEntry, summary="Log a food")
def create_entry(request: LogFoodRequest, user: dict = Depends(get_current_user)):
    base = None
    if request.calories is not None:
        base = NutritionTotals(
            calories=request.calories,
            protein=request.protein or 0.0,
            carbs=request.carbs or 0.0,
            fat=request.fat or 0.0,
        )
    return log_food(
        user["id"],
        name=request.name,
        consumed_date=request.consumed_date,
        meal_type=request.meal_type,
        base=base,
        components=request.components,
        scale_factor=request.scale_factor,
        quantity_grams=request.quantity_grams,
        notes=request.notes,
        source=request.source,
    )


@router.get("/entries", response_model=FoodEntriesResponse, summary="Foods logged on a day")
def entries(
    date: str = Query(..., pattern=_DATE, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    items = list_entries(user["id"], date=date)
    return FoodEntriesResponse(date=date, count=len(items), entries=items)


@router.delete("/entries/{entry_id}", summary="Delete a logged food")
def remove_entry(entry_id: str, user: dict = Depends(get_current_user)):
    delete_entry(user["id"], entry_id)
    return {"status": "ok"}


@router.get("/recent", response_model=List[RecentFoodItem], summary="Recently logged foods")
def recent(
    limit: int = Query(default=10, ge=1, le=50),
    user: dict = Depends(get_current_user),
):
    return recent_foods(user["id"], limit=limit)


@router.get("/summary", response_model=DailyNutritionSummary, summary="Daily totals with macro rings")
def summary(
    date: str = Query(..., pattern=_DATE, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    return daily_summary(user["id"], date=date)
