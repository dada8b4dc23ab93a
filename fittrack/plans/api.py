# -*- coding: utf-8 -*-
"""Meal plan endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from ..config import settings
from ..goals.storage import current_goals
from .generator import default_plan_text, generate_meal_plan, quick_meal_suggestion
from .models import (
    GenerateMealPlanRequest,
    MealPlan,
    MealPlanListResponse,
    QuickSuggestionRequest,
    QuickSuggestionResponse,
    SaveMealPlanRequest,
)
from .storage import delete_meal_plan, get_meal_plan, list_meal_plans, new_meal_plan, save_meal_plan

router = APIRouter(prefix="/api/meal-plans", tags=["Meal Plans"])


@router.get("", response_model=MealPlanListResponse, summary="List meal plans (newest first)")
def meal_plans(user: dict = Depends(get_current_user)):
    items = list_meal_plans(user["id"])
    return MealPlanListResponse(count=len(items), items=items)


@router.post("", response_model=MealPlan, summary="Save a meal plan")
def create_meal_plan(request: SaveMealPlanRequest, user: dict = Depends(get_current_user)):
    plan = new_meal_plan(
        start_date=request.start_date,
        number_of_days=request.number_of_days,
        meal_plan_text=request.meal_plan_text,
        generated=request.generated_meal_plan,
    )
    return save_meal_plan(user["id"], plan)


@router.post("/generate", response_model=MealPlan, summary="Generate and save a meal plan via the LLM")
def generate(request: GenerateMealPlanRequest, user: dict = Depends(get_current_user)):
    generated = generate_meal_plan(request, current_goals(user["id"]))
    plan = new_meal_plan(
        start_date=request.start_date,
        number_of_days=request.number_of_days,
        meal_plan_text=default_plan_text(generated, request.start_date),
        generated=generated,
    )
    return save_meal_plan(user["id"], plan)


@router.post("/suggestions", response_model=QuickSuggestionResponse, summary="Quick meal ideas")
def suggestions(request: QuickSuggestionRequest, user: dict = Depends(get_current_user)):
    return QuickSuggestionResponse(suggestion=quick_meal_suggestion(request.preferences), model=settings.meal_plan_model)


@router.get("/{plan_id}", response_model=MealPlan, summary="Get a meal plan")
def meal_plan(plan_id: str, user: dict = Depends(get_current_user)):
    return get_meal_plan(user["id"], plan_id)


@router.delete("/{plan_id}", summary="Delete a meal plan and its shopping list")
def remove_meal_plan(plan_id: str, user: dict = Depends(get_current_user)):
    delete_meal_plan(user["id"], plan_id)
    return {"status": "ok"}
