# -*- coding: utf-8 -*-
"""LLM-driven meal plan generation (OpenAI-compatible chat completions)."""

from __future__ import annotations

import json
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

import httpx
from fastapi import HTTPException
from pydantic import ValidationError

from ..config import settings
from ..goals.models import MacroGoals
from ..shopping.categories import ShoppingCategory
from .models import GeneratedMealPlan, GenerateMealPlanRequest

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a nutrition assistant that writes practical home-cooking meal plans. "
    "Return a single JSON object only. Do NOT output markdown or extra text."
)

_MEAL_PLAN_SCHEMA: Dict[str, Any] = {
    "title": "Brief descriptive title for the meal plan",
    "description": "2-3 sentence overview of the meal plan approach",
    "totalDays": "number",
    "dailyMeals": [
        {
            "day": 1,
            "date": "Mon, Jun 16",
            "meals": [
                {
                    "type": "breakfast|lunch|dinner|snack",
                    "name": "Meal name",
                    "description": "Brief description",
                    "ingredients": ["ingredient 1"],
                    "instructions": ["step 1"],
                    "prepTime": 15,
                    "nutrition": {"calories": 400, "protein": 25, "carbs": 45, "fat": 12, "fiber": 8, "sugar": 5},
                }
            ],
            "dailyNutrition": {"totalCalories": 2000, "totalProtein": 150, "totalCarbs": 200, "totalFat": 80},
        }
    ],
    "shoppingList": [{"name": "Chicken breast", "amount": "500g", "category": "Meat & Fish"}],
    "mealPrepInstructions": ["step"],
    "totalNutrition": {"totalCalories": 0, "totalProtein": 0, "totalCarbs": 0, "totalFat": 0},
}


def _extract_json(text: str) -> Dict[str, Any]:
    text = text.strip()
    fenced = re.search(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", text)
    if fenced:
        text = fenced.group(1)
    if text.startswith("{") and text.endswith("}"):
        return json.loads(text)
    match = re.search(r"\{[\s\S]*\}", text)
    if not match:
        raise ValueError("No JSON object found")
    return json.loads(match.group(0))


def build_meal_plan_prompt(request: GenerateMealPlanRequest, goals: Optional[MacroGoals] = None) -> str:
    lines = [
        "Create a detailed meal plan with the following requirements.",
        f"- Duration: {request.number_of_days} days starting from {request.start_date.strftime('%b %d, %Y')}",
        f"- Meals each day: {', '.join(m.value for m in request.meal_types)}",
        f"- Cooking for {request.household_size} {'person' if request.household_size == 1 else 'people'}",
    ]
    if request.diet_type:
        lines.append(f"- Diet: {request.diet_type}")
    if request.allergens:
        lines.append(f"- Avoid completely: {', '.join(request.allergens)}")
    if request.max_prep_minutes:
        lines.append(f"- Keep each meal under {request.max_prep_minutes} minutes of prep")
    if request.preferences.strip():
        lines.append(f"- User preferences: {request.preferences.strip()}")
    if request.additional_notes.strip():
        lines.append(f"- Notes: {request.additional_notes.strip()}")
    if goals is not None:
        lines.extend(
            [
                "Daily macro targets:",
                f"- Calories: {int(goals.calories)}",
                f"- Protein: {int(goals.protein)}g",
                f"- Carbs: {int(goals.carbs)}g",
                f"- Fat: {int(goals.fat)}g",
            ]
        )
    categories = ", ".join(c.value for c in ShoppingCategory)
    lines.extend(
        [
            "",
            "Respond with JSON following this structure:",
            json.dumps(_MEAL_PLAN_SCHEMA, ensure_ascii=False),
            "",
            "Rules:",
            "1. Make recipes practical and achievable, with realistic nutrition estimates and prep times in minutes.",
            "2. Keep meals varied across days.",
            f"3. Every shopping list item needs a category from: {categories}.",
            "4. Combine duplicate ingredients in the shopping list and give a total amount.",
        ]
    )
    return "\n".join(lines)


def _chat_completion(messages: List[Dict[str, str]], *, max_tokens: Optional[int] = None) -> str:
    if not settings.meal_plan_api_key:
        raise HTTPException(status_code=503, detail="Meal plan generation is not configured (MEAL_PLAN_API_KEY)")
    url = f"{settings.meal_plan_base_url.rstrip('/')}/chat/completions"
    payload = {
        "model": settings.meal_plan_model,
        "messages": messages,
        "temperature": settings.meal_plan_temperature,
        "max_tokens": max_tokens or settings.meal_plan_max_tokens,
    }
    headers = {"Authorization": f"Bearer {settings.meal_plan_api_key}"}
    try:
        with httpx.Client(timeout=settings.meal_plan_timeout) as client:
            resp = client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as exc:
        logger.warning("meal plan upstream returned %s", exc.response.status_code)
        raise HTTPException(status_code=502, detail=f"Meal plan upstream error: HTTP {exc.response.status_code}") from exc
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("meal plan upstream failed: %s", exc)
        raise HTTPException(status_code=502, detail=f"Meal plan upstream error: {exc}") from exc

    content = (data.get("choices") or [{}])[0].get("message", {}).get("content") or ""
    if not content.strip():
        raise HTTPException(status_code=502, detail="Meal plan upstream returned an empty answer")
    return content.strip()


def parse_generated_meal_plan(text: str, *, number_of_days: Optional[int] = None) -> GeneratedMealPlan:
    """Parse model output into a plan; raises ValueError when it is not a usable plan."""
    parsed = _extract_json(text)
    if not isinstance(parsed, dict):
        raise ValueError("Meal plan must be a JSON object")
    if number_of_days is not None:
        parsed.setdefault("totalDays", number_of_days)
    try:
        return GeneratedMealPlan.model_validate(parsed)
    except ValidationError as exc:
        raise ValueError(f"Meal plan does not match the expected shape: {exc.error_count()} errors") from exc


def generate_meal_plan(request: GenerateMealPlanRequest, goals: Optional[MacroGoals] = None) -> GeneratedMealPlan:
    prompt = build_meal_plan_prompt(request, goals if request.use_macro_goals else None)
    messages = [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
    content = _chat_completion(messages)
    try:
        plan = parse_generated_meal_plan(content, number_of_days=request.number_of_days)
    except ValueError as exc:
        logger.warning("meal plan generation returned an unusable payload: %s", exc)
        raise HTTPException(status_code=502, detail=f"Meal plan generation failed: {exc}") from exc
    logger.info("meal plan generated: %r (%d days)", plan.title, plan.total_days)
    return plan


def quick_meal_suggestion(preferences: str) -> str:
    prompt = (
        f'Based on these preferences: "{preferences.strip()}"\n\n'
        "Suggest 3 simple meal ideas with brief descriptions. Keep it concise and practical. "
        "Answer in plain text, not JSON."
    )
    return _chat_completion([{"role": "user", "content": prompt}], max_tokens=512)


def default_plan_text(plan: GeneratedMealPlan, start: date) -> str:
    """Plain-text rendering stored alongside a generated plan."""
    lines = [plan.title, f"Starting {start.isoformat()}"]
    if plan.description:
        lines.append(plan.description)
    for day in plan.daily_meals:
        lines.append("")
        lines.append(f"Day {day.day}" + (f" ({day.date})" if day.date else ""))
        for meal in day.meals:
            lines.append(f"- {meal.type.display_name}: {meal.name}")
    return "\n".join(lines)
