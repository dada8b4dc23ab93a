# -*- coding: utf-8 -*-
"""Nutrition domain: food log storage and daily aggregation (SQLite)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..goals.storage import current_goals
from ..progress import macro_progress
from .models import (
    DailyNutritionSummary,
    FoodEntry,
    MealComponent,
    MealType,
    NutritionTotals,
    RecentFoodItem,
)
from .portions import clamp_scale_factor, meal_nutrition, scale_nutrition

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _row_to_entry(row: Any) -> FoodEntry:
    r = dict(row)
    components: List[Dict[str, Any]] = []
    raw = r.pop("components_json", None)
    if raw:
        try:
            components = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("food entry %s has unreadable components", r.get("id"))
    r["components"] = components
    return FoodEntry.model_validate(r)


def compute_totals(entries: Iterable[FoodEntry]) -> NutritionTotals:
    total = NutritionTotals()
    for entry in entries:
        total = total + entry.totals
    return total


def log_food(
    user_id: str,
    *,
    name: str,
    consumed_date: str,
    meal_type: MealType,
    base: Optional[NutritionTotals] = None,
    components: Optional[List[MealComponent]] = None,
    scale_factor: float = 1.0,
    quantity_grams: Optional[float] = None,
    notes: Optional[str] = None,
    source: str = "manual",
) -> FoodEntry:
    """Store one food with its per-serving macros multiplied by the portion factor."""
    components = list(components or [])
    if components:
        base = meal_nutrition(components)
    if base is None:
        raise HTTPException(status_code=400, detail="Food needs macros or components")
    factor = clamp_scale_factor(scale_factor)
    scaled = scale_nutrition(base, factor)
    entry = FoodEntry(
        id=str(uuid4()),
        user_id=user_id,
        name=name.strip(),
        consumed_date=consumed_date,
        meal_type=meal_type,
        quantity_grams=quantity_grams,
        calories=scaled.calories,
        protein_g=scaled.protein,
        carbs_g=scaled.carbs,
        fat_g=scaled.fat,
        scale_factor=factor,
        components=components,
        notes=notes,
        source=source,
        created_at=_utc_now(),
    )
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO food_entries (
                id, user_id, name, consumed_date, meal_type, quantity_grams, calories,
                protein_g, carbs_g, fat_g, scale_factor, components_json, notes, source, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.id,
                user_id,
                entry.name,
                consumed_date,
                entry.meal_type.value,
                quantity_grams,
                entry.calories,
                entry.protein_g,
                entry.carbs_g,
                entry.fat_g,
                factor,
                json.dumps([c.model_dump() for c in components], ensure_ascii=False) if components else None,
                notes,
                source,
                entry.created_at,
            ),
        )
    return entry


def list_entries(user_id: str, *, date: str) -> List[FoodEntry]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM food_entries WHERE user_id = ? AND consumed_date = ? ORDER BY created_at ASC",
            (user_id, date),
        ).fetchall()
    return [_row_to_entry(r) for r in rows]


def delete_entry(user_id: str, entry_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM food_entries WHERE id = ? AND user_id = ?", (entry_id, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Food entry not found")


def recent_foods(user_id: str, *, limit: int = 10) -> List[RecentFoodItem]:
    """Most recently logged distinct foods, with per-serving (unscaled) macros."""
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM food_entries WHERE user_id = ? ORDER BY created_at DESC LIMIT ?",
            (user_id, max(limit, 1) * 5),
        ).fetchall()

    seen: set[str] = set()
    items: List[RecentFoodItem] = []
    for row in rows:
        entry = _row_to_entry(row)
        key = entry.name.casefold()
        if key in seen:
            continue
        seen.add(key)
        factor = entry.scale_factor or 1.0
        items.append(
            RecentFoodItem(
                name=entry.name,
                calories=entry.calories / factor,
                protein=entry.protein_g / factor,
                carbs=entry.carbs_g / factor,
                fat=entry.fat_g / factor,
                components=entry.components,
                last_logged_at=entry.created_at,
            )
        )
        if len(items) >= limit:
            break
    return items


def daily_summary(user_id: str, *, date: str) -> DailyNutritionSummary:
    entries = list_entries(user_id, date=date)
    totals = compute_totals(entries)
    by_meal: Dict[str, NutritionTotals] = {}
    for entry in entries:
        key = entry.meal_type.value
        by_meal[key] = by_meal.get(key, NutritionTotals()) + entry.totals
    goals = current_goals(user_id)
    return DailyNutritionSummary(
        date=date,
        totals=totals,
        goals=goals,
        rings=macro_progress(totals, goals),
        by_meal_type=by_meal,
        entry_count=len(entries),
    )
