# -*- coding: utf-8 -*-
"""Meal plan storage helpers (SQLite)."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from .models import GeneratedMealPlan, MealPlan

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _row_to_plan(row: Dict[str, Any]) -> MealPlan:
    generated = None
    raw = row.get("generated_json")
    if raw:
        try:
            generated = GeneratedMealPlan.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValueError):
            logger.warning("meal plan %s has an unreadable generated payload", row.get("id"))
    return MealPlan(
        id=row["id"],
        start_date=row["start_date"],
        number_of_days=row["number_of_days"],
        meal_plan_text=row.get("meal_plan_text") or "",
        created_at=row["created_at"],
        is_ai_generated=bool(row.get("is_ai_generated")),
        generated_meal_plan=generated,
    )


def new_meal_plan(
    *,
    start_date: date,
    number_of_days: int,
    meal_plan_text: str,
    generated: Optional[GeneratedMealPlan] = None,
) -> MealPlan:
    return MealPlan(
        id=str(uuid4()),
        start_date=start_date,
        number_of_days=number_of_days,
        meal_plan_text=meal_plan_text,
        created_at=_iso_now(),
        is_ai_generated=generated is not None,
        generated_meal_plan=generated,
    )


def save_meal_plan(user_id: str, plan: MealPlan) -> MealPlan:
    generated_json = plan.generated_meal_plan.model_dump_json() if plan.generated_meal_plan else None
    with db_conn(settings.app_db_path) as conn:
        owner = conn.execute("SELECT user_id FROM meal_plans WHERE id = ?", (plan.id,)).fetchone()
        if owner and owner["user_id"] != user_id:
            raise HTTPException(status_code=409, detail="Meal plan id already in use")
        conn.execute(
            """
            INSERT INTO meal_plans (
                id, user_id, start_date, number_of_days, meal_plan_text, is_ai_generated, generated_json, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                start_date = excluded.start_date,
                number_of_days = excluded.number_of_days,
                meal_plan_text = excluded.meal_plan_text,
                is_ai_generated = excluded.is_ai_generated,
                generated_json = excluded.generated_json
            """,
            (
                plan.id,
                user_id,
                plan.start_date.isoformat(),
                plan.number_of_days,
                plan.meal_plan_text,
                1 if plan.is_ai_generated else 0,
                generated_json,
                plan.created_at,
            ),
        )
    logger.info("meal plan saved: %s (%d days)", plan.id, plan.number_of_days)
    return plan


def list_meal_plans(user_id: str) -> List[MealPlan]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM meal_plans WHERE user_id = ? ORDER BY created_at DESC, start_date DESC",
            (user_id,),
        ).fetchall()
    return [_row_to_plan(dict(r)) for r in rows]


def get_meal_plan(user_id: str, plan_id: str) -> MealPlan:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM meal_plans WHERE id = ? AND user_id = ?",
            (plan_id, user_id),
        ).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return _row_to_plan(dict(row))


def delete_meal_plan(user_id: str, plan_id: str) -> None:
    # Shopping lists for the plan go with it (ON DELETE CASCADE).
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM meal_plans WHERE id = ? AND user_id = ?", (plan_id, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Meal plan not found")
    logger.info("meal plan deleted: %s", plan_id)
