# -*- coding: utf-8 -*-
"""Macro goals: per-user storage (SQLite)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from ..app_db import db_conn
from ..config import settings
from .models import DEFAULT_GOALS, MacroGoals

logger = logging.getLogger(__name__)


def get_goals_record(user_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM macro_goals WHERE user_id = ?", (user_id,)).fetchone()
    if not row:
        return {"goals": DEFAULT_GOALS, "is_default": True, "updated_at": None}
    r = dict(row)
    goals = MacroGoals(calories=r["calories"], protein=r["protein"], carbs=r["carbs"], fat=r["fat"])
    return {"goals": goals, "is_default": False, "updated_at": r["updated_at"]}


def current_goals(user_id: str) -> MacroGoals:
    return get_goals_record(user_id)["goals"]


def update_goals(user_id: str, *, calories: float, protein: float, carbs: float, fat: float) -> MacroGoals:
    goals = MacroGoals(calories=calories, protein=protein, carbs=carbs, fat=fat)
    now = datetime.now(timezone.utc).isoformat(timespec="seconds")
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO macro_goals (user_id, calories, protein, carbs, fat, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                calories = excluded.calories,
                protein = excluded.protein,
                carbs = excluded.carbs,
                fat = excluded.fat,
                updated_at = excluded.updated_at
            """,
            (user_id, goals.calories, goals.protein, goals.carbs, goals.fat, now),
        )
    logger.info("macro goals updated for %s", user_id)
    return goals
