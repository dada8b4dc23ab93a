# -*- coding: utf-8 -*-
"""Shopping list storage helpers (SQLite)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..plans.storage import get_meal_plan
from .models import ShoppingList, ShoppingListItem, ShoppingListSummary

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _load_items(conn: Any, list_id: str) -> List[ShoppingListItem]:
    rows = conn.execute(
        "SELECT * FROM shopping_list_items WHERE shopping_list_id = ? ORDER BY position ASC",
        (list_id,),
    ).fetchall()
    return [
        ShoppingListItem(
            id=r["id"],
            name=r["name"],
            amount=r["amount"],
            category=r["category"],
            is_completed=bool(r["is_completed"]),
        )
        for r in rows
    ]


def _row_to_list(conn: Any, row: Dict[str, Any]) -> ShoppingList:
    return ShoppingList(
        id=row["id"],
        meal_plan_id=row["meal_plan_id"],
        meal_plan_title=row["meal_plan_title"],
        items=_load_items(conn, row["id"]),
        created_at=row["created_at"],
    )


def _find_list(conn: Any, user_id: str, list_id: str) -> Dict[str, Any]:
    row = conn.execute(
        "SELECT * FROM shopping_lists WHERE id = ? AND user_id = ?",
        (list_id, user_id),
    ).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Shopping list not found")
    return dict(row)


def get_shopping_list_for_plan(user_id: str, meal_plan_id: str) -> Optional[ShoppingList]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM shopping_lists WHERE user_id = ? AND meal_plan_id = ?",
            (user_id, meal_plan_id),
        ).fetchone()
        return _row_to_list(conn, dict(row)) if row else None


def create_shopping_list_for_plan(user_id: str, meal_plan_id: str) -> ShoppingList:
    """Return the plan's shopping list, building it from the plan on first use."""
    existing = get_shopping_list_for_plan(user_id, meal_plan_id)
    if existing is not None:
        return existing

    plan = get_meal_plan(user_id, meal_plan_id)
    details = plan.generated_meal_plan.shopping_items() if plan.generated_meal_plan else []
    shopping_list = ShoppingList(
        id=str(uuid4()),
        meal_plan_id=plan.id,
        meal_plan_title=plan.title,
        items=[
            ShoppingListItem(id=str(uuid4()), name=d.name, amount=d.amount, category=d.category)
            for d in details
        ],
        created_at=_iso_now(),
    )
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            INSERT OR IGNORE INTO shopping_lists (id, user_id, meal_plan_id, meal_plan_title, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (shopping_list.id, user_id, plan.id, shopping_list.meal_plan_title, shopping_list.created_at),
        )
        if cur.rowcount == 0:
            # Another request created it first.
            row = conn.execute(
                "SELECT * FROM shopping_lists WHERE user_id = ? AND meal_plan_id = ?",
                (user_id, plan.id),
            ).fetchone()
            return _row_to_list(conn, dict(row))
        conn.executemany(
            """
            INSERT INTO shopping_list_items (id, shopping_list_id, position, name, amount, category, is_completed)
            VALUES (?, ?, ?, ?, ?, ?, 0)
            """,
            [
                (item.id, shopping_list.id, pos, item.name, item.amount, item.category.value)
                for pos, item in enumerate(shopping_list.items)
            ],
        )
    logger.info("shopping list created: %s for plan %s (%d items)", shopping_list.id, plan.id, len(shopping_list.items))
    return shopping_list


def list_shopping_lists(user_id: str) -> List[ShoppingList]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM shopping_lists WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        ).fetchall()
        return [_row_to_list(conn, dict(r)) for r in rows]


def summarize(shopping_list: ShoppingList) -> ShoppingListSummary:
    return ShoppingListSummary(
        id=shopping_list.id,
        meal_plan_id=shopping_list.meal_plan_id,
        meal_plan_title=shopping_list.meal_plan_title,
        created_at=shopping_list.created_at,
        item_count=len(shopping_list.items),
        completed_count=len(shopping_list.completed_items),
        completion_percentage=shopping_list.completion_percentage,
    )


def get_shopping_list(user_id: str, list_id: str) -> ShoppingList:
    with db_conn(settings.app_db_path) as conn:
        return _row_to_list(conn, _find_list(conn, user_id, list_id))


def toggle_item(user_id: str, list_id: str, item_id: str, *, is_completed: Optional[bool] = None) -> ShoppingListItem:
    """Set an item's completion; without an explicit value the current state flips."""
    with db_conn(settings.app_db_path) as conn:
        _find_list(conn, user_id, list_id)
        row = conn.execute(
            "SELECT * FROM shopping_list_items WHERE id = ? AND shopping_list_id = ?",
            (item_id, list_id),
        ).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Shopping list item not found")
        new_state = (not bool(row["is_completed"])) if is_completed is None else is_completed
        conn.execute(
            "UPDATE shopping_list_items SET is_completed = ? WHERE id = ?",
            (1 if new_state else 0, item_id),
        )
    return ShoppingListItem(
        id=row["id"],
        name=row["name"],
        amount=row["amount"],
        category=row["category"],
        is_completed=new_state,
    )


def reset_list(user_id: str, list_id: str) -> ShoppingList:
    with db_conn(settings.app_db_path) as conn:
        row = _find_list(conn, user_id, list_id)
        conn.execute("UPDATE shopping_list_items SET is_completed = 0 WHERE shopping_list_id = ?", (list_id,))
        return _row_to_list(conn, row)


def delete_list(user_id: str, list_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM shopping_lists WHERE id = ? AND user_id = ?", (list_id, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Shopping list not found")
    logger.info("shopping list deleted: %s", list_id)
