# -*- coding: utf-8 -*-
"""Shopping list endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from ..auth.security import get_current_user
from .categories import category_style
from .models import (
    CategorizedShoppingListResponse,
    CategoryBucket,
    ShoppingList,
    ShoppingListItem,
    ShoppingListsResponse,
    ToggleItemRequest,
)
from .storage import (
    create_shopping_list_for_plan,
    delete_list,
    get_shopping_list,
    list_shopping_lists,
    reset_list,
    summarize,
    toggle_item,
)

router = APIRouter(prefix="/api/shopping-lists", tags=["Shopping Lists"])


def build_categorized(shopping_list: ShoppingList) -> CategorizedShoppingListResponse:
    buckets = []
    for label, items in shopping_list.categorized().items():
        style = category_style(label)
        buckets.append(CategoryBucket(category=label, icon=style.icon, color=style.color, items=items))
    return CategorizedShoppingListResponse(shopping_list=shopping_list, categories=buckets)


@router.get("", response_model=ShoppingListsResponse, summary="List shopping lists")
def shopping_lists(user: dict = Depends(get_current_user)):
    items = [summarize(s) for s in list_shopping_lists(user["id"])]
    return ShoppingListsResponse(count=len(items), items=items)


@router.post("/meal-plans/{meal_plan_id}", response_model=ShoppingList, summary="Create (or fetch) the list for a meal plan")
def create_for_plan(meal_plan_id: str, user: dict = Depends(get_current_user)):
    return create_shopping_list_for_plan(user["id"], meal_plan_id)


@router.get("/{list_id}", response_model=ShoppingList, summary="Get a shopping list")
def shopping_list(list_id: str, user: dict = Depends(get_current_user)):
    return get_shopping_list(user["id"], list_id)


@router.get("/{list_id}/categorized", response_model=CategorizedShoppingListResponse, summary="Items grouped by store section")
def categorized(list_id: str, user: dict = Depends(get_current_user)):
    return build_categorized(get_shopping_list(user["id"], list_id))


@router.post("/{list_id}/items/{item_id}/toggle", response_model=ShoppingListItem, summary="Tick or untick an item")
def toggle(
    list_id: str,
    item_id: str,
    request: Optional[ToggleItemRequest] = Body(default=None),
    user: dict = Depends(get_current_user),
):
    return toggle_item(user["id"], list_id, item_id, is_completed=request.is_completed if request else None)


@router.post("/{list_id}/reset", response_model=ShoppingList, summary="Untick every item")
def reset(list_id: str, user: dict = Depends(get_current_user)):
    return reset_list(user["id"], list_id)


@router.delete("/{list_id}", summary="Delete a shopping list")
def remove(list_id: str, user: dict = Depends(get_current_user)):
    delete_list(user["id"], list_id)
    return {"status": "ok"}
