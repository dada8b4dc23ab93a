# -*- coding: utf-8 -*-
"""Shopping lists: Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from ..progress import progress_percentage
from .categories import ShoppingCategory, categorize, parse_category


class ShoppingListItem(BaseModel):
    id: str
    name: str
    amount: str = ""
    category: ShoppingCategory = ShoppingCategory.other
    is_completed: bool = False

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> ShoppingCategory:
        return parse_category(value)


class ShoppingList(BaseModel):
    id: str
    meal_plan_id: str
    meal_plan_title: str
    items: List[ShoppingListItem] = Field(default_factory=list)
    created_at: str

    @property
    def completed_items(self) -> List[ShoppingListItem]:
        return [item for item in self.items if item.is_completed]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completion_percentage(self) -> int:
        """Share of items ticked off, 0..100; an empty list is 0."""
        return progress_percentage(len(self.completed_items), len(self.items))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completion_text(self) -> str:
        return f"{len(self.completed_items)} of {len(self.items)} completed"

    def categorized(self) -> Dict[str, List[ShoppingListItem]]:
        return categorize(self.items)


class ShoppingListSummary(BaseModel):
    id: str
    meal_plan_id: str
    meal_plan_title: str
    created_at: str
    item_count: int
    completed_count: int
    completion_percentage: int


class ShoppingListsResponse(BaseModel):
    count: int
    items: List[ShoppingListSummary]


class CategoryBucket(BaseModel):
    category: str
    icon: str
    color: str
    items: List[ShoppingListItem]


class CategorizedShoppingListResponse(BaseModel):
    shopping_list: ShoppingList
    categories: List[CategoryBucket]


class ToggleItemRequest(BaseModel):
    is_completed: Optional[bool] = Field(None, description="Explicit state; omitted flips the current one")
