# -*- coding: utf-8 -*-
"""Shopping categories: parsing, icon/color lookup and bucketing."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, TypeVar

T = TypeVar("T")


class ShoppingCategory(str, Enum):
    dairy = "Dairy"
    meat_and_fish = "Meat & Fish"
    fruit_and_veg = "Fruit & Veg"
    store_cupboard = "Store Cupboard"
    frozen = "Frozen"
    breads_and_grains = "Breads & Grains"
    other = "Other"

    @property
    def display_name(self) -> str:
        return self.value


class CategoryStyle(NamedTuple):
    icon: str
    color: str


DEFAULT_STYLE = CategoryStyle(icon="bag", color="gray")

# Adding a category means adding an enum member and a row here.
CATEGORY_STYLES: Dict[ShoppingCategory, CategoryStyle] = {
    ShoppingCategory.dairy: CategoryStyle("drop.fill", "blue"),
    ShoppingCategory.meat_and_fish: CategoryStyle("fish.fill", "red"),
    ShoppingCategory.fruit_and_veg: CategoryStyle("leaf.fill", "green"),
    ShoppingCategory.store_cupboard: CategoryStyle("archivebox.fill", "orange"),
    ShoppingCategory.frozen: CategoryStyle("snowflake", "cyan"),
    ShoppingCategory.breads_and_grains: CategoryStyle("takeoutbag.and.cup.and.straw.fill", "brown"),
    ShoppingCategory.other: DEFAULT_STYLE,
}

# Labels produced by older meal-plan prompts.
_ALIASES: Dict[str, ShoppingCategory] = {
    "produce": ShoppingCategory.fruit_and_veg,
    "fruit and veg": ShoppingCategory.fruit_and_veg,
    "meat & seafood": ShoppingCategory.meat_and_fish,
    "meat and fish": ShoppingCategory.meat_and_fish,
    "dairy & eggs": ShoppingCategory.dairy,
    "pantry": ShoppingCategory.store_cupboard,
    "bakery": ShoppingCategory.breads_and_grains,
    "grains": ShoppingCategory.breads_and_grains,
}


def parse_category(label: Any) -> ShoppingCategory:
    if isinstance(label, ShoppingCategory):
        return label
    text = str(label or "").strip()
    for category in ShoppingCategory:
        if category.value.casefold() == text.casefold():
            return category
    return _ALIASES.get(text.casefold(), ShoppingCategory.other)


def category_style(label: Any) -> CategoryStyle:
    return CATEGORY_STYLES.get(parse_category(label), DEFAULT_STYLE)


def category_icon(label: Any) -> str:
    return category_style(label).icon


def category_color(label: Any) -> str:
    return category_style(label).color


def _category_of(item: Any) -> ShoppingCategory:
    if isinstance(item, dict):
        return parse_category(item.get("category"))
    return parse_category(getattr(item, "category", None))


def categorize(items: Iterable[T]) -> Dict[str, List[T]]:
    """Bucket items by category display name.

    Buckets keep input order, come out in enum order, and empty categories
    never appear.
    """
    buckets: Dict[ShoppingCategory, List[T]] = {}
    for item in items:
        buckets.setdefault(_category_of(item), []).append(item)
    return {category.display_name: buckets[category] for category in ShoppingCategory if category in buckets}
