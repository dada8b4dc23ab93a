# -*- coding: utf-8 -*-
"""Progress ratios for macro rings and pie charts."""

from __future__ import annotations

from typing import Dict, Protocol

from pydantic import BaseModel, Field


class _MacroValues(Protocol):
    calories: float
    protein: float
    carbs: float
    fat: float


MACRO_KEYS = ("calories", "protein", "carbs", "fat")
MACRO_UNITS = {"calories": "", "protein": "g", "carbs": "g", "fat": "g"}


def progress_ratio(current: float, goal: float) -> float:
    """Fraction of ``goal`` reached by ``current``, clamped to [0, 1].

    A zero or negative goal means no progress can be shown, so the ratio is 0.
    """
    if goal <= 0:
        return 0.0
    ratio = float(current) / float(goal)
    return min(max(ratio, 0.0), 1.0)


def progress_percentage(current: float, goal: float) -> int:
    return int(progress_ratio(current, goal) * 100)


def is_goal_achieved(current: float, goal: float) -> bool:
    if goal <= 0:
        return False
    return float(current) / float(goal) >= 1.0


def remaining(current: float, goal: float) -> float:
    return max(float(goal) - float(current), 0.0)


class MacroRing(BaseModel):
    key: str
    current: float = Field(0.0, ge=0)
    goal: float = 0.0
    unit: str = ""
    ratio: float = Field(0.0, ge=0, le=1)
    percentage: int = Field(0, ge=0, le=100)
    achieved: bool = False
    remaining: float = Field(0.0, ge=0)

    @property
    def label(self) -> str:
        return f"{int(round(self.current))}{self.unit}"


def macro_ring(key: str, current: float, goal: float) -> MacroRing:
    current = max(float(current), 0.0)
    return MacroRing(
        key=key,
        current=current,
        goal=float(goal),
        unit=MACRO_UNITS.get(key, ""),
        ratio=progress_ratio(current, goal),
        percentage=progress_percentage(current, goal),
        achieved=is_goal_achieved(current, goal),
        remaining=remaining(current, goal),
    )


def macro_progress(totals: _MacroValues, goals: _MacroValues) -> Dict[str, MacroRing]:
    """One ring per macro, in calories/protein/carbs/fat order."""
    return {key: macro_ring(key, getattr(totals, key), getattr(goals, key)) for key in MACRO_KEYS}
