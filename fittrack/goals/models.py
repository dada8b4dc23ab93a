# -*- coding: utf-8 -*-
"""Macro goals: Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MacroGoals(BaseModel):
    model_config = ConfigDict(frozen=True)

    calories: float = Field(2000.0, ge=0)
    protein: float = Field(150.0, ge=0)
    carbs: float = Field(200.0, ge=0)
    fat: float = Field(80.0, ge=0)


DEFAULT_GOALS = MacroGoals()


class MacroGoalsUpdateRequest(BaseModel):
    calories: float = Field(..., ge=0, le=20000)
    protein: float = Field(..., ge=0, le=2000)
    carbs: float = Field(..., ge=0, le=2000)
    fat: float = Field(..., ge=0, le=2000)


class MacroGoalsResponse(BaseModel):
    goals: MacroGoals
    is_default: bool = False
    updated_at: Optional[str] = None
