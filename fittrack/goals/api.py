# -*- coding: utf-8 -*-
"""Macro goals: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import MacroGoalsResponse, MacroGoalsUpdateRequest
from .storage import get_goals_record, update_goals

router = APIRouter(prefix="/api/goals", tags=["Goals"])


@router.get("", response_model=MacroGoalsResponse, summary="Current macro goals")
def goals(user: dict = Depends(get_current_user)):
    return MacroGoalsResponse.model_validate(get_goals_record(user["id"]))


@router.put("", response_model=MacroGoalsResponse, summary="Update macro goals")
def put_goals(request: MacroGoalsUpdateRequest, user: dict = Depends(get_current_user)):
    update_goals(user["id"], **request.model_dump())
    return MacroGoalsResponse.model_validate(get_goals_record(user["id"]))
