# -*- coding: utf-8 -*-
"""Workouts: API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from .grouping import build_session_detail
from .models import (
    AddSetRequest,
    CreateSessionRequest,
    GymClassRequest,
    PersonalRecord,
    PreviousSessionData,
    SessionDetailResponse,
    SessionListResponse,
    WeeklyVolumeResponse,
    WorkoutSession,
    WorkoutSet,
)
from .storage import (
    add_set,
    create_session,
    finish_session,
    get_personal_record,
    get_session,
    get_sets,
    list_personal_records,
    list_sessions,
    log_gym_class,
    previous_session_data,
    progress_data,
    weekly_volume,
)

router = APIRouter(prefix="/api/workouts", tags=["Workouts"])


@router.get("/sessions", response_model=SessionListResponse, summary="List workout sessions (newest first)")
def sessions(
    limit: int = Query(default=50, ge=1, le=500),
    user: dict = Depends(get_current_user),
):
    items = list_sessions(user["id"], limit=limit)
    return SessionListResponse(count=len(items), sessions=items)


@router.post("/sessions", response_model=WorkoutSession, summary="Start a workout session")
def start_session(request: CreateSessionRequest, user: dict = Depends(get_current_user)):
    return create_session(user["id"], name=request.name)


@router.get("/sessions/{session_id}", response_model=SessionDetailResponse, summary="Session with sets grouped by exercise")
def session_detail(session_id: str, user: dict = Depends(get_current_user)):
    session = get_session(user["id"], session_id)
    return build_session_detail(session, get_sets(user["id"], session_id))


@router.post("/sessions/{session_id}/finish", response_model=WorkoutSession, summary="Finish a workout session")
def finish(session_id: str, user: dict = Depends(get_current_user)):
    return finish_session(user["id"], session_id)


@router.get("/sessions/{session_id}/sets", response_model=List[WorkoutSet], summary="Sets for a session")
def session_sets(session_id: str, user: dict = Depends(get_current_user)):
    return get_sets(user["id"], session_id)


@router.post("/sessions/{session_id}/sets", response_model=WorkoutSet, summary="Log a set")
def log_set(session_id: str, request: AddSetRequest, user: dict = Depends(get_current_user)):
    if request.reps is None and request.duration_seconds is None:
        raise HTTPException(status_code=400, detail="A set needs reps or a duration")
    return add_set(user["id"], session_id, **request.model_dump())


@router.post("/classes", response_model=WorkoutSession, summary="Log a gym class")
def log_class(request: GymClassRequest, user: dict = Depends(get_current_user)):
    return log_gym_class(user["id"], class_type=request.class_type, duration_minutes=request.duration_minutes)


@router.get("/weekly-volume", response_model=WeeklyVolumeResponse, summary="Sets per muscle group, last 7 days")
def volume(user: dict = Depends(get_current_user)):
    return WeeklyVolumeResponse.model_validate(weekly_volume(user["id"]))


@router.get("/personal-records", response_model=List[PersonalRecord], summary="All personal records")
def personal_records(user: dict = Depends(get_current_user)):
    return list_personal_records(user["id"])


@router.get("/personal-records/{exercise_id}", response_model=Optional[PersonalRecord], summary="Personal record for an exercise")
def personal_record(exercise_id: str, user: dict = Depends(get_current_user)):
    return get_personal_record(user["id"], exercise_id)


@router.get("/exercises/{exercise_id}/previous", response_model=Optional[PreviousSessionData], summary="Last completed session data")
def previous(exercise_id: str, user: dict = Depends(get_current_user)):
    return previous_session_data(user["id"], exercise_id)


@router.get("/exercises/{exercise_id}/progress", response_model=List[WorkoutSet], summary="Sets over time for an exercise")
def progress(
    exercise_id: str,
    days: int = Query(default=90, ge=1, le=3650),
    user: dict = Depends(get_current_user),
):
    return progress_data(user["id"], exercise_id, days=days)
