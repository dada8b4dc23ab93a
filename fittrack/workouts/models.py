# -*- coding: utf-8 -*-
"""Workouts: Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

GYM_CLASS_TYPES = ("HIIT", "Yoga", "Pilates", "Spin", "Boxing", "CrossFit", "Bootcamp", "Zumba")
GYM_CLASS_DURATIONS = (15, 30, 45, 60, 75, 90)


class WorkoutSession(BaseModel):
    id: str
    user_id: str
    name: str
    started_at: str
    ended_at: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    created_at: str

    @property
    def is_open(self) -> bool:
        return self.ended_at is None


class WorkoutSet(BaseModel):
    id: str
    workout_session_id: str
    exercise_id: str
    set_number: int = Field(..., ge=1)
    reps: Optional[int] = Field(None, ge=0)
    weight_lbs: Optional[float] = Field(None, ge=0)
    duration_seconds: Optional[int] = Field(None, ge=0)
    rest_seconds: Optional[int] = Field(None, ge=0)
    completed_at: str


class PersonalRecord(BaseModel):
    exercise_id: str
    max_weight_lbs: float = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    achieved_at: str


class CreateSessionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class AddSetRequest(BaseModel):
    exercise_id: str = Field(..., min_length=1)
    set_number: int = Field(..., ge=1)
    reps: Optional[int] = Field(None, ge=0, le=1000)
    weight_lbs: Optional[float] = Field(None, ge=0, le=2000)
    duration_seconds: Optional[int] = Field(None, ge=0, le=24 * 3600)
    rest_seconds: Optional[int] = Field(None, ge=0, le=3600)


class GymClassRequest(BaseModel):
    class_type: str = Field("HIIT", min_length=1, max_length=64)
    duration_minutes: int = Field(45, ge=1, le=240)

    @field_validator("class_type")
    @classmethod
    def _known_class(cls, value: str) -> str:
        for known in GYM_CLASS_TYPES:
            if known.lower() == value.strip().lower():
                return known
        raise ValueError(f"class_type must be one of {', '.join(GYM_CLASS_TYPES)}")


class SessionListResponse(BaseModel):
    count: int
    sessions: List[WorkoutSession]


class ExerciseSetGroup(BaseModel):
    exercise_id: str
    exercise_name: str
    sets: List[WorkoutSet]
    volume_lbs: float = 0.0
    best_set: Optional[str] = None


class SessionDetailResponse(BaseModel):
    session: WorkoutSession
    exercises: List[ExerciseSetGroup]
    total_sets: int = 0
    total_volume_lbs: float = 0.0


class WeeklyVolumeResponse(BaseModel):
    since: str
    sets_by_muscle_group: Dict[str, int]


class PreviousSessionData(BaseModel):
    exercise_id: str
    session_date: str
    sets: List[WorkoutSet]
