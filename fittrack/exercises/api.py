# -*- coding: utf-8 -*-
"""Exercise catalog: API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query

from .catalog import get_exercise, get_exercises_for_group, get_muscle_group_for, list_muscle_groups, search_exercises
from .models import Exercise, ExerciseSearchResponse, MuscleGroup, MuscleGroupSummary

router = APIRouter(prefix="/api/exercises", tags=["Exercises"])


@router.get("/muscle-groups", response_model=List[MuscleGroupSummary], summary="List muscle groups")
def muscle_groups():
    return [
        MuscleGroupSummary(id=g.id, name=g.name, emoji=g.emoji, exercise_count=len(g.exercises))
        for g in list_muscle_groups()
    ]


@router.get("/muscle-groups/{muscle_group_id}", response_model=List[Exercise], summary="Exercises for a muscle group")
def muscle_group_exercises(muscle_group_id: str):
    exercises = get_exercises_for_group(muscle_group_id)
    if not exercises:
        raise HTTPException(status_code=404, detail="Muscle group not found")
    return exercises


@router.get("/search", response_model=ExerciseSearchResponse, summary="Search exercises")
def search(q: str = Query(default="", max_length=100)):
    found = search_exercises(q)
    return ExerciseSearchResponse(query=q, count=len(found), exercises=found)


@router.get("/{exercise_id}", response_model=Exercise, summary="Get exercise by id")
def exercise_detail(exercise_id: str):
    exercise = get_exercise(exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("/{exercise_id}/muscle-group", response_model=MuscleGroup, summary="Muscle group for an exercise")
def exercise_muscle_group(exercise_id: str):
    group = get_muscle_group_for(exercise_id)
    if not group:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return group
