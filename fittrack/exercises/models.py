# -*- coding: utf-8 -*-
"""Exercise catalog: Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ExerciseType(str, Enum):
    weight = "weight"
    bodyweight = "bodyweight"
    timed = "timed"


class ExerciseCategory(str, Enum):
    compound = "compound"
    isolation = "isolation"
    bodyweight = "bodyweight"
    cardio = "cardio"

    @property
    def exercise_type(self) -> ExerciseType:
        if self is ExerciseCategory.bodyweight:
            return ExerciseType.bodyweight
        if self is ExerciseCategory.cardio:
            return ExerciseType.timed
        return ExerciseType.weight


class Exercise(BaseModel):
    id: str
    name: str
    instructions: str
    type: ExerciseType = ExerciseType.weight
    equipment: str = "bodyweight"
    category: ExerciseCategory = ExerciseCategory.compound


class MuscleGroup(BaseModel):
    id: str
    name: str
    emoji: str
    exercises: List[Exercise] = Field(default_factory=list)


class MuscleGroupSummary(BaseModel):
    id: str
    name: str
    emoji: str
    exercise_count: int = Field(0, ge=0)


class ExerciseSearchResponse(BaseModel):
    query: str
    count: int
    exercises: List[Exercise]
