# -*- coding: utf-8 -*-
"""Grouping and formatting of workout sets for session detail."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..exercises.catalog import exercise_name
from .models import ExerciseSetGroup, SessionDetailResponse, WorkoutSession, WorkoutSet


def group_sets_by_exercise(sets: Iterable[WorkoutSet]) -> Dict[str, List[WorkoutSet]]:
    """Bucket sets by exercise id, each bucket ordered by set number.

    Keys are inserted in sorted order so iteration is stable for display.
    """
    buckets: Dict[str, List[WorkoutSet]] = {}
    for s in sets:
        buckets.setdefault(s.exercise_id, []).append(s)
    return {key: sorted(buckets[key], key=lambda s: s.set_number) for key in sorted(buckets)}


def set_volume(s: WorkoutSet) -> float:
    if s.weight_lbs is None or s.reps is None:
        return 0.0
    return float(s.weight_lbs) * int(s.reps)


def session_volume(sets: Iterable[WorkoutSet]) -> float:
    return sum(set_volume(s) for s in sets)


def best_set(sets: Iterable[WorkoutSet]) -> Optional[WorkoutSet]:
    """Heaviest weighted set; ties go to more reps."""
    weighted = [s for s in sets if s.weight_lbs is not None and s.reps is not None]
    if not weighted:
        return None
    return max(weighted, key=lambda s: (s.weight_lbs, s.reps))


def format_duration(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_set(s: WorkoutSet) -> str:
    if s.weight_lbs is not None and s.reps is not None:
        return f"{s.weight_lbs:g} lbs x {s.reps}"
    if s.reps is not None:
        return f"{s.reps} reps"
    if s.duration_seconds is not None:
        return format_duration(s.duration_seconds)
    return "-"


def build_session_detail(session: WorkoutSession, sets: List[WorkoutSet]) -> SessionDetailResponse:
    groups = []
    for exercise_id, exercise_sets in group_sets_by_exercise(sets).items():
        top = best_set(exercise_sets)
        groups.append(
            ExerciseSetGroup(
                exercise_id=exercise_id,
                exercise_name=exercise_name(exercise_id),
                sets=exercise_sets,
                volume_lbs=session_volume(exercise_sets),
                best_set=format_set(top) if top else None,
            )
        )
    return SessionDetailResponse(
        session=session,
        exercises=groups,
        total_sets=len(sets),
        total_volume_lbs=session_volume(sets),
    )
