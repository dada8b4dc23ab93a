# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fittrack.workouts.grouping import best_set, format_set, group_sets_by_exercise, session_volume
from fittrack.workouts.models import WorkoutSet


def _set(exercise_id: str, number: int, *, reps=None, weight=None, duration=None) -> WorkoutSet:
    return WorkoutSet(
        id=f"{exercise_id}-{number}",
        workout_session_id="s1",
        exercise_id=exercise_id,
        set_number=number,
        reps=reps,
        weight_lbs=weight,
        duration_seconds=duration,
        completed_at="2025-06-16T10:00:00+00:00",
    )


class TestGroupSets(unittest.TestCase):
    def test_grouped_and_ordered(self) -> None:
        sets = [
            _set("squat", 3, reps=5, weight=225),
            _set("bench_press", 2, reps=8, weight=135),
            _set("squat", 1, reps=5, weight=205),
            _set("bench_press", 1, reps=8, weight=135),
            _set("squat", 2, reps=5, weight=215),
        ]
        grouped = group_sets_by_exercise(sets)

        self.assertEqual(list(grouped), ["bench_press", "squat"])
        for exercise_sets in grouped.values():
            numbers = [s.set_number for s in exercise_sets]
            self.assertEqual(numbers, sorted(numbers))
        self.assertEqual(sum(len(v) for v in grouped.values()), len(sets))

    def test_empty(self) -> None:
        self.assertEqual(group_sets_by_exercise([]), {})


class TestSetSummaries(unittest.TestCase):
    def test_volume_ignores_unweighted_sets(self) -> None:
        sets = [_set("squat", 1, reps=5, weight=200), _set("planks", 1, duration=60), _set("push_ups", 1, reps=20)]
        self.assertEqual(session_volume(sets), 1000.0)

    def test_best_set_prefers_weight_then_reps(self) -> None:
        sets = [
            _set("bench_press", 1, reps=10, weight=135),
            _set("bench_press", 2, reps=5, weight=155),
            _set("bench_press", 3, reps=6, weight=155),
        ]
        self.assertEqual(best_set(sets).set_number, 3)
        self.assertIsNone(best_set([_set("planks", 1, duration=45)]))

    def test_format_set(self) -> None:
        self.assertEqual(format_set(_set("bench_press", 1, reps=8, weight=135)), "135 lbs x 8")
        self.assertEqual(format_set(_set("bench_press", 1, reps=8, weight=137.5)), "137.5 lbs x 8")
        self.assertEqual(format_set(_set("push_ups", 1, reps=12)), "12 reps")
        self.assertEqual(format_set(_set("planks", 1, duration=75)), "1:15")


if __name__ == "__main__":
    unittest.main()
