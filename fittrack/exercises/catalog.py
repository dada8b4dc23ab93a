# -*- coding: utf-8 -*-
"""Exercise catalog: static muscle groups and lookup helpers."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .models import Exercise, ExerciseCategory, MuscleGroup

# (id, name, instructions, equipment, category)
_Row = Tuple[str, str, str, str, str]

_GROUPS: List[Tuple[str, str, str]] = [
    ("chest", "Chest", "💪"),
    ("back", "Back", "🦾"),
    ("legs", "Legs", "🦵"),
    ("shoulders", "Shoulders", "🏔️"),
    ("arms", "Arms", "💪"),
    ("core", "Core", "⚡"),
]

_EXERCISES: Dict[str, List[_Row]] = {
    "chest": [
        ("bench_press", "Bench Press", "Lie on bench, grip bar shoulder-width apart, lower to chest with control, press up explosively", "barbell", "compound"),
        ("incline_bench_press", "Incline Bench Press", "Set bench to 30-45°, press barbell from inclined position targeting upper chest", "barbell", "compound"),
        ("dumbbell_bench_press", "Dumbbell Bench Press", "Lie on bench with dumbbells, press up while maintaining control and full range of motion", "dumbbell", "compound"),
        ("chest_dips", "Chest Dips", "Lean forward on dip bars, lower body with control, press up focusing on chest activation", "bodyweight", "compound"),
        ("push_ups", "Push-ups", "Hands shoulder-width apart, lower chest to ground, push up maintaining straight body line", "bodyweight", "bodyweight"),
        ("dumbbell_flyes", "Dumbbell Flyes", "Lie flat, arms wide with slight bend, bring dumbbells together in arc motion", "dumbbell", "isolation"),
        ("cable_flyes", "Cable Flyes", "Set cables at chest height, step forward, bring handles together in arc motion", "cable", "isolation"),
        ("pec_deck", "Pec Deck", "Sit in machine, place forearms on pads, bring arms together squeezing chest", "machine", "isolation"),
    ],
    "back": [
        ("deadlifts", "Conventional Deadlifts", "Feet hip-width, grip bar, lift by driving hips forward and extending legs", "barbell", "compound"),
        ("pull_ups", "Pull-ups", "Hang from bar with overhand grip, pull body up until chin over bar", "bodyweight", "bodyweight"),
        ("chin_ups", "Chin-ups", "Hang from bar with underhand grip, pull body up emphasizing biceps", "bodyweight", "bodyweight"),
        ("barbell_rows", "Bent Over Barbell Rows", "Bent over position, pull barbell to lower chest, squeeze shoulder blades", "barbell", "compound"),
        ("dumbbell_rows", "Single Arm Dumbbell Rows", "One knee on bench, row dumbbell to hip, squeeze back muscles", "dumbbell", "compound"),
        ("seated_cable_rows", "Seated Cable Rows", "Sit at cable machine, pull handle to chest, squeeze shoulder blades together", "cable", "compound"),
        ("lat_pulldowns", "Lat Pulldowns", "Sit at machine, pull bar to chest with wide grip, control the weight", "machine", "compound"),
        ("face_pulls", "Face Pulls", "Cable at face height, pull to face with elbows high, squeeze rear delts", "cable", "isolation"),
        ("shrugs", "Barbell Shrugs", "Hold barbell, shrug shoulders up, squeeze traps at top", "barbell", "isolation"),
    ],
    "legs": [
        ("back_squats", "Back Squats", "Bar on upper back, feet shoulder-width, descend until thighs parallel, drive up", "barbell", "compound"),
        ("front_squats", "Front Squats", "Bar across front shoulders, squat down keeping torso upright", "barbell", "compound"),
        ("romanian_deadlifts", "Romanian Deadlifts", "Keep legs slightly bent, hinge at hips, feel hamstring stretch, return to standing", "barbell", "compound"),
        ("leg_press", "Leg Press", "Sit in machine, press weight with legs, control descent", "machine", "compound"),
        ("walking_lunges", "Walking Lunges", "Step forward into lunge, push off to step into next lunge", "bodyweight", "bodyweight"),
        ("leg_extensions", "Leg Extensions", "Sit in machine, extend legs straight, control descent", "machine", "isolation"),
        ("leg_curls", "Lying Leg Curls", "Lie face down, curl heels toward glutes", "machine", "isolation"),
        ("calf_raises", "Standing Calf Raises", "Rise up on toes, hold briefly, lower slowly", "bodyweight", "isolation"),
        ("hip_thrusts", "Hip Thrusts", "Upper back on bench, thrust hips up squeezing glutes", "barbell", "isolation"),
        ("wall_sits", "Wall Sits", "Back against wall, slide down to squat position, hold", "bodyweight", "cardio"),
    ],
    "shoulders": [
        ("overhead_press", "Standing Overhead Press", "Press bar or dumbbells overhead from shoulder level, keep core tight", "barbell", "compound"),
        ("dumbbell_shoulder_press", "Dumbbell Shoulder Press", "Press dumbbells from shoulder level to overhead", "dumbbell", "compound"),
        ("arnold_press", "Arnold Press", "Start palms facing you, rotate and press overhead", "dumbbell", "compound"),
        ("pike_push_ups", "Pike Push-ups", "Downward dog position, lower head to ground, press up", "bodyweight", "bodyweight"),
        ("lateral_raises", "Lateral Raises", "Arms at sides, raise dumbbells to shoulder height out to sides", "dumbbell", "isolation"),
        ("front_raises", "Front Raises", "Raise dumbbells in front to shoulder height", "dumbbell", "isolation"),
        ("rear_delt_flyes", "Rear Delt Flyes", "Bent over, raise arms wide targeting rear delts", "dumbbell", "isolation"),
    ],
    "arms": [
        ("barbell_bicep_curls", "Barbell Bicep Curls", "Arms at sides, curl barbell up with biceps, control descent", "barbell", "isolation"),
        ("dumbbell_bicep_curls", "Dumbbell Bicep Curls", "Curl dumbbells alternating or together, focus on bicep contraction", "dumbbell", "isolation"),
        ("hammer_curls", "Hammer Curls", "Neutral grip, curl dumbbells without rotating wrists", "dumbbell", "isolation"),
        ("preacher_curls", "Preacher Curls", "Arms on preacher bench, curl weight with strict form", "barbell", "isolation"),
        ("close_grip_bench_press", "Close Grip Bench Press", "Narrow grip bench press focusing on triceps", "barbell", "compound"),
        ("tricep_dips", "Tricep Dips", "Hands on bench or bars, lower body, press up with triceps", "bodyweight", "bodyweight"),
        ("tricep_pushdowns", "Tricep Pushdowns", "High cable, push down extending triceps fully", "cable", "isolation"),
        ("overhead_tricep_extension", "Overhead Tricep Extension", "Weight overhead, lower behind head, extend back up", "dumbbell", "isolation"),
    ],
    "core": [
        ("planks", "Planks", "Hold push-up position, keep body straight, engage core", "bodyweight", "cardio"),
        ("side_planks", "Side Planks", "Lie on side, prop up on elbow, lift hips creating straight line", "bodyweight", "cardio"),
        ("hollow_body_hold", "Hollow Body Hold", "Lie on back, press lower back down, hold position", "bodyweight", "cardio"),
        ("crunches", "Crunches", "Lie down, hands behind head, crunch up engaging abs", "bodyweight", "bodyweight"),
        ("bicycle_crunches", "Bicycle Crunches", "Alternate bringing elbow to opposite knee in cycling motion", "bodyweight", "bodyweight"),
        ("russian_twists", "Russian Twists", "Sit with feet up, rotate torso side to side", "bodyweight", "bodyweight"),
        ("mountain_climbers", "Mountain Climbers", "Plank position, alternate bringing knees to chest quickly", "bodyweight", "cardio"),
        ("hanging_leg_raises", "Hanging Leg Raises", "Hang from pull-up bar, raise legs up to 90 degrees, lower with control", "bodyweight", "bodyweight"),
    ],
}


def _build_groups() -> List[MuscleGroup]:
    groups: List[MuscleGroup] = []
    for group_id, name, emoji in _GROUPS:
        exercises = []
        for ex_id, ex_name, instructions, equipment, category in _EXERCISES.get(group_id, []):
            cat = ExerciseCategory(category)
            exercises.append(
                Exercise(
                    id=ex_id,
                    name=ex_name,
                    instructions=instructions,
                    type=cat.exercise_type,
                    equipment=equipment,
                    category=cat,
                )
            )
        groups.append(MuscleGroup(id=group_id, name=name, emoji=emoji, exercises=exercises))
    return groups


MUSCLE_GROUPS: List[MuscleGroup] = _build_groups()


def list_muscle_groups() -> List[MuscleGroup]:
    return list(MUSCLE_GROUPS)


def get_all_exercises() -> List[Exercise]:
    return [exercise for group in MUSCLE_GROUPS for exercise in group.exercises]


def get_exercises_for_group(muscle_group_id: str) -> List[Exercise]:
    for group in MUSCLE_GROUPS:
        if group.id == muscle_group_id:
            return list(group.exercises)
    return []


def get_exercise(exercise_id: str) -> Optional[Exercise]:
    for exercise in get_all_exercises():
        if exercise.id == exercise_id:
            return exercise
    return None


def get_muscle_group_for(exercise_id: str) -> Optional[MuscleGroup]:
    for group in MUSCLE_GROUPS:
        if any(exercise.id == exercise_id for exercise in group.exercises):
            return group
    return None


def search_exercises(query: str) -> List[Exercise]:
    """Case-insensitive match on name or instructions; an empty query returns everything."""
    needle = (query or "").strip().casefold()
    if not needle:
        return get_all_exercises()
    return [
        exercise
        for exercise in get_all_exercises()
        if needle in exercise.name.casefold() or needle in exercise.instructions.casefold()
    ]


def exercise_name(exercise_id: str) -> str:
    exercise = get_exercise(exercise_id)
    if exercise:
        return exercise.name
    return exercise_id.replace("_", " ").title()
