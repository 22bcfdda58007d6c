# planner/workout_engine.py
"""
Weekly workout plan generation.

Exercise selection is random: two calls with the same inputs can return
different exercises. Pass a seeded ``numpy.random.Generator`` to get a
reproducible schedule. Counts, prescriptions and day labels never depend
on the random source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from . import catalog
from .nutrition_engine import (
    UserProfile,
    WorkoutPreferences,
    bmi_category,
    build_nutrition_summary,
    compute_tdee,
    normalize_goal,
)

logger = logging.getLogger(__name__)

PLAN_DURATION_WEEKS = 8

LEVEL_EXERCISE_CAP = {"beginner": 5, "intermediate": 6}
DEFAULT_EXERCISE_CAP = 7
MINUTES_PER_EXERCISE = 10


@dataclass
class ExercisePrescription:
    name: str
    sets: str
    reps: str
    rest_period: str
    notes: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "restPeriod": self.rest_period,
            "notes": self.notes,
        }


@dataclass
class DaySchedule:
    day_number: int
    day_name: str
    workout_type: str
    focus_areas: List[str]
    duration_minutes: int
    exercises: List[ExercisePrescription] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "dayNumber": self.day_number,
            "dayName": self.day_name,
            "workoutType": self.workout_type,
            "focusAreas": list(self.focus_areas),
            "durationMinutes": self.duration_minutes,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


# ---------- Pool construction ----------
def get_workout_categories(goal: str) -> tuple[str, ...]:
    return catalog.GOAL_CATEGORIES.get(normalize_goal(goal), catalog.DEFAULT_GOAL_CATEGORIES)


def get_available_exercises(categories, equipment: str) -> List[str]:
    """Union of the category lists (first-seen order), narrowed by equipment."""
    pool: List[str] = []
    for category in categories:
        for name in catalog.EXERCISES.get(category, ()):
            if name not in pool:
                pool.append(name)

    equipment = equipment.strip().lower()
    if equipment == "none":
        home = catalog.EXERCISES["home"]
        pool = [name for name in pool if name in home]
    elif equipment == "basic":
        pool = [name for name in pool if name not in catalog.BASIC_EQUIPMENT_EXCLUDED]
    return pool


# ---------- Day layout ----------
def get_day_name(day_number: int) -> str:
    return catalog.DAY_NAMES[(day_number - 1) % 7]


def get_workout_type_for_day(day_number: int, goal: str) -> str:
    goal = normalize_goal(goal)
    even = day_number % 2 == 0
    if goal == "lose_weight":
        return "HIIT" if even else "Strength"
    elif goal == "endurance":
        return "Cardio" if even else "HIIT"
    return "Upper Body" if even else "Lower Body"


def get_focus_areas(workout_type: str) -> List[str]:
    return list(catalog.FOCUS_AREAS.get(workout_type, catalog.DEFAULT_FOCUS_AREAS))


# ---------- Selection ----------
def exercise_count(session_minutes: int, fitness_level: str) -> int:
    cap = LEVEL_EXERCISE_CAP.get(fitness_level.strip().lower(), DEFAULT_EXERCISE_CAP)
    return max(0, min(session_minutes // MINUTES_PER_EXERCISE, cap))


def filter_for_workout_type(pool: List[str], workout_type: str) -> List[str]:
    if workout_type == "Upper Body":
        return [name for name in pool if name not in catalog.UPPER_BODY_EXCLUDED]
    elif workout_type == "Lower Body":
        return [name for name in pool if name not in catalog.LOWER_BODY_EXCLUDED]
    return list(pool)


def select_exercises(
    pool: List[str],
    workout_type: str,
    fitness_level: str,
    session_minutes: int,
    rng: np.random.Generator,
) -> List[str]:
    count = exercise_count(session_minutes, fitness_level)
    candidates = filter_for_workout_type(pool, workout_type)
    rng.shuffle(candidates)
    return candidates[:count]


# ---------- Prescription ----------
def get_sets(fitness_level: str) -> str:
    level = fitness_level.strip().lower()
    if level == "beginner":
        return "3"
    if level == "intermediate":
        return "3-4"
    return "4-5"


def get_reps(goal: str, fitness_level: str) -> str:
    goal = normalize_goal(goal)
    if goal == "build_muscle":
        return "8-12"
    if goal == "strength":
        return "4-6"
    return "10-12" if fitness_level.strip().lower() == "beginner" else "12-15"


def get_rest_period(goal: str, fitness_level: str) -> str:
    if normalize_goal(goal) == "strength":
        return "2-3 minutes"
    return "30-60 seconds" if fitness_level.strip().lower() == "beginner" else "60-90 seconds"


def get_exercise_notes(exercise: str, fitness_level: str) -> str:
    if exercise in catalog.EXERCISE_NOTES:
        return catalog.EXERCISE_NOTES[exercise]
    if fitness_level.strip().lower() == "beginner":
        return "Start with light weight, focus on form"
    return "Adjust weight to challenge yourself"


def prescribe(exercise: str, goal: str, fitness_level: str) -> ExercisePrescription:
    return ExercisePrescription(
        name=exercise,
        sets=get_sets(fitness_level),
        reps=get_reps(goal, fitness_level),
        rest_period=get_rest_period(goal, fitness_level),
        notes=get_exercise_notes(exercise, fitness_level),
    )


def generate_weekly_schedule(
    profile: UserProfile,
    prefs: WorkoutPreferences,
    rng: Optional[np.random.Generator] = None,
) -> List[DaySchedule]:
    rng = rng if rng is not None else np.random.default_rng()
    categories = get_workout_categories(profile.goal)
    pool = get_available_exercises(categories, prefs.equipment)

    schedule: List[DaySchedule] = []
    for day in range(1, prefs.days_per_week + 1):
        workout_type = get_workout_type_for_day(day, profile.goal)
        chosen = select_exercises(pool, workout_type, profile.fitness_level, prefs.session_minutes, rng)
        schedule.append(DaySchedule(
            day_number=day,
            day_name=get_day_name(day),
            workout_type=workout_type,
            focus_areas=get_focus_areas(workout_type),
            duration_minutes=prefs.session_minutes,
            exercises=[prescribe(name, profile.goal, profile.fitness_level) for name in chosen],
        ))
    return schedule


# ---------- Recommendations ----------
def get_workout_frequency_recommendation(days: int) -> str:
    if days < 3:
        return "Consider increasing to at least 3 days per week for better results"
    if days > 5:
        return "Make sure to include rest days for recovery"
    return "Good workout frequency for your level"


def get_equipment_recommendation(equipment: str) -> str:
    if equipment.strip().lower() == "none":
        return "Consider investing in resistance bands for more exercise variety"
    return ""


def build_recommendations(bmi: float, category: str, prefs: WorkoutPreferences) -> List[str]:
    lines = [
        f"Your BMI is {bmi} ({category})",
        f"Injury considerations: {', '.join(prefs.injuries)}" if prefs.injuries else "No injury considerations",
        get_workout_frequency_recommendation(prefs.days_per_week),
        get_equipment_recommendation(prefs.equipment),
    ]
    return [line for line in lines if line]


# ---------- Full plan ----------
def generate_workout_plan(
    profile: UserProfile,
    prefs: WorkoutPreferences,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, Any]:
    """
    Build the complete plan response for a validated profile.

    Returns a dict with userProfile, planDetails, weeklySchedule,
    nutrition and recommendations.
    """
    bmi = profile.bmi
    category = bmi_category(bmi)
    tdee = compute_tdee(profile)

    logger.info(
        "Generating plan: goal=%s level=%s days=%d minutes=%d equipment=%s",
        profile.goal, profile.fitness_level, prefs.days_per_week,
        prefs.session_minutes, prefs.equipment,
    )
    schedule = generate_weekly_schedule(profile, prefs, rng)

    return {
        "userProfile": {
            "age": profile.age,
            "height": profile.height_cm,
            "weight": profile.weight_kg,
            "gender": profile.gender,
            "bmi": bmi,
            "bmiCategory": category,
            "tdee": tdee,
        },
        "planDetails": {
            "goal": profile.goal,
            "duration": PLAN_DURATION_WEEKS,
            "daysPerWeek": prefs.days_per_week,
            "sessionDuration": prefs.session_minutes,
            "equipment": prefs.equipment,
            "fitnessLevel": profile.fitness_level,
        },
        "weeklySchedule": [day.to_dict() for day in schedule],
        "nutrition": build_nutrition_summary(profile, tdee),
        "recommendations": build_recommendations(bmi, category, prefs),
    }
