"""
Static exercise reference data.

Two independent tables live here:

  EXERCISES        – category tag → exercise names, consumed by the plan generator
  EQUIPMENT_TABLE  – equipment tag → suggestion records, consumed by the
                     equipment advisor (loaded from data/equipment_exercises.csv)

Both are built once at import time and never mutated.
"""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Mapping

import pandas as pd

logger = logging.getLogger(__name__)

_data_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
EQUIPMENT_CSV_PATH = os.path.join(_data_dir, "equipment_exercises.csv")


# ── Plan-generation catalog ─────────────────────────────────────────────────
EXERCISES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "cardio":      ("Running", "Cycling", "Jump Rope", "Swimming", "Rowing"),
    "hiit":        ("Burpees", "Mountain Climbers", "Jump Squats", "High Knees", "Box Jumps"),
    "strength":    ("Squats", "Deadlifts", "Bench Press", "Pull-ups", "Overhead Press"),
    "hypertrophy": ("Dumbbell Curls", "Tricep Extensions", "Lateral Raises", "Leg Press"),
    "home":        ("Push-ups", "Bodyweight Squats", "Lunges", "Plank", "Burpees"),
})

# goal → ordered workout categories
GOAL_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "lose_weight":  ("cardio", "hiit", "strength"),
    "build_muscle": ("strength", "hypertrophy"),
    "strength":     ("strength",),
    "endurance":    ("cardio", "hiit"),
})
DEFAULT_GOAL_CATEGORIES = ("strength", "cardio")

# Removed from the pool when the user only has basic equipment
BASIC_EQUIPMENT_EXCLUDED = frozenset({"Deadlifts", "Bench Press"})

UPPER_BODY_EXCLUDED = frozenset({"Squats", "Deadlifts", "Leg Press", "Lunges"})
LOWER_BODY_EXCLUDED = frozenset({"Push-ups", "Pull-ups", "Bench Press", "Overhead Press"})

FOCUS_AREAS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Upper Body": ("Chest", "Back", "Shoulders", "Arms"),
    "Lower Body": ("Quads", "Hamstrings", "Glutes", "Calves"),
    "HIIT":       ("Full Body", "Cardio"),
    "Cardio":     ("Cardiovascular",),
    "Strength":   ("Compound Movements",),
})
DEFAULT_FOCUS_AREAS = ("General Fitness",)

EXERCISE_NOTES: Mapping[str, str] = MappingProxyType({
    "Deadlifts":   "Maintain straight back, engage core",
    "Squats":      "Keep knees behind toes, chest up",
    "Bench Press": "Retract shoulder blades, arch back slightly",
    "Pull-ups":    "Start with assisted if needed, focus on full range",
})

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


# ── Equipment-suggestion table ──────────────────────────────────────────────
BODYWEIGHT_TAG = "none"
SUGGESTION_FIELDS = ["name", "description", "muscleGroup", "difficulty"]


def load_equipment_table(path: str = EQUIPMENT_CSV_PATH) -> Mapping[str, tuple[dict, ...]]:
    """
    Read the equipment CSV into tag → ordered suggestion records.

    Row order in the file is table order; tags keep first-seen order.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except Exception as e:
        raise RuntimeError(f"Failed to load equipment table from {path}: {e}")

    missing = {"equipment", *SUGGESTION_FIELDS} - set(df.columns)
    if missing:
        raise RuntimeError(f"Equipment table {path} is missing columns: {sorted(missing)}")

    table: dict[str, tuple[dict, ...]] = {}
    for tag, group in df.groupby("equipment", sort=False):
        table[tag] = tuple(group[SUGGESTION_FIELDS].to_dict(orient="records"))

    if BODYWEIGHT_TAG not in table:
        raise RuntimeError(f"Equipment table {path} has no '{BODYWEIGHT_TAG}' rows")

    logger.info("Loaded %d equipment tags from %s", len(table), path)
    return MappingProxyType(table)


EQUIPMENT_TABLE = load_equipment_table()
