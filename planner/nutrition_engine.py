# planner/nutrition_engine.py

from __future__ import annotations

import math
from dataclasses import dataclass, field


def normalize_goal(goal: str) -> str:
    """'Lose Weight', 'lose weight' and 'lose_weight' all map to 'lose_weight'."""
    return "_".join(goal.strip().lower().split())


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class UserProfile:
    age: int
    height_cm: float
    weight_kg: float
    gender: str
    goal: str
    fitness_level: str

    @property
    def is_male(self) -> bool:
        return self.gender.strip().lower() == "male"

    @property
    def level_key(self) -> str:
        return self.fitness_level.strip().lower()

    @property
    def bmi(self) -> float:
        h_m = self.height_cm / 100
        return round(self.weight_kg / (h_m ** 2), 1)


@dataclass
class WorkoutPreferences:
    days_per_week: int = 3
    session_minutes: int = 30
    equipment: str = "none"
    injuries: list[str] = field(default_factory=list)
    preferences: list[str] = field(default_factory=list)


@dataclass
class MacroTargets:
    calories: int
    protein_g: int
    carbs_g: int
    fats_g: int

    @property
    def percentages(self) -> dict:
        protein_pct = round(self.protein_g * 4 / self.calories * 100, 1) if self.calories > 0 else 0.0
        return {
            "protein": protein_pct,
            "carbohydrates": round(CARB_FRACTION * 100),
            "fats": round(FAT_FRACTION * 100),
        }


# ── Metabolic Calculator (Mifflin-St Jeor) ──────────────────────────────────

# Fitness level doubles as the activity proxy on the plan path.
ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "beginner": 1.2,
    "intermediate": 1.375,
    "advanced": 1.55,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2


def compute_bmr(profile: UserProfile) -> float:
    w, h, a = profile.weight_kg, profile.height_cm, profile.age
    if profile.is_male:
        return 10 * w + 6.25 * h - 5 * a + 5
    else:
        return 10 * w + 6.25 * h - 5 * a - 161


def compute_tdee(profile: UserProfile) -> int:
    bmr = compute_bmr(profile)
    mult = ACTIVITY_MULTIPLIERS.get(profile.level_key, DEFAULT_ACTIVITY_MULTIPLIER)
    return round_half_up(bmr * mult)


# ── BMI ─────────────────────────────────────────────────────────────────────

def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    elif bmi < 25:
        return "Normal weight"
    elif bmi < 30:
        return "Overweight"
    return "Obese"


# ── Macro Planner, Policy A (plan generation path) ──────────────────────────

# Protein in g per kg of body weight.
PROTEIN_PER_KG: dict[str, float] = {
    "lose_weight": 2.2,
    "build_muscle": 2.5,
    "strength": 2.3,
    "endurance": 1.8,
}
DEFAULT_PROTEIN_PER_KG = 1.6

# Fixed calorie fractions; they are not balanced against protein.
CARB_FRACTION = 0.4
FAT_FRACTION = 0.3


def adjust_for_goal(tdee: int, goal: str) -> int:
    goal = normalize_goal(goal)
    if goal == "lose_weight":
        return tdee - 500
    elif goal == "build_muscle":
        return tdee + 250
    return tdee


def compute_macro_targets(goal: str, weight_kg: float, tdee: int) -> MacroTargets:
    calories = adjust_for_goal(tdee, goal)
    protein_factor = PROTEIN_PER_KG.get(normalize_goal(goal), DEFAULT_PROTEIN_PER_KG)

    return MacroTargets(
        calories=calories,
        protein_g=round_half_up(protein_factor * weight_kg),
        carbs_g=round_half_up(calories * CARB_FRACTION / 4),
        fats_g=round_half_up(calories * FAT_FRACTION / 9),
    )


def build_nutrition_summary(profile: UserProfile, tdee: int) -> dict:
    targets = compute_macro_targets(profile.goal, profile.weight_kg, tdee)
    return {
        "dailyCalories": targets.calories,
        "macronutrients": {
            "protein": targets.protein_g,
            "carbohydrates": targets.carbs_g,
            "fats": targets.fats_g,
        },
        "macroPercentages": targets.percentages,
        "mealFrequency": "5-6 small meals per day",
        "hydration": "3-4 liters of water daily",
    }
