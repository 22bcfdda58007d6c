from typing import Any, List, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from planner.nutrition_engine import UserProfile, WorkoutPreferences


# ── Workout plan ────────────────────────────────────────────────────────────
class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Required profile
    age: int = Field(..., gt=0)
    height: float = Field(..., gt=0, allow_inf_nan=False, description="cm")
    weight: float = Field(..., gt=0, allow_inf_nan=False, description="kg")
    gender: str
    goal: str = Field(..., description="lose weight | build muscle | strength | endurance")
    fitnessLevel: str = Field(..., description="beginner | intermediate | advanced")

    # Preferences
    workoutDays: int = Field(3, ge=1, le=7, validation_alias=AliasChoices("workoutDays", "daysPerWeek"))
    workoutDuration: int = Field(30, gt=0, validation_alias=AliasChoices("workoutDuration", "sessionMinutes"))
    equipment: str = Field("none", description="none | basic | full")
    injuries: List[str] = Field(default_factory=list)
    preferences: List[str] = Field(default_factory=list)

    @field_validator("injuries", "preferences", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [str(item) for item in value]

    def to_profile(self) -> UserProfile:
        return UserProfile(
            age=self.age,
            height_cm=self.height,
            weight_kg=self.weight,
            gender=self.gender,
            goal=self.goal,
            fitness_level=self.fitnessLevel,
        )

    def to_preferences(self) -> WorkoutPreferences:
        return WorkoutPreferences(
            days_per_week=self.workoutDays,
            session_minutes=self.workoutDuration,
            equipment=self.equipment,
            injuries=list(self.injuries),
            preferences=list(self.preferences),
        )


# ── Standalone nutrition ────────────────────────────────────────────────────
class NutritionRequest(BaseModel):
    age: int = Field(..., gt=0)
    weight: float = Field(..., gt=0, allow_inf_nan=False)
    height: float = Field(..., gt=0, allow_inf_nan=False)
    bodyType: str = Field(..., min_length=1, description="ectomorph | mesomorph | endomorph")
    activityLevel: Literal["sedentary", "light", "moderate", "active", "very_active"]
    gender: str = Field(..., min_length=1)
    goals: Literal["weight_loss", "maintenance", "muscle_gain"]
