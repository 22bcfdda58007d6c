"""
FitPlan API routes.

  POST   /plan                    – weekly workout plan + nutrition targets
  POST   /nutrition               – standalone nutrition targets (body type based)
  GET    /progress?range=         – progress entries, newest first
  POST   /progress                – record a progress entry
  DELETE /progress/reset          – clear the progress log
  POST   /progress/demo           – replace the progress log with demo data
  POST   /equipment-suggestions   – exercise ideas for a set of equipment
"""

import logging
from typing import Any, Dict, Optional

import numpy as np
from fastapi import APIRouter, Body, Depends, Request

from app.config import EXPOSE_ERROR_DETAILS
from app.progress_store import ProgressStore
from app.schemas import NutritionRequest, PlanRequest
from planner.equipment_advisor import suggest_exercises
from planner.workout_engine import generate_workout_plan
from utils.errors import FitPlanError, InternalError
from utils.nutrition_calculator import NutritionCalculator

logger = logging.getLogger(__name__)

router = APIRouter()
nutrition_calc = NutritionCalculator()


# ── Dependencies ────────────────────────────────────────────────────────────
def get_progress_store(request: Request) -> ProgressStore:
    return request.app.state.progress_store


def get_plan_rng(request: Request) -> np.random.Generator:
    """Fresh generator per request; seeded when the app was given a seed."""
    return np.random.default_rng(request.app.state.plan_seed)


def _internal_error(message: str, exc: Exception) -> InternalError:
    details = [str(exc)] if EXPOSE_ERROR_DETAILS else None
    return InternalError(message, details)


# ── Workout plan ────────────────────────────────────────────────────────────
@router.post("/plan")
async def create_plan(req: PlanRequest, rng: np.random.Generator = Depends(get_plan_rng)):
    try:
        return generate_workout_plan(req.to_profile(), req.to_preferences(), rng=rng)
    except FitPlanError:
        raise
    except Exception as e:
        logger.exception("Error generating workout plan")
        raise _internal_error("Internal server error", e) from e


# ── Standalone nutrition ────────────────────────────────────────────────────
@router.post("/nutrition")
async def calculate_nutrition(req: NutritionRequest):
    try:
        return nutrition_calc.get_nutrition_plan(
            age=req.age,
            weight_kg=req.weight,
            height_cm=req.height,
            body_type=req.bodyType,
            activity_level=req.activityLevel,
            gender=req.gender,
            goal=req.goals,
        )
    except FitPlanError:
        raise
    except Exception as e:
        logger.exception("Error calculating nutrition")
        raise _internal_error("Internal server error", e) from e


# ── Progress log ────────────────────────────────────────────────────────────
@router.get("/progress")
async def list_progress(range: Optional[str] = None, store: ProgressStore = Depends(get_progress_store)):
    return [entry.to_dict() for entry in store.list(range)]


@router.post("/progress", status_code=201)
async def add_progress(
    payload: Optional[Dict[str, Any]] = Body(None),
    store: ProgressStore = Depends(get_progress_store),
):
    return store.append(payload or {}).to_dict()


@router.delete("/progress/reset")
async def reset_progress(store: ProgressStore = Depends(get_progress_store)):
    store.reset()
    return {"message": "Progress data reset"}


@router.post("/progress/demo")
async def demo_progress(store: ProgressStore = Depends(get_progress_store)):
    count = store.generate_demo()
    return {"message": "Demo data generated", "count": count}


# ── Equipment suggestions ───────────────────────────────────────────────────
@router.post("/equipment-suggestions")
async def equipment_suggestions(payload: Optional[Dict[str, Any]] = Body(None)):
    equipment = (payload or {}).get("equipment")
    return {"success": True, "exercises": suggest_exercises(equipment)}
