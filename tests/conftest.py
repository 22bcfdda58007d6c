from datetime import datetime, timedelta, timezone

import numpy as np
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.progress_store import ProgressStore
from planner.nutrition_engine import UserProfile, WorkoutPreferences

BASE_TIME = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns ``now`` and then moves it forward by ``step``."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return ProgressStore(clock=clock, rng=np.random.default_rng(0))


@pytest.fixture
def client(store):
    return TestClient(create_app(progress_store=store, plan_seed=42))


@pytest.fixture
def male_profile():
    return UserProfile(
        age=30,
        height_cm=175,
        weight_kg=80,
        gender="male",
        goal="lose weight",
        fitness_level="beginner",
    )


@pytest.fixture
def default_prefs():
    return WorkoutPreferences()
