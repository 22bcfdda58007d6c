from fastapi.testclient import TestClient

import app.main
import app.routes
from app.main import create_app
from app.progress_store import ProgressStore

PROFILE = {
    "age": 30,
    "height": 175,
    "weight": 80,
    "gender": "male",
    "goal": "lose weight",
    "fitnessLevel": "beginner",
}


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


# ---------- /plan ----------
def test_plan_with_defaults(client):
    response = client.post("/plan", json=PROFILE)
    assert response.status_code == 200
    body = response.json()

    assert set(body) == {"userProfile", "planDetails", "weeklySchedule", "nutrition", "recommendations"}
    assert body["planDetails"]["daysPerWeek"] == 3
    assert body["planDetails"]["sessionDuration"] == 30
    assert body["planDetails"]["equipment"] == "none"
    assert body["planDetails"]["goal"] == "lose weight"
    assert body["userProfile"]["tdee"] == 2099
    assert body["nutrition"]["dailyCalories"] == body["userProfile"]["tdee"] - 500
    assert len(body["weeklySchedule"]) == 3
    for day in body["weeklySchedule"]:
        assert len(day["exercises"]) <= 3


def test_plan_is_reproducible_with_seed(client):
    prefs = dict(PROFILE, goal="build muscle", equipment="full", workoutDays=4, workoutDuration=60)
    first = client.post("/plan", json=prefs).json()
    second = client.post("/plan", json=prefs).json()
    assert first["weeklySchedule"] == second["weeklySchedule"]


def test_plan_accepts_alternate_names_and_numeric_strings(client):
    payload = dict(PROFILE, age="30", height="175", daysPerWeek=5, sessionMinutes=90, equipment="full")
    body = client.post("/plan", json=payload).json()
    assert body["planDetails"]["daysPerWeek"] == 5
    assert body["planDetails"]["sessionDuration"] == 90
    assert all(len(day["exercises"]) <= 5 for day in body["weeklySchedule"])


def test_plan_ignores_non_list_injuries(client):
    body = client.post("/plan", json=dict(PROFILE, injuries="knee")).json()
    assert "No injury considerations" in body["recommendations"]


def test_plan_missing_fields(client):
    payload = {k: v for k, v in PROFILE.items() if k not in ("age", "goal")}
    response = client.post("/plan", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Missing required fields"
    assert sorted(body["details"]) == ["age is required", "goal is required"]


def test_plan_non_numeric_fields(client):
    response = client.post("/plan", json=dict(PROFILE, age="thirty", weight="heavy"))
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid data types"
    assert sorted(body["details"]) == ["age must be a number", "weight must be a number"]


def test_plan_rejects_infinite_measurements(client):
    response = client.post("/plan", json=dict(PROFILE, weight="Infinity"))
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid data types"
    assert body["details"] == ["weight must be a number"]


def test_plan_days_out_of_range(client):
    response = client.post("/plan", json=dict(PROFILE, workoutDays=8))
    assert response.status_code == 400


def test_plan_internal_error(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("catalog exploded")

    monkeypatch.setattr(app.routes, "generate_workout_plan", boom)
    response = client.post("/plan", json=PROFILE)
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_internal_error_message_hidden_in_production(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("catalog exploded")

    monkeypatch.setattr(app.routes, "generate_workout_plan", boom)
    monkeypatch.setattr(app.routes, "EXPOSE_ERROR_DETAILS", False)
    response = client.post("/plan", json=PROFILE)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


# ---------- /nutrition ----------
NUTRITION = {
    "age": 30,
    "weight": 80,
    "height": 175,
    "bodyType": "mesomorph",
    "activityLevel": "moderate",
    "gender": "male",
    "goals": "maintenance",
}


def test_nutrition(client):
    response = client.post("/nutrition", json=NUTRITION)
    assert response.status_code == 200
    body = response.json()
    assert body["calories"] == 2836
    assert body["protein"] == 213
    assert body["carbsPercentage"] == 40
    assert len(body["meals"]) == 4
    assert len(body["tips"]) == 8


def test_nutrition_missing_field(client):
    payload = {k: v for k, v in NUTRITION.items() if k != "bodyType"}
    response = client.post("/nutrition", json=payload)
    assert response.status_code == 400
    assert response.json()["details"] == ["bodyType is required"]


def test_nutrition_unknown_activity_level(client):
    response = client.post("/nutrition", json=dict(NUTRITION, activityLevel="couch"))
    assert response.status_code == 400


def test_nutrition_rejects_infinite_height(client):
    response = client.post("/nutrition", json=dict(NUTRITION, height="Infinity"))
    assert response.status_code == 400
    assert response.json()["details"] == ["height must be a number"]


# ---------- /progress ----------
def test_progress_flow(client):
    assert client.get("/progress").json() == []

    response = client.post("/progress", json={})
    assert response.status_code == 400
    assert client.get("/progress").json() == []

    response = client.post("/progress", json={"weight": 70})
    assert response.status_code == 201
    created = response.json()
    assert created["weight"] == 70
    assert created["hips"] is None

    response = client.post("/progress/demo")
    assert response.json() == {"message": "Demo data generated", "count": 31}
    entries = client.get("/progress").json()
    assert len(entries) == 31
    assert all(e["hips"] is None for e in entries)

    assert len(client.get("/progress", params={"range": "week"}).json()) == 7
    assert len(client.get("/progress", params={"range": "forever"}).json()) == 31

    response = client.delete("/progress/reset")
    assert response.status_code == 200
    assert client.get("/progress").json() == []


def test_progress_without_body(client):
    assert client.post("/progress").status_code == 400


def test_apps_have_independent_stores():
    first = TestClient(create_app(progress_store=ProgressStore()))
    second = TestClient(create_app(progress_store=ProgressStore()))
    first.post("/progress", json={"weight": 70})
    assert len(first.get("/progress").json()) == 1
    assert second.get("/progress").json() == []


# ---------- /equipment-suggestions ----------
def test_equipment_suggestions(client):
    response = client.post("/equipment-suggestions", json={"equipment": ["dumbbells", "nonexistent-tag"]})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [e["name"] for e in body["exercises"]] == ["Dumbbell Rows", "Goblet Squats"]


def test_equipment_suggestions_fallback(client):
    body = client.post("/equipment-suggestions", json={"equipment": ["nonexistent-tag"]}).json()
    assert len(body["exercises"]) == 4


def test_equipment_suggestions_invalid(client):
    assert client.post("/equipment-suggestions", json={}).status_code == 400
    response = client.post("/equipment-suggestions", json={"equipment": "dumbbells"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid equipment list"


# ---------- unhandled errors ----------
class BrokenStore(ProgressStore):
    def list(self, range_=None):
        raise RuntimeError("store unavailable")


def test_progress_unhandled_error(monkeypatch):
    monkeypatch.setattr(app.main, "EXPOSE_ERROR_DETAILS", False)
    client = TestClient(create_app(progress_store=BrokenStore()), raise_server_exceptions=False)
    response = client.get("/progress")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_progress_oversized_metric_is_stored_as_null(client):
    response = client.post("/progress", json={"weight": 10**400, "waist": 80})
    assert response.status_code == 201
    assert response.json()["weight"] is None
    assert response.json()["waist"] == 80
