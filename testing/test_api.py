"""
Tests for the schedule API routes.

Usage:
    pytest testing/test_api.py
"""

import csv
import io
import time

import jwt
import pytest
from fastapi.testclient import TestClient

from shootplan.config import get_settings
from shootplan.api.routes.schedules import get_location_resolver, get_schedule_repository
from shootplan.main import app
from shootplan.scheduling.resolver import StaticLocationResolver
from testing.sample_inputs import SAMPLE_PROJECT_ID, get_sample_resolutions, get_sample_scenes

JWT_SECRET = "test-secret-with-at-least-32-bytes!!"

CAFE_SCENES = [
    {"scene": 1, "onScreenDurationText": "2분", "location": "카페"},
    {"scene": 2, "onScreenDurationText": "3분", "location": "카페"},
]


class FakeScheduleRepository:
    """In-memory stand-in for the Supabase schedules table."""

    def __init__(self):
        self.rows = {}
        self.saves = 0
        self.deletes = 0

    def get_cached(self, project_id, fingerprint):
        schedule = self.rows.get(project_id)
        if schedule and schedule.fingerprint == fingerprint:
            return schedule
        return None

    def save(self, project_id, schedule):
        self.saves += 1
        self.rows[project_id] = schedule
        return {"project_id": project_id}

    def delete(self, project_id):
        self.deletes += 1
        self.rows.pop(project_id, None)


@pytest.fixture
def repo():
    return FakeScheduleRepository()


@pytest.fixture
def client(repo, monkeypatch):
    monkeypatch.delenv("LOCATION_REGISTRY_URL", raising=False)
    app.dependency_overrides[get_schedule_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def jwt_secret(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", JWT_SECRET)
    get_settings.cache_clear()


def _token(secret=JWT_SECRET, **claims):
    payload = {"sub": "user-1", "aud": "authenticated", "exp": int(time.time()) + 600, **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["message"] == "Shoot Plan API"


def test_generate_schedule(client):
    response = client.post("/api/schedules/generate", json={"scenes": CAFE_SCENES})

    assert response.status_code == 200
    data = response.json()
    assert data["total_days"] == 1
    assert [s["scene_number"] for s in data["days"][0]["scenes"]] == [1, 2]
    assert data["days"][0]["timeline"][0]["activity"] == "집합"


def test_generate_with_registry_override(client):
    app.dependency_overrides[get_location_resolver] = lambda: StaticLocationResolver(get_sample_resolutions())

    response = client.post(
        "/api/schedules/generate",
        json={"project_id": SAMPLE_PROJECT_ID, "scenes": get_sample_scenes(), "start_date": "2026-03-02"},
    )

    data = response.json()
    assert data["total_days"] == 2
    assert [day["date"] for day in data["days"]] == ["2026-03-02", "2026-03-03"]
    assert data["days"][0]["location_group_id"] == "grp_cafe_street"


def test_empty_scene_list(client):
    data = client.post("/api/schedules/generate", json={"scenes": []}).json()

    assert data["total_days"] == 0
    assert data["days"] == []
    assert data["message"] == "촬영할 씬이 없습니다."


def test_rejects_non_object_scenes(client):
    response = client.post("/api/schedules/generate", json={"scenes": [1, 2]})
    assert response.status_code == 422


def test_cached_schedule_is_reused(client, repo):
    body = {"project_id": SAMPLE_PROJECT_ID, "scenes": CAFE_SCENES}

    first = client.post("/api/schedules/generate", json=body).json()
    second = client.post("/api/schedules/generate", json=body).json()

    assert repo.saves == 1
    assert first == second

    changed = {**body, "scenes": [CAFE_SCENES[0]]}
    assert client.post("/api/schedules/generate", json=changed).json()["total_scenes"] == 1
    assert repo.saves == 2


def test_cache_skipped_on_request(client, repo):
    body = {"project_id": SAMPLE_PROJECT_ID, "scenes": CAFE_SCENES, "use_cache": False}
    client.post("/api/schedules/generate", json=body)
    assert repo.saves == 0


def test_breakdown(client):
    data = client.post("/api/schedules/breakdown", json={"scenes": get_sample_scenes()}).json()

    assert [ref["scene_number"] for ref in data["actors"]["민수"]] == [1, 3, 4]
    assert set(data) == {
        "locations", "actors", "time_slots", "equipment", "crew", "props", "costumes", "cameras",
    }


def test_schedule_csv_export(client):
    response = client.post("/api/schedules/export/schedule.csv", json={"scenes": CAFE_SCENES})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "schedule.csv" in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][0] == "Day"
    assert rows[1][3] == "1, 2"


def test_breakdown_csv_export(client):
    response = client.post("/api/schedules/export/breakdown.csv", json={"scenes": CAFE_SCENES})

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["Category", "Item", "Scenes", "Count"]
    assert ["Location", "카페", "1, 2", "2"] in rows


def test_valid_token_accepted(client, jwt_secret):
    response = client.post(
        "/api/schedules/generate",
        json={"scenes": CAFE_SCENES},
        headers={"Authorization": f"Bearer {_token()}"},
    )
    assert response.status_code == 200


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        _token(secret="another-secret-with-at-least-32-bytes"),
        _token(exp=int(time.time()) - 60),
        _token(aud="anon"),
    ],
)
def test_invalid_token_rejected(client, jwt_secret, token):
    response = client.post(
        "/api/schedules/generate",
        json={"scenes": CAFE_SCENES},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


def test_cached_schedule_dropped_when_nothing_left(client, repo):
    body = {"project_id": SAMPLE_PROJECT_ID, "scenes": CAFE_SCENES}
    client.post("/api/schedules/generate", json=body)
    assert SAMPLE_PROJECT_ID in repo.rows

    data = client.post("/api/schedules/generate", json={**body, "scenes": []}).json()

    assert data["total_days"] == 0
    assert repo.deletes == 1
    assert SAMPLE_PROJECT_ID not in repo.rows
    assert repo.saves == 1


@pytest.mark.parametrize("path", ["/api/schedules/generate", "/api/schedules/export/schedule.csv"])
def test_generation_failure_returns_500(client, monkeypatch, path):
    async def failing_generate(*args, **kwargs):
        raise RuntimeError("registry exploded")

    monkeypatch.setattr("shootplan.api.routes.schedules.generate_schedule", failing_generate)

    response = client.post(path, json={"scenes": CAFE_SCENES})

    assert response.status_code == 500
    assert "registry exploded" in response.json()["detail"]
