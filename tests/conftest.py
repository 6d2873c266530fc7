"""
Shared fixtures: an authenticated test client and stage/guide builders.

The app is never started with its lifespan, so no MongoDB connection is made;
tests patch the collection functions they touch.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

import pytest
from fastapi.testclient import TestClient

from krishi_setu.core.security import verify_jwt
from krishi_setu.main import app
from krishi_setu.models.cultivation_guide import CultivationGuide, Stage, StageStatus, Task

FARMER_ID = "farmer-1"


@pytest.fixture
def user_payload():
    return {"sub": FARMER_ID, "role": "farmer", "language": "hi"}


@pytest.fixture
def client(user_payload):
    app.dependency_overrides[verify_jwt] = lambda: user_payload
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_stage():
    def _make(name="Stage", status=StageStatus.UPCOMING, tasks=()):
        return Stage(
            name=name,
            status=status,
            duration="Day 1-5",
            ai_instruction=f"Instructions for {name}",
            tasks=[
                task if isinstance(task, Task) else Task(text=task[0], completed=task[1])
                for task in tasks
            ],
        )

    return _make


@pytest.fixture
def three_stages(make_stage):
    return [
        make_stage("Land Preparation", StageStatus.ACTIVE, [("Till soil", False), ("Add manure", True)]),
        make_stage("Sowing", StageStatus.UPCOMING, [("Plant seeds", False)]),
        make_stage("Harvest", StageStatus.UPCOMING, [("Cut crop", False)]),
    ]


@pytest.fixture
def make_guide(three_stages):
    def _make(stages=None, guide_id="guide-1"):
        return CultivationGuide(
            id=guide_id,
            farmer_id=FARMER_ID,
            crop="Wheat",
            variety="HD-3226",
            estimated_duration_days=120,
            estimated_expenses=25000,
            stages=three_stages if stages is None else stages,
        )

    return _make
