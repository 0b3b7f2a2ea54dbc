import pytest
from fastapi.testclient import TestClient

from services.scribe_service.main import app
from services.scribe_service.src.routers.scribe import get_generation_client


class FakeGenerationClient:
    """Stands in for GenerationClient: returns queued replies or raises queued errors."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def generate(self, prompt, options, correlation_id=None):
        self.calls.append({"prompt": prompt, "options": options, "correlation_id": correlation_id})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_backend():
    return FakeGenerationClient()


@pytest.fixture
def client(fake_backend):
    app.dependency_overrides[get_generation_client] = lambda: fake_backend
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client():
    app.dependency_overrides[get_generation_client] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
