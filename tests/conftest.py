"""
Shared fixtures: the application is built around an injected storage backend.
"""
import pytest
from fastapi.testclient import TestClient

from main import create_app
from tests.stubs import FailingStorage, RecordingStorage


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def client(storage, monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    return TestClient(create_app(storage=storage))


@pytest.fixture
def failing_client():
    return TestClient(create_app(storage=FailingStorage()))


@pytest.fixture
def ana():
    return {"nome": "Ana", "telefone": 5551234, "endereco": "Rua A"}
