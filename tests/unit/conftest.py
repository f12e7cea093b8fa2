"""Pytest configuration and fixtures for unit tests."""

import pytest
from fastapi.testclient import TestClient

from src.main import create_app
from tests.unit.mocks import InMemoryTaskStore


@pytest.fixture
def task_store():
    """Provides a fresh InMemoryTaskStore for each test."""
    return InMemoryTaskStore()


@pytest.fixture
def client(task_store: InMemoryTaskStore) -> TestClient:
    """Create a test client for a FastAPI app serving the in-memory store."""
    return TestClient(create_app(store=task_store))


@pytest.fixture
def sample_task_payload():
    """Returns a complete create payload."""
    return {
        "task": "Buy milk",
        "status": "In Progress",
        "priority": "High",
        "dueDate": "2024-01-01",
        "comments": "2% fat",
    }
