"""Pytest fixtures for the task tracker tests."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from hypertask.config import Settings
from hypertask.main import create_app
from hypertask.repository import TaskRepository


class FakeClock:
    """Hands out strictly increasing timestamps, one second apart."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(clock: FakeClock) -> TaskRepository:
    """An empty repository with a deterministic clock."""
    return TaskRepository(clock=clock)


@pytest.fixture
def seeded_repository(clock: FakeClock) -> TaskRepository:
    repo = TaskRepository(clock=clock)
    repo.seed()
    return repo


@pytest.fixture
def client(repository: TaskRepository) -> TestClient:
    """Create a test client over an empty repository."""
    return TestClient(create_app(Settings(seed=False), repository=repository))


@pytest.fixture
def seeded_client() -> TestClient:
    """Create a test client over a freshly seeded app."""
    return TestClient(create_app(Settings(seed=True)))
