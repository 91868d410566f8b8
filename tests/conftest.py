# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from catalog_service.config import ServiceSettings
from catalog_service.main import create_app

ALLOWED_ORIGIN = "http://localhost:5273"


class FakeClock:
    """Wall clock and monotonic clock that only move when told to."""

    def __init__(self, start=datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.start = start
        self.elapsed = 0.0
        self.now_calls = 0

    def now(self) -> datetime:
        self.now_calls += 1
        return self.start + timedelta(seconds=self.elapsed)

    def monotonic(self) -> float:
        return self.elapsed

    def advance(self, seconds: float) -> None:
        self.elapsed += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(clock):
    return create_app(ServiceSettings(), clock=clock.now, monotonic=clock.monotonic)


@pytest.fixture
def client(app):
    return TestClient(app)
