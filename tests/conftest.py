"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that might load settings so
a developer's local .env does not leak into the tests.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.pop("BASE_URL", None)
os.environ.pop("VERCEL_URL", None)
os.environ.setdefault("FORTUNE_COOLDOWN_HOURS", "24")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import random
from typing import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.adapters.fortune_store.in_memory import InMemoryFortuneStore
from app.core.app_factory import create_app
from app.services.fortune_service import FortuneService

HOUR = 3600.0


class FakeTime:
    """Deterministic clock used to simulate the passage of time."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds

    def advance_hours(self, hours: float) -> None:
        self.advance(hours * HOUR)


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def store(fake_time: FakeTime) -> InMemoryFortuneStore:
    return InMemoryFortuneStore(cooldown_hours=24, clock=fake_time.time)


@pytest.fixture
def picker() -> Callable[[], str]:
    return lambda: "A test fortune."


@pytest.fixture
def service(
    store: InMemoryFortuneStore,
    fake_time: FakeTime,
    picker: Callable[[], str],
) -> FortuneService:
    return FortuneService(store, picker, clock=fake_time.time, rng=random.Random(7))


@pytest.fixture
def app(service: FortuneService) -> FastAPI:
    return create_app(service=service, setup_logging=False)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
