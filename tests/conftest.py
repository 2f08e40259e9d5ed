"""Pytest fixtures shared across the test suite."""

import pytest
from fastapi.testclient import TestClient

from app import app, get_ledger
from ledger import Ledger
from schemas import ObservationIn


@pytest.fixture
def ledger() -> Ledger:
    """A fresh ledger per test."""
    return Ledger(difficulty=2)


@pytest.fixture
def client(ledger: Ledger):
    """Test client bound to the per-test ledger."""
    app.dependency_overrides[get_ledger] = lambda: ledger
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def observation_body() -> dict:
    return {
        "productId": "P1",
        "temp": 4,
        "humidity": 50,
        "pH": 6.5,
        "bacterialCount": 0,
        "location": "X",
    }


@pytest.fixture
def observation(observation_body: dict) -> ObservationIn:
    return ObservationIn(**observation_body)
