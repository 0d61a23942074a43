"""Shared fixtures for the Smart Farm test suite."""

from __future__ import annotations

import io
import json
from typing import Any

import numpy as np
import pytest
from numpy.random import Generator

from smartfarm.simulation.config import SimulationConfig
from smartfarm.simulation.engine import SimulationEngine
from smartfarm.simulation.state import FarmState


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default game config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def engine(default_config: SimulationConfig) -> SimulationEngine:
    """A fresh engine on day 1."""
    return SimulationEngine(config=default_config)


@pytest.fixture
def fresh_state() -> FarmState:
    """Day-1 state with an empty 6x6 grid."""
    return FarmState()


class FakeBedrock:
    """Stands in for a ``bedrock-runtime`` client.

    Returns ``payload`` JSON-encoded, or raises ``error`` when set.
    ``response`` replaces the whole reply when given.
    """

    def __init__(
        self,
        payload: Any = None,
        error: Exception | None = None,
        response: Any = None,
    ) -> None:
        self.payload = payload
        self.error = error
        self.response = response
        self.calls: list[dict[str, Any]] = []

    def invoke_model(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        if isinstance(self.payload, bytes):
            raw = self.payload
        else:
            raw = json.dumps(self.payload).encode()
        return {"body": io.BytesIO(raw)}


@pytest.fixture
def make_bedrock() -> type[FakeBedrock]:
    """The fake client class, for tests that need a custom reply."""
    return FakeBedrock


@pytest.fixture
def fake_bedrock() -> FakeBedrock:
    """A client that answers with one advice message."""
    return FakeBedrock(
        payload={"messages": [{"role": "assistant", "content": "Plant wheat."}]},
    )
