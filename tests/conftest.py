"""Shared pytest fixtures."""

import pytest

from fetchc import AsyncMemoryStore
from fetchc.demo import ShipQuery


@pytest.fixture
def bucket_store() -> AsyncMemoryStore:
    """Create a fresh store holding one container's bucket list."""
    return AsyncMemoryStore({"ship1-containerA": [10, 20]})


@pytest.fixture
def query() -> ShipQuery:
    return ShipQuery(ship_id="ship1", container_id="containerA")


@pytest.fixture
def missing_query() -> ShipQuery:
    return ShipQuery(ship_id="ship1", container_id="missing")
