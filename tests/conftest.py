# tests/conftest.py

"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from factories import BackendData, create_backend
from httpx import ASGITransport

from holdemstats.store import StatisticsEffects, StatisticsStore
from holdemstats.transport import HttpxFetcher

TEST_BASE_URL = "http://test"


@pytest.fixture
def backend() -> BackendData:
    """Fixture providing the fake API's data, empty at the start of a test."""
    return BackendData()


@pytest.fixture
async def fetcher(backend: BackendData) -> AsyncGenerator[HttpxFetcher, None]:
    """Fixture providing an HttpxFetcher wired to the fake API in-process."""
    transport = ASGITransport(create_backend(backend))
    async with HttpxFetcher(TEST_BASE_URL, transport=transport) as fetcher:
        yield fetcher


@pytest.fixture
def store() -> StatisticsStore:
    return StatisticsStore()


@pytest.fixture
def effects(store: StatisticsStore, fetcher: HttpxFetcher) -> StatisticsEffects:
    return StatisticsEffects(store, fetcher)
