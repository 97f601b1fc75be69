"""
Shared test configuration and fixtures.
"""
from unittest.mock import AsyncMock

import httpx
import pytest


@pytest.fixture
def mock_client():
    """Mock httpx.AsyncClient for provider tests"""
    return AsyncMock(spec=httpx.AsyncClient)


def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
