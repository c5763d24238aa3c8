"""Pytest configuration and fixtures."""

import os
from typing import Callable

import httpx
import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["SWAPKIT_API_KEY"] = "test-api-key"
os.environ["SWAPKIT_API_URL"] = "https://swapkit.test"
os.environ["INTEGRATION_TEST_DELAY"] = "0"
os.environ["DEBUG"] = "true"

from swapquote.config import Settings, get_settings
from swapquote.routing.swapkit import SwapKitClient


@pytest.fixture
def settings() -> Settings:
    """Fresh settings built from the test environment."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def make_client(settings) -> Callable[..., SwapKitClient]:
    """Build a SwapKit client whose requests are answered by a handler."""

    def factory(handler) -> SwapKitClient:
        return SwapKitClient.from_settings(settings, transport=httpx.MockTransport(handler))

    return factory
