"""Shared test fixtures for the Vultr client test suite."""

import pytest
from pathlib import Path

from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env")

# Reset the process-wide client so set_token() tests start clean
import vultr.client as client_module

from vultr.config import ClientConfig
from vultr.engine import RequestEngine
from vultr.client import VultrClient


# =============================================================================
# CONSTANTS
# =============================================================================

BASE_URL = "https://api.test.vultr.local"
TEST_API_KEY = "abc123"


def url(path: str) -> str:
    """Absolute URL the engine will hit for a path."""
    return f"{BASE_URL}{path}"


# =============================================================================
# CLIENT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_default_client():
    """Ensure no process-wide client leaks between tests."""
    client_module._default_client = None
    yield
    if client_module._default_client is not None:
        client_module._default_client.close()
    client_module._default_client = None


@pytest.fixture
def config() -> ClientConfig:
    """Config pointing at the fake API origin."""
    return ClientConfig(base_url=BASE_URL, max_workers=4)


@pytest.fixture
def engine(config):
    """RequestEngine against the fake origin."""
    engine = RequestEngine(config)
    yield engine
    engine.close()


@pytest.fixture
def client(config):
    """VultrClient keyed with the test API key."""
    client = VultrClient(TEST_API_KEY, config)
    yield client
    client.close()
