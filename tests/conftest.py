"""Configuration for pytest."""

import io
import sys
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest
import requests

# Add the src directory to the Python path automatically for all tests
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
sys.path.insert(0, str(src_dir))

from gravity_client.config import ClientConfig  # noqa: E402

BASE_URL = "http://engine.test/grrec-Customer-war/WebshopServlet"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "network: mark test as binding a local port"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


def make_response(status_code: int = 200, body: bytes = b"") -> requests.Response:
    """Build a real ``requests.Response`` streaming ``body``."""
    response = requests.Response()
    response.status_code = status_code
    response.raw = io.BytesIO(body)
    return response


@pytest.fixture
def response_factory() -> Callable[..., requests.Response]:
    """Factory for canned HTTP responses."""
    return make_response


@pytest.fixture
def config() -> ClientConfig:
    """Plain HTTP configuration without credentials."""
    return ClientConfig(remote_url=BASE_URL)


@pytest.fixture
def session() -> MagicMock:
    """Session mock answering every request with an empty 200."""
    mock_session = MagicMock(spec=requests.Session)
    mock_session.request.return_value = make_response(200, b"")
    return mock_session
