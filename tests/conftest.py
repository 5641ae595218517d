"""
Shared pytest fixtures for CrowdGuard tests.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from crowdguard.core.config import Settings
from tests.factories import FakeClock


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "CROWDGUARD_TIMEZONE": "UTC",
        "CROWDGUARD_TTS_PROVIDER": "log",
        "CROWDGUARD_LOG_LEVEL": "WARNING",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def settings(mock_env):
    """Fresh Settings built from the test environment."""
    return Settings()


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for datetime helpers."""
    mock = MagicMock()
    mock.local_timezone = "UTC"
    with patch("crowdguard.utils.datetime_utils.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def fake_clock():
    return FakeClock()
