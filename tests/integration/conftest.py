"""Shared fixtures for integration tests.

Modules here skip unless RUN_TENANTKIT_NETWORK_TESTS=1 and read credentials
from the environment or a ``.env`` file.
"""

import pytest

from tenantkit.bulk import BulkSettings, ConfigurationError, load_settings


@pytest.fixture
def live_settings() -> BulkSettings:
    try:
        return load_settings()
    except ConfigurationError as e:
        pytest.skip(f"No live credentials: {e}")
