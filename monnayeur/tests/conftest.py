"""
Test configuration.

Unit tests never read a developer's .env or keypair: settings are
forced to the test environment and reset around each test.
"""

import os

import pytest

os.environ["ENV"] = "test"

from monnayeur.config.settings import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reset the settings singleton around each test."""
    reset_settings()
    yield
    reset_settings()
