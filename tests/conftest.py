"""Pytest configuration for the contact backend tests."""

import pytest

from apps.core import tasks
from apps.core.store import connection_manager


@pytest.fixture(autouse=True)
def _drain_side_channel():
    """Let queued notifications finish so they cannot leak into the next test."""
    yield
    tasks.shutdown_executor(wait=True)


@pytest.fixture(autouse=True)
def _reset_store_state():
    """Each test starts with a store that has not been connected yet."""
    connection_manager.reset()
    yield
    connection_manager.reset()


@pytest.fixture
def valid_payload() -> dict:
    """A contact payload that passes validation."""
    return {
        "name": "Amina Otieno",
        "email": "amina@example.com",
        "company": "Otieno Traders",
        "service": "E-Commerce Development",
        "message": "We need an online shop for our hardware business.",
    }
