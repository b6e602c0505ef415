"""Test configuration and fixtures."""

import logfire
import pytest


@pytest.fixture(autouse=True, scope="session")
def quiet_logfire():
    """Configure Logfire locally so spans are recorded but nothing is sent."""
    logfire.configure(send_to_logfire=False, console=False)
