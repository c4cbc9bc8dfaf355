"""
Pytest configuration and fixtures for all tests.

Provides shared setup/teardown for logging.

License: MIT
"""

import pytest
from rankmerge_core.logging_service import LoggingService


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reset LoggingService state before each test."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    LoggingService.reset()
