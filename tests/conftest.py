"""Root pytest configuration for all tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def app_logger_level():
    """Let caplog see debug records from the application namespace."""
    app_logger = logging.getLogger("src")
    previous = app_logger.level
    app_logger.setLevel(logging.DEBUG)
    yield
    app_logger.setLevel(previous)
