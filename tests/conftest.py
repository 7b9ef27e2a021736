"""
Shared test fixtures.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging() once a test is done."""
    yield
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)
