"""
Shared test fixtures
"""

import sys
import pytest
from loguru import logger

from proxy_deploy.utils.logging_config import configure_logging


@pytest.fixture
def log_messages():
    """Capture loguru output"""
    messages = []
    handler_id = logger.add(messages.append, format="{level} {message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def stderr_logging(capsys):
    """Route loguru to the captured stderr, as the deploy script configures it"""
    configure_logging("DEBUG", "")
    yield
    logger.remove()
    logger.add(sys.__stderr__)
