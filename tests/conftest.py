import logging

import pytest
import structlog

from splitledger.config import get_settings


@pytest.fixture(autouse=True)
def reset_logging_and_settings():
    """Undo what a CLI invocation configures so tests stay independent."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    get_settings.cache_clear()
