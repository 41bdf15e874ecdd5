import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
