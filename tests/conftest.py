import os
import pytest

os.environ["NUMBA_DISABLE_JIT"] = "0"

from loguru import logger


@pytest.fixture
def log_messages():
    messages = []
    logger.enable("fenwick_tree")
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
    logger.disable("fenwick_tree")
