import logging
from collections.abc import Iterator

import pytest

from copilot_chat.logging import logger, setup_logger


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logger_installs_a_single_handler() -> None:
    setup_logger(level=logging.DEBUG)
    setup_logger(level=logging.DEBUG)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_setup_logger_with_custom_handler() -> None:
    handler = logging.NullHandler()

    setup_logger(level=logging.WARNING, propagate=True, handler=handler)

    assert logger.handlers == [handler]
    assert logger.propagate is True
