# tests/test_log_config.py
import logging
import sys

import pytest

from convsim_core.log_config import LOG_FORMAT, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_repeated_setup_keeps_a_single_stdout_handler(restore_root_logger):
    setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)
    root = restore_root_logger
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stdout
    assert root.handlers[0].formatter._fmt == LOG_FORMAT
    assert root.level == logging.DEBUG
