# src/convsim_core/log_config.py
"""
Package-wide logging setup. `setup_logging` is called once when `convsim_core` is
imported; every module then logs through `logging.getLogger(__name__)`.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level=logging.INFO):
    """Routes the root logger to a single stdout handler at `level`."""
    root_logger = logging.getLogger()

    # Replace rather than stack handlers when called more than once.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.debug("Logging configured for ConvSim Core.")
