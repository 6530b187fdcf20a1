import logging
import sys
from typing import Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def setup_logging(level: Union[int, str] = logging.INFO):
    """
    Sets up centralized logging configuration for the application.

    Configures the root logger with a StreamHandler that outputs to stderr
    using a standard format including timestamp, logger name, level,
    filename, line number, and the message.

    Args:
        level: The minimum logging level to capture, either a logging constant
               (e.g., logging.INFO) or its name (e.g., "DEBUG").
    """
    if isinstance(level, str):
        level_name = level
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level_name}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Prevent adding duplicate handlers if setup_logging is called multiple times
    if not any(getattr(h, "_cboe_snapshot_handler", False) for h in root_logger.handlers):
        formatter = logging.Formatter(LOG_FORMAT)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler._cboe_snapshot_handler = True

        root_logger.addHandler(handler)
    else:
        for handler in root_logger.handlers:
            if getattr(handler, "_cboe_snapshot_handler", False):
                handler.setLevel(level)

    # SQL echo is controlled by the engine, keep the pool quiet
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)

    root_logger.debug("Centralized logging configured.")
