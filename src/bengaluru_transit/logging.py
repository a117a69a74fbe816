"""
Opt-in handler setup for the ``bengaluru_transit`` loggers.

Library modules only create loggers via ``logging.getLogger(__name__)``.
Handlers are attached here, and only when the caller asks for them, either
through ``ClientConfig.log_level`` or by calling ``setup_logger`` directly.
"""

import logging
import os
from pathlib import Path

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default)


def setup_logger(name: str = "bengaluru_transit", log_dir: str | None = None, log_file: str = "transit.log",
                 console_level: str = "INFO", file_level: str = "DEBUG") -> logging.Logger:
    """
    Attach a console handler and, when log_dir is given, a file handler.

    Calling again for the same logger re-applies ``console_level`` to the
    existing console handler instead of adding another one, and a log file
    is only attached once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # Capture all levels, handlers will filter

    # FileHandler subclasses StreamHandler, so match the exact type
    consoles = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    if consoles:
        for handler in consoles:
            handler.setLevel(_level(console_level, logging.INFO))
    else:
        ch = logging.StreamHandler()
        ch.setLevel(_level(console_level, logging.INFO))
        ch.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(ch)

    if log_dir is not None:
        log_path = os.path.abspath(Path(log_dir) / log_file)
        attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not attached:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setLevel(_level(file_level, logging.DEBUG))
            fh.setFormatter(logging.Formatter(FILE_FORMAT))
            logger.addHandler(fh)

    return logger
