"""Logging setup for the dsn-json command line.

Library code only obtains loggers through :func:`get_logger`; handlers are
attached by :func:`setup_logging`, which the CLI calls once with its
resolved :class:`~dsn_json.config.DsnJsonConfig`.
"""

from __future__ import annotations

import logging
import sys

from dsn_json.config import DsnJsonConfig

ROOT_LOGGER = "dsn_json"

# Diagnostics on stderr read like compiler warnings; the file log keeps context
CONSOLE_FORMAT = "dsn-json: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config: DsnJsonConfig) -> logging.Logger:
    """Attach handlers to the ``dsn_json`` logger according to ``config``.

    Skipped keys and dropped sections are logged at WARNING by
    :class:`~dsn_json.diagnostics.Diagnostics`, so the default level shows
    them and ``ERROR`` silences them. stdout is never used: the CLI writes
    the JSON document there.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(config.log_level.value)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
