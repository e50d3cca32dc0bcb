"""Central logging configuration."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from pathlib import Path

LOG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "scribeline" / "logs"
LOG_FILE_NAME = "scribeline.log"


def configure_logging(level: int = logging.INFO, log_dir: Path | None = None) -> Path:
    """Configure console and rotating file logging; return the log file path.

    Handlers are only installed when the root logger has none, so a host
    application that already set up logging keeps its handlers.
    """

    directory = log_dir or LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILE_NAME

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not root_logger.handlers:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        file_handler = RotatingFileHandler(log_file, maxBytes=512_000, backupCount=5)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
        root_logger.addHandler(file_handler)
    return log_file


def configure_logging_from_config(config) -> Path:
    """Apply the ``logging`` section of a :class:`ConfigManager`."""

    return configure_logging(config.log_level(), config.log_dir())


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger.

    Handlers are installed by the host application through
    :func:`configure_logging`; the engine itself only emits records.
    """

    return logging.getLogger(name)
