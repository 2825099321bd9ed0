import logging
import os

from .constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

ROOT_LOGGER_NAME = "grid_diagrams"


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a package logger; the root one gets a handler on first use."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.hasHandlers():
        handler = logging.StreamHandler()
        formatter = logging.Formatter('[%(asctime)s][%(levelname)s][%(name)s] %(message)s')
        handler.setFormatter(formatter)
        root.addHandler(handler)
        level_name = os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)
