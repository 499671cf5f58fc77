# src/amelie/logging.py
import logging
import sys

ROOT_LOGGER_NAME = "amelie"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _root_logger() -> logging.Logger:
    # Single stderr handler on "amelie"; children propagate to it and stop
    # there, so records are not printed again by uvicorn or basicConfig.
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    return root


def get_logger(name: str = ROOT_LOGGER_NAME, verbose: bool = False) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    _root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
