"""Logging setup shared by helpmark modules."""

from __future__ import annotations

import logging

_DEFAULT_LEVEL = logging.INFO
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger, applying the default root configuration on first use."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_FORMAT)
    return logger


def set_verbose(verbose: bool) -> None:
    """Switch the ``helpmark`` logger hierarchy between INFO and DEBUG."""
    logging.getLogger("helpmark").setLevel(logging.DEBUG if verbose else _DEFAULT_LEVEL)
