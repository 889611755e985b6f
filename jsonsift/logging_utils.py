from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO


DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _coerce_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: str | int = "INFO", *, stream: Optional[TextIO] = None) -> None:
    """Attach a console handler to the root logger (once) and set its level.

    Only the CLI calls this. Output goes to stderr by default since stdout
    carries the parsed JSON. JSONSIFT_LOG_FORMAT overrides the format.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(os.getenv("JSONSIFT_LOG_FORMAT", DEFAULT_FORMAT)))
        root.addHandler(handler)
    root.setLevel(_coerce_level(level))


def get_logger(name: str, *, level: Optional[str | int] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_coerce_level(level))
    return logger
