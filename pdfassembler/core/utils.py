"""Utilities shared by PDF Assembler modules."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    if level is not None:
        logger.setLevel(level)
    return logger


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


def strip_extension(name: str) -> str:
    """Return *name* without its final extension (``"a.b.pdf"`` -> ``"a.b"``)."""

    stem = Path(name).name
    if "." in stem.lstrip("."):
        return stem.rsplit(".", 1)[0]
    return stem
