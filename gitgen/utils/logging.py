# -*- coding: utf-8 -*-
"""Logger setup for the ``gitgen`` package."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s: %(message)s"
_DEBUG_FORMAT = (
    "%(asctime)s | %(levelname)-7s | %(name)s:%(lineno)d: %(message)s"
)


def setup_logger(
    level: str = "warning",
    *,
    stream=None,
    name: str = "gitgen",
) -> logging.Logger:
    """Configure and return the package logger.

    The level is passed in by the entry point; there is no module-level
    debug switch.  Calling again replaces the handler installed before.
    """
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(numeric)
    for handler in list(logger.handlers):
        if getattr(handler, "_gitgen_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        logging.Formatter(_DEBUG_FORMAT if numeric <= logging.DEBUG else _FORMAT),
    )
    handler._gitgen_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def resolve_log_level(debug: bool, env_level: Optional[str]) -> str:
    """``--debug`` wins over the environment; default is ``warning``."""
    if debug:
        return "debug"
    return (env_level or "warning").strip().lower() or "warning"
