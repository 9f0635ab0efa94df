"""Project-wide logging utilities.

One lazily configured ``buildstamp`` logger. Quiet by default (WARNING), so
only rejected registry entries show up; set ``BUILDSTAMP_LOG_LEVEL=DEBUG`` to
also see why build metadata could not be loaded. Applications embedding
buildstamp can still override handlers or levels afterwards.
"""
from __future__ import annotations

import logging
from typing import Optional

from .config import ProvenanceConfig

_LOGGER: Optional[logging.Logger] = None


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger("buildstamp")
        # Only add a handler if the application hasn't configured logging.
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
            logger.addHandler(handler)
        logger.setLevel(_resolve_level(ProvenanceConfig.from_env().log_level))
        _LOGGER = logger
    return _LOGGER

__all__ = ["get_logger"]
