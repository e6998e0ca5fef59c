"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/_logging.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging


def get_logger(name: str = "iterextra") -> logging.Logger:
    """Library-friendly logger. Handlers are attached by the CLI, never here."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
