"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/errors.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations


class IterExtraError(Exception):
    """Base exception for this package."""


class ConfigError(IterExtraError): ...


class ValidationError(IterExtraError):
    """Input data could not be turned into items/keys."""


class EmptyIterableError(IterExtraError):
    """Raised when a non-empty collection was required but nothing was produced."""
