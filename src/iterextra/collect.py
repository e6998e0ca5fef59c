"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/collect.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Type, Union

from .errors import EmptyIterableError
from .protocols import T


def collect_nonempty(iterable: Iterable[T]) -> Optional[List[T]]:
    """Collect into a list; an empty result becomes None."""
    out = list(iterable)
    return out if out else None


def require_nonempty(
    iterable: Iterable[T],
    error: Union[BaseException, Type[BaseException]] = EmptyIterableError,
) -> List[T]:
    """Collect into a list, raising ``error`` (instance or class) if nothing was produced."""
    out = list(iterable)
    if out:
        return out
    if isinstance(error, type):
        raise error("expected at least one item, got an empty iterable")
    raise error
