"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/selection.py

Min/max-by-key over partially ordered keys.

A single left-to-right fold keeps the first item seen and replaces it only when
a later key is strictly better (< for min, > for max). Ties and incomparable
pairs (e.g. anything vs NaN) leave the current best in place, so:
  - the earliest of several equal keys wins, for min and for max;
  - a NaN key at the front is never displaced;
  - a NaN key after a comparable best is skipped.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional

from .protocols import KeyFn, SupportsStrictGreater, SupportsStrictLess, T

MinKey = Callable[[T], SupportsStrictLess]
MaxKey = Callable[[T], SupportsStrictGreater]


@dataclass(frozen=True)
class Selected(Generic[T]):
    index: int
    item: T
    key: Any


def _identity(x):
    return x


def _fold(
    iterable: Iterable[T],
    key: Optional[KeyFn[T]],
    better: Callable[[Any, Any], Any],
) -> Optional[Selected[T]]:
    key_fn = _identity if key is None else key
    it = enumerate(iterable)
    first = next(it, None)
    if first is None:
        return None
    best_idx, best = first
    best_key = key_fn(best)
    for idx, item in it:
        k = key_fn(item)
        if better(k, best_key):
            best_idx, best, best_key = idx, item, k
    return Selected(index=best_idx, item=best, key=best_key)


def select_min_indexed(iterable: Iterable[T], key: Optional[MinKey[T]] = None) -> Optional[Selected[T]]:
    """Like select_min, but also report the winner's position and key."""
    return _fold(iterable, key, operator.lt)


def select_max_indexed(iterable: Iterable[T], key: Optional[MaxKey[T]] = None) -> Optional[Selected[T]]:
    """Like select_max, but also report the winner's position and key."""
    return _fold(iterable, key, operator.gt)


def select_min(iterable: Iterable[T], key: Optional[MinKey[T]] = None) -> Optional[T]:
    """
    Return the item with the smallest key, or None for an empty iterable.

    The key only needs ``<``. ``key`` is called exactly once per item and
    defaults to the item itself.

    >>> select_min([3.2, 1.5, 2.8, 0.9])
    0.9
    >>> select_min([1.0, float("nan"), 2.0, 0.5])
    0.5
    """
    found = _fold(iterable, key, operator.lt)
    return None if found is None else found.item


def select_max(iterable: Iterable[T], key: Optional[MaxKey[T]] = None) -> Optional[T]:
    """
    Return the item with the largest key, or None for an empty iterable.

    Mirror image of select_min; the key only needs ``>``.

    >>> select_max([3.2, 1.5, 2.8, 0.9])
    3.2
    """
    found = _fold(iterable, key, operator.gt)
    return None if found is None else found.item
