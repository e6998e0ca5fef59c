"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/deltas.py

Recurrence deltas: for each item, how many items sit between it and the
previous equal item. Items never seen before yield their own index.

  ['a', 'b', 'c', 'a', 'c']  ->  [0, 1, 2, 2, 1]

Equality is always an explicit ``==`` (or cmp == 0) test against earlier
items, so unhashable items work and NaN never matches an earlier NaN.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Tuple

from .protocols import CmpFn, KeyFn, T


def _deltas(values: Iterable[Any], same: Callable[[Any, Any], bool]) -> Iterator[int]:
    seen: List[Tuple[Any, int]] = []
    for idx, value in enumerate(values):
        last = None
        for prev, prev_idx in reversed(seen):
            if same(prev, value):
                last = prev_idx
                break
        seen.append((value, idx))
        yield idx if last is None else idx - last - 1


def deltas(iterable: Iterable[T]) -> Iterator[int]:
    """Distance to the last occurrence, items compared with ``==``."""
    return _deltas(iterable, lambda a, b: a == b)


def deltas_by(iterable: Iterable[T], cmp: CmpFn[T]) -> Iterator[int]:
    """
    Distance to the last occurrence under a cmp-style function.

    Two items are the same when ``cmp(earlier, current) == 0``; the sign of a
    non-zero result is ignored.

    >>> list(deltas_by([1.1, 2.2, 3.3, 1.2, 2.1], lambda a, b: int(a) - int(b)))
    [0, 1, 2, 2, 2]
    """
    return _deltas(iterable, lambda a, b: cmp(a, b) == 0)


def deltas_by_key(iterable: Iterable[T], key: KeyFn[T]) -> Iterator[int]:
    """
    Distance to the last occurrence of an item with an equal key.

    ``key`` is evaluated once per item.

    >>> list(deltas_by_key(["apple", "banana", "apricot", "blueberry"], lambda s: s[0]))
    [0, 1, 1, 1]
    """
    return _deltas((key(item) for item in iterable), lambda a, b: a == b)
