"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/fluent.py

Method-style access to the iterextra operations over any iterable:

    iter_extra(rows).deltas_by_key(lambda r: r["tf"]).max_by_partial_key()

The wrapper holds a single iterator; like that iterator it can be consumed
once.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, Optional, Type, Union

from .collect import collect_nonempty, require_nonempty
from .deltas import deltas, deltas_by, deltas_by_key
from .errors import EmptyIterableError
from .protocols import CmpFn, KeyFn, T
from .selection import select_max, select_min


class IterExtra(Generic[T]):
    def __init__(self, iterable: Iterable[T]):
        self._it: Iterator[T] = iter(iterable)

    def __iter__(self) -> Iterator[T]:
        return self._it

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._it!r})"

    # selection
    def min_by_partial_key(self, key: Optional[KeyFn[T]] = None) -> Optional[T]:
        return select_min(self._it, key)

    def max_by_partial_key(self, key: Optional[KeyFn[T]] = None) -> Optional[T]:
        return select_max(self._it, key)

    # deltas
    def deltas(self) -> "IterExtra[int]":
        return IterExtra(deltas(self._it))

    def deltas_by(self, cmp: CmpFn[T]) -> "IterExtra[int]":
        return IterExtra(deltas_by(self._it, cmp))

    def deltas_by_key(self, key: KeyFn[T]) -> "IterExtra[int]":
        return IterExtra(deltas_by_key(self._it, key))

    # collection
    def to_list(self) -> List[T]:
        return list(self._it)

    def collect_nonempty(self) -> Optional[List[T]]:
        return collect_nonempty(self._it)

    def require_nonempty(
        self, error: Union[BaseException, Type[BaseException]] = EmptyIterableError
    ) -> List[T]:
        return require_nonempty(self._it, error)


def iter_extra(iterable: Iterable[T]) -> IterExtra[T]:
    """Wrap ``iterable`` (an existing IterExtra is returned as is)."""
    if isinstance(iterable, IterExtra):
        return iterable
    return IterExtra(iterable)
