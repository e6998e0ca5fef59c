"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/protocols.py

Key capabilities required by the selectors. Each direction needs exactly one
strict predicate; nothing asks for equality, a three-way compare, or sortability,
so floats (NaN included) and numpy scalars qualify as they are.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar


class SupportsStrictLess(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


class SupportsStrictGreater(Protocol):
    def __gt__(self, other: Any, /) -> bool: ...


T = TypeVar("T")

KeyFn = Callable[[T], Any]
CmpFn = Callable[[T, T], int]
