"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/__init__.py

Public API:
  - select_min / select_max            (partial-order min/max by key)
  - select_min_indexed / select_max_indexed
  - deltas / deltas_by / deltas_by_key (distance to previous equal item)
  - collect_nonempty / require_nonempty
  - IterExtra / iter_extra             (method-style wrapper over any iterable)
  - run_select / run_deltas / run_job  (facades used by the CLI)

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from .api import run_deltas, run_job, run_select
from .collect import collect_nonempty, require_nonempty
from .deltas import deltas, deltas_by, deltas_by_key
from .errors import ConfigError, EmptyIterableError, IterExtraError, ValidationError
from .fluent import IterExtra, iter_extra
from .protocols import SupportsStrictGreater, SupportsStrictLess
from .selection import Selected, select_max, select_max_indexed, select_min, select_min_indexed

__all__ = [
    "ConfigError",
    "EmptyIterableError",
    "IterExtra",
    "IterExtraError",
    "Selected",
    "SupportsStrictGreater",
    "SupportsStrictLess",
    "ValidationError",
    "collect_nonempty",
    "deltas",
    "deltas_by",
    "deltas_by_key",
    "iter_extra",
    "require_nonempty",
    "run_deltas",
    "run_job",
    "run_select",
    "select_max",
    "select_max_indexed",
    "select_min",
    "select_min_indexed",
]
