"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/api.py

Public API:
  - run_select (min/max over in-memory items)
  - run_deltas (recurrence deltas over in-memory items)
  - run_job    (YAML-driven)

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ._logging import get_logger
from .config import JobConfig
from .deltas import deltas, deltas_by_key
from .errors import ConfigError
from .ingest import load_job_items
from .selection import Selected, select_max_indexed, select_min_indexed

_LOG = get_logger(__name__)

_SELECTORS = {"min": select_min_indexed, "max": select_max_indexed}


def run_select(
    items: List[Any],
    *,
    mode: str = "min",
    key: Optional[Callable[[Any], Any]] = None,
) -> Optional[Selected]:
    m = str(mode).strip().lower()
    if m not in _SELECTORS:
        raise ConfigError(f"mode must be 'min' or 'max', got {mode!r}")
    found = _SELECTORS[m](items, key)
    if found is None:
        _LOG.info(f"select {m}: no items")
    else:
        _LOG.info(f"select {m}: index {found.index} of {len(items)} (key={found.key!r})")
    return found


def run_deltas(items: List[Any], *, key: Optional[Callable[[Any], Any]] = None) -> List[int]:
    out = list(deltas(items) if key is None else deltas_by_key(items, key))
    _LOG.info(f"deltas: {len(out)} value(s)")
    return out


def run_job(
    job: JobConfig,
    *,
    base_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Run one configured job. Returns a dict with:
      job, operation, n, items, and either 'selected' (Selected | None) or 'deltas' (list[int]).
    """
    items, key = load_job_items(job.ingest, base_dir=base_dir)
    _LOG.info(f"job '{job.id}': {job.operation} over {len(items)} item(s) from {job.ingest.source}")
    out: Dict[str, Any] = {"job": job.id, "operation": job.operation, "n": len(items), "items": items}
    if job.operation == "deltas":
        out["deltas"] = run_deltas(items, key=key)
    else:
        out["selected"] = run_select(items, mode=job.operation, key=key)
    return out
