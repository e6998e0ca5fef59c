"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/ingest.py

Turns job inputs (inline values, JSONL records, CSV tables) into items plus an
optional key function. Missing record values (JSON null, blank CSV cells) read
as MISSING, a key that is neither less nor greater than anything, so string and
numeric columns alike flow through the selectors without a TypeError on ``<``.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from ._logging import get_logger
from .config import IngestConfig
from .errors import ValidationError

_LOG = get_logger(__name__)


class _Missing:
    """Incomparable stand-in for an absent record value."""

    __slots__ = ()

    def __lt__(self, other: Any) -> bool:
        return False

    def __gt__(self, other: Any) -> bool:
        return False

    def __eq__(self, other: Any) -> bool:
        # like NaN: never equal, not even to itself
        return False

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def _is_missing(value: Any) -> bool:
    # pandas fills blank cells with float NaN, whatever the column dtype
    return value is None or (isinstance(value, float) and math.isnan(value))


def parse_value(raw: Any, *, index: int = 0) -> Any:
    """Numbers pass through; strings are parsed as floats ('nan', 'inf', '-inf' included)."""
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid value at index {index}: booleans are not numeric keys")
    if isinstance(raw, (int, float)):
        return raw
    if raw is None:
        return math.nan
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid value at index {index}: {raw!r} is not a number") from e
    raise ValidationError(f"Invalid value at index {index}: unsupported type {type(raw).__name__}")


def load_values(values: List[Any]) -> List[Any]:
    if not isinstance(values, list):
        raise ValidationError("For ingest.source=values, values must be a list")
    return [parse_value(v, index=i) for i, v in enumerate(values)]


def load_records_jsonl(path: Path) -> List[Dict[str, Any]]:
    p = Path(path)
    if not p.exists():
        raise ValidationError(f"records_jsonl not found: {p}")
    records: List[Dict[str, Any]] = []
    with p.open(encoding="utf-8") as f:
        for i, ln in enumerate(f, start=1):
            if not ln.strip():
                continue
            try:
                rec = json.loads(ln)
            except json.JSONDecodeError as e:
                raise ValidationError(f"{p}:{i}: invalid JSON ({e.msg})") from e
            if not isinstance(rec, dict):
                raise ValidationError(f"{p}:{i}: each line must be a JSON object")
            records.append(rec)
    _LOG.debug(f"Loaded {len(records)} record(s) from {p}")
    return records


def load_csv_records(path: Path) -> List[Dict[str, Any]]:
    p = Path(path)
    if not p.exists():
        raise ValidationError(f"csv not found: {p}")
    try:
        df = pd.read_csv(p)
    except pd.errors.EmptyDataError:
        return []
    _LOG.debug(f"Loaded {len(df)} row(s) x {len(df.columns)} column(s) from {p}")
    return df.to_dict(orient="records")


def field_key(field: str) -> Callable[[Dict[str, Any]], Any]:
    """Key function reading ``field`` from a record; absent values read as MISSING."""

    def _key(rec: Dict[str, Any]) -> Any:
        value = rec[field]
        return MISSING if _is_missing(value) else value

    _key.__name__ = f"field_key[{field}]"
    return _key


def check_field(records: List[Dict[str, Any]], field: str) -> None:
    for idx, rec in enumerate(records):
        if field not in rec:
            raise ValidationError(f"Record at index {idx} missing field '{field}'")


def _resolve(path: str, base_dir: Optional[Path]) -> Path:
    p = Path(path)
    if not p.is_absolute() and base_dir is not None:
        p = base_dir / p
    return p


def load_job_items(
    ingest: IngestConfig, *, base_dir: Optional[Path] = None
) -> Tuple[List[Any], Optional[Callable[[Any], Any]]]:
    """Return (items, key) for an ingest block. ``key`` is None when items are their own keys."""
    if ingest.source == "values":
        return load_values(ingest.values or []), None

    path = _resolve(ingest.path or "", base_dir)
    if ingest.source == "records_jsonl":
        records = load_records_jsonl(path)
    elif ingest.source == "csv":
        records = load_csv_records(path)
    else:
        raise ValidationError(f"Unknown ingest source: {ingest.source}")

    if not ingest.field:
        return records, None
    check_field(records, ingest.field)
    return records, field_key(ingest.field)
