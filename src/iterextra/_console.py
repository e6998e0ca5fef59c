"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/_console.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Iterable, List, Optional

import numpy as np
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as rich_tb

from .ingest import MISSING
from .selection import Selected

theme = Theme(
    {
        "warn": "yellow",
        "bad": "red",
        "muted": "dim",
        "accent": "bright_cyan",
        "title": "bold bright_cyan",
    }
)
console = Console(theme=theme)


class _JsonLineFormatter(logging.Formatter):
    """One JSON object per record, so ``--json-logs`` output can be piped to jq."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_console_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Point the root logger at stderr; stdout is reserved for result tables."""
    level = level.upper()
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)

    handler: logging.Handler
    if json_logs:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonLineFormatter())
    else:
        handler = RichHandler(
            console=Console(theme=theme, stderr=True),
            show_path=False,
            markup=True,
        )
    handler.setLevel(level)
    root.addHandler(handler)


def rich_tracebacks(enabled: bool = True) -> None:
    if enabled:
        rich_tb(show_locals=False)


def _rounded_table(title: str, *columns: str) -> Table:
    t = Table(
        title=Text(title, style="title"),
        header_style="bold",
        border_style="accent",
        row_styles=["", "muted"],
        box=box.ROUNDED,
    )
    for name in columns:
        t.add_column(name)
    return t


def format_value(value: Any) -> Text:
    """Render a key/item; NaN and MISSING are highlighted as the usual incomparable keys."""
    if value is MISSING:
        return Text("missing", style="warn")
    if isinstance(value, (float, np.floating)) and np.isnan(value):
        return Text("NaN", style="warn")
    if isinstance(value, dict):
        return Text(json.dumps(value, default=str, ensure_ascii=False), style="muted")
    return Text(repr(value) if isinstance(value, str) else str(value))


def render_selection(mode: str, found: Optional[Selected], n: int, title: Optional[str] = None) -> None:
    t = _rounded_table(title or f"select {mode}", "n", "index", "key", "item")
    if found is None:
        t.add_row(str(n), "—", "—", Text("no value", style="muted"))
    else:
        t.add_row(str(n), str(found.index), format_value(found.key), format_value(found.item))
    console.print(t)


def render_deltas(items: List[Any], values: List[int], title: str = "deltas") -> None:
    t = _rounded_table(title, "index", "item", "delta")
    for i, (item, d) in enumerate(zip(items, values)):
        t.add_row(str(i), format_value(item), Text(str(d), style="accent"))
    console.print(t)


def render_jobs_summary(jobs: Iterable[Any]) -> None:
    t = _rounded_table("Jobs", "id", "operation", "source", "details")
    for j in jobs:
        src = j.ingest.source
        if src == "values":
            details = f"n={len(j.ingest.values or [])}"
        else:
            details = f"path={j.ingest.path} field={j.ingest.field or '—'}"
        t.add_row(j.id, Text(j.operation, style="accent"), src, details)
    console.print(t)
