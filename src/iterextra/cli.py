"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/cli.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.text import Text

from ._console import (
    console,
    render_deltas,
    render_jobs_summary,
    render_selection,
    rich_tracebacks,
    setup_console_logging,
)
from .api import run_deltas, run_job, run_select
from .collect import require_nonempty
from .config import IngestConfig, load_config
from .errors import ConfigError, EmptyIterableError, ValidationError
from .ingest import load_job_items

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Partial-order min/max selection and recurrence deltas.",
)

_DEFAULT_CONFIG = "iterextra.yaml"


def _exit_for(e: Exception) -> int:
    mapping = {
        ConfigError: 2,
        PydanticValidationError: 2,
        ValidationError: 3,
        EmptyIterableError: 4,
    }
    for etype, code in mapping.items():
        if isinstance(e, etype):
            return code
    return 1


def _discovery_config(provided: Optional[Path]) -> Path:
    if provided:
        return provided.resolve()
    cwd_cfg = Path.cwd() / _DEFAULT_CONFIG
    if cwd_cfg.exists():
        return cwd_cfg.resolve()
    raise ConfigError(f"No config found. Pass --config or place {_DEFAULT_CONFIG} in the current directory.")


def _ingest_from_options(
    value: Optional[List[str]],
    csv: Optional[Path],
    records_jsonl: Optional[Path],
    field: Optional[str],
) -> IngestConfig:
    given = [name for name, v in (("--value", value), ("--csv", csv), ("--records-jsonl", records_jsonl)) if v]
    if len(given) != 1:
        raise ConfigError("Provide exactly one input: --value (repeatable), --csv or --records-jsonl.")
    if value:
        if field:
            raise ConfigError("--field only applies to --csv/--records-jsonl inputs.")
        return IngestConfig(source="values", values=list(value))
    if csv:
        return IngestConfig(source="csv", path=str(csv), field=field)
    return IngestConfig(source="records_jsonl", path=str(records_jsonl), field=field)


def _load(ingest: IngestConfig) -> Tuple[List[Any], Optional[Callable[[Any], Any]]]:
    return load_job_items(ingest, base_dir=Path.cwd())


def _fail(e: Exception) -> None:
    console.print(Text(str(e), style="bad"))
    raise typer.Exit(code=_exit_for(e))


@app.callback()
def _root(
    log_level: str = typer.Option(
        os.environ.get("ITEREXTRA_LOG_LEVEL", "WARNING"),
        "--log-level",
        help="Console log level.",
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON logs."),
    trace: bool = typer.Option(False, "--trace", help="Rich tracebacks on errors."),
):
    setup_console_logging(log_level, json_logs)
    rich_tracebacks(enabled=trace)


# ───────────────────────────────────────────────────────────────────────────────
# SELECT
# ───────────────────────────────────────────────────────────────────────────────


@app.command(help="Pick the min/max item; NaN-like keys never abort the scan.")
def select(
    mode: str = typer.Option("min", "--mode", help="min|max"),
    value: List[str] = typer.Option(None, "--value", help="One or more values (nan/inf accepted).", show_default=False),
    csv: Optional[Path] = typer.Option(None, "--csv", help="CSV table; rows are items."),
    records_jsonl: Optional[Path] = typer.Option(None, "--records-jsonl", help="JSONL records path."),
    field: Optional[str] = typer.Option(None, "--field", help="Key column for --csv/--records-jsonl."),
):
    try:
        if mode.strip().lower() not in {"min", "max"}:
            raise ConfigError(f"--mode must be min or max, got {mode!r}")
        ingest = _ingest_from_options(value, csv, records_jsonl, field)
        if ingest.source != "values" and not ingest.field:
            raise ConfigError("--field is required when selecting over records.")
        items, key = _load(ingest)
        require_nonempty(items, EmptyIterableError("No items to select from (no value)."))
        found = run_select(items, mode=mode, key=key)
        render_selection(mode.strip().lower(), found, len(items))
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e)


# ───────────────────────────────────────────────────────────────────────────────
# DELTAS
# ───────────────────────────────────────────────────────────────────────────────


@app.command(help="Distance from each item to its previous equal item.")
def deltas(
    value: List[str] = typer.Option(None, "--value", help="One or more values.", show_default=False),
    csv: Optional[Path] = typer.Option(None, "--csv", help="CSV table; rows are items."),
    records_jsonl: Optional[Path] = typer.Option(None, "--records-jsonl", help="JSONL records path."),
    field: Optional[str] = typer.Option(None, "--field", help="Compare records by this column."),
    raw: bool = typer.Option(False, "--raw", help="Compare --value inputs as strings (no float parsing)."),
):
    try:
        ingest = _ingest_from_options(value, csv, records_jsonl, field)
        if raw and ingest.source != "values":
            raise ConfigError("--raw only applies to --value inputs.")
        if raw:
            items: List[Any] = list(value)
            key = None
        else:
            items, key = _load(ingest)
        out = run_deltas(items, key=key)
        render_deltas(items, out)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e)


# ───────────────────────────────────────────────────────────────────────────────
# RUN (config)
# ───────────────────────────────────────────────────────────────────────────────


@app.command(help="Run jobs from a YAML config.")
def run(
    config: Optional[Path] = typer.Option(None, "--config", help=f"Path to {_DEFAULT_CONFIG}"),
    job: List[str] = typer.Option([], "--job", help="One or more job ids to run."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate and print summary, then exit."),
):
    try:
        cfg_path = _discovery_config(config)
        root = load_config(cfg_path)
        jobs = root.jobs if not job else [j for j in root.jobs if j.id in set(job)]
        if not jobs:
            raise ConfigError("No jobs selected. Check --job or the config file.")

        if dry_run:
            render_jobs_summary(jobs)
            console.print("[green]✔ Config validated (dry run).[/green]")
            raise typer.Exit(code=0)

        for j in jobs:
            res = run_job(j, base_dir=cfg_path.parent)
            if j.operation == "deltas":
                render_deltas(res["items"], res["deltas"], title=f"{j.id}: deltas")
            else:
                render_selection(j.operation, res["selected"], res["n"], title=f"{j.id}: select {j.operation}")
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
