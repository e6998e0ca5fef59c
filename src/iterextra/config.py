"""
--------------------------------------------------------------------------------
<iterextra project>
iterextra/config.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .errors import ConfigError

Operation = Literal["min", "max", "deltas"]
Source = Literal["values", "records_jsonl", "csv"]


class IngestConfig(BaseModel):
    """
    Where a job's items come from (discriminated by .source).

    sources:
      - "values"        : inline scalars (numbers, or strings such as "nan"/"inf")
      - "records_jsonl" : one JSON object per line
      - "csv"           : a table read with pandas; each row becomes a record

    Fields:
      values : for 'values'                 — the scalars themselves
      path   : for 'records_jsonl'/'csv'    — file path, relative to the config file
      field  : for 'records_jsonl'/'csv'    — key column (the item itself if omitted)
    """

    source: Source
    values: Optional[List[Any]] = None
    path: Optional[str] = None
    field: Optional[str] = None

    @model_validator(mode="after")
    def _validate_by_source(self) -> "IngestConfig":
        if self.source == "values":
            if self.values is None:
                raise ConfigError("ingest.values is required for source='values'")
            if self.path:
                raise ConfigError("ingest.path is not used for source='values'")
        elif not self.path:
            raise ConfigError(f"ingest.path is required for source='{self.source}'")
        return self


class JobConfig(BaseModel):
    id: str
    operation: Operation
    ingest: IngestConfig

    @field_validator("id")
    @classmethod
    def _non_blank_id(cls, v: str) -> str:
        if not v.strip():
            raise ConfigError("job id must be a non-empty string")
        return v.strip()

    @model_validator(mode="after")
    def _by_operation(self) -> "JobConfig":
        # Records are dicts; min/max needs a comparable key pulled out of them.
        if self.operation in {"min", "max"} and self.ingest.source != "values" and not self.ingest.field:
            raise ConfigError(f"job '{self.id}': ingest.field is required for operation '{self.operation}'")
        return self


class RootConfig(BaseModel):
    jobs: List[JobConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self) -> "RootConfig":
        ids = [j.id for j in self.jobs]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ConfigError(f"duplicate job id(s): {dupes}")
        return self


def load_config(path: Path) -> RootConfig:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict) or "jobs" not in raw:
        raise ConfigError(f"Top-level 'jobs' key missing in config: {p}")
    return RootConfig(**raw)
