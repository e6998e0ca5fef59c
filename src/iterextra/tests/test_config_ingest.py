"""
--------------------------------------------------------------------------------
<iterextra project>
src/iterextra/tests/test_config_ingest.py

Job config validation, input loading and the run_* facades.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import json
import math
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from iterextra.api import run_deltas, run_job, run_select
from iterextra.config import IngestConfig, JobConfig, RootConfig, load_config
from iterextra.errors import ConfigError, ValidationError
from iterextra.ingest import MISSING, field_key, load_csv_records, load_job_items, load_values, parse_value


def _write_jsonl(path: Path, rows) -> Path:
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n")
    return path


# ───────────────────────────────────────────────────────── config ──
def test_values_source_requires_values() -> None:
    with pytest.raises(ConfigError, match="ingest.values is required"):
        IngestConfig(source="values")


def test_file_sources_require_path() -> None:
    with pytest.raises(ConfigError, match="ingest.path is required for source='csv'"):
        IngestConfig(source="csv", field="x")


def test_min_over_records_requires_field() -> None:
    with pytest.raises(ConfigError, match="ingest.field is required"):
        JobConfig(id="j", operation="min", ingest={"source": "records_jsonl", "path": "r.jsonl"})
    # deltas may compare whole records
    job = JobConfig(id="j", operation="deltas", ingest={"source": "records_jsonl", "path": "r.jsonl"})
    assert job.ingest.field is None


def test_unknown_operation_is_rejected() -> None:
    with pytest.raises(PydanticValidationError):
        JobConfig(id="j", operation="median", ingest={"source": "values", "values": [1]})


def test_duplicate_job_ids_rejected() -> None:
    job = {"id": "a", "operation": "min", "ingest": {"source": "values", "values": [1]}}
    with pytest.raises(ConfigError, match="duplicate job id"):
        RootConfig(jobs=[job, dict(job)])


def test_load_config_requires_jobs_key(tmp_path: Path) -> None:
    p = tmp_path / "iterextra.yaml"
    p.write_text("something: else\n")
    with pytest.raises(ConfigError, match="Top-level 'jobs' key missing"):
        load_config(p)
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path / "missing.yaml")


def test_load_config_roundtrip(tmp_path: Path) -> None:
    p = tmp_path / "iterextra.yaml"
    p.write_text(
        "jobs:\n"
        "  - id: lowest\n"
        "    operation: min\n"
        "    ingest:\n"
        "      source: values\n"
        "      values: [3.2, nan, .nan, 0.9]\n"
    )
    root = load_config(p)
    assert [j.id for j in root.jobs] == ["lowest"]
    assert root.jobs[0].operation == "min"


# ───────────────────────────────────────────────────────── ingest ──
def test_parse_value() -> None:
    assert parse_value(3) == 3
    assert parse_value(" 2.5 ") == 2.5
    assert math.isnan(parse_value("nan"))
    assert parse_value("-inf") == -math.inf
    assert math.isnan(parse_value(None))
    with pytest.raises(ValidationError, match="index 4"):
        parse_value("abc", index=4)
    with pytest.raises(ValidationError, match="booleans"):
        parse_value(True)


def test_load_values_parses_strings() -> None:
    out = load_values(["1.5", 2, "NaN"])
    assert out[:2] == [1.5, 2]
    assert math.isnan(out[2])


def test_load_csv_records_empty_cells_are_nan(tmp_path: Path) -> None:
    p = tmp_path / "prices.csv"
    p.write_text("name,price\nalpha,3.5\nbeta,\ngamma,1.25\n")
    rows = load_csv_records(p)
    assert [r["name"] for r in rows] == ["alpha", "beta", "gamma"]
    assert math.isnan(rows[1]["price"])


def test_load_csv_records_empty_file(tmp_path: Path) -> None:
    p = tmp_path / "empty.csv"
    p.write_text("")
    assert load_csv_records(p) == []


def test_load_job_items_missing_field(tmp_path: Path) -> None:
    _write_jsonl(tmp_path / "r.jsonl", [{"id": "a", "score": 1}, {"id": "b"}])
    ingest = IngestConfig(source="records_jsonl", path="r.jsonl", field="score")
    with pytest.raises(ValidationError, match="index 1 missing field 'score'"):
        load_job_items(ingest, base_dir=tmp_path)


def test_load_job_items_bad_jsonl(tmp_path: Path) -> None:
    (tmp_path / "r.jsonl").write_text('{"id": "a"}\nnot json\n')
    ingest = IngestConfig(source="records_jsonl", path="r.jsonl")
    with pytest.raises(ValidationError, match=":2: invalid JSON"):
        load_job_items(ingest, base_dir=tmp_path)


def test_load_job_items_missing_file(tmp_path: Path) -> None:
    ingest = IngestConfig(source="csv", path="nope.csv", field="x")
    with pytest.raises(ValidationError, match="csv not found"):
        load_job_items(ingest, base_dir=tmp_path)


def test_field_key_reads_absent_values_as_missing() -> None:
    key = field_key("score")
    assert key({"score": 2}) == 2
    assert key({"score": None}) is MISSING
    assert key({"score": float("nan")}) is MISSING
    assert key({"score": "B"}) == "B"


def test_missing_is_incomparable_with_numbers_and_strings() -> None:
    for other in (1.0, -5, "A", "", MISSING):
        assert not (MISSING < other)
        assert not (MISSING > other)
        assert not (other < MISSING)
        assert not (other > MISSING)
    assert MISSING != MISSING


# ───────────────────────────────────────────────────────── api ──
def test_run_select_modes() -> None:
    values = [1.0, float("nan"), 2.0, 0.5]
    assert run_select(values, mode="min").item == 0.5
    assert run_select(values, mode=" MAX ").item == 2.0
    assert run_select([], mode="min") is None
    with pytest.raises(ConfigError, match="mode must be"):
        run_select(values, mode="median")


def test_run_deltas_with_and_without_key() -> None:
    assert run_deltas(list("abcac")) == [0, 1, 2, 2, 1]
    assert run_deltas(["apple", "banana", "apricot"], key=lambda s: s[0]) == [0, 1, 1]


def test_run_job_over_jsonl_records_with_nulls(tmp_path: Path) -> None:
    _write_jsonl(
        tmp_path / "variants.jsonl",
        [
            {"id": "v1", "score": 0.4},
            {"id": "v2", "score": None},
            {"id": "v3", "score": 0.9},
            {"id": "v4", "score": 0.1},
        ],
    )
    job = JobConfig(
        id="best",
        operation="max",
        ingest={"source": "records_jsonl", "path": "variants.jsonl", "field": "score"},
    )
    res = run_job(job, base_dir=tmp_path)
    assert res["job"] == "best"
    assert res["n"] == 4
    assert res["selected"].item["id"] == "v3"
    assert res["selected"].index == 2


def test_run_job_nan_first_row_wins(tmp_path: Path) -> None:
    p = tmp_path / "t.csv"
    p.write_text("name,price\nunknown,\ncheap,1.0\ncheaper,-5.0\n")
    job = JobConfig(id="low", operation="min", ingest={"source": "csv", "path": str(p), "field": "price"})
    res = run_job(job)
    assert res["selected"].item["name"] == "unknown"
    assert res["selected"].index == 0


def test_run_job_deltas_over_csv_column(tmp_path: Path) -> None:
    p = tmp_path / "tfs.csv"
    p.write_text("site,tf\n1,lexA\n2,crp\n3,lexA\n4,fnr\n5,crp\n")
    job = JobConfig(id="gaps", operation="deltas", ingest={"source": "csv", "path": "tfs.csv", "field": "tf"})
    res = run_job(job, base_dir=tmp_path)
    assert res["deltas"] == [0, 1, 1, 3, 2]
    assert len(res["items"]) == 5


def test_run_job_blank_cell_in_string_column(tmp_path: Path) -> None:
    p = tmp_path / "grades.csv"
    p.write_text("name,grade\na,B\nb,\nc,A\n")
    ingest = {"source": "csv", "path": "grades.csv", "field": "grade"}

    lo = run_job(JobConfig(id="lo", operation="min", ingest=ingest), base_dir=tmp_path)
    assert lo["selected"].item["name"] == "c"
    assert lo["selected"].index == 2

    hi = run_job(JobConfig(id="hi", operation="max", ingest=ingest), base_dir=tmp_path)
    assert hi["selected"].item["name"] == "a"
    assert hi["selected"].key == "B"


def test_run_job_deltas_never_match_missing(tmp_path: Path) -> None:
    _write_jsonl(tmp_path / "r.jsonl", [{"tag": None}, {"tag": "x"}, {"tag": None}, {"tag": "x"}])
    job = JobConfig(id="gaps", operation="deltas", ingest={"source": "records_jsonl", "path": "r.jsonl", "field": "tag"})
    assert run_job(job, base_dir=tmp_path)["deltas"] == [0, 1, 2, 1]


def test_load_config_malformed_yaml(tmp_path: Path) -> None:
    cfg = tmp_path / "iterextra.yaml"
    cfg.write_text("jobs: [\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(cfg)
