from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from seometa.adapters.logging.jsonl_logger import JsonlReportLogger, report_to_dict
from seometa.app.pipeline import validate_page
from seometa.domain.models import Finding, PageMetadata, ValidationReport
from seometa.utils.json_sanitize import json_sanitize


def test_json_sanitize_handles_report_types():
    data = {
        "finding": Finding("lang", "error", "bad tag", "lang-bcp47"),
        "when": datetime(2025, 5, 20, 12, 30, tzinfo=timezone.utc),
        "dir": Path("/tmp/reports"),
        "formats": frozenset({"png", "jpeg"}),
        "pair": (1, 2),
        3: object,
    }
    out = json_sanitize(data)

    assert out["finding"] == {"field": "lang", "severity": "error", "message": "bad tag", "rule": "lang-bcp47"}
    assert out["when"] == "2025-05-20T12:30:00+00:00"
    assert out["dir"] == "/tmp/reports"
    assert out["formats"] == ["jpeg", "png"]
    assert out["pair"] == [1, 2]
    assert isinstance(out["3"], str)
    json.dumps(out)


def test_report_to_dict_counts():
    report = ValidationReport(
        page=PageMetadata(title="T"),
        findings=(Finding("title", "warning", "short", "title-length"),),
        source="t.json",
    )
    row = report_to_dict(report)

    assert row["source"] == "t.json"
    assert row["has_errors"] is False
    assert row["counts"] == {"error": 0, "warning": 1, "info": 0}
    assert row["page"]["title"] == "T"
    assert row["findings"][0]["rule"] == "title-length"


def test_logger_appends_rows(tmp_path, container, good_page):
    sink = JsonlReportLogger(path=tmp_path / "logs")
    for source in ("a.json", "b.json"):
        validate_page(
            good_page,
            rules=container.rules,
            normalizer=container.normalizer,
            source=source,
            report_logger=sink,
        )

    rows = sink.read()
    assert [r["source"] for r in rows] == ["a.json", "b.json"]
    assert all("logged_at" in r for r in rows)
    assert sink.data_file == tmp_path / "logs" / "reports.jsonl"


def test_read_missing_file_is_empty(tmp_path):
    assert JsonlReportLogger(path=tmp_path).read() == []


def test_read_rejects_corrupt_line(tmp_path):
    sink = JsonlReportLogger(path=tmp_path)
    sink.data_file.write_text('{"source": "a"}\nnot json\n', encoding="utf-8")
    with pytest.raises(RuntimeError, match="line 2"):
        sink.read()
