from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from seometa.domain.models import ValidationReport
from seometa.utils.json_sanitize import json_sanitize


def report_to_dict(report: ValidationReport) -> dict[str, Any]:
    return {
        "source": report.source,
        "has_errors": report.has_errors,
        "counts": {
            "error": len(report.errors),
            "warning": len(report.warnings),
            "info": len(report.infos),
        },
        "findings": [json_sanitize(f) for f in report.findings],
        "page": json_sanitize(report.page),
        "metadata": json_sanitize(report.metadata),
    }


@dataclass(slots=True)
class JsonlReportLogger:
    """
    Appends one JSON object per validation report.

    Files:
      - <dir>/reports.jsonl
    """
    path: Path
    file_name: str = "reports.jsonl"

    @property
    def data_file(self) -> Path:
        return self.path / self.file_name

    def log(self, report: ValidationReport) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        row = {
            "logged_at": datetime.now(timezone.utc).isoformat(),
            **report_to_dict(report),
        }
        with self.data_file.open("a", encoding="utf-8") as f:
            f.write(json.dumps(row, ensure_ascii=False))
            f.write("\n")

    def read(self) -> list[dict[str, Any]]:
        if not self.data_file.exists():
            return []

        rows: list[dict[str, Any]] = []
        for i, line in enumerate(self.data_file.read_text(encoding="utf-8").splitlines(), start=1):
            if not line.strip():
                continue
            try:
                rows.append(json.loads(line))
            except json.JSONDecodeError as e:
                snippet = line[:200].replace("\n", "\\n")
                raise RuntimeError(
                    f"Invalid JSON on {self.data_file} line {i}: {e}\n"
                    f"Snippet: {snippet}"
                ) from e
        return rows
