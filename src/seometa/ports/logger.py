from __future__ import annotations

from typing import Protocol

from seometa.domain.models import ValidationReport


class ReportLogger(Protocol):
    """
    Persists validation reports (typically JSONL) for later review.
    """

    def log(self, report: ValidationReport) -> None:
        ...
