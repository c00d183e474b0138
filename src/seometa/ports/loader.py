from __future__ import annotations

from pathlib import Path
from typing import Protocol

from seometa.domain.models import PageMetadata


class RecordLoader(Protocol):
    """
    Reads one file into one or more page records.
    """

    @property
    def extensions(self) -> frozenset[str]: ...

    def load(self, path: Path) -> list[PageMetadata]:
        ...
