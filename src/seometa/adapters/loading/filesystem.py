from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from loguru import logger

from seometa.adapters.loading.records import (
    FrontmatterRecordLoader,
    JsonRecordLoader,
    YamlRecordLoader,
)
from seometa.domain.errors import SeoMetaError
from seometa.domain.models import LoadReport, PageMetadata
from seometa.ports import RecordLoader


def _is_hidden(path: Path, root: Path) -> bool:
    # Only parts below the input root count; a hidden parent of the root does not
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = Path(path.name)
    return any(part.startswith(".") for part in rel.parts)


def _default_loaders() -> tuple[RecordLoader, ...]:
    return (JsonRecordLoader(), YamlRecordLoader(), FrontmatterRecordLoader())


def _expand_dir(root: Path, *, recursive: bool) -> list[tuple[Path, bool]]:
    it = root.rglob("*") if recursive else root.glob("*")
    return [(x, _is_hidden(x, root)) for x in it if x.is_file()]


def _iter_files(inputs: Sequence[str], *, recursive: bool) -> list[tuple[Path, bool]]:
    """
    Resolve inputs to (file, hidden) pairs. Explicit file inputs are never hidden.
    """
    files: dict[Path, bool] = {}

    def add(pairs: list[tuple[Path, bool]]) -> None:
        for f, hidden in pairs:
            files[f.resolve()] = hidden

    for inp in inputs:
        p = Path(inp).expanduser()

        # Case 1: direct file or directory
        if p.exists():
            if p.is_dir():
                add(_expand_dir(p, recursive=recursive))
            elif p.is_file():
                add([(p, False)])
            continue

        # Case 2: glob pattern (ONLY if relative)
        if p.is_absolute():
            logger.warning("Input not found: {}", p)
            continue

        matched = False
        for m in Path(".").glob(inp):
            matched = True
            if m.is_dir():
                add(_expand_dir(m, recursive=recursive))
            elif m.is_file():
                add([(m, _is_hidden(m, Path(".")))])
        if not matched:
            logger.warning("Input not found: {}", inp)

    # Stable, deterministic ordering
    return sorted(files.items(), key=lambda x: str(x[0]))


@dataclass(frozen=True, slots=True)
class FilesystemScanner:
    """
    Collects page records from files, directories and relative globs.

    Files with no matching loader are skipped. A file that fails to load is
    logged and listed in LoadReport.failures; the scan carries on with the
    remaining files.
    """
    loaders: tuple[RecordLoader, ...] = field(default_factory=_default_loaders)
    recursive: bool = True
    skip_hidden: bool = True

    def loader_for(self, path: Path) -> RecordLoader | None:
        ext = path.suffix.lower()
        return next((ld for ld in self.loaders if ext in ld.extensions), None)

    def scan(self, inputs: Sequence[str]) -> tuple[list[tuple[str, PageMetadata]], LoadReport]:
        scanned = loaded = skipped_hidden = skipped_extension = 0
        by_ext: dict[str, int] = {}
        failures: list[tuple[str, str]] = []

        records: list[tuple[str, PageMetadata]] = []
        for path, hidden in _iter_files(inputs, recursive=self.recursive):
            scanned += 1

            if self.skip_hidden and hidden:
                skipped_hidden += 1
                continue

            loader = self.loader_for(path)
            if loader is None:
                skipped_extension += 1
                continue

            try:
                pages = loader.load(path)
            except SeoMetaError as e:
                logger.warning("Failed to load {}: {}", path, e)
                failures.append((str(path), str(e)))
                continue

            for i, page in enumerate(pages):
                source = str(path) if len(pages) == 1 else f"{path}#{i}"
                records.append((source, page))
            loaded += 1
            ext = path.suffix.lower()
            by_ext[ext] = by_ext.get(ext, 0) + 1

        report = LoadReport(
            scanned=scanned,
            loaded=loaded,
            skipped_hidden=skipped_hidden,
            skipped_extension=skipped_extension,
            failed=len(failures),
            by_extension=dict(by_ext),
            failures=tuple(failures),
        )
        logger.debug("Scan finished: {}", report)
        return records, report
