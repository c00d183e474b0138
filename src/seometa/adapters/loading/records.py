from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from loguru import logger

from seometa.domain.errors import MetadataShapeError, RecordLoadError
from seometa.domain.models import PAGE_FIELDS, PageMetadata, page_from_mapping


def _read_text(path: Path, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as e:
        raise RecordLoadError(f"Cannot stat {path}: {e}") from e
    if size > max_bytes:
        raise RecordLoadError(f"{path} is {size} bytes, larger than the {max_bytes} byte limit")

    try:
        return path.read_bytes().decode("utf-8").lstrip("\ufeff")
    except (OSError, UnicodeDecodeError) as e:
        raise RecordLoadError(f"Cannot read {path}: {e}") from e


# Implicit YAML 1.1 typing turns `lang: no` into False and `slug: 2024` into 2024.
# Metadata values are text, so these scalars stay exactly as written.
_TEXT_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that only resolves null implicitly; other plain scalars load as str."""


TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml_text(text: str) -> Any:
    return yaml.load(text, Loader=TextScalarLoader)


def records_from_data(data: Any, *, source: Path) -> list[PageMetadata]:
    """
    A single mapping is one record; a list holds one mapping per record.
    """
    if data is None:
        return []
    items = data if isinstance(data, list) else [data]

    pages: list[PageMetadata] = []
    for i, item in enumerate(items):
        try:
            pages.append(page_from_mapping(item))
        except MetadataShapeError as e:
            where = f"{source}" if len(items) == 1 else f"{source} record {i}"
            raise MetadataShapeError(f"{where}: {e}") from e
    return pages


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """
    Split a markdown string into (frontmatter, content).

    Frontmatter is a YAML block between a leading '---' line and the next '---' line.
    No opening or closing fence means no frontmatter.
    """
    s = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = s.split("\n")
    if not lines or lines[0].strip() != "---":
        return {}, s

    end_idx = next((i for i in range(1, len(lines)) if lines[i].strip() == "---"), None)
    if end_idx is None:
        return {}, s

    fm_text = "\n".join(lines[1:end_idx]).strip()
    content = "\n".join(lines[end_idx + 1:]).lstrip("\n")
    if not fm_text:
        return {}, content

    try:
        loaded = load_yaml_text(fm_text)
    except yaml.YAMLError as e:
        raise RecordLoadError(f"Invalid YAML frontmatter: {e}") from e

    if not isinstance(loaded, dict):
        raise RecordLoadError(f"Frontmatter must be a mapping, got {type(loaded).__name__}")
    return loaded, content


@dataclass(frozen=True, slots=True)
class JsonRecordLoader:
    max_bytes: int = 2_000_000
    extensions: frozenset[str] = frozenset({".json"})

    def load(self, path: Path) -> list[PageMetadata]:
        text = _read_text(path, self.max_bytes)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RecordLoadError(f"Invalid JSON in {path} line {e.lineno}: {e.msg}") from e
        return records_from_data(data, source=path)


@dataclass(frozen=True, slots=True)
class YamlRecordLoader:
    max_bytes: int = 2_000_000
    extensions: frozenset[str] = frozenset({".yaml", ".yml"})

    def load(self, path: Path) -> list[PageMetadata]:
        text = _read_text(path, self.max_bytes)
        try:
            data = load_yaml_text(text)
        except yaml.YAMLError as e:
            raise RecordLoadError(f"Invalid YAML in {path}: {e}") from e
        return records_from_data(data, source=path)


@dataclass(frozen=True, slots=True)
class FrontmatterRecordLoader:
    """
    Reads page metadata from markdown frontmatter.

    A nested `seo:` mapping is used when present; otherwise the known
    metadata keys are picked from the top level and the rest
    (tags, aliases, dates used by other tools) is ignored.
    """
    max_bytes: int = 2_000_000
    section: str = "seo"
    extensions: frozenset[str] = frozenset({".md", ".markdown"})

    def load(self, path: Path) -> list[PageMetadata]:
        text = _read_text(path, self.max_bytes)
        try:
            fm, _ = split_frontmatter(text)
        except RecordLoadError as e:
            raise RecordLoadError(f"{path}: {e}") from e

        if not fm:
            logger.debug("No frontmatter in {}", path)
            return []

        nested = fm.get(self.section)
        if isinstance(nested, Mapping):
            raw = dict(nested)
        else:
            raw = {k: v for k, v in fm.items() if k in PAGE_FIELDS}
            ignored = sorted(str(k) for k in fm if k not in PAGE_FIELDS)
            if ignored:
                logger.debug("Ignoring frontmatter keys in {}: {}", path, ", ".join(ignored))

        if not raw:
            return []
        return records_from_data(raw, source=path)
