from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Sequence

from seometa.domain.errors import MetadataShapeError
from seometa.domain.schema import (
    FIELD_DESCRIPTION,
    FIELD_KEYWORDS,
    FIELD_TITLE,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    Severity,
)


# -------------------------
# Page record
# -------------------------

@dataclass(frozen=True, slots=True)
class PageMetadata:
    """
    The metadata of one page, as authored.

    Flat record: title and description are always strings (empty when missing),
    every other field is optional. keywords is a comma-separated string.
    """
    title: str = ""
    description: str = ""
    keywords: Optional[str] = None
    author: Optional[str] = None

    canonical_url: Optional[str] = None
    lang: Optional[str] = None      # e.g. "en-US"
    updated: Optional[str] = None   # ISO 8601

    # Social
    og_image: Optional[str] = None
    og_type: Optional[str] = None       # "website" | "article" | "book" ...
    twitter_card: Optional[str] = None  # "summary_large_image"

    json_ld: Optional[str] = None

    content_type: Optional[str] = None  # "work" | "post" | "author" ...
    slug: Optional[str] = None


PAGE_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(PageMetadata))
_REQUIRED_STR_FIELDS = (FIELD_TITLE, FIELD_DESCRIPTION)


def check_page_shape(page: PageMetadata) -> None:
    """
    Fail fast when a caller built a PageMetadata with non-string values.
    """
    if not isinstance(page, PageMetadata):
        raise MetadataShapeError(f"Expected PageMetadata, got {type(page).__name__}")

    for name in PAGE_FIELDS:
        value = getattr(page, name)
        if name in _REQUIRED_STR_FIELDS:
            if not isinstance(value, str):
                raise MetadataShapeError(f"Field {name!r} must be str, got {type(value).__name__}")
        elif value is not None and not isinstance(value, str):
            raise MetadataShapeError(f"Field {name!r} must be str or None, got {type(value).__name__}")


def page_from_mapping(raw: Mapping[str, Any]) -> PageMetadata:
    """
    Build a PageMetadata from plain data (parsed JSON / YAML / frontmatter).

    - unknown keys raise MetadataShapeError
    - None / missing title and description become ""
    - keywords may be a string or a list of strings (joined with ", ")
    - any other non-string value raises MetadataShapeError
    """
    if not isinstance(raw, Mapping):
        raise MetadataShapeError(f"Expected a mapping of fields, got {type(raw).__name__}")

    unknown = sorted(str(k) for k in raw if k not in PAGE_FIELDS)
    if unknown:
        raise MetadataShapeError(f"Unknown metadata fields: {', '.join(unknown)}")

    values: dict[str, Optional[str]] = {}
    for name, value in raw.items():
        if name == FIELD_KEYWORDS and isinstance(value, (list, tuple)):
            if not all(isinstance(v, str) for v in value):
                raise MetadataShapeError("Field 'keywords' list must contain only strings")
            value = ", ".join(v.strip() for v in value)

        if value is None:
            if name in _REQUIRED_STR_FIELDS:
                value = ""
        elif not isinstance(value, str):
            raise MetadataShapeError(f"Field {name!r} must be a string, got {type(value).__name__}")

        values[name] = value

    return PageMetadata(**values)


# -------------------------
# Supporting inputs
# -------------------------

@dataclass(frozen=True, slots=True)
class ImageResource:
    """
    Facts about the og:image file, when the caller already has them.
    Nothing in this package downloads the image.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    size_bytes: Optional[int] = None
    format: Optional[str] = None  # "jpeg" | "png" | "webp" ...


@dataclass(frozen=True, slots=True)
class SiteDefaults:
    """
    Site-wide fallbacks applied during normalization to fields left empty.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    lang: Optional[str] = None
    twitter_card: Optional[str] = None


# -------------------------
# Output objects
# -------------------------

@dataclass(frozen=True, slots=True)
class Finding:
    field: str
    severity: Severity
    message: str
    rule: str = ""


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """
    Result of validating one record: the normalized page plus ordered findings.
    """
    page: PageMetadata
    findings: Sequence[Finding] = field(default_factory=tuple)
    source: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == SEVERITY_ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == SEVERITY_WARNING]

    @property
    def infos(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == SEVERITY_INFO]

    @property
    def has_errors(self) -> bool:
        return any(f.severity == SEVERITY_ERROR for f in self.findings)

    def for_field(self, name: str) -> list[Finding]:
        return [f for f in self.findings if f.field == name]


@dataclass(frozen=True, slots=True)
class LoadReport:
    """
    Counters from scanning a directory of record files.
    """
    scanned: int = 0
    loaded: int = 0
    skipped_hidden: int = 0
    skipped_extension: int = 0
    failed: int = 0
    by_extension: Mapping[str, int] = field(default_factory=dict)
    failures: Sequence[tuple[str, str]] = field(default_factory=tuple)  # (path, reason)
