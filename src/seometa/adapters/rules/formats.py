from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional
from urllib.parse import urlsplit

from seometa.domain.models import Finding, PageMetadata
from seometa.domain.schema import (
    FIELD_CANONICAL_URL,
    FIELD_LANG,
    FIELD_SLUG,
    FIELD_UPDATED,
    SEVERITY_ERROR,
)

# primary language subtag (2-3 letters), optional region (2 letters or UN M.49 digits)
_BCP47_RE = re.compile(r"[A-Za-z]{2,3}(?:-(?:[A-Za-z]{2}|[0-9]{3}))?")
_SLUG_RE = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")


def is_absolute_url(value: str) -> bool:
    try:
        parts = urlsplit(value.strip())
    except ValueError:  # e.g. unbalanced "[" in the host
        return False
    return bool(parts.scheme) and bool(parts.netloc)


def is_iso8601_datetime(value: str) -> bool:
    """
    Date and time of day, optionally with an offset. A bare date is rejected.
    """
    text = value.strip()
    try:
        datetime.fromisoformat(text)
    except ValueError:
        return False

    try:
        date.fromisoformat(text)
    except ValueError:
        return True
    return False


@dataclass(frozen=True, slots=True)
class AbsoluteUrlRule:
    field: str = FIELD_CANONICAL_URL
    severity: str = SEVERITY_ERROR
    name: str = "canonical-url-absolute"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None or is_absolute_url(value):
            return []
        return [
            Finding(
                field=self.field,
                severity=self.severity,  # type: ignore[arg-type]
                message=f"{self.field} {value!r} is a relative URL; use an absolute URL with scheme and host",
                rule=self.name,
            )
        ]


@dataclass(frozen=True, slots=True)
class LanguageTagRule:
    field: str = FIELD_LANG
    name: str = "lang-bcp47"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None or _BCP47_RE.fullmatch(value):
            return []
        return [
            Finding(
                field=self.field,
                severity=SEVERITY_ERROR,
                message=f"{self.field} {value!r} is not a BCP 47 language tag (e.g. 'en' or 'en-US')",
                rule=self.name,
            )
        ]


@dataclass(frozen=True, slots=True)
class IsoDateTimeRule:
    field: str = FIELD_UPDATED
    name: str = "updated-iso8601"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None or is_iso8601_datetime(value):
            return []
        return [
            Finding(
                field=self.field,
                severity=SEVERITY_ERROR,
                message=f"{self.field} {value!r} is not an ISO 8601 datetime (e.g. '2025-05-20T12:30:00Z')",
                rule=self.name,
            )
        ]


@dataclass(frozen=True, slots=True)
class SlugRule:
    field: str = FIELD_SLUG
    name: str = "slug-format"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None or _SLUG_RE.fullmatch(value):
            return []
        return [
            Finding(
                field=self.field,
                severity=SEVERITY_ERROR,
                message=f"{self.field} {value!r} must be lowercase words joined by single hyphens (a-z, 0-9, '-')",
                rule=self.name,
            )
        ]
