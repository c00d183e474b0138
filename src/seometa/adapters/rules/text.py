from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from seometa.domain.models import Finding, PageMetadata
from seometa.domain.schema import (
    FIELD_KEYWORDS,
    FIELD_TITLE,
    KEYWORDS_MAX_TERMS,
    KEYWORDS_MIN_TERMS,
    META_TITLE_COUNTS,
    SEVERITY_WARNING,
)


def split_keywords(value: str) -> list[str]:
    """
    Split a comma-separated keyword string into trimmed, non-empty terms.
    """
    return [t.strip() for t in value.split(",") if t.strip()]


@dataclass(frozen=True, slots=True)
class LengthRule:
    """
    Character-length window for a text field (title, description).

    An empty value gets a single "is empty" warning instead of a length warning.
    """
    field: str
    min_chars: int
    max_chars: int
    name: str = "length"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None:
            return []

        n = len(value)
        if not value.strip():
            message = f"{self.field} is empty; recommended length is {self.min_chars}-{self.max_chars} characters"
        elif n < self.min_chars:
            message = f"{self.field} is {n} characters, shorter than the recommended {self.min_chars}-{self.max_chars}"
        elif n > self.max_chars:
            message = f"{self.field} is {n} characters, longer than the recommended {self.min_chars}-{self.max_chars}"
        else:
            return []

        return [Finding(field=self.field, severity=SEVERITY_WARNING, message=message, rule=self.name)]


@dataclass(frozen=True, slots=True)
class UniqueTitleRule:
    """
    Flags a title shared with other pages of the same batch.

    Only active when the caller passes title counts in metadata
    (validate_pages does); a single page has nothing to compare against.
    """
    field: str = FIELD_TITLE
    name: str = "title-unique"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        counts = (metadata or {}).get(META_TITLE_COUNTS)
        if not counts or not page.title.strip():
            return []

        seen = counts.get(page.title.strip(), 0)  # type: ignore[union-attr]
        if seen <= 1:
            return []

        return [
            Finding(
                field=self.field,
                severity=SEVERITY_WARNING,
                message=f"title is used by {seen} pages; titles should be unique",
                rule=self.name,
            )
        ]


@dataclass(frozen=True, slots=True)
class KeywordsRule:
    field: str = FIELD_KEYWORDS
    min_terms: int = KEYWORDS_MIN_TERMS
    max_terms: int = KEYWORDS_MAX_TERMS
    name: str = "keywords-count"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None:
            return []

        n = len(split_keywords(value))
        if self.min_terms <= n <= self.max_terms:
            return []

        direction = "fewer" if n < self.min_terms else "more"
        return [
            Finding(
                field=self.field,
                severity=SEVERITY_WARNING,
                message=(
                    f"{self.field} has {n} terms, {direction} than the recommended "
                    f"{self.min_terms}-{self.max_terms}"
                ),
                rule=self.name,
            )
        ]
