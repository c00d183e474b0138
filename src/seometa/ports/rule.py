from __future__ import annotations

from typing import Mapping, Protocol

from seometa.domain.models import Finding, PageMetadata


class FieldRule(Protocol):
    """
    Checks one field of a page record and reports findings.

    The full record is passed so a rule can look at related fields.
    Content problems are returned as findings, never raised.
    """

    @property
    def field(self) -> str: ...

    @property
    def name(self) -> str: ...

    def check(self, page: PageMetadata, *, metadata: Mapping[str, object] | None = None) -> list[Finding]:
        ...
