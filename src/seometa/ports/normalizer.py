from __future__ import annotations

from typing import Protocol

from seometa.domain.models import PageMetadata


class Normalizer(Protocol):
    """
    Fills defaults for absent fields. Never changes a field that is set.
    """

    def normalize(self, page: PageMetadata) -> PageMetadata:
        ...
