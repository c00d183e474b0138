from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from seometa.domain.models import PageMetadata, SiteDefaults
from seometa.domain.schema import OG_TYPE_DEFAULT, OG_TYPE_POST, POST_CONTENT_TYPES


@dataclass(frozen=True, slots=True)
class DefaultsNormalizer:
    """
    Fills absent fields from the rest of the record and from site defaults.

    Strategy:
      - og_type: "article" when content_type names a post, else "website"
      - title / description: site values when empty
      - lang / twitter_card: site values when absent
    Fields that are set are returned untouched, even when they fail validation.
    """
    post_content_types: tuple[str, ...] = POST_CONTENT_TYPES
    site: Optional[SiteDefaults] = None

    def is_post(self, page: PageMetadata) -> bool:
        if page.content_type is None:
            return False
        return page.content_type.strip().lower() in self.post_content_types

    def normalize(self, page: PageMetadata) -> PageMetadata:
        changes: dict[str, Any] = {}

        if page.og_type is None:
            changes["og_type"] = OG_TYPE_POST if self.is_post(page) else OG_TYPE_DEFAULT

        site = self.site
        if site is not None:
            if not page.title and site.title:
                changes["title"] = site.title
            if not page.description and site.description:
                changes["description"] = site.description
            if page.lang is None and site.lang:
                changes["lang"] = site.lang
            if page.twitter_card is None and site.twitter_card:
                changes["twitter_card"] = site.twitter_card

        return replace(page, **changes) if changes else page
