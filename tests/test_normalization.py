from __future__ import annotations

import pytest

from seometa.adapters.normalization.defaults import DefaultsNormalizer
from seometa.domain.models import PageMetadata, SiteDefaults


@pytest.mark.parametrize("content_type", ["work", "post", "article", "blog", "news", " Post "])
def test_post_like_content_types_become_articles(content_type):
    page = PageMetadata(title="x", content_type=content_type)
    assert DefaultsNormalizer().normalize(page).og_type == "article"


@pytest.mark.parametrize("content_type", [None, "author", "page", ""])
def test_everything_else_is_a_website(content_type):
    page = PageMetadata(title="x", content_type=content_type)
    assert DefaultsNormalizer().normalize(page).og_type == "website"


def test_existing_og_type_is_kept_even_when_invalid():
    page = PageMetadata(og_type="blog", content_type="post")
    assert DefaultsNormalizer().normalize(page) == page


def test_custom_post_content_types():
    normalizer = DefaultsNormalizer(post_content_types=("recipe",))
    assert normalizer.normalize(PageMetadata(content_type="recipe")).og_type == "article"
    assert normalizer.normalize(PageMetadata(content_type="post")).og_type == "website"


def test_site_defaults_fill_only_empty_fields():
    site = SiteDefaults(title="Site", description="About the site", lang="en", twitter_card="summary_large_image")
    normalizer = DefaultsNormalizer(site=site)

    filled = normalizer.normalize(PageMetadata())
    assert (filled.title, filled.description, filled.lang, filled.twitter_card) == (
        "Site",
        "About the site",
        "en",
        "summary_large_image",
    )

    page = PageMetadata(title="Page", description="Own", lang="de", twitter_card="summary")
    kept = normalizer.normalize(page)
    assert (kept.title, kept.description, kept.lang, kept.twitter_card) == ("Page", "Own", "de", "summary")


def test_normalize_does_not_touch_other_fields():
    page = PageMetadata(title="T", slug="Bad Slug", canonical_url="/rel", json_ld="{")
    out = DefaultsNormalizer().normalize(page)
    assert (out.slug, out.canonical_url, out.json_ld) == ("Bad Slug", "/rel", "{")


def test_normalize_is_idempotent():
    normalizer = DefaultsNormalizer(site=SiteDefaults(title="Site"))
    once = normalizer.normalize(PageMetadata(content_type="news"))
    assert normalizer.normalize(once) == once
