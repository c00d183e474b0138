from __future__ import annotations

import pytest
from loguru import logger

from seometa.app.container import Container, build_container
from seometa.domain.models import PageMetadata

_FILLER = "page metadata guide for search and social previews "


def text_of(n: int) -> str:
    """Readable text of exactly n characters."""
    return (_FILLER * (n // len(_FILLER) + 1))[:n]


@pytest.fixture
def container() -> Container:
    return build_container()


@pytest.fixture
def good_page() -> PageMetadata:
    return PageMetadata(
        title=text_of(55),
        description=text_of(140),
        keywords="seo, metadata, open graph",
        author="Editorial Team",
        canonical_url="https://example.com/blog/metadata-guide",
        lang="en-US",
        updated="2025-05-20T12:30:00Z",
        og_image="https://example.com/img/cover.png",
        og_type="article",
        twitter_card="summary_large_image",
        json_ld='{"@context": "https://schema.org", "@type": "Article"}',
        content_type="post",
        slug="metadata-guide",
    )


@pytest.fixture(autouse=True)
def _reset_loguru():
    # the CLI re-points loguru at whatever sys.stderr is during a test
    yield
    logger.remove()
    logger.disable("seometa")
