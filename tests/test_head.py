from __future__ import annotations

from seometa.app.head import render_head, to_context
from seometa.domain.models import PageMetadata


def test_to_context_splits_keywords(good_page):
    ctx = to_context(good_page)
    assert ctx["keywords"] == ["seo", "metadata", "open graph"]
    assert ctx["slug"] == "metadata-guide"
    assert to_context(PageMetadata())["keywords"] == []


def test_render_head_full_page(good_page):
    head = render_head(good_page, site_name="Example")
    lines = head.splitlines()

    assert lines[0] == '<meta charset="utf-8">'
    assert '<meta http-equiv="content-language" content="en-US">' in lines
    assert '<link rel="canonical" href="https://example.com/blog/metadata-guide">' in lines
    assert '<meta property="og:type" content="article">' in lines
    assert '<meta property="og:url" content="https://example.com/blog/metadata-guide">' in lines
    assert '<meta property="og:site_name" content="Example">' in lines
    assert '<meta name="twitter:card" content="summary_large_image">' in lines
    assert '<meta name="author" content="Editorial Team">' in lines
    assert lines[-1].startswith('<script type="application/ld+json">{"@context"')


def test_render_head_skips_absent_fields():
    head = render_head(PageMetadata(title="Only a title"))
    assert "<title>Only a title</title>" in head
    assert "canonical" not in head
    assert "og:image" not in head
    assert "og:site_name" not in head
    assert "ld+json" not in head


def test_render_head_escapes_values():
    page = PageMetadata(
        title='Tom & "Jerry" <3',
        description='Say "hi"',
        json_ld='{"name": "</script><script>alert(1)</script>"}',
    )
    head = render_head(page)

    assert "<title>Tom &amp; \"Jerry\" &lt;3</title>" in head
    assert '<meta name="description" content="Say &quot;hi&quot;">' in head
    assert "</script><script>" not in head
    assert head.count("</script>") == 1
