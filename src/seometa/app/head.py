from __future__ import annotations

from html import escape
from typing import Any

from seometa.adapters.rules.text import split_keywords
from seometa.domain.models import PAGE_FIELDS, PageMetadata


def to_context(page: PageMetadata) -> dict[str, Any]:
    """
    Plain dict of every field, for template engines. keywords becomes a list.
    """
    ctx: dict[str, Any] = {name: getattr(page, name) for name in PAGE_FIELDS}
    ctx["keywords"] = split_keywords(page.keywords) if page.keywords else []
    return ctx


def _meta_name(name: str, content: str) -> str:
    return f'<meta name="{name}" content="{escape(content)}">'


def _meta_property(prop: str, content: str) -> str:
    return f'<meta property="{prop}" content="{escape(content)}">'


def render_head(page: PageMetadata, site_name: str = "") -> str:
    """
    Render the <head> tags for a page, one per line.

    Attribute values are HTML-escaped. JSON-LD is emitted as-is inside its
    script tag, with "</" escaped so it cannot close the tag early.
    Render the normalized record (ValidationReport.page) to get defaults in.
    """
    out: list[str] = ['<meta charset="utf-8">']

    if page.lang:
        out.append(f'<meta http-equiv="content-language" content="{escape(page.lang)}">')
    out.append('<meta name="viewport" content="width=device-width, initial-scale=1">')
    if page.title:
        out.append(f"<title>{escape(page.title, quote=False)}</title>")
    if page.description:
        out.append(_meta_name("description", page.description))
    if page.keywords:
        out.append(_meta_name("keywords", ", ".join(split_keywords(page.keywords))))
    if page.author:
        out.append(_meta_name("author", page.author))
    if page.canonical_url:
        out.append(f'<link rel="canonical" href="{escape(page.canonical_url)}">')

    # Open Graph
    out.append(_meta_property("og:title", page.title))
    if page.description:
        out.append(_meta_property("og:description", page.description))
    if page.og_type:
        out.append(_meta_property("og:type", page.og_type))
    if page.canonical_url:
        out.append(_meta_property("og:url", page.canonical_url))
    if page.og_image:
        out.append(_meta_property("og:image", page.og_image))
    if site_name:
        out.append(_meta_property("og:site_name", site_name))

    # Twitter
    if page.twitter_card:
        out.append(_meta_name("twitter:card", page.twitter_card))
    out.append(_meta_name("twitter:title", page.title))
    if page.description:
        out.append(_meta_name("twitter:description", page.description))
    if page.og_image:
        out.append(_meta_name("twitter:image", page.og_image))

    if page.json_ld:
        ld = page.json_ld.replace("</", "<\\/")
        out.append(f'<script type="application/ld+json">{ld}</script>')

    return "\n".join(out) + "\n"
