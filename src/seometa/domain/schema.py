from __future__ import annotations

from typing import Final, Literal

# Canonical field names of a page metadata record
FIELD_TITLE: Final[str] = "title"
FIELD_DESCRIPTION: Final[str] = "description"
FIELD_KEYWORDS: Final[str] = "keywords"
FIELD_AUTHOR: Final[str] = "author"
FIELD_CANONICAL_URL: Final[str] = "canonical_url"
FIELD_LANG: Final[str] = "lang"
FIELD_UPDATED: Final[str] = "updated"
FIELD_OG_IMAGE: Final[str] = "og_image"
FIELD_OG_TYPE: Final[str] = "og_type"
FIELD_TWITTER_CARD: Final[str] = "twitter_card"
FIELD_JSON_LD: Final[str] = "json_ld"
FIELD_CONTENT_TYPE: Final[str] = "content_type"
FIELD_SLUG: Final[str] = "slug"

# Order in which findings are reported
VALIDATED_FIELDS: Final[tuple[str, ...]] = (
    FIELD_TITLE,
    FIELD_DESCRIPTION,
    FIELD_KEYWORDS,
    FIELD_CANONICAL_URL,
    FIELD_LANG,
    FIELD_UPDATED,
    FIELD_OG_IMAGE,
    FIELD_OG_TYPE,
    FIELD_TWITTER_CARD,
    FIELD_JSON_LD,
    FIELD_SLUG,
)

Severity = Literal["error", "warning", "info"]

SEVERITY_ERROR: Final[str] = "error"
SEVERITY_WARNING: Final[str] = "warning"
SEVERITY_INFO: Final[str] = "info"
SEVERITIES: Final[tuple[str, ...]] = (SEVERITY_ERROR, SEVERITY_WARNING, SEVERITY_INFO)

# Length / count limits
TITLE_MIN_CHARS: Final[int] = 50
TITLE_MAX_CHARS: Final[int] = 60
DESCRIPTION_MIN_CHARS: Final[int] = 120
DESCRIPTION_MAX_CHARS: Final[int] = 160
KEYWORDS_MIN_TERMS: Final[int] = 3
KEYWORDS_MAX_TERMS: Final[int] = 8

# og:image recommendations
OG_IMAGE_WIDTH: Final[int] = 1200
OG_IMAGE_HEIGHT: Final[int] = 630
OG_IMAGE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
OG_IMAGE_FORMATS: Final[tuple[str, ...]] = ("jpeg", "png", "webp")

# File extension -> image format
IMAGE_EXTENSIONS: Final[dict[str, str]] = {
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".png": "png",
    ".webp": "webp",
    ".gif": "gif",
    ".svg": "svg",
    ".bmp": "bmp",
    ".avif": "avif",
    ".tif": "tiff",
    ".tiff": "tiff",
}

# https://ogp.me/#types
OG_TYPES: Final[frozenset[str]] = frozenset(
    {
        "website",
        "article",
        "book",
        "profile",
        "music.song",
        "music.album",
        "music.playlist",
        "music.radio_station",
        "video.movie",
        "video.episode",
        "video.tv_show",
        "video.other",
    }
)
OG_TYPE_DEFAULT: Final[str] = "website"
OG_TYPE_POST: Final[str] = "article"

# content_type values that describe a post
POST_CONTENT_TYPES: Final[tuple[str, ...]] = ("work", "post", "article", "blog", "news")

TWITTER_CARD_RECOMMENDED: Final[str] = "summary_large_image"

# Keys understood in the `metadata` mapping passed to rules
META_IMAGE_RESOURCE: Final[str] = "og_image_resource"
META_TITLE_COUNTS: Final[str] = "title_counts"
