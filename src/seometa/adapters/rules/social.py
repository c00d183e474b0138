from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Mapping, Optional
from urllib.parse import urlsplit

from seometa.adapters.rules.formats import is_absolute_url
from seometa.domain.errors import MetadataShapeError
from seometa.domain.models import Finding, ImageResource, PageMetadata
from seometa.domain.schema import (
    FIELD_OG_IMAGE,
    FIELD_OG_TYPE,
    FIELD_TWITTER_CARD,
    IMAGE_EXTENSIONS,
    META_IMAGE_RESOURCE,
    OG_IMAGE_FORMATS,
    OG_IMAGE_HEIGHT,
    OG_IMAGE_MAX_BYTES,
    OG_IMAGE_WIDTH,
    OG_TYPES,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    TWITTER_CARD_RECOMMENDED,
)


def normalize_image_format(fmt: str) -> str:
    fmt = fmt.strip().lower().lstrip(".")
    return "jpeg" if fmt == "jpg" else fmt


def _url_suffix(value: str) -> str:
    try:
        path = urlsplit(value.strip()).path
    except ValueError:
        # unparseable netloc; drop query/fragment by hand
        path = value.strip().split("?", 1)[0].split("#", 1)[0]
    return PurePosixPath(path).suffix.lower()


def _format_label(formats: tuple[str, ...]) -> str:
    labels = {"jpeg": "JPG", "png": "PNG", "webp": "WebP"}
    return "/".join(labels.get(f, f.upper()) for f in formats)


@dataclass(frozen=True, slots=True)
class OgImageRule:
    """
    og:image checks.

    What can be checked from the URL alone is checked here (absolute URL,
    file extension). Dimensions, byte size and the real format come from an
    ImageResource passed as metadata["og_image_resource"]; without one the
    image is reported as unverified (info), never as an error.
    """
    field: str = FIELD_OG_IMAGE
    width: int = OG_IMAGE_WIDTH
    height: int = OG_IMAGE_HEIGHT
    max_bytes: int = OG_IMAGE_MAX_BYTES
    formats: tuple[str, ...] = OG_IMAGE_FORMATS
    name: str = "og-image"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None:
            return []

        findings: list[Finding] = []

        if not is_absolute_url(value):
            findings.append(self._warn(f"{self.field} {value!r} is a relative URL; use an absolute URL"))

        ext = _url_suffix(value)
        url_format = IMAGE_EXTENSIONS.get(ext)
        bad_extension = url_format is not None and url_format not in self.formats
        if bad_extension:
            findings.append(
                self._warn(f"{self.field} looks like a {ext} file; use {_format_label(self.formats)}")
            )

        resource = (metadata or {}).get(META_IMAGE_RESOURCE)
        if resource is None:
            findings.append(
                Finding(
                    field=self.field,
                    severity=SEVERITY_INFO,
                    message=(
                        f"{self.field} unverified: dimensions ({self.width}x{self.height}), "
                        f"size and format need the image file"
                    ),
                    rule=self.name,
                )
            )
            return findings

        if not isinstance(resource, ImageResource):
            raise MetadataShapeError(
                f"metadata[{META_IMAGE_RESOURCE!r}] must be ImageResource, got {type(resource).__name__}"
            )

        findings.extend(self._check_resource(resource, url_format_flagged=bad_extension))
        return findings

    def _check_resource(self, res: ImageResource, *, url_format_flagged: bool) -> list[Finding]:
        findings: list[Finding] = []
        unknown: list[str] = []

        if res.width is None or res.height is None:
            unknown.append("dimensions")
        elif (res.width, res.height) != (self.width, self.height):
            findings.append(
                self._warn(
                    f"{self.field} is {res.width}x{res.height}; recommended {self.width}x{self.height}"
                )
            )

        if res.size_bytes is None:
            unknown.append("size")
        elif res.size_bytes > self.max_bytes:
            findings.append(
                self._warn(
                    f"{self.field} is {res.size_bytes} bytes; maximum is {self.max_bytes} bytes"
                )
            )

        if res.format is None:
            unknown.append("format")
        elif not url_format_flagged and normalize_image_format(res.format) not in self.formats:
            findings.append(
                self._warn(f"{self.field} format {res.format!r} is not {_format_label(self.formats)}")
            )

        if unknown:
            findings.append(
                Finding(
                    field=self.field,
                    severity=SEVERITY_INFO,
                    message=f"{self.field} unverified: {', '.join(unknown)} not provided",
                    rule=self.name,
                )
            )
        return findings

    def _warn(self, message: str) -> Finding:
        return Finding(field=self.field, severity=SEVERITY_WARNING, message=message, rule=self.name)


@dataclass(frozen=True, slots=True)
class ChoiceRule:
    """
    Value must be one of a fixed set (og:type).
    """
    field: str = FIELD_OG_TYPE
    allowed: frozenset[str] = OG_TYPES
    name: str = "og-type-known"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None or value in self.allowed:
            return []
        return [
            Finding(
                field=self.field,
                severity=SEVERITY_ERROR,
                message=f"{self.field} {value!r} is not one of: {', '.join(sorted(self.allowed))}",
                rule=self.name,
            )
        ]


@dataclass(frozen=True, slots=True)
class RecommendedValueRule:
    """
    Any value is accepted; values other than the recommended one are noted.
    """
    field: str = FIELD_TWITTER_CARD
    recommended: str = TWITTER_CARD_RECOMMENDED
    name: str = "twitter-card-recommended"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None or value == self.recommended:
            return []
        return [
            Finding(
                field=self.field,
                severity=SEVERITY_INFO,
                message=f"{self.field} {value!r} differs from the recommended {self.recommended!r}",
                rule=self.name,
            )
        ]
