from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from seometa.domain.errors import ConfigError
from seometa.domain.models import SiteDefaults
from seometa.domain.schema import (
    DESCRIPTION_MAX_CHARS,
    DESCRIPTION_MIN_CHARS,
    KEYWORDS_MAX_TERMS,
    KEYWORDS_MIN_TERMS,
    OG_IMAGE_FORMATS,
    OG_IMAGE_HEIGHT,
    OG_IMAGE_MAX_BYTES,
    OG_IMAGE_WIDTH,
    POST_CONTENT_TYPES,
    TITLE_MAX_CHARS,
    TITLE_MIN_CHARS,
)


@dataclass(frozen=True)
class Limits:
    title_min: int = TITLE_MIN_CHARS
    title_max: int = TITLE_MAX_CHARS
    description_min: int = DESCRIPTION_MIN_CHARS
    description_max: int = DESCRIPTION_MAX_CHARS
    keywords_min: int = KEYWORDS_MIN_TERMS
    keywords_max: int = KEYWORDS_MAX_TERMS


@dataclass(frozen=True)
class OgImage:
    width: int = OG_IMAGE_WIDTH
    height: int = OG_IMAGE_HEIGHT
    max_bytes: int = OG_IMAGE_MAX_BYTES
    formats: tuple[str, ...] = OG_IMAGE_FORMATS


@dataclass(frozen=True)
class Defaults:
    post_content_types: tuple[str, ...] = POST_CONTENT_TYPES
    site: Optional[SiteDefaults] = None


@dataclass(frozen=True)
class Logging:
    level: str = "WARNING"
    report_dir: Optional[Path] = None


@dataclass(frozen=True)
class Settings:
    limits: Limits = field(default_factory=Limits)
    og_image: OgImage = field(default_factory=OgImage)
    defaults: Defaults = field(default_factory=Defaults)
    logging: Logging = field(default_factory=Logging)


def _window(section: str, lo: int, hi: int) -> None:
    if lo < 0 or hi < lo:
        raise ConfigError(f"[{section}] invalid range {lo}..{hi}")


def _table(raw: dict[str, Any], section: str) -> dict[str, Any]:
    value = raw.get(section, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{section}] must be a table, got {type(value).__name__}")
    return value


def _str_tuple(raw: Any, key: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(v, str) for v in raw):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(v.strip().lower() for v in raw)


def load_settings(path: str | Path = "seometa.toml") -> Settings:
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")

    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    def expand(p: str) -> Path:
        return Path(os.path.expandvars(os.path.expanduser(p))).resolve()

    lim = _table(raw, "limits")
    img = _table(raw, "og_image")
    dfl = _table(raw, "defaults")
    log = _table(raw, "logging")

    try:
        limits = Limits(
            title_min=int(lim.get("title_min", TITLE_MIN_CHARS)),
            title_max=int(lim.get("title_max", TITLE_MAX_CHARS)),
            description_min=int(lim.get("description_min", DESCRIPTION_MIN_CHARS)),
            description_max=int(lim.get("description_max", DESCRIPTION_MAX_CHARS)),
            keywords_min=int(lim.get("keywords_min", KEYWORDS_MIN_TERMS)),
            keywords_max=int(lim.get("keywords_max", KEYWORDS_MAX_TERMS)),
        )
        og_image = OgImage(
            width=int(img.get("width", OG_IMAGE_WIDTH)),
            height=int(img.get("height", OG_IMAGE_HEIGHT)),
            max_bytes=int(img.get("max_bytes", OG_IMAGE_MAX_BYTES)),
            formats=(
                tuple("jpeg" if f == "jpg" else f for f in _str_tuple(img["formats"], "og_image.formats"))
                if "formats" in img
                else OG_IMAGE_FORMATS
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid number in {path}: {e}") from e

    _window("limits.title", limits.title_min, limits.title_max)
    _window("limits.description", limits.description_min, limits.description_max)
    _window("limits.keywords", limits.keywords_min, limits.keywords_max)

    site_keys = {
        "site_title": "title",
        "site_description": "description",
        "lang": "lang",
        "twitter_card": "twitter_card",
    }
    site_values = {dst: dfl[src] for src, dst in site_keys.items() if src in dfl}
    for key, value in site_values.items():
        if not isinstance(value, str):
            raise ConfigError(f"defaults.{key} must be a string")

    defaults = Defaults(
        post_content_types=(
            _str_tuple(dfl["post_content_types"], "defaults.post_content_types")
            if "post_content_types" in dfl
            else POST_CONTENT_TYPES
        ),
        site=SiteDefaults(**site_values) if site_values else None,
    )

    level = str(log.get("level", "WARNING")).upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigError(f"logging.level: {e}") from e

    report_dir = log.get("report_dir")
    if report_dir is not None and not isinstance(report_dir, str):
        raise ConfigError("logging.report_dir must be a string")

    logging = Logging(
        level=level,
        report_dir=expand(report_dir) if report_dir else None,
    )

    return Settings(limits=limits, og_image=og_image, defaults=defaults, logging=logging)
