from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from seometa.adapters.logging.jsonl_logger import JsonlReportLogger
from seometa.adapters.normalization.defaults import DefaultsNormalizer
from seometa.adapters.rules import (
    AbsoluteUrlRule,
    ChoiceRule,
    IsoDateTimeRule,
    JsonLdRule,
    KeywordsRule,
    LanguageTagRule,
    LengthRule,
    OgImageRule,
    RecommendedValueRule,
    SlugRule,
    UniqueTitleRule,
)
from seometa.domain.schema import FIELD_DESCRIPTION, FIELD_TITLE
from seometa.ports import FieldRule, Normalizer, ReportLogger
from seometa.settings import Settings


def default_rules(settings: Optional[Settings] = None) -> tuple[FieldRule, ...]:
    """
    The rule table. Order is the order findings are reported in.
    """
    s = settings or Settings()
    lim = s.limits
    img = s.og_image
    return (
        LengthRule(field=FIELD_TITLE, min_chars=lim.title_min, max_chars=lim.title_max, name="title-length"),
        UniqueTitleRule(),
        LengthRule(
            field=FIELD_DESCRIPTION,
            min_chars=lim.description_min,
            max_chars=lim.description_max,
            name="description-length",
        ),
        KeywordsRule(min_terms=lim.keywords_min, max_terms=lim.keywords_max),
        AbsoluteUrlRule(),
        LanguageTagRule(),
        IsoDateTimeRule(),
        OgImageRule(width=img.width, height=img.height, max_bytes=img.max_bytes, formats=img.formats),
        ChoiceRule(),
        RecommendedValueRule(),
        JsonLdRule(),
        SlugRule(),
    )


@dataclass(frozen=True, slots=True)
class Container:
    """
    Lightweight dependency container.
    Holds the rule table, the normalizer and the optional report logger.
    """
    rules: tuple[FieldRule, ...]
    normalizer: Normalizer
    report_logger: Optional[ReportLogger] = None


def build_container(settings: Optional[Settings] = None) -> Container:
    s = settings or Settings()
    normalizer = DefaultsNormalizer(
        post_content_types=s.defaults.post_content_types,
        site=s.defaults.site,
    )
    report_logger = JsonlReportLogger(path=s.logging.report_dir) if s.logging.report_dir else None
    return Container(rules=default_rules(s), normalizer=normalizer, report_logger=report_logger)
